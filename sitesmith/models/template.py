"""Template models and store request/response types."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from typing_extensions import Literal

from .base import SitesmithModel
from .page import Page
from .settings import GlobalSettings
from .theme import Theme

TemplateCategory = Literal[
    "landing-page",
    "event",
    "donation",
    "blog",
    "multi-page",
    "portfolio",
    "contact",
]
TemplateStatus = Literal["draft", "published", "archived"]

TEMPLATE_CATEGORIES = (
    "landing-page",
    "event",
    "donation",
    "blog",
    "multi-page",
    "portfolio",
    "contact",
)
TEMPLATE_STATUSES = ("draft", "published", "archived")


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Lowercase, strip and de-duplicate tags, keeping their order."""
    result: List[str] = []
    for tag in tags or []:
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return result


class Template(SitesmithModel):
    """A complete authored website definition."""

    id: str
    user_id: Optional[str] = None
    name: str
    description: str = ""
    category: TemplateCategory = "multi-page"
    tags: List[str] = []
    status: TemplateStatus = "draft"
    is_system_template: bool = False
    theme: Theme = Field(default_factory=Theme)
    global_settings: GlobalSettings = Field(default_factory=GlobalSettings)
    metadata: Dict[str, Any] = {}
    current_version: str = "1.0.0"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    pages: List[Page] = []


class TemplateListItem(SitesmithModel):
    """Template summary used by search and listings."""

    id: str
    user_id: Optional[str] = None
    name: str
    description: str = ""
    category: TemplateCategory = "multi-page"
    tags: List[str] = []
    status: TemplateStatus = "draft"
    is_system_template: bool = False
    current_version: str = "1.0.0"
    page_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TemplateSearchParams(SitesmithModel):
    """Filters, sorting and paging for template search."""

    search: Optional[str] = None
    category: Optional[TemplateCategory] = None
    tags: List[str] = []
    status: Optional[TemplateStatus] = None
    is_system_template: Optional[bool] = None
    sort_by: Literal["name", "created_at", "updated_at"] = "updated_at"
    sort_order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)

    @field_validator("sort_by", mode="before")
    @classmethod
    def normalize_sort_by(cls, v: Any) -> Any:
        """Accept camelCase sort keys."""
        return {"createdAt": "created_at", "updatedAt": "updated_at"}.get(v, v)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        """Normalize tag filters."""
        return normalize_tags(v)


class TemplateSearchResult(SitesmithModel):
    """One page of search results."""

    items: List[TemplateListItem] = []
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0


class CreateTemplateRequest(SitesmithModel):
    """Request to create a template, optionally cloned from another."""

    name: str
    description: str = ""
    category: TemplateCategory = "multi-page"
    tags: List[str] = []
    status: TemplateStatus = "draft"
    theme: Optional[Dict[str, Any]] = None
    global_settings: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    clone_from_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate template name."""
        if not v.strip():
            raise ValueError("Template name cannot be empty")
        if len(v) > 255:
            raise ValueError("Template name cannot exceed 255 characters")
        return v.strip()

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        """Normalize tags."""
        return normalize_tags(v)


class UpdateTemplateRequest(SitesmithModel):
    """Partial template update; only fields that are set are applied."""

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[TemplateCategory] = None
    tags: Optional[List[str]] = None
    status: Optional[TemplateStatus] = None
    theme: Optional[Dict[str, Any]] = None
    global_settings: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        """Validate template name."""
        if v is not None and not v.strip():
            raise ValueError("Template name cannot be empty")
        return v.strip() if v else v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Normalize tags."""
        return normalize_tags(v) if v is not None else v

    def is_empty(self) -> bool:
        """Whether the request changes nothing."""
        return all(getattr(self, name) is None for name in self.model_fields_set)
