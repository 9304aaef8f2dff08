"""Page and section models."""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, SerializeAsAny, field_validator

from .base import SitesmithModel, new_id
from .component import BaseComponent, parse_component

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class PageSeo(SitesmithModel):
    """Per-page SEO metadata."""

    title: str = ""
    description: str = ""
    keywords: List[str] = []
    canonical_url: Optional[str] = None
    no_index: bool = False
    og_image: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None


class Section(SitesmithModel):
    """A layout band of a page grouping ordered components."""

    id: str = Field(default_factory=new_id)
    name: Optional[str] = None
    background_color: Optional[str] = None
    background_image: Optional[str] = None
    padding_top: Optional[str] = None
    padding_right: Optional[str] = None
    padding_bottom: Optional[str] = None
    padding_left: Optional[str] = None
    max_width: Optional[str] = None
    hidden: bool = False
    components: List[SerializeAsAny[BaseComponent]] = []

    @field_validator("components", mode="before")
    @classmethod
    def parse_components(cls, v: Any) -> List[BaseComponent]:
        """Parse each component into its typed variant."""
        if v is None:
            return []
        return [parse_component(item) for item in v]


class Page(SitesmithModel):
    """One routable document within a template."""

    id: str
    template_id: str
    name: str
    slug: str
    is_homepage: bool = False
    seo: PageSeo = Field(default_factory=PageSeo)
    sections: List[Section] = []
    sort_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def validate_slug(v: Optional[str]) -> Optional[str]:
    """Validate a page slug."""
    if v is None:
        return v
    if not SLUG_RE.match(v):
        raise ValueError("Slug must be lowercase letters, digits and single hyphens")
    return v


class CreatePageRequest(SitesmithModel):
    """Request to add a page to a template."""

    name: str
    slug: str
    is_homepage: bool = False
    seo: Optional[Dict[str, Any]] = None
    sections: Optional[List[Section]] = None
    clone_from_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate page name."""
        if not v.strip():
            raise ValueError("Page name cannot be empty")
        return v.strip()

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: Optional[str]) -> Optional[str]:
        """Validate page slug format."""
        return validate_slug(v)


class UpdatePageRequest(SitesmithModel):
    """Partial page update; only fields that are set are applied."""

    name: Optional[str] = None
    slug: Optional[str] = None
    seo: Optional[Dict[str, Any]] = None
    sections: Optional[List[Section]] = None

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: Optional[str]) -> Optional[str]:
        """Validate page slug format."""
        return validate_slug(v)

    def is_empty(self) -> bool:
        """Whether the request changes nothing."""
        return all(getattr(self, name) is None for name in self.model_fields_set)
