"""Version snapshot models."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import SitesmithModel
from .page import Page
from .settings import GlobalSettings
from .theme import Theme


class VersionSnapshot(SitesmithModel):
    """Complete restore point of a template's content."""

    theme: Theme = Field(default_factory=Theme)
    global_settings: GlobalSettings = Field(default_factory=GlobalSettings)
    pages: List[Page] = []


class TemplateVersion(SitesmithModel):
    """Immutable, numbered snapshot of a template."""

    id: str
    template_id: str
    version: str
    changes: Optional[str] = None
    snapshot: VersionSnapshot = Field(default_factory=VersionSnapshot)
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
