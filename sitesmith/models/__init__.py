"""Data models for sitesmith.

This package contains Pydantic models for the content graph (templates,
pages, sections and components), themes, version snapshots and the
render-time published projection.
"""

from .base import SitesmithModel, merge_model
from .theme import Theme, ColorPalette, Typography, Spacing, BorderRadius, Shadows
from .settings import (
    GlobalSettings,
    HeaderSettings,
    FooterSettings,
    FooterColumn,
    FooterLink,
    NavigationItem,
    SocialLink,
)
from .component import BaseComponent, UnknownComponent, COMPONENT_TYPES, parse_component
from .page import Page, PageSeo, Section, CreatePageRequest, UpdatePageRequest
from .template import (
    Template,
    TemplateListItem,
    TemplateSearchParams,
    TemplateSearchResult,
    CreateTemplateRequest,
    UpdateTemplateRequest,
)
from .version import TemplateVersion, VersionSnapshot
from .published import PublishedContent, GeneratedPage


__all__ = [
    # Base
    "SitesmithModel",
    "merge_model",

    # Theme
    "Theme",
    "ColorPalette",
    "Typography",
    "Spacing",
    "BorderRadius",
    "Shadows",

    # Settings
    "GlobalSettings",
    "HeaderSettings",
    "FooterSettings",
    "FooterColumn",
    "FooterLink",
    "NavigationItem",
    "SocialLink",

    # Content
    "BaseComponent",
    "UnknownComponent",
    "COMPONENT_TYPES",
    "parse_component",
    "Page",
    "PageSeo",
    "Section",
    "Template",
    "TemplateListItem",
    "TemplateVersion",
    "VersionSnapshot",

    # Requests
    "CreatePageRequest",
    "UpdatePageRequest",
    "CreateTemplateRequest",
    "UpdateTemplateRequest",
    "TemplateSearchParams",
    "TemplateSearchResult",

    # Rendering
    "PublishedContent",
    "GeneratedPage",
]
