"""Render-time projection of a template.

``PublishedContent`` is assembled from a template and its pages right
before rendering and is never persisted.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import SitesmithModel
from .page import Page
from .settings import SocialLink
from .theme import Theme


class PublishedNavItem(SitesmithModel):
    id: str
    label: str = ""
    url: str = "#"
    open_in_new_tab: bool = False
    children: List["PublishedNavItem"] = []


class PublishedNavigation(SitesmithModel):
    items: List[PublishedNavItem] = []
    logo: Optional[str] = None
    logo_alt: Optional[str] = None
    sticky: bool = True
    transparent: bool = False


class PublishedFooterLink(SitesmithModel):
    id: str
    label: str = ""
    url: str = "#"


class PublishedFooterColumn(SitesmithModel):
    id: str
    title: str = ""
    links: List[PublishedFooterLink] = []


class PublishedFooter(SitesmithModel):
    columns: List[PublishedFooterColumn] = []
    social_links: List[SocialLink] = []
    copyright: str = ""
    show_newsletter: bool = False
    newsletter_title: Optional[str] = None
    newsletter_description: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None


class SeoDefaults(SitesmithModel):
    """Site-level fallbacks for page head metadata."""

    title: str = ""
    description: str = ""
    keywords: List[str] = []
    favicon: str = "/favicon.ico"
    og_image: Optional[str] = None
    google_analytics_id: Optional[str] = None
    custom_head_code: Optional[str] = None


class PublishedContent(SitesmithModel):
    """Everything the renderer needs for one site."""

    template_id: str
    template_name: str
    theme: Theme = Field(default_factory=Theme)
    pages: List[Page] = []
    navigation: PublishedNavigation = Field(default_factory=PublishedNavigation)
    footer: PublishedFooter = Field(default_factory=PublishedFooter)
    seo_defaults: SeoDefaults = Field(default_factory=SeoDefaults)
    language: str = "en"
    custom_css: Optional[str] = None
    published_at: Optional[datetime] = None
    version: str = "1.0.0"


class GeneratedPage(SitesmithModel):
    """Static artifacts for one page."""

    slug: str
    html: str
    css: str
