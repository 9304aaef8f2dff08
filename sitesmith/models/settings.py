"""Site-wide settings: header navigation, footer and head defaults."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import SitesmithModel, merge_model


class NavigationItem(SitesmithModel):
    """Header navigation entry; children form a one-level dropdown."""

    id: Optional[str] = None
    label: str = ""
    href: str = "#"
    is_external: bool = False
    children: List["NavigationItem"] = []


class FooterLink(SitesmithModel):
    label: str = ""
    href: str = "#"


class FooterColumn(SitesmithModel):
    title: str = ""
    links: List[FooterLink] = []


class SocialLink(SitesmithModel):
    platform: str = "website"
    url: str = ""


class HeaderSettings(SitesmithModel):
    """Header configuration."""

    logo: Optional[str] = None
    logo_alt: Optional[str] = None
    navigation: List[NavigationItem] = []
    sticky: bool = True
    transparent: bool = False
    background_color: Optional[str] = None


class FooterSettings(SitesmithModel):
    """Footer configuration."""

    logo: Optional[str] = None
    description: Optional[str] = None
    columns: List[FooterColumn] = []
    social_links: List[SocialLink] = []
    copyright: str = ""
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    show_newsletter: bool = False
    newsletter_title: Optional[str] = None
    newsletter_description: Optional[str] = None


class GlobalSettings(SitesmithModel):
    """Settings shared by every page of a template."""

    favicon: Optional[str] = None
    language: str = "en"
    header: HeaderSettings = Field(default_factory=HeaderSettings)
    footer: FooterSettings = Field(default_factory=FooterSettings)
    custom_css: Optional[str] = None
    custom_head_code: Optional[str] = None
    analytics_id: Optional[str] = None

    def merged(self, patch: Optional[Dict[str, Any]]) -> "GlobalSettings":
        """Merge a partial settings document over these settings."""
        return merge_model(self, patch)
