"""Command modules for the sitesmith CLI."""

from .config import app as config_app
from .pages import app as pages_app
from .site import app as site_app
from .templates import app as templates_app
from .themes import app as themes_app
from .versions import app as versions_app

__all__ = [
    "config_app",
    "pages_app",
    "site_app",
    "templates_app",
    "themes_app",
    "versions_app",
]
