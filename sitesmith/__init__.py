"""sitesmith package.

Build, version and render themed multi-page websites. Templates carry a
theme, site-wide settings and ordered pages made of sections and
components; stores persist them with SQLAlchemy and the renderer turns
them into static HTML.
"""

__version__ = "0.1.0"
__description__ = "Themed multi-page website builder"

# Re-export main classes for convenience
from .config import ConfigManager, Profile, RenderSettings, ContentDefaults
from .output import OutputFormatter
from .storage.database import Database
from .stores import TemplateStore, PageStore, VersionStore, increment_version
from .theming import ThemeService, generate_css_variables
from .publishing import PreviewService, build_published_content
from .render import SiteGenerator, ImageOptimizer
from .exceptions import (
    SitesmithError,
    ConfigError,
    NotFoundError,
    ValidationError,
    PersistenceError,
    RenderError,
)

__all__ = [
    "__version__",
    "__description__",
    "ConfigManager",
    "Profile",
    "RenderSettings",
    "ContentDefaults",
    "OutputFormatter",
    "Database",
    "TemplateStore",
    "PageStore",
    "VersionStore",
    "increment_version",
    "ThemeService",
    "generate_css_variables",
    "PreviewService",
    "build_published_content",
    "SiteGenerator",
    "ImageOptimizer",
    "SitesmithError",
    "ConfigError",
    "NotFoundError",
    "ValidationError",
    "PersistenceError",
    "RenderError",
]
