"""Service factory for dependency injection.

Commands never build stores themselves; they ask this module for a
:class:`Services` bundle wired from the profile held in the Typer context.
"""

import logging
from typing import Any, Optional

import typer

from ..config import ConfigManager, Profile
from ..exceptions import ConfigError
from ..publishing import PreviewService
from ..render.site import SiteGenerator
from ..storage.database import Database
from ..stores import PageStore, TemplateStore, VersionStore
from ..theming import ThemeService

logger = logging.getLogger(__name__)


class Services:
    """Stores and services sharing one database."""

    def __init__(self, database: Database, profile: Profile) -> None:
        self.database = database
        self.profile = profile
        self.user_id = profile.user_id

        defaults = profile.content_defaults()
        self.templates = TemplateStore(database, defaults)
        self.pages = PageStore(database)
        self.versions = VersionStore(database, defaults)
        self.themes = ThemeService(self.templates)
        self.previews = PreviewService(self.templates, SiteGenerator(profile.render_settings()))

    def close(self) -> None:
        self.database.dispose()


def create_services(profile: Profile, config_manager: Optional[ConfigManager] = None, echo: bool = False) -> Services:
    """Open the profile's database, create missing tables and wire the services.

    Raises:
        PersistenceError: If the schema cannot be created
    """
    config_manager = config_manager or ConfigManager()
    url = config_manager.resolve_database_url(profile)
    logger.debug("Opening database %s", url.split("@")[-1])
    database = Database(url, echo=echo)
    database.create_all()
    return Services(database, profile)


def get_services(ctx: typer.Context) -> Services:
    """Services for the current command, created once per invocation.

    Raises:
        ConfigError: If no profile or environment configuration is available
    """
    cached = ctx.obj.get("services")
    if cached is not None:
        return cached

    profile = ctx.obj.get("profile")
    if profile is None:
        raise ConfigError(
            "No sitesmith configuration found. Please either:\n"
            "  1. Run 'sitesmith config init' to set up a profile, or\n"
            "  2. Set the SITESMITH_USER environment variable (and optionally SITESMITH_DATABASE_URL)"
        )

    services = create_services(profile, ctx.obj.get("config_manager"), echo=False)
    ctx.obj["services"] = services
    ctx.call_on_close(services.close)
    return services


def render_result(ctx: typer.Context, data: Any, **kwargs: Any) -> None:
    """Render command output in the format selected for this invocation."""
    formatter = ctx.obj["output_formatter"]
    formatter.render(data, format=ctx.obj.get("output_format"), **kwargs)
