"""Configuration management for sitesmith.

This module provides configuration profile management (which database to
use, who the caller is, how images and analytics are rendered) and the
content defaults injected into the stores.
"""

import os
import tomllib
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any

from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigError
from .models.settings import FooterSettings, GlobalSettings
from .models.theme import Theme

OUTPUT_FORMATS = ("table", "json", "yaml")
DEFAULT_TRACKING_ENDPOINT = "/api/sites/{site_id}/track"
DEFAULT_ORGANIZATION = "Your Organization"

ENV_DATABASE_URL = "SITESMITH_DATABASE_URL"
ENV_USER = "SITESMITH_USER"
ENV_OUTPUT_FORMAT = "SITESMITH_OUTPUT_FORMAT"
ENV_CDN_BASE_URL = "SITESMITH_CDN_BASE_URL"
ENV_CONFIG_DIR = "SITESMITH_CONFIG_DIR"


def default_copyright(organization_name: str = DEFAULT_ORGANIZATION, year: Optional[int] = None) -> str:
    """Build the default footer copyright line."""
    year = year or datetime.now().year
    return f"© {year} {organization_name}. All rights reserved."


class ContentDefaults(BaseModel):
    """Values new templates start from.

    Passed to the stores at construction so defaults never live in mutable
    module state.
    """

    theme: Theme = Field(default_factory=Theme)
    global_settings: GlobalSettings = Field(
        default_factory=lambda: GlobalSettings(footer=FooterSettings(copyright=default_copyright()))
    )
    template_version: str = "1.0.0"
    homepage_name: str = "Home"
    homepage_slug: str = "home"

    @classmethod
    def for_organization(cls, organization_name: str, year: Optional[int] = None) -> "ContentDefaults":
        """Defaults with the organization's name in the footer copyright."""
        settings = GlobalSettings(footer=FooterSettings(copyright=default_copyright(organization_name, year)))
        return cls(global_settings=settings)


class RenderSettings(BaseModel):
    """Renderer options that depend on the deployment."""

    cdn_base_url: Optional[str] = None
    image_optimization: bool = True
    tracking_endpoint: str = DEFAULT_TRACKING_ENDPOINT

    @field_validator("cdn_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the CDN base URL."""
        return v.rstrip("/") if v else None

    @field_validator("tracking_endpoint")
    @classmethod
    def validate_tracking_endpoint(cls, v: str) -> str:
        """Validate that the endpoint can be formatted with the site id."""
        if "{site_id}" not in v:
            raise ValueError("Tracking endpoint must contain '{site_id}'")
        return v


class Profile(BaseModel):
    """Configuration profile for a sitesmith workspace."""

    name: str = Field(..., description="Profile name")
    database_url: Optional[str] = Field(None, description="SQLAlchemy database URL")
    user_id: str = Field(..., description="Caller identity used as ownership key")
    output_format: str = Field(default="table", description="Default output format")
    organization_name: str = Field(default=DEFAULT_ORGANIZATION, description="Name used in footer defaults")
    cdn_base_url: Optional[str] = Field(None, description="Image CDN base URL")
    image_optimization: bool = Field(default=True, description="Rewrite image URLs for optimization")
    tracking_endpoint: str = Field(default=DEFAULT_TRACKING_ENDPOINT, description="Analytics beacon endpoint")
    active: bool = Field(default=False, description="Whether this is the active profile")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate profile name."""
        if not v or not v.replace("-", "").replace("_", "").isalnum():
            raise ValueError("Profile name may only contain letters, digits, '-' and '_'")
        return v

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Validate user id."""
        if not v.strip():
            raise ValueError("User id cannot be empty")
        return v.strip()

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate output format."""
        v = v.lower()
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"Output format must be one of: {', '.join(OUTPUT_FORMATS)}")
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate database URL format."""
        if v is None:
            return v
        if "://" not in v:
            raise ValueError("Invalid database URL. Expected format: dialect://...")
        return v

    @field_validator("tracking_endpoint")
    @classmethod
    def validate_tracking_endpoint(cls, v: str) -> str:
        """Validate tracking endpoint."""
        if "{site_id}" not in v:
            raise ValueError("Tracking endpoint must contain '{site_id}'")
        return v

    def render_settings(self) -> RenderSettings:
        """Renderer options for this profile."""
        return RenderSettings(
            cdn_base_url=self.cdn_base_url,
            image_optimization=self.image_optimization,
            tracking_endpoint=self.tracking_endpoint,
        )

    def content_defaults(self) -> ContentDefaults:
        """Content defaults for this profile."""
        return ContentDefaults.for_organization(self.organization_name)


class ConfigManager:
    """Manages sitesmith configuration profiles."""

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """Initialize configuration manager.

        Args:
            config_dir: Configuration directory path. If None, uses default.
        """
        if config_dir is None:
            env_dir = os.getenv(ENV_CONFIG_DIR)
            config_dir = Path(env_dir) if env_dir else Path.home() / ".sitesmith"
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "config.toml"
        self.profiles_dir = self.config_dir / "profiles"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.profiles_dir.mkdir(exist_ok=True)

        self._profiles: Dict[str, Profile] = {}
        self._active_profile: Optional[str] = None
        self._load_config()

    @property
    def default_database_url(self) -> str:
        """SQLite database stored in the configuration directory."""
        return f"sqlite:///{self.config_dir / 'sitesmith.db'}"

    def create_profile(
        self,
        name: str,
        user_id: str,
        database_url: Optional[str] = None,
        output_format: str = "table",
        organization_name: str = DEFAULT_ORGANIZATION,
        cdn_base_url: Optional[str] = None,
        image_optimization: bool = True,
        tracking_endpoint: str = DEFAULT_TRACKING_ENDPOINT,
        overwrite: bool = False,
    ) -> Profile:
        """Create a new configuration profile.

        Args:
            name: Profile name
            user_id: Caller identity
            database_url: SQLAlchemy database URL (defaults to a local SQLite file)
            output_format: Default output format
            organization_name: Organization used in content defaults
            cdn_base_url: Image CDN base URL
            image_optimization: Whether image URLs are rewritten
            tracking_endpoint: Analytics beacon endpoint
            overwrite: Replace an existing profile with the same name

        Returns:
            Created profile

        Raises:
            ConfigError: If profile creation fails
        """
        if name in self._profiles and not overwrite:
            raise ConfigError(f"Profile '{name}' already exists")

        try:
            profile = Profile(
                name=name,
                user_id=user_id,
                database_url=database_url,
                output_format=output_format,
                organization_name=organization_name,
                cdn_base_url=cdn_base_url,
                image_optimization=image_optimization,
                tracking_endpoint=tracking_endpoint,
                active=self._active_profile == name,
            )
        except ValueError as e:
            raise ConfigError(f"Failed to create profile: {e}") from e

        self._profiles[name] = profile
        self._save_profile(profile)
        if self._active_profile is None:
            self.set_active_profile(name)
        else:
            self._save_config()

        return profile

    def get_profile(self, name: str) -> Profile:
        """Get a specific profile by name.

        Raises:
            ConfigError: If profile doesn't exist
        """
        if name not in self._profiles:
            raise ConfigError(f"Profile '{name}' not found")

        return self._profiles[name]

    def list_profiles(self) -> List[Dict[str, Any]]:
        """List all available profiles."""
        profiles = []
        for profile in self._profiles.values():
            profile_dict = profile.model_dump()
            profile_dict["active"] = profile.name == self._active_profile
            profiles.append(profile_dict)

        return profiles

    def set_active_profile(self, name: str) -> None:
        """Set the active profile.

        Raises:
            ConfigError: If profile doesn't exist
        """
        if name not in self._profiles:
            raise ConfigError(f"Profile '{name}' not found")

        for profile in self._profiles.values():
            profile.active = profile.name == name

        self._active_profile = name
        self._save_config()

    def get_active_profile(self) -> Optional[str]:
        """Get the name of the active profile."""
        return self._active_profile

    def get_default_profile(self) -> Profile:
        """Get the default (active) profile.

        Raises:
            ConfigError: If no default profile is set
        """
        if not self._active_profile:
            raise ConfigError("No default profile set")

        return self._profiles[self._active_profile]

    def delete_profile(self, name: str) -> None:
        """Delete a configuration profile.

        Raises:
            ConfigError: If profile doesn't exist
        """
        if name not in self._profiles:
            raise ConfigError(f"Profile '{name}' not found")

        if self._active_profile == name:
            self._active_profile = None

        del self._profiles[name]

        profile_file = self.profiles_dir / f"{name}.json"
        if profile_file.exists():
            profile_file.unlink()

        self._save_config()

    def resolve_database_url(self, profile: Optional[Profile]) -> str:
        """Database URL for a profile, honoring the environment override."""
        env_url = os.getenv(ENV_DATABASE_URL)
        if env_url:
            return env_url
        if profile and profile.database_url:
            return profile.database_url
        return self.default_database_url

    def apply_environment(self, profile: Profile) -> Profile:
        """Return a copy of ``profile`` with environment overrides applied."""
        overrides: Dict[str, Any] = {}
        if os.getenv(ENV_DATABASE_URL):
            overrides["database_url"] = os.getenv(ENV_DATABASE_URL)
        if os.getenv(ENV_USER):
            overrides["user_id"] = os.getenv(ENV_USER)
        if os.getenv(ENV_OUTPUT_FORMAT):
            overrides["output_format"] = os.getenv(ENV_OUTPUT_FORMAT).lower()
        if os.getenv(ENV_CDN_BASE_URL):
            overrides["cdn_base_url"] = os.getenv(ENV_CDN_BASE_URL)

        if not overrides:
            return profile

        try:
            return Profile(**{**profile.model_dump(), **overrides})
        except ValueError as e:
            raise ConfigError(f"Invalid environment configuration: {e}") from e

    def has_environment_config(self) -> bool:
        """Check if environment variables provide sufficient configuration."""
        return bool(os.getenv(ENV_USER))

    def get_environment_config(self) -> Dict[str, Any]:
        """Get configuration from environment variables.

        Raises:
            ConfigError: If insufficient environment configuration
        """
        env_user = os.getenv(ENV_USER)
        if not env_user:
            raise ConfigError(f"{ENV_USER} environment variable is required")

        return {
            "name": "environment",
            "user_id": env_user,
            "database_url": os.getenv(ENV_DATABASE_URL),
            "output_format": (os.getenv(ENV_OUTPUT_FORMAT) or "table").lower(),
            "cdn_base_url": os.getenv(ENV_CDN_BASE_URL),
            "active": True,
        }

    def _load_config(self) -> None:
        """Load configuration from file."""
        if not self.config_file.exists():
            return

        try:
            with open(self.config_file, "rb") as f:
                config_data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        active = config_data.get("active_profile")
        self._active_profile = active or None

        for profile_file in sorted(self.profiles_dir.glob("*.json")):
            try:
                with open(profile_file, "r") as f:
                    profile_data = json.load(f)
                profile = Profile(**profile_data)
            except (OSError, ValueError) as e:
                raise ConfigError(f"Failed to load profile {profile_file.name}: {e}") from e
            self._profiles[profile.name] = profile

        if self._active_profile not in self._profiles:
            self._active_profile = None

    def _save_config(self) -> None:
        """Save configuration to file."""
        # tomllib is read-only, so the file is written by hand
        active = self._active_profile or ""
        toml_content = f"""# sitesmith configuration
version = "1.0"
active_profile = "{active}"
"""
        try:
            with open(self.config_file, "w") as f:
                f.write(toml_content)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}") from e

    def _save_profile(self, profile: Profile) -> None:
        """Save individual profile to file."""
        profile_file = self.profiles_dir / f"{profile.name}.json"
        try:
            with open(profile_file, "w") as f:
                json.dump(profile.model_dump(), f, indent=2, default=str)
        except OSError as e:
            raise ConfigError(f"Failed to save profile: {e}") from e
