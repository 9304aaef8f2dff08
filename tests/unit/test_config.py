"""Unit tests for config.py module.

Tests the Profile model and ConfigManager for profile management, file
persistence and environment overrides.
"""

import json

import pytest
from pydantic import ValidationError

from sitesmith.config import (
    ConfigManager,
    ContentDefaults,
    Profile,
    RenderSettings,
    default_copyright,
)
from sitesmith.exceptions import ConfigError

ENV_VARS = [
    "SITESMITH_DATABASE_URL",
    "SITESMITH_USER",
    "SITESMITH_OUTPUT_FORMAT",
    "SITESMITH_CDN_BASE_URL",
    "SITESMITH_CONFIG_DIR",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove sitesmith variables from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestProfile:
    """Test cases for the Profile model."""

    def test_profile_defaults(self):
        """Test creating a profile with minimal data."""
        profile = Profile(name="default", user_id="alice")
        assert profile.output_format == "table"
        assert profile.database_url is None
        assert profile.image_optimization is True
        assert profile.tracking_endpoint == "/api/sites/{site_id}/track"
        assert profile.active is False

    def test_profile_name_validation(self):
        """Test profile names are restricted to safe characters."""
        Profile(name="team-prod_1", user_id="alice")
        with pytest.raises(ValidationError):
            Profile(name="bad name", user_id="alice")

    def test_profile_user_required(self):
        """Test a blank user id is rejected."""
        with pytest.raises(ValidationError):
            Profile(name="default", user_id="  ")

    def test_profile_output_format(self):
        """Test output formats are normalized and checked."""
        assert Profile(name="p", user_id="u", output_format="JSON").output_format == "json"
        with pytest.raises(ValidationError):
            Profile(name="p", user_id="u", output_format="xml")

    def test_profile_database_url(self):
        """Test database URLs must name a dialect."""
        with pytest.raises(ValidationError):
            Profile(name="p", user_id="u", database_url="sites.db")

    def test_tracking_endpoint_placeholder(self):
        """Test the tracking endpoint must contain the site id placeholder."""
        with pytest.raises(ValidationError):
            Profile(name="p", user_id="u", tracking_endpoint="/track")

    def test_render_settings(self):
        """Test render settings are derived from the profile."""
        profile = Profile(name="p", user_id="u", cdn_base_url="https://cdn.example.com/", image_optimization=False)
        settings = profile.render_settings()
        assert isinstance(settings, RenderSettings)
        assert settings.cdn_base_url == "https://cdn.example.com"
        assert settings.image_optimization is False

    def test_content_defaults(self):
        """Test content defaults carry the organization name."""
        profile = Profile(name="p", user_id="u", organization_name="Acme Trust")
        assert "Acme Trust" in profile.content_defaults().global_settings.footer.copyright


class TestContentDefaults:
    """Test cases for content defaults."""

    def test_default_copyright(self):
        """Test the copyright line format."""
        assert default_copyright("Acme", 2026) == "© 2026 Acme. All rights reserved."

    def test_for_organization(self):
        """Test organization defaults keep the default theme."""
        defaults = ContentDefaults.for_organization("Acme", 2026)
        assert defaults.global_settings.footer.copyright == "© 2026 Acme. All rights reserved."
        assert defaults.homepage_slug == "home"
        assert defaults.template_version == "1.0.0"


class TestConfigManager:
    """Test cases for the ConfigManager class."""

    @pytest.fixture
    def config_manager(self, tmp_path):
        """Create a ConfigManager with a temporary directory."""
        return ConfigManager(config_dir=tmp_path / ".sitesmith")

    def test_creates_directories(self, config_manager):
        """Test the configuration directories are created."""
        assert config_manager.config_dir.is_dir()
        assert config_manager.profiles_dir.is_dir()

    def test_config_dir_from_environment(self, tmp_path, monkeypatch):
        """Test SITESMITH_CONFIG_DIR selects the directory."""
        monkeypatch.setenv("SITESMITH_CONFIG_DIR", str(tmp_path / "custom"))
        manager = ConfigManager()
        assert manager.config_dir == tmp_path / "custom"

    def test_first_profile_becomes_active(self, config_manager):
        """Test the first created profile is activated."""
        config_manager.create_profile("default", "alice")
        config_manager.create_profile("team", "bob")
        assert config_manager.get_active_profile() == "default"
        assert config_manager.get_default_profile().user_id == "alice"

    def test_profiles_persist(self, config_manager):
        """Test profiles survive a reload."""
        config_manager.create_profile("default", "alice", database_url="sqlite:///sites.db")
        config_manager.create_profile("team", "bob")
        config_manager.set_active_profile("team")

        reloaded = ConfigManager(config_dir=config_manager.config_dir)
        assert reloaded.get_active_profile() == "team"
        assert reloaded.get_profile("default").database_url == "sqlite:///sites.db"
        with open(config_manager.profiles_dir / "team.json") as f:
            assert json.load(f)["user_id"] == "bob"

    def test_duplicate_profile(self, config_manager):
        """Test creating an existing profile needs overwrite."""
        config_manager.create_profile("default", "alice")
        with pytest.raises(ConfigError):
            config_manager.create_profile("default", "bob")
        profile = config_manager.create_profile("default", "bob", overwrite=True)
        assert profile.user_id == "bob"

    def test_invalid_profile_raises_config_error(self, config_manager):
        """Test invalid values surface as ConfigError."""
        with pytest.raises(ConfigError):
            config_manager.create_profile("default", "alice", output_format="xml")

    def test_list_profiles(self, config_manager):
        """Test listed profiles mark the active one."""
        config_manager.create_profile("default", "alice")
        config_manager.create_profile("team", "bob")
        profiles = {item["name"]: item for item in config_manager.list_profiles()}
        assert profiles["default"]["active"] is True
        assert profiles["team"]["active"] is False

    def test_missing_profile(self, config_manager):
        """Test unknown profiles raise ConfigError."""
        with pytest.raises(ConfigError):
            config_manager.get_profile("nope")
        with pytest.raises(ConfigError):
            config_manager.set_active_profile("nope")
        with pytest.raises(ConfigError):
            config_manager.get_default_profile()

    def test_delete_profile(self, config_manager):
        """Test deleting the active profile clears the active setting."""
        config_manager.create_profile("default", "alice")
        config_manager.delete_profile("default")
        assert config_manager.get_active_profile() is None
        assert not (config_manager.profiles_dir / "default.json").exists()
        with pytest.raises(ConfigError):
            config_manager.delete_profile("default")

    def test_default_database_url(self, config_manager):
        """Test profiles without a URL use SQLite in the config directory."""
        profile = config_manager.create_profile("default", "alice")
        url = config_manager.resolve_database_url(profile)
        assert url == f"sqlite:///{config_manager.config_dir / 'sitesmith.db'}"

    def test_database_url_environment_override(self, config_manager, monkeypatch):
        """Test SITESMITH_DATABASE_URL wins over the profile."""
        profile = config_manager.create_profile("default", "alice", database_url="sqlite:///a.db")
        monkeypatch.setenv("SITESMITH_DATABASE_URL", "sqlite:///b.db")
        assert config_manager.resolve_database_url(profile) == "sqlite:///b.db"

    def test_apply_environment(self, config_manager, monkeypatch):
        """Test environment variables override profile fields."""
        profile = config_manager.create_profile("default", "alice")
        monkeypatch.setenv("SITESMITH_USER", "carol")
        monkeypatch.setenv("SITESMITH_OUTPUT_FORMAT", "YAML")
        updated = config_manager.apply_environment(profile)
        assert updated.user_id == "carol"
        assert updated.output_format == "yaml"
        assert profile.user_id == "alice"

    def test_apply_environment_invalid(self, config_manager, monkeypatch):
        """Test invalid environment values raise ConfigError."""
        profile = config_manager.create_profile("default", "alice")
        monkeypatch.setenv("SITESMITH_OUTPUT_FORMAT", "xml")
        with pytest.raises(ConfigError):
            config_manager.apply_environment(profile)

    def test_environment_config(self, config_manager, monkeypatch):
        """Test a profile can be built from the environment alone."""
        assert not config_manager.has_environment_config()
        with pytest.raises(ConfigError):
            config_manager.get_environment_config()

        monkeypatch.setenv("SITESMITH_USER", "dave")
        assert config_manager.has_environment_config()
        profile = Profile(**config_manager.get_environment_config())
        assert profile.name == "environment"
        assert profile.user_id == "dave"

    def test_corrupt_config_file(self, tmp_path):
        """Test an unreadable config file raises ConfigError."""
        config_dir = tmp_path / ".sitesmith"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("active_profile = [unclosed")
        with pytest.raises(ConfigError):
            ConfigManager(config_dir=config_dir)
