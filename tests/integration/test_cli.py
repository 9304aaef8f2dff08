"""End-to-end tests for the sitesmith CLI.

Each test gets its own configuration directory and SQLite file; commands run
through Typer's CliRunner and JSON output is parsed from stdout.
"""

import json

import pytest
from typer.testing import CliRunner

from sitesmith.app import app, register_commands


@pytest.fixture(scope="module", autouse=True)
def commands():
    register_commands()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def environment(tmp_path, monkeypatch):
    """Isolated configuration and database."""
    for name in ("SITESMITH_USER", "SITESMITH_OUTPUT_FORMAT", "SITESMITH_CDN_BASE_URL", "SITESMITH_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SITESMITH_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("SITESMITH_DATABASE_URL", f"sqlite:///{tmp_path / 'sites.db'}")


@pytest.fixture
def invoke(runner):
    """Run a command as alice with JSON output."""

    def run(*args, user="alice"):
        return runner.invoke(app, ["--user", user, "-o", "json", *args])

    return run


def data(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


@pytest.fixture
def template_id(invoke):
    created = data(invoke("templates", "create", "--name", "Spring Gala", "--tag", "Gala"))
    return created["id"]


class TestGlobalOptions:
    """Test cases for the root command."""

    def test_version(self, runner):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "sitesmith" in result.stdout

    def test_no_configuration(self, runner):
        """Test commands explain how to configure when nothing is set up."""
        result = runner.invoke(app, ["templates", "list"])
        assert result.exit_code == 1
        assert "sitesmith config init" in result.output


class TestConfigCommands:
    """Test cases for profile commands."""

    def test_init_and_use_profile(self, runner):
        """Test a saved profile supplies the user id."""
        result = runner.invoke(app, ["config", "init", "--user", "carol", "--no-interactive"])
        assert result.exit_code == 0, result.output
        assert "set as active" in result.output

        created = data(runner.invoke(app, ["-o", "json", "templates", "create", "--name", "Mine"]))
        assert created["userId"] == "carol"

    def test_init_requires_user(self, runner):
        """Test init fails without a user id when not interactive."""
        result = runner.invoke(app, ["config", "init", "--no-interactive"])
        assert result.exit_code == 1
        assert "user id is required" in result.output

    def test_list_and_show(self, runner):
        """Test profiles can be listed and shown."""
        runner.invoke(app, ["config", "init", "--user", "carol", "--no-interactive"])
        runner.invoke(app, ["config", "init", "--name", "team", "--user", "dave", "--no-interactive"])

        profiles = data(runner.invoke(app, ["-o", "json", "config", "list"]))
        assert {profile["name"] for profile in profiles} == {"default", "team"}

        shown = data(runner.invoke(app, ["-o", "json", "config", "show", "team"]))
        assert shown["user_id"] == "dave"
        assert shown["resolved_database_url"].startswith("sqlite:///")

    def test_use_and_delete(self, runner):
        """Test switching and deleting profiles."""
        runner.invoke(app, ["config", "init", "--user", "carol", "--no-interactive"])
        runner.invoke(app, ["config", "init", "--name", "team", "--user", "dave", "--no-interactive"])

        assert runner.invoke(app, ["config", "use", "team"]).exit_code == 0
        created = data(runner.invoke(app, ["-o", "json", "templates", "create", "--name", "Team site"]))
        assert created["userId"] == "dave"

        assert runner.invoke(app, ["config", "delete", "default", "--yes"]).exit_code == 0
        result = runner.invoke(app, ["config", "show", "default"])
        assert result.exit_code == 1


class TestTemplateCommands:
    """Test cases for template commands."""

    def test_create_and_get(self, invoke, template_id):
        """Test a created template can be fetched."""
        template = data(invoke("templates", "get", template_id))
        assert template["name"] == "Spring Gala"
        assert template["tags"] == ["gala"]
        assert template["pages"][0]["slug"] == "home"

    def test_create_with_theme_file(self, invoke, tmp_path):
        """Test theme overrides load from YAML."""
        theme_file = tmp_path / "theme.yaml"
        theme_file.write_text("colors:\n  primary: '#101010'\n")
        created = data(invoke("templates", "create", "--name", "Dark", "--theme-file", str(theme_file)))
        assert created["theme"]["colors"]["primary"] == "#101010"

    def test_create_invalid_category(self, invoke):
        """Test invalid values are reported, not raised."""
        result = invoke("templates", "create", "--name", "Bad", "--category", "spaceship")
        assert result.exit_code == 1
        assert "Validation error" in result.output

    def test_list(self, invoke, template_id):
        """Test list returns a search result."""
        result = data(invoke("templates", "list", "--search", "gala"))
        assert result["total"] == 1
        assert result["items"][0]["id"] == template_id
        assert result["items"][0]["pageCount"] == 1

    def test_not_visible(self, invoke, template_id):
        """Test other users cannot see the template."""
        result = invoke("templates", "get", template_id, user="bob")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_update(self, invoke, template_id):
        """Test updates apply and empty updates fail."""
        updated = data(invoke("templates", "update", template_id, "--status", "published"))
        assert updated["status"] == "published"
        result = invoke("templates", "update", template_id)
        assert result.exit_code == 1
        assert "No fields to update" in result.output

    def test_duplicate_and_delete(self, invoke, template_id):
        """Test duplicating and deleting templates."""
        copy = data(invoke("templates", "duplicate", template_id))
        assert copy["name"] == "Spring Gala (Copy)"

        assert invoke("templates", "delete", copy["id"], "--yes").exit_code == 0
        assert invoke("templates", "get", copy["id"]).exit_code == 1

    def test_delete_cancelled(self, runner, template_id):
        """Test answering no keeps the template."""
        result = runner.invoke(app, ["--user", "alice", "templates", "delete", template_id], input="n\n")
        assert result.exit_code == 1
        assert runner.invoke(app, ["--user", "alice", "templates", "get", template_id]).exit_code == 0


class TestPageCommands:
    """Test cases for page commands."""

    def test_page_lifecycle(self, invoke, template_id, tmp_path):
        """Test creating, updating, reordering and deleting pages."""
        sections = tmp_path / "sections.json"
        sections.write_text(json.dumps([{"components": [{"type": "text", "content": "Hello"}]}]))
        about = data(
            invoke("pages", "create", template_id, "--name", "About", "--slug", "about", "--sections-file", str(sections))
        )
        assert about["sections"][0]["components"][0]["content"] == "Hello"

        conflict = invoke("pages", "create", template_id, "--name", "Again", "--slug", "about")
        assert conflict.exit_code == 1
        assert "Field: slug" in conflict.output

        updated = data(invoke("pages", "update", template_id, about["id"], "--seo-title", "About us"))
        assert updated["seo"]["title"] == "About us"

        listed = data(invoke("pages", "list", template_id))
        home_id = listed[0]["id"]
        assert invoke("pages", "reorder", template_id, about["id"], home_id).exit_code == 0
        assert [page["slug"] for page in data(invoke("pages", "list", template_id))] == ["about", "home"]

        assert invoke("pages", "delete", template_id, home_id, "--yes").exit_code == 1
        assert invoke("pages", "delete", template_id, about["id"], "--yes").exit_code == 0

    def test_reorder_unknown_page(self, invoke, template_id):
        """Test unknown ids are rejected."""
        result = invoke("pages", "reorder", template_id, "nope")
        assert result.exit_code == 1
        assert "does not belong" in result.output


class TestVersionCommands:
    """Test cases for version commands."""

    def test_version_lifecycle(self, invoke, template_id):
        """Test creating, listing, showing and restoring versions."""
        version = data(invoke("versions", "create", template_id, "-m", "First"))
        assert version["version"] == "1.0.1"

        invoke("pages", "create", template_id, "--name", "Extra", "--slug", "extra")
        listed = data(invoke("versions", "list", template_id))
        assert [item["version"] for item in listed] == ["1.0.1"]

        shown = data(invoke("versions", "show", template_id, version["id"]))
        assert shown["changes"] == "First"

        restored = data(invoke("versions", "restore", template_id, version["id"], "--yes"))
        assert [page["slug"] for page in restored["pages"]] == ["home"]


class TestThemeAndSiteCommands:
    """Test cases for theme and site commands."""

    def test_palette_and_css(self, runner, invoke, template_id):
        """Test palettes change the generated CSS variables."""
        colors = data(invoke("themes", "palette", template_id, "--preset", "ocean", "--color", "accent=#000000"))
        assert colors["primary"] == "#0369a1"
        assert colors["accent"] == "#000000"

        result = runner.invoke(app, ["--user", "alice", "themes", "css", template_id])
        assert result.exit_code == 0
        assert "--color-primary: #0369a1;" in result.stdout

    def test_palette_requires_colors(self, invoke, template_id):
        """Test a palette needs a preset or colors."""
        assert invoke("themes", "palette", template_id).exit_code == 1

    def test_presets(self, invoke):
        """Test presets list palettes and font pairings."""
        presets = data(invoke("themes", "presets"))
        kinds = {(item["kind"], item["id"]) for item in presets}
        assert ("palette", "midnight") in kinds
        assert ("fonts", "editorial") in kinds

    def test_preview(self, runner, template_id):
        """Test preview writes HTML to stdout."""
        result = runner.invoke(app, ["--user", "alice", "site", "preview", template_id])
        assert result.exit_code == 0
        assert result.stdout.startswith("<!DOCTYPE html>")
        assert "<title>Spring Gala</title>" in result.stdout

    def test_preview_not_found(self, runner):
        """Test previewing an unknown template fails."""
        result = runner.invoke(app, ["--user", "alice", "site", "preview", "missing"])
        assert result.exit_code == 1

    def test_build(self, invoke, template_id, tmp_path):
        """Test build writes one HTML and CSS file per page."""
        invoke("pages", "create", template_id, "--name", "About", "--slug", "about")
        out_dir = tmp_path / "public"
        written = data(invoke("site", "build", template_id, "--out-dir", str(out_dir)))
        assert [item["slug"] for item in written] == ["home", "about"]
        assert (out_dir / "about.html").read_text().startswith("<!DOCTYPE html>")
        assert ":root {" in (out_dir / "home.css").read_text()
