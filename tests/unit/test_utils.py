"""Unit tests for CLI helper utilities."""

import pytest
from sqlalchemy.exc import OperationalError

from sitesmith.exceptions import (
    ConfigError,
    NotFoundError,
    PersistenceError,
    RenderError,
    SitesmithError,
    ValidationError,
)
from sitesmith.models.base import validate_model
from sitesmith.models.template import CreateTemplateRequest
from sitesmith.utils import format_error_for_user, load_document, load_list, load_mapping, parse_assignments


class TestDocuments:
    """Test cases for document loading."""

    def test_load_yaml_and_json(self, tmp_path):
        """Test YAML and JSON files both load."""
        yaml_file = tmp_path / "theme.yaml"
        yaml_file.write_text("colors:\n  primary: '#000000'\n")
        json_file = tmp_path / "theme.json"
        json_file.write_text('{"colors": {"primary": "#ffffff"}}')
        assert load_mapping(yaml_file) == {"colors": {"primary": "#000000"}}
        assert load_mapping(json_file) == {"colors": {"primary": "#ffffff"}}

    def test_load_none(self):
        """Test no path loads nothing."""
        assert load_document(None) is None
        assert load_mapping(None) is None

    def test_missing_file(self, tmp_path):
        """Test missing files raise ValidationError."""
        with pytest.raises(ValidationError):
            load_document(tmp_path / "missing.yaml")

    def test_unparseable_file(self, tmp_path):
        """Test syntax errors raise ValidationError."""
        path = tmp_path / "bad.yaml"
        path.write_text("colors: [unclosed")
        with pytest.raises(ValidationError):
            load_document(path)

    def test_type_checks(self, tmp_path):
        """Test mapping and list loaders check the document type."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        assert load_list(path) == ["a", "b"]
        with pytest.raises(ValidationError):
            load_mapping(path)

    def test_parse_assignments(self):
        """Test key=value options become a dict."""
        assert parse_assignments(["primary=#000", " accent = #fff "], "--color") == {
            "primary": "#000",
            "accent": "#fff",
        }
        assert parse_assignments(None, "--color") == {}
        with pytest.raises(ValidationError) as exc_info:
            parse_assignments(["primary"], "--color")
        assert exc_info.value.field == "--color"


class TestFormatErrorForUser:
    """Test cases for format_error_for_user."""

    def test_not_found(self):
        """Test not-found errors are prefixed."""
        error = NotFoundError("Template 't1' not found", resource="template", resource_id="t1")
        assert format_error_for_user(error) == "Not found: Template 't1' not found"

    def test_validation_field(self):
        """Test validation errors name the field."""
        message = format_error_for_user(ValidationError("Slug taken", field="slug"))
        assert "Validation error: Slug taken" in message
        assert "Field: slug" in message

    def test_validation_debug_details(self):
        """Test debug mode lists pydantic error locations."""
        with pytest.raises(ValidationError) as exc_info:
            validate_model(CreateTemplateRequest, {"name": "x", "status": "live"})
        assert "status" in format_error_for_user(exc_info.value, debug=True)

    def test_persistence_hides_cause(self):
        """Test storage causes are shown only in debug mode."""
        cause = OperationalError("UPDATE pages", {}, Exception("database is locked"))
        error = PersistenceError("Failed to reorder pages", operation="reorder pages", cause=cause)
        assert "No changes were saved." in format_error_for_user(error)
        assert "OperationalError" not in format_error_for_user(error)
        assert "OperationalError" in format_error_for_user(error, debug=True)

    def test_render_and_config(self):
        """Test render and configuration errors."""
        assert "Page: about" in format_error_for_user(RenderError("boom", slug="about"))
        assert format_error_for_user(ConfigError("no profile")) == "Configuration error: no profile"

    def test_generic(self):
        """Test base and foreign errors."""
        assert format_error_for_user(SitesmithError("plain")) == "plain"
        assert format_error_for_user(RuntimeError("oops")) == "Unexpected error: oops"
