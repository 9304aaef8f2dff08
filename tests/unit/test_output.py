"""Unit tests for output.py module.

Tests the OutputFormatter class for table, JSON and YAML rendering and
format selection.
"""

import json
from io import StringIO
from unittest.mock import patch

import pytest
import yaml
from rich.console import Console

from sitesmith.exceptions import ValidationError
from sitesmith.output import OutputFormatter


class TestOutputFormatter:
    """Test cases for the OutputFormatter class."""

    @pytest.fixture
    def buffer(self):
        return StringIO()

    @pytest.fixture
    def formatter(self, buffer):
        """Formatter writing tables into a buffer."""
        return OutputFormatter(Console(file=buffer, width=200, color_system=None))

    @pytest.fixture
    def sample_data(self):
        return [
            {"id": "t1", "name": "Spring Gala", "isSystemTemplate": False, "tags": ["gala", "events"]},
            {"id": "t2", "name": "Charity Starter", "isSystemTemplate": True, "tags": []},
        ]

    def test_determine_format_override(self, formatter):
        """Test an explicit format wins."""
        assert formatter.determine_format("YAML") == "yaml"

    def test_determine_format_environment(self, formatter, monkeypatch):
        """Test SITESMITH_OUTPUT_FORMAT is used when no override is given."""
        monkeypatch.setenv("SITESMITH_OUTPUT_FORMAT", "json")
        assert formatter.determine_format() == "json"

    def test_determine_format_tty(self, formatter, monkeypatch):
        """Test terminals get tables and pipes get JSON."""
        monkeypatch.delenv("SITESMITH_OUTPUT_FORMAT", raising=False)
        with patch("sys.stdout.isatty", return_value=True):
            assert formatter.determine_format() == "table"
        with patch("sys.stdout.isatty", return_value=False):
            assert formatter.determine_format() == "json"

    def test_render_table(self, formatter, buffer, sample_data):
        """Test table output uses titled columns and symbols for booleans."""
        formatter.render(sample_data, format="table", columns=["name", "isSystemTemplate", "tags"], title="Templates")
        output = buffer.getvalue()
        assert "Templates" in output
        assert "Is System Template" in output
        assert "Spring Gala" in output
        assert "gala, events" in output
        assert "✓" in output and "✗" in output

    def test_render_table_empty(self, formatter, buffer):
        """Test empty data prints a notice."""
        formatter.render([], format="table")
        assert "No data to display" in buffer.getvalue()

    def test_render_table_single_dict(self, formatter, buffer):
        """Test a single mapping renders as one row."""
        formatter.render({"snake_key": "value"}, format="table")
        output = buffer.getvalue()
        assert "Snake Key" in output
        assert "value" in output

    def test_render_json(self, formatter, sample_data, capsys):
        """Test JSON output is parseable."""
        formatter.render(sample_data, format="json")
        assert json.loads(capsys.readouterr().out) == sample_data

    def test_render_yaml(self, formatter, sample_data, capsys):
        """Test YAML output keeps key order and is parseable."""
        formatter.render(sample_data, format="yaml")
        output = capsys.readouterr().out
        assert yaml.safe_load(output) == sample_data
        assert output.index("id:") < output.index("name:")

    def test_unknown_format(self, formatter):
        """Test unknown formats raise ValidationError."""
        with pytest.raises(ValidationError):
            formatter.render({"a": 1}, format="xml")
