"""Output rendering and formatting utilities.

This module provides the formatter used by CLI commands to display data
as Rich tables, JSON or YAML.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional, Union

import yaml
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ENV_OUTPUT_FORMAT, OUTPUT_FORMATS
from .exceptions import ValidationError


class OutputFormatter:
    """Main output formatter that handles multiple output formats."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize output formatter.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    def determine_format(self, format_override: Optional[str] = None) -> str:
        """Determine the output format to use.

        Args:
            format_override: Explicit format override

        Returns:
            Format name (table, json, yaml)
        """
        if format_override:
            return format_override.lower()

        env_format = os.environ.get(ENV_OUTPUT_FORMAT)
        if env_format:
            return env_format.lower()

        # Interactive terminals get tables, pipes get JSON
        if sys.stdout.isatty():
            return "table"
        return "json"

    def render(
        self,
        data: Any,
        format: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """Render data in the specified format.

        Args:
            data: Data to render
            format: Output format (table, json, yaml)
            **kwargs: Additional formatting options

        Raises:
            ValidationError: If the format is unknown
        """
        format_name = self.determine_format(format)

        if format_name == "table":
            self.render_table(data, **kwargs)
        elif format_name == "json":
            self.render_json(data, **kwargs)
        elif format_name == "yaml":
            self.render_yaml(data, **kwargs)
        else:
            raise ValidationError(
                f"Unknown output format: {format_name}. Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )

    def render_table(
        self,
        data: Union[List[Dict[str, Any]], Dict[str, Any]],
        columns: Optional[List[str]] = None,
        title: Optional[str] = None,
        show_header: bool = True,
        show_lines: bool = False,
        theme: str = "default",
        **kwargs: Any,
    ) -> None:
        """Render data as a table using Rich.

        Args:
            data: Data to render
            columns: Keys to display, in order
            title: Table title
            show_header: Whether to show column headers
            show_lines: Whether to show row separators
            theme: "simple" for a minimal box style
            **kwargs: Additional arguments
        """
        if not data:
            self.console.print("[dim]No data to display[/dim]")
            return

        if isinstance(data, dict):
            data = [data]

        if not columns:
            all_keys = set()
            for item in data:
                all_keys.update(item.keys())
            columns = sorted(all_keys)

        table = Table(
            title=title,
            show_header=show_header,
            show_lines=show_lines,
            box=box.SIMPLE if theme == "simple" else box.ROUNDED,
        )
        for col in columns:
            table.add_column(_column_title(col), overflow="fold")

        for item in data:
            table.add_row(*[_cell(item.get(col)) for col in columns])

        self.console.print(table)

    def render_json(
        self,
        data: Any,
        pretty: bool = True,
        indent: int = 2,
        **kwargs: Any,
    ) -> None:
        """Render data as JSON.

        Args:
            data: Data to render
            pretty: Whether to format JSON nicely
            indent: Indentation level for pretty printing
            **kwargs: Additional arguments

        Raises:
            ValidationError: If the data cannot be serialized
        """
        try:
            output = json.dumps(
                data,
                indent=indent if pretty else None,
                ensure_ascii=False,
                default=str,
            )
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Failed to serialize data to JSON: {e}")
        print(output)

    def render_yaml(self, data: Any, **kwargs: Any) -> None:
        """Render data as YAML.

        Raises:
            ValidationError: If the data cannot be serialized
        """
        try:
            print(yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False), end="")
        except yaml.YAMLError as e:
            raise ValidationError(f"Failed to serialize data to YAML: {e}")


def _column_title(key: str) -> str:
    # camelCase and snake_case keys both become "Title Case"
    spaced = "".join(f" {char}" if char.isupper() else char for char in key)
    return spaced.replace("_", " ").strip().title()


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)
