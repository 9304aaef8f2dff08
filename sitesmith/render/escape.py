"""Escaping helpers for HTML and CSS output."""

import re
from typing import Any

_HTML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}
_HTML_RE = re.compile(r"[&<>\"']")
_UNSAFE_CSS_RE = re.compile(r"[<>{};]")


def escape_html(value: Any) -> str:
    """Escape a value for use in HTML text or a quoted attribute.

    ``None`` renders as an empty string.
    """
    if value is None:
        return ""
    return _HTML_RE.sub(lambda match: _HTML_ENTITIES[match.group(0)], str(value))


def css_value(value: Any) -> str:
    """Strip characters that could end a declaration, a rule or a style element."""
    if value is None:
        return ""
    return _UNSAFE_CSS_RE.sub("", str(value))


def style_value(value: Any) -> str:
    """CSS value safe for an inline ``style="..."`` attribute."""
    return escape_html(css_value(value))
