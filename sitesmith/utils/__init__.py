"""Utility modules for the sitesmith CLI.

This package contains the service factory, error formatting and document
loading helpers shared by the command modules.
"""

from .documents import load_document, load_list, load_mapping, parse_assignments
from .errors import format_error_for_user

__all__ = [
    "format_error_for_user",
    "load_document",
    "load_list",
    "load_mapping",
    "parse_assignments",
]
