"""Stores: the persistence-backed operations on templates, pages and versions."""

from .pages import PageStore
from .templates import TemplateStore
from .versions import VersionStore, increment_version

__all__ = [
    "TemplateStore",
    "PageStore",
    "VersionStore",
    "increment_version",
]
