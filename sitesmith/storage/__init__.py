"""Persistence adapter for sitesmith.

Tables, the transaction boundary and the row/model codec.
"""

from .database import Database
from .tables import Base, TemplateRow, TemplateTagRow, PageRow, VersionRow

__all__ = [
    "Database",
    "Base",
    "TemplateRow",
    "TemplateTagRow",
    "PageRow",
    "VersionRow",
]
