"""Conversion between table rows and typed models.

JSON columns are decoded here and nowhere else.
"""

from typing import Any, Dict, List, Optional

from ..models.page import Page, PageSeo, Section
from ..models.settings import GlobalSettings
from ..models.template import Template, TemplateListItem
from ..models.theme import Theme
from ..models.version import TemplateVersion, VersionSnapshot
from .tables import PageRow, TemplateRow, VersionRow


def decode_theme(data: Optional[Dict[str, Any]]) -> Theme:
    return Theme.model_validate(data or {})


def decode_settings(data: Optional[Dict[str, Any]]) -> GlobalSettings:
    return GlobalSettings.model_validate(data or {})


def decode_seo(data: Optional[Dict[str, Any]]) -> PageSeo:
    return PageSeo.model_validate(data or {})


def decode_sections(data: Optional[List[Any]]) -> List[Section]:
    return [Section.model_validate(section) for section in data or []]


def encode_sections(sections: Optional[List[Section]]) -> List[Dict[str, Any]]:
    return [section.to_document() for section in sections or []]


def page_from_row(row: PageRow) -> Page:
    """Build a Page from its row."""
    return Page(
        id=row.id,
        template_id=row.template_id,
        name=row.name,
        slug=row.slug,
        is_homepage=row.is_homepage,
        seo=decode_seo(row.seo),
        sections=decode_sections(row.sections),
        sort_order=row.sort_order,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def page_values(page: Page) -> Dict[str, Any]:
    """Column values for re-inserting a page (id and template excluded)."""
    return {
        "name": page.name,
        "slug": page.slug,
        "is_homepage": page.is_homepage,
        "seo": page.seo.to_document(),
        "sections": encode_sections(page.sections),
    }


def template_from_row(row: TemplateRow, include_pages: bool = True) -> Template:
    """Build a Template (with its pages) from its row."""
    return Template(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        description=row.description or "",
        category=row.category,
        tags=[tag.tag for tag in row.tags],
        status=row.status,
        is_system_template=row.is_system_template,
        theme=decode_theme(row.theme),
        global_settings=decode_settings(row.global_settings),
        metadata=dict(row.template_metadata or {}),
        current_version=row.current_version,
        created_at=row.created_at,
        updated_at=row.updated_at,
        pages=[page_from_row(page) for page in row.pages] if include_pages else [],
    )


def list_item_from_row(row: TemplateRow, page_count: int) -> TemplateListItem:
    """Build a search result entry."""
    return TemplateListItem(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        description=row.description or "",
        category=row.category,
        tags=[tag.tag for tag in row.tags],
        status=row.status,
        is_system_template=row.is_system_template,
        current_version=row.current_version,
        page_count=page_count,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def snapshot_from_row(row: TemplateRow) -> VersionSnapshot:
    """Capture the current content of a template."""
    return VersionSnapshot(
        theme=decode_theme(row.theme),
        global_settings=decode_settings(row.global_settings),
        pages=[page_from_row(page) for page in row.pages],
    )


def version_from_row(row: VersionRow) -> TemplateVersion:
    """Build a TemplateVersion from its row."""
    return TemplateVersion(
        id=row.id,
        template_id=row.template_id,
        version=row.version,
        changes=row.changes,
        snapshot=VersionSnapshot.model_validate(row.snapshot or {}),
        created_by=row.created_by,
        created_at=row.created_at,
    )
