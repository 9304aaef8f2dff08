"""Template store: create, read, search, update and delete templates."""

import copy
import logging
import math
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql.elements import ColumnElement

from ..access import deletable_by, owned_by, readable_by, visible_to
from ..config import ContentDefaults
from ..exceptions import ValidationError
from ..models.base import new_id, utcnow
from ..models.page import PageSeo
from ..models.template import (
    CreateTemplateRequest,
    Template,
    TemplateListItem,
    TemplateSearchParams,
    TemplateSearchResult,
    UpdateTemplateRequest,
)
from ..storage.codec import decode_settings, decode_theme, list_item_from_row, template_from_row
from ..storage.database import Database
from ..storage.tables import PageRow, TemplateRow, TemplateTagRow

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "name": TemplateRow.name,
    "created_at": TemplateRow.created_at,
    "updated_at": TemplateRow.updated_at,
}


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _tag_rows(tags: List[str]) -> List[TemplateTagRow]:
    return [TemplateTagRow(tag=tag, position=index) for index, tag in enumerate(tags)]


class TemplateStore:
    """Persistence operations on templates.

    Missing templates and templates the caller may not see or change are
    reported the same way: ``None`` or ``False``.
    """

    def __init__(self, database: Database, defaults: Optional[ContentDefaults] = None) -> None:
        """Initialize the store.

        Args:
            database: Database to operate on
            defaults: Theme and settings new templates start from
        """
        self.database = database
        self.defaults = defaults or ContentDefaults()

    def create(self, owner_id: str, request: CreateTemplateRequest) -> Template:
        """Create a template owned by ``owner_id``.

        When ``clone_from_id`` names a template the caller can see, its theme
        and settings become the base and its pages are copied. When no page is
        copied, a single homepage is created.

        Args:
            owner_id: Caller identity
            request: Template fields

        Returns:
            The created template with its pages

        Raises:
            ValidationError: If theme or settings overrides are invalid
            PersistenceError: If the database rejects the write
        """
        with self.database.transaction("create template") as session:
            row = self._insert(session, owner_id, request, system=False)
            template = template_from_row(row)

        logger.info("Created template %s (%s) for %s", template.id, template.name, owner_id)
        return template

    def create_system_template(self, request: CreateTemplateRequest) -> Template:
        """Create a platform-provided template, readable by every caller."""
        with self.database.transaction("create system template") as session:
            row = self._insert(session, None, request, system=True)
            template = template_from_row(row)

        logger.info("Created system template %s (%s)", template.id, template.name)
        return template

    def get(self, template_id: str, caller_id: Optional[str] = None) -> Optional[Template]:
        """Get a template with its pages.

        Args:
            template_id: Template ID
            caller_id: When given, the template must be visible to this caller

        Returns:
            The template, or None when missing or not visible
        """
        return self._get(template_id, visible_to(caller_id))

    def get_visible(self, template_id: str, caller_id: Optional[str]) -> Optional[Template]:
        """Get a template the caller may read.

        Unlike :meth:`get` there is no unchecked path: without a caller only
        system templates are returned.
        """
        return self._get(template_id, readable_by(caller_id))

    def _get(self, template_id: str, condition: ColumnElement) -> Optional[Template]:
        with self.database.session() as session:
            row = session.scalar(
                select(TemplateRow)
                .where(TemplateRow.id == template_id, condition)
                .options(selectinload(TemplateRow.pages), selectinload(TemplateRow.tags))
            )
            return template_from_row(row) if row is not None else None

    def search(self, owner_id: Optional[str], params: Optional[TemplateSearchParams] = None) -> TemplateSearchResult:
        """Search templates visible to ``owner_id``.

        Args:
            owner_id: Caller identity; without one only system templates match
            params: Filters, sorting and paging

        Returns:
            One page of results with totals
        """
        params = params or TemplateSearchParams()
        conditions = [readable_by(owner_id)]

        if params.search:
            pattern = f"%{escape_like(params.search)}%"
            conditions.append(
                or_(
                    TemplateRow.name.ilike(pattern, escape="\\"),
                    TemplateRow.description.ilike(pattern, escape="\\"),
                )
            )
        if params.category:
            conditions.append(TemplateRow.category == params.category)
        if params.status:
            conditions.append(TemplateRow.status == params.status)
        if params.is_system_template is not None:
            conditions.append(TemplateRow.is_system_template.is_(params.is_system_template))
        if params.tags:
            tagged = select(TemplateTagRow.template_id).where(TemplateTagRow.tag.in_(params.tags))
            conditions.append(TemplateRow.id.in_(tagged))

        page_counts = (
            select(PageRow.template_id, func.count(PageRow.id).label("page_count"))
            .group_by(PageRow.template_id)
            .subquery()
        )
        sort_column = SORT_COLUMNS[params.sort_by]
        ordering = sort_column.asc() if params.sort_order == "asc" else sort_column.desc()

        with self.database.session() as session:
            total = session.scalar(select(func.count()).select_from(TemplateRow).where(*conditions)) or 0
            rows = session.execute(
                select(TemplateRow, func.coalesce(page_counts.c.page_count, 0))
                .outerjoin(page_counts, page_counts.c.template_id == TemplateRow.id)
                .where(*conditions)
                .order_by(ordering, TemplateRow.id)
                .offset((params.page - 1) * params.limit)
                .limit(params.limit)
                .options(selectinload(TemplateRow.tags))
            ).all()
            items = [list_item_from_row(row, count) for row, count in rows]

        return TemplateSearchResult(
            items=items,
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=math.ceil(total / params.limit) if total else 0,
        )

    def list_system_templates(self) -> List[TemplateListItem]:
        """Published system templates ordered by category, then name."""
        page_counts = (
            select(PageRow.template_id, func.count(PageRow.id).label("page_count"))
            .group_by(PageRow.template_id)
            .subquery()
        )
        with self.database.session() as session:
            rows = session.execute(
                select(TemplateRow, func.coalesce(page_counts.c.page_count, 0))
                .outerjoin(page_counts, page_counts.c.template_id == TemplateRow.id)
                .where(TemplateRow.is_system_template.is_(True), TemplateRow.status == "published")
                .order_by(TemplateRow.category, TemplateRow.name)
                .options(selectinload(TemplateRow.tags))
            ).all()
            return [list_item_from_row(row, count) for row, count in rows]

    def update(self, template_id: str, owner_id: str, request: UpdateTemplateRequest) -> Optional[Template]:
        """Apply a partial update to an owned template.

        Theme and settings patches are merged over the stored values; every
        other provided field replaces the stored one.

        Returns:
            The updated template, or None when missing or not owned

        Raises:
            ValidationError: If the patch is empty or produces invalid values
            PersistenceError: If the database rejects the write
        """
        if request.is_empty():
            raise ValidationError("No fields to update")

        with self.database.transaction("update template") as session:
            row = session.scalar(select(TemplateRow).where(TemplateRow.id == template_id, owned_by(owner_id)))
            if row is None:
                return None

            if request.name is not None:
                row.name = request.name
            if request.description is not None:
                row.description = request.description
            if request.category is not None:
                row.category = request.category
            if request.status is not None:
                row.status = request.status
            if request.tags is not None:
                row.tags = _tag_rows(request.tags)
            if request.theme is not None:
                row.theme = decode_theme(row.theme).merged(request.theme).to_document()
            if request.global_settings is not None:
                row.global_settings = decode_settings(row.global_settings).merged(request.global_settings).to_document()
            if request.metadata is not None:
                row.template_metadata = {**(row.template_metadata or {}), **request.metadata}
            row.updated_at = utcnow()

            session.flush()
            template = template_from_row(row)

        logger.info("Updated template %s", template_id)
        return template

    def delete(self, template_id: str, owner_id: str) -> bool:
        """Delete an owned, non-system template with its pages and versions.

        Returns:
            True if deleted, False when missing, not owned or a system template
        """
        with self.database.transaction("delete template") as session:
            row = session.scalar(select(TemplateRow).where(TemplateRow.id == template_id, deletable_by(owner_id)))
            if row is None:
                return False
            session.delete(row)

        logger.info("Deleted template %s", template_id)
        return True

    def duplicate(self, template_id: str, owner_id: str, new_name: Optional[str] = None) -> Optional[Template]:
        """Copy a visible template into a new one owned by the caller.

        Returns:
            The copy, or None when the source is missing or not visible
        """
        source = self.get(template_id, owner_id)
        if source is None:
            return None

        request = CreateTemplateRequest(
            name=new_name or f"{source.name} (Copy)",
            description=source.description,
            category=source.category,
            tags=source.tags,
            clone_from_id=source.id,
        )
        return self.create(owner_id, request)

    def _insert(
        self,
        session: Session,
        owner_id: Optional[str],
        request: CreateTemplateRequest,
        system: bool,
    ) -> TemplateRow:
        source = None
        if request.clone_from_id:
            source = session.scalar(
                select(TemplateRow)
                .where(TemplateRow.id == request.clone_from_id, visible_to(owner_id))
                .options(selectinload(TemplateRow.pages))
            )
            if source is None:
                logger.debug("Clone source %s not visible, creating from defaults", request.clone_from_id)

        theme = self.defaults.theme
        settings = self.defaults.global_settings
        if source is not None:
            theme = theme.merged(source.theme)
            settings = settings.merged(source.global_settings)
        theme = theme.merged(request.theme)
        settings = settings.merged(request.global_settings)

        metadata = {"version": self.defaults.template_version}
        metadata.update(request.metadata or {})

        row = TemplateRow(
            id=new_id(),
            user_id=owner_id,
            name=request.name,
            description=request.description,
            category=request.category,
            status=request.status,
            is_system_template=system,
            theme=theme.to_document(),
            global_settings=settings.to_document(),
            template_metadata=metadata,
            current_version=self.defaults.template_version,
        )
        row.tags = _tag_rows(request.tags)

        if source is not None and source.pages:
            row.pages = [
                PageRow(
                    id=new_id(),
                    name=page.name,
                    slug=page.slug,
                    is_homepage=page.is_homepage,
                    seo=copy.deepcopy(page.seo),
                    sections=copy.deepcopy(page.sections),
                    sort_order=index,
                )
                for index, page in enumerate(source.pages)
            ]
        else:
            row.pages = [
                PageRow(
                    id=new_id(),
                    name=self.defaults.homepage_name,
                    slug=self.defaults.homepage_slug,
                    is_homepage=True,
                    seo=PageSeo(title=request.name, description=request.description).to_document(),
                    sections=[],
                    sort_order=0,
                )
            ]

        session.add(row)
        session.flush()
        return row
