"""Page store: pages within a template, including clone and reorder."""

import copy
import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..access import can_read, owned_by
from ..exceptions import ValidationError
from ..models.base import merge_model, new_id, utcnow
from ..models.page import CreatePageRequest, Page, PageSeo, UpdatePageRequest
from ..storage.codec import decode_seo, encode_sections, page_from_row
from ..storage.database import Database
from ..storage.tables import PageRow, TemplateRow

logger = logging.getLogger(__name__)


class PageStore:
    """Persistence operations on the pages of a template."""

    def __init__(self, database: Database) -> None:
        self.database = database

    def get_pages(self, template_id: str) -> List[Page]:
        """All pages of a template ordered by sort order, then creation time.

        No visibility check is applied.
        """
        with self.database.session() as session:
            rows = session.scalars(
                select(PageRow)
                .where(PageRow.template_id == template_id)
                .order_by(PageRow.sort_order, PageRow.created_at)
            ).all()
            return [page_from_row(row) for row in rows]

    def get_page(self, template_id: str, page_id: str, caller_id: Optional[str]) -> Optional[Page]:
        """A single page, provided its template is visible to the caller."""
        with self.database.session() as session:
            template = session.get(TemplateRow, template_id)
            if template is None or not can_read(template, caller_id):
                return None
            row = session.scalar(
                select(PageRow).where(PageRow.id == page_id, PageRow.template_id == template_id)
            )
            return page_from_row(row) if row is not None else None

    def create(self, template_id: str, owner_id: str, request: CreatePageRequest) -> Optional[Page]:
        """Append a page to an owned template.

        With ``clone_from_id`` the sections of that page (in the same
        template) are copied and its SEO is merged with the request's.

        Returns:
            The created page, or None when the template is missing or not owned

        Raises:
            ValidationError: If the slug is already used in the template
            PersistenceError: If the database rejects the write
        """
        with self.database.transaction("create page") as session:
            template = self._owned_template(session, template_id, owner_id)
            if template is None:
                return None
            self._ensure_slug_available(session, template_id, request.slug)

            max_order = session.scalar(
                select(func.max(PageRow.sort_order)).where(PageRow.template_id == template_id)
            )
            sort_order = 0 if max_order is None else max_order + 1

            source = None
            if request.clone_from_id:
                source = session.scalar(
                    select(PageRow).where(
                        PageRow.id == request.clone_from_id,
                        PageRow.template_id == template_id,
                    )
                )

            if source is not None:
                seo = merge_model(decode_seo(source.seo), request.seo)
                seo.title = (request.seo or {}).get("title") or request.name
                sections = copy.deepcopy(source.sections)
            else:
                seo = merge_model(PageSeo(title=request.name), request.seo)
                sections = encode_sections(request.sections)

            row = PageRow(
                id=new_id(),
                template_id=template_id,
                name=request.name,
                slug=request.slug,
                is_homepage=request.is_homepage,
                seo=seo.to_document(),
                sections=sections,
                sort_order=sort_order,
            )
            session.add(row)
            template.updated_at = utcnow()
            session.flush()
            page = page_from_row(row)

        logger.info("Created page %s (%s) in template %s", page.id, page.slug, template_id)
        return page

    def update(
        self,
        template_id: str,
        page_id: str,
        owner_id: str,
        request: UpdatePageRequest,
    ) -> Optional[Page]:
        """Apply a partial update to a page of an owned template.

        SEO patches merge over the stored SEO; sections, when provided,
        replace the stored list entirely.

        Returns:
            The updated page, or None when missing or not owned

        Raises:
            ValidationError: If the patch is empty or the new slug is taken
        """
        if request.is_empty():
            raise ValidationError("No fields to update")

        with self.database.transaction("update page") as session:
            template = self._owned_template(session, template_id, owner_id)
            if template is None:
                return None
            row = self._page_row(session, template_id, page_id)
            if row is None:
                return None

            if request.name is not None:
                row.name = request.name
            if request.slug is not None and request.slug != row.slug:
                self._ensure_slug_available(session, template_id, request.slug)
                row.slug = request.slug
            if request.seo is not None:
                row.seo = merge_model(decode_seo(row.seo), request.seo).to_document()
            if request.sections is not None:
                row.sections = encode_sections(request.sections)
            row.updated_at = template.updated_at = utcnow()

            session.flush()
            page = page_from_row(row)

        logger.info("Updated page %s in template %s", page_id, template_id)
        return page

    def delete(self, template_id: str, page_id: str, owner_id: str) -> bool:
        """Delete a page of an owned template.

        Returns:
            True if deleted; False when missing, not owned or the homepage
        """
        with self.database.transaction("delete page") as session:
            template = self._owned_template(session, template_id, owner_id)
            if template is None:
                return False
            row = self._page_row(session, template_id, page_id)
            if row is None:
                return False
            if row.is_homepage:
                logger.debug("Refusing to delete homepage %s", page_id)
                return False
            session.delete(row)
            template.updated_at = utcnow()

        logger.info("Deleted page %s from template %s", page_id, template_id)
        return True

    def reorder(self, template_id: str, owner_id: str, ordered_ids: List[str]) -> bool:
        """Assign ``sort_order = index`` to each page id, all or nothing.

        Returns:
            True on success, False when the template is missing or not owned

        Raises:
            ValidationError: If an id is repeated or not a page of the template
            PersistenceError: If the database rejects the write
        """
        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValidationError("Page ids must not repeat", field="ordered_ids")

        with self.database.transaction("reorder pages") as session:
            template = self._owned_template(session, template_id, owner_id)
            if template is None:
                return False

            rows = {
                row.id: row
                for row in session.scalars(select(PageRow).where(PageRow.template_id == template_id))
            }
            for index, page_id in enumerate(ordered_ids):
                row = rows.get(page_id)
                if row is None:
                    raise ValidationError(
                        f"Page '{page_id}' does not belong to template '{template_id}'",
                        field="ordered_ids",
                    )
                self._assign_sort_order(session, row, index)
            template.updated_at = utcnow()

        logger.info("Reordered %d pages in template %s", len(ordered_ids), template_id)
        return True

    def _assign_sort_order(self, session: Session, row: PageRow, index: int) -> None:
        row.sort_order = index
        session.flush()

    def _owned_template(self, session: Session, template_id: str, owner_id: str) -> Optional[TemplateRow]:
        return session.scalar(select(TemplateRow).where(TemplateRow.id == template_id, owned_by(owner_id)))

    def _page_row(self, session: Session, template_id: str, page_id: str) -> Optional[PageRow]:
        return session.scalar(select(PageRow).where(PageRow.id == page_id, PageRow.template_id == template_id))

    def _ensure_slug_available(self, session: Session, template_id: str, slug: str) -> None:
        existing = session.scalar(
            select(PageRow.id).where(PageRow.template_id == template_id, PageRow.slug == slug)
        )
        if existing is not None:
            raise ValidationError(f"Slug '{slug}' is already used in this template", field="slug")
