"""Version store: numbered snapshots of a template and restore."""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from ..access import owned_by, readable_by
from ..config import ContentDefaults
from ..models.base import new_id, utcnow
from ..models.template import Template
from ..models.version import TemplateVersion
from ..storage.codec import page_values, snapshot_from_row, template_from_row, version_from_row
from ..storage.database import Database
from ..storage.tables import PageRow, TemplateRow, VersionRow

logger = logging.getLogger(__name__)


def increment_version(version: Optional[str]) -> str:
    """Bump the patch component of a dotted version string.

    Missing or non-numeric components count as zero.

    Examples:
        >>> increment_version("1.0.0")
        '1.0.1'
        >>> increment_version("1")
        '1.0.1'
    """
    parts = []
    for part in (version or "1.0.0").split(".")[:3]:
        parts.append(int(part) if part.strip().isdigit() else 0)
    while len(parts) < 3:
        parts.append(0)
    parts[2] += 1
    return ".".join(str(part) for part in parts)


def _version_key(version: TemplateVersion):
    numbers = []
    for part in version.version.split("."):
        numbers.append(int(part) if part.isdigit() else 0)
    return (version.created_at, tuple(numbers))


class VersionStore:
    """Persistence operations on template versions."""

    def __init__(self, database: Database, defaults: Optional[ContentDefaults] = None) -> None:
        self.database = database
        self.defaults = defaults or ContentDefaults()

    def create(self, template_id: str, owner_id: str, changes: Optional[str] = None) -> Optional[TemplateVersion]:
        """Snapshot an owned template under the next version number.

        The version row and the template's ``current_version`` are written in
        the same transaction.

        Args:
            template_id: Template to snapshot
            owner_id: Caller identity
            changes: Optional note describing the changes

        Returns:
            The new version, or None when the template is missing or not owned

        Raises:
            PersistenceError: If the database rejects the write
        """
        with self.database.transaction("create version") as session:
            row = session.scalar(
                select(TemplateRow)
                .where(TemplateRow.id == template_id, owned_by(owner_id))
                .options(selectinload(TemplateRow.pages))
            )
            if row is None:
                return None

            next_version = increment_version(row.current_version or self.defaults.template_version)
            version_row = VersionRow(
                id=new_id(),
                template_id=template_id,
                version=next_version,
                changes=changes,
                snapshot=snapshot_from_row(row).to_document(),
                created_by=owner_id,
            )
            session.add(version_row)
            row.current_version = next_version
            session.flush()
            version = version_from_row(version_row)

        logger.info("Created version %s of template %s", version.version, template_id)
        return version

    def list(self, template_id: str, caller_id: Optional[str]) -> List[TemplateVersion]:
        """Versions of a visible template, newest first."""
        with self.database.session() as session:
            visible = readable_by(caller_id)
            template = session.scalar(select(TemplateRow.id).where(TemplateRow.id == template_id, visible))
            if template is None:
                return []
            rows = session.scalars(select(VersionRow).where(VersionRow.template_id == template_id)).all()
            versions = [version_from_row(row) for row in rows]
        return sorted(versions, key=_version_key, reverse=True)

    def get(self, template_id: str, version_id: str, caller_id: Optional[str]) -> Optional[TemplateVersion]:
        """A single version of a visible template."""
        with self.database.session() as session:
            row = session.scalar(
                select(VersionRow)
                .join(TemplateRow, TemplateRow.id == VersionRow.template_id)
                .where(
                    VersionRow.id == version_id,
                    VersionRow.template_id == template_id,
                    readable_by(caller_id),
                )
            )
            return version_from_row(row) if row is not None else None

    def restore(self, template_id: str, version_id: str, owner_id: str) -> Optional[Template]:
        """Overwrite an owned template's content with a stored snapshot.

        Theme and settings are replaced and the page collection is rebuilt in
        snapshot order with fresh ids. No new version is recorded and
        ``current_version`` is left as is.

        Returns:
            The restored template, or None when the template or version is
            missing or the template is not owned

        Raises:
            PersistenceError: If the database rejects the write; nothing is changed
        """
        with self.database.transaction("restore version") as session:
            row = session.scalar(select(TemplateRow).where(TemplateRow.id == template_id, owned_by(owner_id)))
            if row is None:
                return None
            version_row = session.scalar(
                select(VersionRow).where(VersionRow.id == version_id, VersionRow.template_id == template_id)
            )
            if version_row is None:
                return None

            snapshot = version_from_row(version_row).snapshot
            row.theme = snapshot.theme.to_document()
            row.global_settings = snapshot.global_settings.to_document()
            row.updated_at = utcnow()

            session.execute(delete(PageRow).where(PageRow.template_id == template_id))
            session.add_all(
                PageRow(id=new_id(), template_id=template_id, sort_order=index, **page_values(page))
                for index, page in enumerate(snapshot.pages)
            )
            session.flush()
            session.expire(row, ["pages"])
            template = template_from_row(row)

        logger.info("Restored template %s to version %s", template_id, version_row.version)
        return template
