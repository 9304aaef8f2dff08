"""Template visibility and ownership rules.

A template is readable by its owner and, when it is a system template, by
everyone. A caller without an identity reads system templates only. Only the
owner may change a template, and system templates can never be deleted. Every
store applies these predicates instead of spelling the rule out again, so a
miss and a denial look the same to the caller.
"""

from typing import Optional

from sqlalchemy import and_, false, or_, true
from sqlalchemy.sql.elements import ColumnElement

from .storage.tables import TemplateRow


def readable_by(caller_id: Optional[str]) -> ColumnElement:
    """SQL filter for templates the caller may read."""
    system = TemplateRow.is_system_template.is_(True)
    if not caller_id:
        return system
    return or_(TemplateRow.user_id == caller_id, system)


def visible_to(caller_id: Optional[str]) -> ColumnElement:
    """Like :func:`readable_by`, but ``None`` means an internal, unchecked read."""
    if caller_id is None:
        return true()
    return readable_by(caller_id)


def owned_by(caller_id: Optional[str]) -> ColumnElement:
    """SQL filter for templates the caller may modify."""
    if not caller_id:
        return false()
    return TemplateRow.user_id == caller_id


def deletable_by(caller_id: Optional[str]) -> ColumnElement:
    """SQL filter for templates the caller may delete."""
    return and_(owned_by(caller_id), TemplateRow.is_system_template.is_(False))


def can_read(row: TemplateRow, caller_id: Optional[str]) -> bool:
    """Python counterpart of :func:`readable_by` for loaded rows."""
    if row.is_system_template:
        return True
    return bool(caller_id) and row.user_id == caller_id
