"""SQLAlchemy table definitions.

Theme, settings, metadata, SEO, sections and snapshots are JSON columns;
nothing outside :mod:`sitesmith.storage` reads them directly.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

from ..models.base import new_id, utcnow
from ..models.template import TEMPLATE_CATEGORIES, TEMPLATE_STATUSES

Base = declarative_base()


def _in_clause(column: str, values: tuple) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


class TemplateRow(Base):
    __tablename__ = "templates"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(255), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(32), nullable=False, default="multi-page")
    status = Column(String(16), nullable=False, default="draft")
    is_system_template = Column(Boolean, nullable=False, default=False)
    theme = Column(JSON, nullable=False)
    global_settings = Column(JSON, nullable=False)
    # "metadata" is reserved on declarative classes
    template_metadata = Column("metadata", JSON, nullable=False, default=dict)
    current_version = Column(String(32), nullable=False, default="1.0.0")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    tags = relationship(
        "TemplateTagRow",
        order_by="TemplateTagRow.position",
        cascade="all, delete-orphan",
    )
    pages = relationship(
        "PageRow",
        order_by=lambda: [PageRow.sort_order, PageRow.created_at],
        cascade="all, delete-orphan",
    )
    versions = relationship("VersionRow", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint(_in_clause("category", TEMPLATE_CATEGORIES), name="ck_templates_category"),
        CheckConstraint(_in_clause("status", TEMPLATE_STATUSES), name="ck_templates_status"),
    )


class TemplateTagRow(Base):
    __tablename__ = "template_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(String(36), ForeignKey("templates.id", ondelete="CASCADE"), nullable=False)
    tag = Column(String(64), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    __table_args__ = (Index("idx_template_tags_tag", "tag"),)


class PageRow(Base):
    __tablename__ = "template_pages"

    id = Column(String(36), primary_key=True, default=new_id)
    template_id = Column(String(36), ForeignKey("templates.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    is_homepage = Column(Boolean, nullable=False, default=False)
    seo = Column(JSON, nullable=False, default=dict)
    sections = Column(JSON, nullable=False, default=list)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("template_id", "slug", name="uq_template_pages_slug"),
        Index("idx_template_pages_order", "template_id", "sort_order"),
    )


class VersionRow(Base):
    __tablename__ = "template_versions"

    id = Column(String(36), primary_key=True, default=new_id)
    template_id = Column(String(36), ForeignKey("templates.id", ondelete="CASCADE"), nullable=False)
    version = Column(String(32), nullable=False)
    changes = Column(Text, nullable=True)
    snapshot = Column(JSON, nullable=False)
    created_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("template_id", "version", name="uq_template_versions_version"),
    )
