"""Database engine and transaction boundary.

Stores reach the database only through :meth:`Database.transaction` (for
writes) and :meth:`Database.session` (for reads). Both translate SQLAlchemy
failures into :class:`~sitesmith.exceptions.PersistenceError` after rolling
back, so callers never see driver exceptions or SQL text.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..exceptions import PersistenceError
from .tables import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Database:
    """Owns the engine and hands out sessions."""

    def __init__(self, url: str, echo: bool = False) -> None:
        """Initialize the database.

        Args:
            url: SQLAlchemy database URL
            echo: Log emitted SQL
        """
        self.url = url
        engine_kwargs = {}
        is_sqlite = url.startswith("sqlite")
        if is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # one shared connection, otherwise every checkout sees an empty database
                engine_kwargs["poolclass"] = StaticPool

        self.engine: Engine = create_engine(url, echo=echo, **engine_kwargs)
        if is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_all(self) -> None:
        """Create any missing tables."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to initialize database", operation="create schema", cause=e) from e

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Read-only session scope."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError("Failed to read from database", operation="read", cause=e) from e
        finally:
            session.close()

    @contextmanager
    def transaction(self, operation: str) -> Iterator[Session]:
        """Run a unit of work that either fully commits or fully rolls back.

        Args:
            operation: Short description used in logs and errors

        Raises:
            PersistenceError: If the database rejects any statement or the commit
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning("Rolled back %s: %s", operation, e.__class__.__name__)
            raise PersistenceError(f"Failed to {operation}", operation=operation, cause=e) from e
        except Exception:
            session.rollback()
            logger.warning("Rolled back %s", operation)
            raise
        finally:
            session.close()
