"""SQLAlchemy engine wrapper with typed failure reporting."""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, fields
from datetime import UTC, datetime
from typing import Any, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.pool import StaticPool

from studio_crm.adapters.sql_tables import metadata
from studio_crm.errors import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

LIKE_ESCAPE = "\\"


def utcnow() -> datetime:
    """Return the current UTC time for timestamp columns."""
    return datetime.now(tz=UTC)


def contains_pattern(term: str) -> str:
    """Build a lowercase LIKE pattern that matches wildcards in the term literally."""
    escaped = (
        term.lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def row_to(model: type[T], row: Mapping[str, Any], **extra: object) -> T:
    """Build a dataclass from a result row, taking only the fields it declares."""
    values = {
        item.name: row[item.name]
        for item in fields(model)  # type: ignore[arg-type]
        if item.name in row
    }
    values.update(extra)
    return model(**values)


def _enable_sqlite_foreign_keys(  # type: ignore[no-untyped-def]
    dbapi_connection, connection_record
) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@dataclass
class Database:
    """Owns the engine and hands out transactional connections."""

    engine: Engine

    @classmethod
    def create(cls, url: str, *, echo: bool = False) -> "Database":
        """Create an engine for the given URL."""
        if url.startswith("sqlite"):
            options: dict[str, object] = {
                "connect_args": {"check_same_thread": False},
            }
            if ":memory:" in url or url.rstrip("/") == "sqlite:":
                options["poolclass"] = StaticPool
            engine = create_engine(url, echo=echo, **options)
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        else:
            engine = create_engine(url, echo=echo, pool_pre_ping=True)
        return cls(engine=engine)

    def create_schema(self) -> None:
        """Create any missing tables."""
        with self.transaction() as connection:
            metadata.create_all(connection)

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection whose statements commit or roll back together."""
        try:
            with self.engine.begin() as connection:
                yield connection
        except IntegrityError as exc:
            logger.warning("Constraint violation: %s", exc.orig)
            raise StorageError(
                "The change conflicts with existing data or references a "
                "missing record"
            ) from exc
        except OperationalError as exc:
            logger.error("Database unavailable: %s", exc.orig)
            raise StorageError("The database is currently unavailable") from exc
        except SQLAlchemyError as exc:
            logger.exception("Database statement failed")
            raise StorageError("The database rejected the operation") from exc

    def close(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
