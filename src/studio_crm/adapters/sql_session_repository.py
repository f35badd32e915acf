"""SQL implementation for photography sessions."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import insert, select, update

from studio_crm.adapters.database import Database, row_to, utcnow
from studio_crm.adapters.sql_tables import clients, photography_sessions
from studio_crm.domain.sessions import PhotographySession
from studio_crm.services.calendar import SessionRepository

_CLIENT_NAME = (clients.c.first_name + " " + clients.c.last_name).label("client_name")


def parse_session(row: Mapping[str, Any]) -> PhotographySession:
    """Parse a session row into a domain model."""
    return row_to(
        PhotographySession,
        row,
        equipment_needed=list(row["equipment_needed"] or []),
    )


def _select_sessions():  # type: ignore[no-untyped-def]
    return select(photography_sessions, _CLIENT_NAME).join(
        clients, clients.c.id == photography_sessions.c.client_id
    )


@dataclass
class SqlSessionRepository(SessionRepository):
    """SQL-backed repository for photography sessions."""

    database: Database

    def create_session(self, values: dict[str, object]) -> PhotographySession:
        """Insert a session and return it."""
        now = utcnow()
        session_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(photography_sessions).values(
                    id=session_id, **values, created_at=now, updated_at=now
                )
            )
            row = connection.execute(
                _select_sessions().where(photography_sessions.c.id == session_id)
            ).mappings().one()
        return parse_session(row)

    def update_session(
        self, session_id: UUID, values: dict[str, object]
    ) -> PhotographySession | None:
        """Update a session, returning None when no row matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(photography_sessions)
                .where(photography_sessions.c.id == session_id)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                _select_sessions().where(photography_sessions.c.id == session_id)
            ).mappings().one()
        return parse_session(row)

    def get_session(self, session_id: UUID) -> PhotographySession | None:
        """Return a session by id, if present."""
        with self.database.transaction() as connection:
            row = connection.execute(
                _select_sessions().where(photography_sessions.c.id == session_id)
            ).mappings().first()
        return parse_session(row) if row else None

    def list_sessions(  # noqa: PLR0913
        self,
        *,
        start: datetime | None,
        end: datetime | None,
        client_id: UUID | None,
        session_type: str | None,
        status: str | None,
        limit: int,
    ) -> list[PhotographySession]:
        """Return sessions ordered by start time."""
        statement = (
            _select_sessions()
            .order_by(photography_sessions.c.start_time)
            .limit(limit)
        )
        if start is not None:
            statement = statement.where(photography_sessions.c.start_time >= start)
        if end is not None:
            statement = statement.where(photography_sessions.c.start_time < end)
        if client_id is not None:
            statement = statement.where(photography_sessions.c.client_id == client_id)
        if session_type:
            statement = statement.where(
                photography_sessions.c.session_type == session_type
            )
        if status:
            statement = statement.where(photography_sessions.c.status == status)
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [parse_session(row) for row in rows]

    def client_exists(self, client_id: UUID) -> bool:
        """Return whether the client row exists."""
        with self.database.transaction() as connection:
            found = connection.execute(
                select(clients.c.id).where(clients.c.id == client_id)
            ).first()
        return found is not None
