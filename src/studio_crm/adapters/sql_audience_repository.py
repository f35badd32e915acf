"""SQL queries that select message recipients."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, func, select

from studio_crm.adapters.database import Database
from studio_crm.adapters.sql_tables import clients, invoices, leads
from studio_crm.domain.audience import Recipient
from studio_crm.services.audience import AudienceRepository, unique_by_email

_CLIENT_COLUMNS = (
    clients.c.id,
    clients.c.email,
    (clients.c.first_name + " " + clients.c.last_name).label("name"),
)


@dataclass
class SqlAudienceRepository(AudienceRepository):
    """SQL-backed recipient queries."""

    database: Database

    def all_clients(self) -> list[Recipient]:
        """Return every active client."""
        return self._clients(
            select(*_CLIENT_COLUMNS).where(clients.c.status == "ACTIVE")
        )

    def open_leads(self) -> list[Recipient]:
        """Return leads that are neither converted nor lost."""
        statement = (
            select(leads.c.id, leads.c.email, leads.c.name)
            .where(leads.c.status.not_in(("CONVERTED", "LOST")))
            .order_by(leads.c.created_at)
        )
        with self.database.transaction() as connection:
            rows = connection.execute(statement).all()
        return unique_by_email(
            Recipient(id=row.id, kind="lead", email=row.email, name=row.name)
            for row in rows
        )

    def clients_with_revenue_above(self, threshold: float) -> list[Recipient]:
        """Return clients whose paid invoices exceed the threshold."""
        paid = (
            select(invoices.c.client_id)
            .where(invoices.c.status == "PAID")
            .group_by(invoices.c.client_id)
            .having(func.sum(invoices.c.total) > threshold)
        )
        return self._clients(
            select(*_CLIENT_COLUMNS).where(
                clients.c.status == "ACTIVE", clients.c.id.in_(paid)
            )
        )

    def clients_created_since(self, since: datetime) -> list[Recipient]:
        """Return clients created at or after a point in time."""
        return self._clients(
            select(*_CLIENT_COLUMNS).where(
                clients.c.status == "ACTIVE", clients.c.created_at >= since
            )
        )

    def clients_created_before(self, before: datetime) -> list[Recipient]:
        """Return clients created before a point in time."""
        return self._clients(
            select(*_CLIENT_COLUMNS).where(
                clients.c.status == "ACTIVE", clients.c.created_at < before
            )
        )

    def clients_by_ids(self, client_ids: list[UUID]) -> list[Recipient]:
        """Return the clients with the given ids, including shared addresses."""
        if not client_ids:
            return []
        statement = select(*_CLIENT_COLUMNS).where(clients.c.id.in_(client_ids))
        with self.database.transaction() as connection:
            rows = connection.execute(statement.order_by(clients.c.created_at)).all()
        return [
            Recipient(id=row.id, kind="client", email=row.email, name=row.name)
            for row in rows
        ]

    def _clients(self, statement: Select) -> list[Recipient]:
        with self.database.transaction() as connection:
            rows = connection.execute(statement.order_by(clients.c.created_at)).all()
        return unique_by_email(
            Recipient(id=row.id, kind="client", email=row.email, name=row.name)
            for row in rows
        )

