"""SQL implementation for leads."""

from dataclasses import dataclass
from uuid import UUID, uuid4

from sqlalchemy import func, insert, or_, select, update

from studio_crm.adapters.database import (
    LIKE_ESCAPE,
    Database,
    contains_pattern,
    row_to,
    utcnow,
)
from studio_crm.adapters.sql_tables import clients, leads
from studio_crm.domain.clients import Client
from studio_crm.domain.leads import Lead
from studio_crm.services.leads import LeadRepository


@dataclass
class SqlLeadRepository(LeadRepository):
    """SQL-backed repository for leads."""

    database: Database

    def list_leads(
        self, *, search: str | None, status: str | None, limit: int
    ) -> list[Lead]:
        """Return leads, newest first."""
        statement = select(leads).order_by(leads.c.created_at.desc()).limit(limit)
        if search:
            pattern = contains_pattern(search)
            statement = statement.where(
                or_(
                    func.lower(leads.c.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(leads.c.email).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(leads.c.company).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        if status:
            statement = statement.where(leads.c.status == status)
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [row_to(Lead, row) for row in rows]

    def create_lead(self, values: dict[str, object]) -> Lead:
        """Insert a lead and return it."""
        now = utcnow()
        lead_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(leads).values(
                    id=lead_id, **values, created_at=now, updated_at=now
                )
            )
            row = connection.execute(
                select(leads).where(leads.c.id == lead_id)
            ).mappings().one()
        return row_to(Lead, row)

    def update_lead(self, lead_id: UUID, values: dict[str, object]) -> Lead | None:
        """Update a lead, returning None when no row matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(leads)
                .where(leads.c.id == lead_id)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                select(leads).where(leads.c.id == lead_id)
            ).mappings().one()
        return row_to(Lead, row)

    def get_lead(self, lead_id: UUID) -> Lead | None:
        """Return a lead by id, if present."""
        with self.database.transaction() as connection:
            row = connection.execute(
                select(leads).where(leads.c.id == lead_id)
            ).mappings().first()
        return row_to(Lead, row) if row else None

    def convert_lead(
        self, lead_id: UUID, client_values: dict[str, object]
    ) -> tuple[Lead, Client] | None:
        """Create a client and mark the lead converted in one transaction."""
        now = utcnow()
        client_id = uuid4()
        with self.database.transaction() as connection:
            result = connection.execute(
                update(leads)
                .where(leads.c.id == lead_id, leads.c.status != "CONVERTED")
                .values(
                    status="CONVERTED",
                    converted_at=now,
                    updated_at=now,
                )
            )
            if result.rowcount == 0:
                return None
            connection.execute(
                insert(clients).values(
                    id=client_id, **client_values, created_at=now, updated_at=now
                )
            )
            connection.execute(
                update(leads)
                .where(leads.c.id == lead_id)
                .values(converted_client_id=client_id)
            )
            lead_row = connection.execute(
                select(leads).where(leads.c.id == lead_id)
            ).mappings().one()
            client_row = connection.execute(
                select(clients).where(clients.c.id == client_id)
            ).mappings().one()
        return row_to(Lead, lead_row), row_to(Client, client_row)
