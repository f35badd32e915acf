"""SQL aggregates for the pipeline dashboard and global search."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, or_, select

from studio_crm.adapters.database import (
    LIKE_ESCAPE,
    Database,
    contains_pattern,
    row_to,
)
from studio_crm.adapters.sql_invoice_repository import parse_invoice
from studio_crm.adapters.sql_session_repository import parse_session
from studio_crm.adapters.sql_tables import (
    clients,
    invoices,
    leads,
    photography_sessions,
)
from studio_crm.domain.clients import Client
from studio_crm.domain.leads import Lead
from studio_crm.domain.reports import SearchResults
from studio_crm.services.reports import ReportRepository


@dataclass
class SqlReportRepository(ReportRepository):
    """SQL-backed reporting queries."""

    database: Database

    def pipeline_counts(self, start: datetime, end: datetime) -> dict[str, float]:
        """Return lead, session and revenue figures for a time range."""

        def created_between(table):  # type: ignore[no-untyped-def]
            return (table.c.created_at >= start) & (table.c.created_at < end)

        statements = {
            "new_leads": select(func.count()).where(created_between(leads)),
            "converted_leads": select(func.count()).where(
                leads.c.converted_at >= start, leads.c.converted_at < end
            ),
            "new_clients": select(func.count()).where(created_between(clients)),
            "sessions_booked": select(func.count()).where(
                created_between(photography_sessions),
                photography_sessions.c.status != "CANCELLED",
            ),
            "paid_revenue": select(func.coalesce(func.sum(invoices.c.total), 0)).where(
                invoices.c.status == "PAID",
                invoices.c.paid_at >= start,
                invoices.c.paid_at < end,
            ),
            "pending_revenue": select(
                func.coalesce(func.sum(invoices.c.total), 0)
            ).where(invoices.c.status.in_(("SENT", "OVERDUE"))),
        }
        with self.database.transaction() as connection:
            return {
                name: float(connection.execute(statement).scalar_one())
                for name, statement in statements.items()
            }

    def search(self, term: str, limit: int) -> SearchResults:
        """Search clients, leads, invoices and sessions."""
        pattern = contains_pattern(term)

        def matches(column):  # type: ignore[no-untyped-def]
            return func.lower(column).like(pattern, escape=LIKE_ESCAPE)

        client_full_name = clients.c.first_name + " " + clients.c.last_name
        with self.database.transaction() as connection:
            client_rows = connection.execute(
                select(clients)
                .where(
                    or_(
                        matches(client_full_name),
                        matches(clients.c.email),
                        matches(clients.c.phone),
                        matches(clients.c.company),
                    )
                )
                .order_by(clients.c.created_at.desc())
                .limit(limit)
            ).mappings().all()
            lead_rows = connection.execute(
                select(leads)
                .where(
                    or_(
                        matches(leads.c.name),
                        matches(leads.c.email),
                        matches(leads.c.company),
                        matches(leads.c.message),
                    )
                )
                .order_by(leads.c.created_at.desc())
                .limit(limit)
            ).mappings().all()
            invoice_rows = connection.execute(
                select(invoices, client_full_name.label("client_name"))
                .join(clients, clients.c.id == invoices.c.client_id)
                .where(
                    or_(matches(invoices.c.invoice_number), matches(client_full_name))
                )
                .order_by(invoices.c.issue_date.desc())
                .limit(limit)
            ).mappings().all()
            session_rows = connection.execute(
                select(photography_sessions, client_full_name.label("client_name"))
                .join(clients, clients.c.id == photography_sessions.c.client_id)
                .where(
                    or_(
                        matches(photography_sessions.c.title),
                        matches(photography_sessions.c.location),
                        matches(photography_sessions.c.notes),
                        matches(client_full_name),
                    )
                )
                .order_by(photography_sessions.c.start_time.desc())
                .limit(limit)
            ).mappings().all()
        return SearchResults(
            term=term,
            clients=[row_to(Client, row) for row in client_rows],
            leads=[row_to(Lead, row) for row in lead_rows],
            invoices=[parse_invoice(row) for row in invoice_rows],
            sessions=[parse_session(row) for row in session_rows],
        )
