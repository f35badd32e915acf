"""SQL implementation for client records."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID, uuid4

from sqlalchemy import func, insert, or_, select, update

from studio_crm.adapters.database import (
    LIKE_ESCAPE,
    Database,
    contains_pattern,
    row_to,
    utcnow,
)
from studio_crm.adapters.sql_invoice_repository import parse_invoice
from studio_crm.adapters.sql_session_repository import parse_session
from studio_crm.adapters.sql_tables import clients, invoices, photography_sessions
from studio_crm.domain.clients import Client, ClientSummary, TopClient
from studio_crm.services.clients import ClientRepository

_RECENT_LIMIT = 5


@dataclass
class SqlClientRepository(ClientRepository):
    """SQL-backed repository for clients."""

    database: Database

    def list_clients(
        self, *, search: str | None, status: str | None, limit: int
    ) -> list[Client]:
        """Return clients, newest first."""
        statement = select(clients).order_by(clients.c.created_at.desc()).limit(limit)
        if search:
            pattern = contains_pattern(search)
            full_name = clients.c.first_name + " " + clients.c.last_name
            statement = statement.where(
                or_(
                    func.lower(full_name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(clients.c.email).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(clients.c.phone).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(clients.c.company).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        if status:
            statement = statement.where(clients.c.status == status)
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [row_to(Client, row) for row in rows]

    def create_client(self, values: dict[str, object]) -> Client:
        """Insert a client and return it."""
        now = utcnow()
        client_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(clients).values(
                    id=client_id, **values, created_at=now, updated_at=now
                )
            )
            row = connection.execute(
                select(clients).where(clients.c.id == client_id)
            ).mappings().one()
        return row_to(Client, row)

    def update_client(
        self, client_id: UUID, values: dict[str, object]
    ) -> Client | None:
        """Update a client, returning None when no row matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(clients)
                .where(clients.c.id == client_id)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                select(clients).where(clients.c.id == client_id)
            ).mappings().one()
        return row_to(Client, row)

    def get_client(self, client_id: UUID) -> Client | None:
        """Return a client by id, if present."""
        with self.database.transaction() as connection:
            row = connection.execute(
                select(clients).where(clients.c.id == client_id)
            ).mappings().first()
        return row_to(Client, row) if row else None

    def find_by_email(self, email: str) -> Client | None:
        """Return the client with this email, if any."""
        with self.database.transaction() as connection:
            row = connection.execute(
                select(clients)
                .where(func.lower(clients.c.email) == email.lower())
                .order_by(clients.c.created_at)
                .limit(1)
            ).mappings().first()
        return row_to(Client, row) if row else None

    def summarize_client(self, client_id: UUID) -> ClientSummary:
        """Aggregate sessions and invoices for a client."""
        with self.database.transaction() as connection:
            session_count = connection.execute(
                select(func.count())
                .select_from(photography_sessions)
                .where(photography_sessions.c.client_id == client_id)
            ).scalar_one()
            totals = connection.execute(
                select(
                    func.count().label("invoice_count"),
                    func.coalesce(
                        func.sum(invoices.c.total).filter(invoices.c.status == "PAID"),
                        0,
                    ).label("total_paid"),
                    func.coalesce(
                        func.sum(invoices.c.total).filter(
                            invoices.c.status.in_(("SENT", "OVERDUE"))
                        ),
                        0,
                    ).label("pending_amount"),
                ).where(invoices.c.client_id == client_id)
            ).mappings().one()
            session_rows = connection.execute(
                select(photography_sessions)
                .where(photography_sessions.c.client_id == client_id)
                .order_by(photography_sessions.c.start_time.desc())
                .limit(_RECENT_LIMIT)
            ).mappings().all()
            invoice_rows = connection.execute(
                select(invoices)
                .where(invoices.c.client_id == client_id)
                .order_by(invoices.c.issue_date.desc(), invoices.c.created_at.desc())
                .limit(_RECENT_LIMIT)
            ).mappings().all()
        return ClientSummary(
            session_count=int(session_count),
            invoice_count=int(totals["invoice_count"]),
            total_paid=float(totals["total_paid"]),
            pending_amount=float(totals["pending_amount"]),
            recent_sessions=[parse_session(row) for row in session_rows],
            recent_invoices=[parse_invoice(row) for row in invoice_rows],
        )

    def list_top_clients(
        self,
        *,
        order_by: str,
        min_revenue: float | None,
        year: int | None,
        limit: int,
    ) -> list[TopClient]:
        """Rank clients by revenue or activity."""
        revenue_query = select(
            invoices.c.client_id,
            func.sum(invoices.c.total).label("total_revenue"),
            func.count().label("invoice_count"),
        ).where(invoices.c.status == "PAID")
        if year is not None:
            revenue_query = revenue_query.where(
                invoices.c.issue_date >= date(year, 1, 1),
                invoices.c.issue_date < date(year + 1, 1, 1),
            )
        revenue = revenue_query.group_by(invoices.c.client_id).subquery()
        activity = (
            select(
                photography_sessions.c.client_id,
                func.count().label("session_count"),
                func.max(photography_sessions.c.start_time).label("last_session_at"),
            )
            .group_by(photography_sessions.c.client_id)
            .subquery()
        )
        total_revenue = func.coalesce(revenue.c.total_revenue, 0)
        session_count = func.coalesce(activity.c.session_count, 0)
        statement = (
            select(
                clients.c.id,
                clients.c.first_name,
                clients.c.last_name,
                clients.c.email,
                total_revenue.label("total_revenue"),
                func.coalesce(revenue.c.invoice_count, 0).label("invoice_count"),
                session_count.label("session_count"),
                activity.c.last_session_at,
            )
            .outerjoin(revenue, revenue.c.client_id == clients.c.id)
            .outerjoin(activity, activity.c.client_id == clients.c.id)
            .limit(limit)
        )
        if min_revenue is not None:
            statement = statement.where(total_revenue >= min_revenue)
        if order_by == "session_count":
            statement = statement.order_by(session_count.desc(), total_revenue.desc())
        elif order_by == "recent_activity":
            statement = statement.order_by(
                activity.c.last_session_at.desc().nulls_last(), total_revenue.desc()
            )
        else:
            statement = statement.order_by(total_revenue.desc(), session_count.desc())
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [
            TopClient(
                id=row["id"],
                first_name=row["first_name"],
                last_name=row["last_name"],
                email=row["email"],
                total_revenue=float(row["total_revenue"]),
                invoice_count=int(row["invoice_count"]),
                session_count=int(row["session_count"]),
                last_session_at=row["last_session_at"],
            )
            for row in rows
        ]
