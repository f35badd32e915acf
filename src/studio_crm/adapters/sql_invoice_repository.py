"""SQL implementation for invoices and their line items."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import func, insert, or_, select, update
from sqlalchemy.engine import Connection

from studio_crm.adapters.database import (
    LIKE_ESCAPE,
    Database,
    contains_pattern,
    row_to,
    utcnow,
)
from studio_crm.adapters.sql_tables import (
    clients,
    invoice_items,
    invoice_payments,
    invoices,
)
from studio_crm.domain.invoices import (
    Invoice,
    InvoiceItem,
    InvoicePayment,
    PaymentReceipt,
)
from studio_crm.services.invoices import InvoiceRepository

_CLIENT_NAME = (clients.c.first_name + " " + clients.c.last_name).label("client_name")


def parse_invoice(
    row: Mapping[str, Any], items: list[InvoiceItem] | None = None
) -> Invoice:
    """Parse an invoice row into a domain model."""
    return row_to(Invoice, row, items=items or [])


def _select_invoices():  # type: ignore[no-untyped-def]
    return select(invoices, _CLIENT_NAME).join(
        clients, clients.c.id == invoices.c.client_id
    )


@dataclass
class SqlInvoiceRepository(InvoiceRepository):
    """SQL-backed repository for invoices."""

    database: Database

    def create_invoice(
        self, values: dict[str, object], items: list[dict[str, object]]
    ) -> Invoice:
        """Insert an invoice and its items atomically."""
        now = utcnow()
        invoice_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(invoices).values(
                    id=invoice_id, **values, created_at=now, updated_at=now
                )
            )
            for item in items:
                connection.execute(
                    insert(invoice_items).values(
                        id=uuid4(),
                        invoice_id=invoice_id,
                        **item,
                        created_at=now,
                        updated_at=now,
                    )
                )
            row = connection.execute(
                _select_invoices().where(invoices.c.id == invoice_id)
            ).mappings().one()
            item_rows = connection.execute(
                select(invoice_items)
                .where(invoice_items.c.invoice_id == invoice_id)
                .order_by(invoice_items.c.sort_order)
            ).mappings().all()
        return parse_invoice(row, [row_to(InvoiceItem, item) for item in item_rows])

    def list_invoices(
        self, *, client_id: UUID | None, status: str | None, limit: int
    ) -> list[Invoice]:
        """Return invoices, newest first."""
        statement = (
            _select_invoices()
            .order_by(invoices.c.issue_date.desc(), invoices.c.created_at.desc())
            .limit(limit)
        )
        if client_id is not None:
            statement = statement.where(invoices.c.client_id == client_id)
        if status:
            statement = statement.where(invoices.c.status == status)
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [parse_invoice(row) for row in rows]

    def update_invoice(
        self, invoice_id: UUID, values: dict[str, object]
    ) -> Invoice | None:
        """Update an invoice, returning None when no row matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(invoices)
                .where(invoices.c.id == invoice_id)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                _select_invoices().where(invoices.c.id == invoice_id)
            ).mappings().one()
        return parse_invoice(row)

    def client_exists(self, client_id: UUID) -> bool:
        """Return whether the client row exists."""
        with self.database.transaction() as connection:
            found = connection.execute(
                select(clients.c.id).where(clients.c.id == client_id)
            ).first()
        return found is not None

    def get_invoice(self, invoice_id: UUID) -> Invoice | None:
        """Return an invoice by id."""
        with self.database.transaction() as connection:
            row = connection.execute(
                _select_invoices().where(invoices.c.id == invoice_id)
            ).mappings().first()
        return parse_invoice(row) if row else None

    def list_payments(
        self,
        *,
        invoice_id: UUID | None,
        status: str | None,
        search: str | None,
        limit: int,
    ) -> list[InvoicePayment]:
        """Return payments, most recent payment date first."""
        statement = (
            select(invoice_payments)
            .order_by(
                invoice_payments.c.payment_date.desc(),
                invoice_payments.c.created_at.desc(),
            )
            .limit(limit)
        )
        if invoice_id is not None:
            statement = statement.where(invoice_payments.c.invoice_id == invoice_id)
        if status:
            statement = statement.where(invoice_payments.c.status == status)
        if search:
            pattern = contains_pattern(search)
            statement = statement.where(
                or_(
                    *(
                        func.lower(column).like(pattern, escape=LIKE_ESCAPE)
                        for column in (
                            invoice_payments.c.payment_method,
                            invoice_payments.c.payment_reference,
                            invoice_payments.c.notes,
                        )
                    )
                )
            )
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [row_to(InvoicePayment, row) for row in rows]

    def record_payment(
        self, invoice_id: UUID, values: dict[str, object]
    ) -> PaymentReceipt:
        """Insert a payment and settle the invoice in one transaction."""
        now = utcnow()
        payment_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(invoice_payments).values(
                    id=payment_id,
                    invoice_id=invoice_id,
                    **values,
                    created_at=now,
                    updated_at=now,
                )
            )
            return _settle(connection, payment_id)

    def update_payment(
        self, payment_id: UUID, values: dict[str, object]
    ) -> PaymentReceipt | None:
        """Update a payment and settle its invoice, None when no row matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(invoice_payments)
                .where(invoice_payments.c.id == payment_id)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            return _settle(connection, payment_id)


def _settle(connection: Connection, payment_id: UUID) -> PaymentReceipt:
    """Mark the payment's invoice PAID once completed payments cover its total."""
    payment = row_to(
        InvoicePayment,
        connection.execute(
            select(invoice_payments).where(invoice_payments.c.id == payment_id)
        ).mappings().one(),
    )
    invoice = connection.execute(
        select(invoices.c.total, invoices.c.status).where(
            invoices.c.id == payment.invoice_id
        )
    ).one()
    paid = connection.execute(
        select(func.coalesce(func.sum(invoice_payments.c.amount), 0)).where(
            invoice_payments.c.invoice_id == payment.invoice_id,
            invoice_payments.c.status == "COMPLETED",
        )
    ).scalar_one()
    amount_paid = round(float(paid), 2)
    total = float(invoice.total)
    status = invoice.status
    if amount_paid >= total and status not in {"PAID", "CANCELLED"}:
        now = utcnow()
        connection.execute(
            update(invoices)
            .where(invoices.c.id == payment.invoice_id)
            .values(status="PAID", paid_at=now, updated_at=now)
        )
        status = "PAID"
    return PaymentReceipt(
        payment=payment,
        invoice_status=status,
        amount_paid=amount_paid,
        balance_due=round(max(total - amount_paid, 0.0), 2),
    )
