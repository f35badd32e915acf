"""Services for billing clients."""

import secrets
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol
from uuid import UUID

from studio_crm.domain.invoices import Invoice, InvoicePayment, PaymentReceipt
from studio_crm.errors import NotFoundError, ValidationError

_CENT = Decimal("0.01")


class InvoiceRepository(Protocol):
    """Persistence interface for invoices."""

    def create_invoice(
        self, values: dict[str, object], items: list[dict[str, object]]
    ) -> Invoice:
        """Insert an invoice and its items atomically."""

    def list_invoices(
        self, *, client_id: UUID | None, status: str | None, limit: int
    ) -> list[Invoice]:
        """Return invoices, newest first."""

    def update_invoice(
        self, invoice_id: UUID, values: dict[str, object]
    ) -> Invoice | None:
        """Update an invoice, returning None when no row matched."""

    def client_exists(self, client_id: UUID) -> bool:
        """Return whether the client row exists."""

    def get_invoice(self, invoice_id: UUID) -> Invoice | None:
        """Return an invoice by id."""

    def list_payments(
        self,
        *,
        invoice_id: UUID | None,
        status: str | None,
        search: str | None,
        limit: int,
    ) -> list[InvoicePayment]:
        """Return payments, most recent payment date first."""

    def record_payment(
        self, invoice_id: UUID, values: dict[str, object]
    ) -> PaymentReceipt:
        """Insert a payment and settle the invoice in one transaction."""

    def update_payment(
        self, payment_id: UUID, values: dict[str, object]
    ) -> PaymentReceipt | None:
        """Update a payment and settle its invoice, None when no row matched."""


@dataclass(frozen=True)
class LineItem:
    """Billable line supplied by the caller."""

    description: str
    quantity: float
    unit_price: float
    tax_rate: float | None = None


@dataclass
class InvoiceService:
    """Application service for invoices."""

    repository: InvoiceRepository
    default_tax_rate: float = 20.0
    due_days: int = 30
    currency: str = "EUR"

    def create_invoice(  # noqa: PLR0913
        self,
        *,
        client_id: UUID,
        items: list[LineItem],
        currency: str | None = None,
        due_date: date | None = None,
        notes: str | None = None,
        issue_date: date | None = None,
    ) -> Invoice:
        """Create a draft invoice with computed totals."""
        if not self.repository.client_exists(client_id):
            raise NotFoundError(f"Client not found: {client_id}")
        issued = issue_date or datetime.now(tz=UTC).date()
        subtotal = Decimal(0)
        tax_total = Decimal(0)
        rows: list[dict[str, object]] = []
        for index, item in enumerate(items):
            raw_rate = self.default_tax_rate if item.tax_rate is None else item.tax_rate
            rate = Decimal(str(raw_rate))
            net = _money(Decimal(str(item.quantity)) * Decimal(str(item.unit_price)))
            subtotal += net
            tax_total += net * rate / 100
            rows.append(
                {
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "tax_rate": float(rate),
                    "line_total": float(net),
                    "sort_order": index,
                }
            )
        tax_amount = _money(tax_total)
        return self.repository.create_invoice(
            {
                "invoice_number": generate_invoice_number(issued),
                "client_id": client_id,
                "issue_date": issued,
                "due_date": due_date or issued + timedelta(days=self.due_days),
                "subtotal": float(subtotal),
                "tax_amount": float(tax_amount),
                "total": float(subtotal + tax_amount),
                "currency": (currency or self.currency).upper(),
                "status": "DRAFT",
                "notes": notes,
            },
            rows,
        )

    def list_invoices(
        self,
        *,
        client_id: UUID | None = None,
        status: str | None = None,
        limit: int = 25,
    ) -> list[Invoice]:
        """Return invoices filtered by client or status."""
        return self.repository.list_invoices(
            client_id=client_id, status=status, limit=limit
        )

    def update_status(self, invoice_id: UUID, status: str) -> Invoice:
        """Move an invoice to a new status, stamping payment time when paid."""
        values: dict[str, object] = {"status": status}
        if status == "PAID":
            values["paid_at"] = datetime.now(tz=UTC)
        invoice = self.repository.update_invoice(invoice_id, values)
        if invoice is None:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        return invoice

    def list_payments(
        self,
        *,
        invoice_id: UUID | None = None,
        status: str | None = None,
        search: str | None = None,
        limit: int = 25,
    ) -> list[InvoicePayment]:
        """Return payments for an invoice or across all invoices."""
        return self.repository.list_payments(
            invoice_id=invoice_id, status=status, search=search, limit=limit
        )

    def record_payment(
        self, invoice_id: UUID, values: dict[str, object]
    ) -> PaymentReceipt:
        """Record a payment; completed payments covering the total mark it PAID."""
        invoice = self.repository.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        if invoice.status == "CANCELLED":
            raise ValidationError(
                "invoice_id", "Cancelled invoices cannot take payments"
            )
        payload = {"payment_date": datetime.now(tz=UTC).date(), **values}
        return self.repository.record_payment(invoice_id, payload)

    def update_payment(
        self, payment_id: UUID, values: dict[str, object]
    ) -> PaymentReceipt:
        """Correct a recorded payment and re-check the invoice balance."""
        receipt = self.repository.update_payment(payment_id, values)
        if receipt is None:
            raise NotFoundError(f"Payment not found: {payment_id}")
        return receipt


def generate_invoice_number(issued: date) -> str:
    """Return a human-friendly invoice number for the issue date."""
    return f"INV-{issued:%Y%m%d}-{secrets.token_hex(3).upper()}"


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)
