"""Domain models for invoices."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class InvoiceItem:
    """A single billed line."""

    id: UUID
    invoice_id: UUID
    description: str
    quantity: float
    unit_price: float
    tax_rate: float
    line_total: float
    sort_order: int


@dataclass(frozen=True)
class Invoice:
    """An invoice issued to a client."""

    id: UUID
    invoice_number: str
    client_id: UUID
    issue_date: date
    due_date: date
    subtotal: float
    tax_amount: float
    total: float
    currency: str
    status: str
    notes: str | None
    paid_at: datetime | None
    created_at: datetime
    updated_at: datetime
    client_name: str | None = None
    items: list[InvoiceItem] = field(default_factory=list)


@dataclass(frozen=True)
class InvoicePayment:
    """Money received against an invoice."""

    id: UUID
    invoice_id: UUID
    amount: float
    payment_method: str
    payment_reference: str | None
    payment_date: date
    status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PaymentReceipt:
    """A payment together with the invoice balance it leaves behind."""

    payment: InvoicePayment
    invoice_status: str
    amount_paid: float
    balance_due: float
