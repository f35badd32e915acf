"""Invoice tools."""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import Field

from studio_crm.services.invoices import InvoiceService, LineItem
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success

InvoiceStatus = Literal["DRAFT", "SENT", "PAID", "OVERDUE", "CANCELLED"]
PaymentStatus = Literal["COMPLETED", "PENDING", "FAILED", "REFUNDED"]
PaymentMethod = Literal[
    "bank_transfer", "cash", "card", "paypal", "stripe", "voucher", "other"
]


class InvoiceItemParams(ToolParameters):
    description: str = Field(min_length=1)
    quantity: float = Field(default=1, gt=0)
    unit_price: float = Field(ge=0)
    tax_rate: float | None = Field(
        default=None, ge=0, le=100, description="Percent; studio default when omitted"
    )


class CreateInvoiceParams(ToolParameters):
    client_id: UUID
    items: list[InvoiceItemParams] = Field(min_length=1)
    due_date: date | None = None
    notes: str | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class ReadInvoicesParams(ToolParameters):
    client_id: UUID | None = None
    status: InvoiceStatus | None = None
    limit: int = Field(default=25, ge=1, le=100)


class UpdateInvoiceStatusParams(ToolParameters):
    invoice_id: UUID
    status: InvoiceStatus


class ReadPaymentsParams(ToolParameters):
    invoice_id: UUID | None = None
    status: PaymentStatus | None = None
    search: str | None = Field(
        default=None, description="Matches payment method, reference or notes"
    )
    limit: int = Field(default=25, ge=1, le=100)


class CreatePaymentParams(ToolParameters):
    invoice_id: UUID
    amount: float = Field(gt=0)
    payment_method: PaymentMethod = "bank_transfer"
    payment_reference: str | None = Field(default=None, max_length=255)
    payment_date: date | None = Field(default=None, description="Defaults to today")
    status: PaymentStatus = "COMPLETED"
    notes: str | None = None


class UpdatePaymentParams(ToolParameters):
    payment_id: UUID
    amount: float | None = Field(default=None, gt=0)
    payment_method: PaymentMethod | None = None
    payment_reference: str | None = Field(default=None, max_length=255)
    payment_date: date | None = None
    status: PaymentStatus | None = None
    notes: str | None = None


def invoice_tools(invoices: InvoiceService) -> list[Tool]:
    """Build tools for invoices."""

    async def create_invoice(params: CreateInvoiceParams) -> ToolResult:
        invoice = invoices.create_invoice(
            client_id=params.client_id,
            items=[LineItem(**item.model_dump()) for item in params.items],
            currency=params.currency,
            due_date=params.due_date,
            notes=params.notes,
        )
        return success(
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            total=invoice.total,
            invoice=invoice,
        )

    async def read_crm_invoices(params: ReadInvoicesParams) -> ToolResult:
        found = invoices.list_invoices(
            client_id=params.client_id, status=params.status, limit=params.limit
        )
        return success(count=len(found), invoices=found)

    async def update_invoice_status(params: UpdateInvoiceStatusParams) -> ToolResult:
        invoice = invoices.update_status(params.invoice_id, params.status)
        return success(
            invoice=invoice,
            message=f"Invoice {invoice.invoice_number} marked {invoice.status}",
        )

    async def read_crm_invoice_payments(params: ReadPaymentsParams) -> ToolResult:
        found = invoices.list_payments(
            invoice_id=params.invoice_id,
            status=params.status,
            search=params.search,
            limit=params.limit,
        )
        return success(count=len(found), payments=found)

    async def create_crm_invoice_payment(params: CreatePaymentParams) -> ToolResult:
        values = params.model_dump(exclude={"invoice_id"}, exclude_none=True)
        receipt = invoices.record_payment(params.invoice_id, values)
        return success(
            payment_id=receipt.payment.id,
            payment=receipt.payment,
            invoice_status=receipt.invoice_status,
            amount_paid=receipt.amount_paid,
            balance_due=receipt.balance_due,
        )

    async def update_crm_invoice_payment(params: UpdatePaymentParams) -> ToolResult:
        receipt = invoices.update_payment(
            params.payment_id, params.changes("payment_id")
        )
        return success(
            payment=receipt.payment,
            invoice_status=receipt.invoice_status,
            amount_paid=receipt.amount_paid,
            balance_due=receipt.balance_due,
        )

    return [
        Tool(
            name="create_invoice",
            description="Create a draft invoice with line items for a client.",
            parameters=CreateInvoiceParams,
            execute=create_invoice,
        ),
        Tool(
            name="read_crm_invoices",
            description="List invoices by client or status.",
            parameters=ReadInvoicesParams,
            execute=read_crm_invoices,
        ),
        Tool(
            name="update_invoice_status",
            description="Change an invoice's status, e.g. mark it paid.",
            parameters=UpdateInvoiceStatusParams,
            execute=update_invoice_status,
        ),
        Tool(
            name="read_crm_invoice_payments",
            description="List payments received, by invoice, status or reference.",
            parameters=ReadPaymentsParams,
            execute=read_crm_invoice_payments,
        ),
        Tool(
            name="create_crm_invoice_payment",
            description=(
                "Record a payment against an invoice; the invoice is marked paid "
                "once completed payments cover its total."
            ),
            parameters=CreatePaymentParams,
            execute=create_crm_invoice_payment,
        ),
        Tool(
            name="update_crm_invoice_payment",
            description="Correct the amount, status or details of a recorded payment.",
            parameters=UpdatePaymentParams,
            execute=update_crm_invoice_payment,
        ),
    ]
