"""Tests for invoice tools."""

from datetime import UTC, date, datetime
from uuid import uuid4

from studio_crm.services.invoices import generate_invoice_number
from tests.conftest import create_client, run_tool


def test_create_invoice_computes_totals(registry) -> None:
    client_id = create_client(registry)

    result = run_tool(
        registry,
        "create_invoice",
        client_id=client_id,
        items=[
            {"description": "Portrait session", "quantity": 1, "unit_price": 199.99},
            {
                "description": "Prints",
                "quantity": 3,
                "unit_price": 12.5,
                "tax_rate": 10,
            },
        ],
        currency="eur",
        notes="Thank you!",
    )

    assert result["success"] is True
    invoice = result["invoice"]
    assert invoice["subtotal"] == 237.49
    assert invoice["tax_amount"] == 43.75
    assert invoice["total"] == 281.24
    assert invoice["currency"] == "EUR"
    assert invoice["status"] == "DRAFT"
    assert invoice["client_name"] == "Anna Berger"
    assert [item["line_total"] for item in invoice["items"]] == [199.99, 37.5]
    assert result["invoice_number"].startswith("INV-")


def test_create_invoice_requires_items(registry) -> None:
    client_id = create_client(registry)

    result = run_tool(registry, "create_invoice", client_id=client_id, items=[])

    assert result["success"] is False
    assert result["error"].startswith("items: ")


def test_create_invoice_for_unknown_client_is_not_found(registry) -> None:
    result = run_tool(
        registry,
        "create_invoice",
        client_id=str(uuid4()),
        items=[{"description": "Session", "unit_price": 100}],
    )

    assert result["success"] is False
    assert result["error_kind"] == "not_found"


def test_mark_invoice_paid_stamps_payment_time(registry) -> None:
    client_id = create_client(registry)
    created = run_tool(
        registry,
        "create_invoice",
        client_id=client_id,
        items=[{"description": "Session", "unit_price": 100}],
    )

    result = run_tool(
        registry,
        "update_invoice_status",
        invoice_id=created["invoice_id"],
        status="PAID",
    )

    assert result["success"] is True
    assert result["invoice"]["status"] == "PAID"
    assert result["invoice"]["paid_at"] is not None
    listed = run_tool(registry, "read_crm_invoices", status="PAID")
    assert [invoice["id"] for invoice in listed["invoices"]] == [created["invoice_id"]]


def test_update_unknown_invoice_is_not_found(registry) -> None:
    result = run_tool(
        registry, "update_invoice_status", invoice_id=str(uuid4()), status="PAID"
    )

    assert result["error_kind"] == "not_found"


def test_generate_invoice_number_uses_issue_date() -> None:
    number = generate_invoice_number(date(2025, 3, 10))

    assert number.startswith("INV-20250310-")
    assert len(number) == len("INV-20250310-") + 6


def _invoice(registry, amount: float = 200) -> str:
    client_id = create_client(registry)
    result = run_tool(
        registry,
        "create_invoice",
        client_id=client_id,
        items=[{"description": "Portrait", "unit_price": amount, "tax_rate": 0}],
    )
    return result["invoice_id"]


def _pay(registry, invoice_id: str, **overrides: object) -> dict[str, object]:
    parameters: dict[str, object] = {"invoice_id": invoice_id, **overrides}
    return run_tool(registry, "create_crm_invoice_payment", **parameters)


def test_partial_then_full_payment_settles_invoice(registry) -> None:
    invoice_id = _invoice(registry)

    deposit = _pay(registry, invoice_id, amount=50, payment_reference="DEP-1")
    rest = _pay(
        registry,
        invoice_id,
        amount=150,
        payment_method="card",
        payment_date="2025-03-12",
    )
    invoices = run_tool(registry, "read_crm_invoices", status="PAID")

    assert deposit["success"] is True
    assert deposit["invoice_status"] == "DRAFT"
    assert deposit["amount_paid"] == 50.0
    assert deposit["balance_due"] == 150.0
    assert deposit["payment"]["payment_method"] == "bank_transfer"
    today = datetime.now(tz=UTC).date()
    assert deposit["payment"]["payment_date"] == today.isoformat()
    assert rest["invoice_status"] == "PAID"
    assert rest["balance_due"] == 0.0
    assert invoices["invoices"][0]["id"] == invoice_id
    assert invoices["invoices"][0]["paid_at"] is not None


def test_pending_payment_does_not_settle_until_completed(registry) -> None:
    invoice_id = _invoice(registry, amount=80)

    pending = _pay(registry, invoice_id, amount=80, status="PENDING")
    completed = run_tool(
        registry,
        "update_crm_invoice_payment",
        payment_id=pending["payment_id"],
        status="COMPLETED",
    )

    assert pending["invoice_status"] == "DRAFT"
    assert pending["amount_paid"] == 0.0
    assert completed["payment"]["status"] == "COMPLETED"
    assert completed["invoice_status"] == "PAID"


def test_payment_against_cancelled_invoice_is_rejected(registry) -> None:
    invoice_id = _invoice(registry)
    run_tool(
        registry, "update_invoice_status", invoice_id=invoice_id, status="CANCELLED"
    )

    result = _pay(registry, invoice_id, amount=10)

    assert result["success"] is False
    assert result["error"].startswith("invoice_id: ")


def test_payment_against_unknown_invoice_is_not_found(registry) -> None:
    result = _pay(registry, str(uuid4()), amount=10)

    assert result["error_kind"] == "not_found"


def test_payment_amount_must_be_positive(registry) -> None:
    invoice_id = _invoice(registry)

    result = _pay(registry, invoice_id, amount=0)

    assert result["error"].startswith("amount: ")


def test_read_payments_by_invoice_and_reference(registry) -> None:
    first = _invoice(registry)
    second = _invoice(registry)
    _pay(registry, first, amount=20, payment_reference="SEPA-4471")
    _pay(registry, second, amount=30, notes="Paid at the studio", payment_method="cash")

    by_invoice = run_tool(registry, "read_crm_invoice_payments", invoice_id=first)
    by_reference = run_tool(registry, "read_crm_invoice_payments", search="sepa")
    by_notes = run_tool(registry, "read_crm_invoice_payments", search="studio")

    assert by_invoice["count"] == 1
    assert by_reference["payments"][0]["invoice_id"] == first
    assert by_notes["payments"][0]["payment_method"] == "cash"


def test_update_unknown_payment_is_not_found(registry) -> None:
    result = run_tool(
        registry, "update_crm_invoice_payment", payment_id=str(uuid4()), amount=5
    )

    assert result["error_kind"] == "not_found"
