"""Tests for client and lead tools."""

from uuid import uuid4

from tests.conftest import create_client, run_tool


def test_create_and_search_clients(registry) -> None:
    client_id = create_client(registry, email="Anna@Example.com")
    create_client(
        registry, first_name="Ben", last_name="Maier", email="ben@example.com"
    )

    result = run_tool(registry, "read_crm_clients", search="berg")

    assert result["success"] is True
    assert result["count"] == 1
    assert result["clients"][0]["id"] == client_id
    assert result["clients"][0]["email"] == "anna@example.com"


def test_search_treats_wildcards_literally(registry) -> None:
    create_client(registry)

    result = run_tool(registry, "read_crm_clients", search="%")

    assert result["count"] == 0


def test_create_client_rejects_malformed_email(registry) -> None:
    result = run_tool(
        registry,
        "create_crm_client",
        first_name="Anna",
        last_name="Berger",
        email="not-an-email",
    )

    assert result["success"] is False
    assert result["error_kind"] == "validation"
    assert result["error"].startswith("email: ")


def test_update_client(registry) -> None:
    client_id = create_client(registry)

    result = run_tool(
        registry,
        "update_crm_client",
        client_id=client_id,
        city="Wien",
        status="INACTIVE",
    )

    assert result["success"] is True
    assert result["client"]["city"] == "Wien"
    assert result["client"]["status"] == "INACTIVE"


def test_update_client_requires_a_field(registry) -> None:
    client_id = create_client(registry)

    result = run_tool(registry, "update_crm_client", client_id=client_id)

    assert result["success"] is False
    assert result["error_kind"] == "validation"


def test_update_unknown_client_is_not_found(registry) -> None:
    missing = str(uuid4())

    result = run_tool(registry, "update_crm_client", client_id=missing, city="Graz")

    assert result == {
        "success": False,
        "error": f"Client not found: {missing}",
        "error_kind": "not_found",
    }


def test_lookup_client_summarizes_billing(registry) -> None:
    client_id = create_client(registry)
    paid = run_tool(
        registry,
        "create_invoice",
        client_id=client_id,
        items=[{"description": "Family shoot", "quantity": 2, "unit_price": 100}],
    )
    run_tool(
        registry,
        "update_invoice_status",
        invoice_id=paid["invoice_id"],
        status="PAID",
    )
    pending = run_tool(
        registry,
        "create_invoice",
        client_id=client_id,
        items=[{"description": "Prints", "unit_price": 50}],
    )
    run_tool(
        registry,
        "update_invoice_status",
        invoice_id=pending["invoice_id"],
        status="SENT",
    )

    result = run_tool(registry, "lookup_client", email="ANNA@example.com")

    assert result["success"] is True
    assert result["client"]["id"] == client_id
    summary = result["summary"]
    assert summary["invoice_count"] == 2
    assert summary["total_paid"] == 240.0
    assert summary["pending_amount"] == 60.0
    assert len(summary["recent_invoices"]) == 2


def test_lookup_client_requires_an_identifier(registry) -> None:
    result = run_tool(registry, "lookup_client")

    assert result["success"] is False
    assert result["error_kind"] == "validation"
    assert result["error"].startswith("client_id: ")


def test_list_top_clients_orders_by_paid_revenue(registry) -> None:
    create_client(registry, first_name="Ben", email="ben@example.com")
    top_id = create_client(registry)
    invoice = run_tool(
        registry,
        "create_invoice",
        client_id=top_id,
        items=[{"description": "Wedding", "unit_price": 1000, "tax_rate": 0}],
    )
    run_tool(
        registry,
        "update_invoice_status",
        invoice_id=invoice["invoice_id"],
        status="PAID",
    )

    result = run_tool(registry, "list_top_clients")

    assert result["success"] is True
    assert result["clients"][0]["id"] == top_id
    assert result["clients"][0]["total_revenue"] == 1000.0
    assert result["clients"][1]["total_revenue"] == 0.0

    filtered = run_tool(registry, "list_top_clients", min_revenue=1)
    assert [client["id"] for client in filtered["clients"]] == [top_id]


def test_lead_lifecycle_and_conversion(registry) -> None:
    created = run_tool(
        registry,
        "create_crm_lead",
        name="Maria Huber",
        email="Maria@Example.com",
        message="Newborn shoot in May",
        source="website",
    )
    lead_id = created["lead_id"]
    assert created["lead"]["status"] == "NEW"
    assert created["lead"]["priority"] == "medium"

    updated = run_tool(registry, "update_crm_lead", lead_id=lead_id, status="QUALIFIED")
    assert updated["lead"]["status"] == "QUALIFIED"

    converted = run_tool(registry, "convert_lead", lead_id=lead_id, phone="+43 1 234")

    assert converted["success"] is True
    client = converted["client"]
    assert client["first_name"] == "Maria"
    assert client["last_name"] == "Huber"
    assert client["email"] == "maria@example.com"
    assert client["phone"] == "+43 1 234"
    leads = run_tool(registry, "read_crm_leads", status="CONVERTED")
    assert leads["leads"][0]["converted_client_id"] == client["id"]

    again = run_tool(registry, "convert_lead", lead_id=lead_id)
    assert again["success"] is False
    assert again["error_kind"] == "validation"


def test_update_lead_cannot_mark_converted(registry) -> None:
    created = run_tool(registry, "create_crm_lead", name="Eva", email="eva@example.com")

    result = run_tool(
        registry, "update_crm_lead", lead_id=created["lead_id"], status="CONVERTED"
    )

    assert result["success"] is False
    assert result["error"].startswith("status: ")


def test_repeated_client_searches_return_the_same_result(registry) -> None:
    create_client(registry)
    create_client(registry, first_name="Ben", email="ben@example.com")

    first = run_tool(registry, "read_crm_clients", search="example")
    second = run_tool(registry, "read_crm_clients", search="example")

    assert first["count"] == 2
    assert first == second
