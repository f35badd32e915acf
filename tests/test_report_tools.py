"""Tests for reporting and search tools."""

from datetime import UTC, datetime

from studio_crm.services.reports import period_start
from tests.conftest import create_client, run_tool


def test_period_start() -> None:
    now = datetime(2025, 8, 14, 15, 30, tzinfo=UTC)

    assert period_start("today", now) == datetime(2025, 8, 14, tzinfo=UTC)
    assert period_start("week", now) == datetime(2025, 8, 11, tzinfo=UTC)
    assert period_start("month", now) == datetime(2025, 8, 1, tzinfo=UTC)
    assert period_start("quarter", now) == datetime(2025, 7, 1, tzinfo=UTC)
    assert period_start("year", now) == datetime(2025, 1, 1, tzinfo=UTC)


def test_pipeline_summary(registry) -> None:
    client_id = create_client(registry)
    lead = run_tool(
        registry, "create_crm_lead", name="Maria Huber", email="m@example.com"
    )
    run_tool(registry, "create_crm_lead", name="Eva Gruber", email="eva@example.com")
    run_tool(registry, "convert_lead", lead_id=lead["lead_id"])
    run_tool(
        registry,
        "create_photography_session",
        client_id=client_id,
        session_type="PORTRAIT",
        session_date="2025-03-10",
        session_time="10:00",
        location="Studio",
    )
    paid = run_tool(
        registry,
        "create_invoice",
        client_id=client_id,
        items=[{"description": "Portrait", "unit_price": 200, "tax_rate": 0}],
    )
    run_tool(
        registry, "update_invoice_status", invoice_id=paid["invoice_id"], status="PAID"
    )
    sent = run_tool(
        registry,
        "create_invoice",
        client_id=client_id,
        items=[{"description": "Album", "unit_price": 80, "tax_rate": 0}],
    )
    run_tool(
        registry, "update_invoice_status", invoice_id=sent["invoice_id"], status="SENT"
    )

    result = run_tool(registry, "pipeline_summary", period="month")

    assert result["success"] is True
    summary = result["summary"]
    assert summary["new_leads"] == 2
    assert summary["converted_leads"] == 1
    assert summary["conversion_rate"] == 50.0
    assert summary["new_clients"] == 2
    assert summary["sessions_booked"] == 1
    assert summary["paid_revenue"] == 200.0
    assert summary["pending_revenue"] == 80.0


def test_pipeline_summary_without_leads(registry) -> None:
    result = run_tool(registry, "pipeline_summary")

    assert result["summary"]["conversion_rate"] == 0.0


def test_global_search_across_entities(registry) -> None:
    client_id = create_client(registry)
    run_tool(
        registry, "create_crm_lead", name="Bergmann GmbH", email="info@example.com"
    )
    run_tool(
        registry,
        "create_photography_session",
        client_id=client_id,
        session_type="BUSINESS",
        session_date="2025-03-10",
        session_time="10:00",
        location="Office",
    )

    result = run_tool(registry, "global_search", term="berg")

    assert result["success"] is True
    assert len(result["results"]["clients"]) == 1
    assert len(result["results"]["leads"]) == 1
    assert len(result["results"]["sessions"]) == 1
    assert result["total"] == 3


def test_global_search_requires_two_characters(registry) -> None:
    result = run_tool(registry, "global_search", term="a")

    assert result["error"].startswith("term: ")
