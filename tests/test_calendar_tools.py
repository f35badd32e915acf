"""Tests for photography session and availability tools."""

from uuid import uuid4

from tests.conftest import create_client, run_tool


def _book(registry, client_id: str, **overrides: object) -> dict[str, object]:
    parameters: dict[str, object] = {
        "client_id": client_id,
        "session_type": "FAMILY",
        "session_date": "2025-03-10",
        "session_time": "10:00",
        "location": "Studio Wien",
        **overrides,
    }
    result = run_tool(registry, "create_photography_session", **parameters)
    assert result["success"] is True, result
    return result


def test_book_session_computes_end_time(registry) -> None:
    client_id = create_client(registry)

    result = _book(registry, client_id, price=295, equipment_needed=["backdrop"])

    session = result["session"]
    assert session["title"] == "Family Session"
    assert session["status"] == "CONFIRMED"
    assert session["start_time"] == "2025-03-10T10:00:00"
    assert session["end_time"] == "2025-03-10T12:00:00"
    assert session["client_name"] == "Anna Berger"
    assert session["equipment_needed"] == ["backdrop"]


def test_book_session_for_unknown_client_is_not_found(registry) -> None:
    result = run_tool(
        registry,
        "create_photography_session",
        client_id=str(uuid4()),
        session_type="WEDDING",
        session_date="2025-03-10",
        session_time="10:00",
        location="Schloss",
    )

    assert result["success"] is False
    assert result["error_kind"] == "not_found"


def test_book_session_rejects_unknown_type(registry) -> None:
    client_id = create_client(registry)

    result = run_tool(
        registry,
        "create_photography_session",
        client_id=client_id,
        session_type="UNDERWATER",
        session_date="2025-03-10",
        session_time="10:00",
        location="Pool",
    )

    assert result["success"] is False
    assert result["error"].startswith("session_type: ")


def test_update_unknown_session_is_not_found(registry) -> None:
    missing = str(uuid4())

    result = run_tool(
        registry, "update_photography_session", session_id=missing, status="CANCELLED"
    )

    assert result["success"] is False
    assert result["error_kind"] == "not_found"
    assert "session not found" in result["error"].lower()


def test_reschedule_session_moves_both_ends(registry) -> None:
    client_id = create_client(registry)
    session_id = _book(registry, client_id)["session_id"]

    result = run_tool(
        registry,
        "update_photography_session",
        session_id=session_id,
        session_time="14:30",
        duration_minutes=60,
    )

    assert result["success"] is True
    assert result["session"]["start_time"] == "2025-03-10T14:30:00"
    assert result["session"]["end_time"] == "2025-03-10T15:30:00"


def test_cancel_session_records_reason(registry) -> None:
    client_id = create_client(registry)
    session_id = _book(registry, client_id)["session_id"]

    result = run_tool(
        registry,
        "cancel_photography_session",
        session_id=session_id,
        cancellation_reason="Client is ill",
        refund_amount=50,
    )

    assert result["success"] is True
    assert result["session"]["status"] == "CANCELLED"
    assert result["session"]["cancellation_reason"] == "Client is ill"
    assert result["session"]["refund_amount"] == 50.0


def test_read_sessions_filters_by_date_range(registry) -> None:
    client_id = create_client(registry)
    _book(registry, client_id)
    _book(registry, client_id, session_date="2025-04-01")

    march = run_tool(
        registry,
        "read_calendar_sessions",
        start_date="2025-03-01",
        end_date="2025-03-31",
    )
    inverted = run_tool(
        registry,
        "read_calendar_sessions",
        start_date="2025-03-31",
        end_date="2025-03-01",
    )

    assert march["count"] == 1
    assert inverted["success"] is False
    assert inverted["error"].startswith("end_date: ")


def test_availability_on_an_empty_day(registry) -> None:
    result = run_tool(
        registry, "check_calendar_availability", date="2025-03-10", duration_minutes=120
    )

    assert result["success"] is True
    assert result["available"] is True
    slots = result["availability"]["available_slots"]
    assert [slot["start_time"] for slot in slots] == [
        "09:00",
        "10:00",
        "11:00",
        "12:00",
        "13:00",
        "14:00",
        "15:00",
        "16:00",
    ]
    assert slots[-1]["end_time"] == "18:00"
    assert len(result["availability"]["recommended_slots"]) == 3


def test_availability_skips_booked_and_keeps_cancelled_time(registry) -> None:
    client_id = create_client(registry)
    _book(registry, client_id)
    cancelled = _book(registry, client_id, session_time="15:00")
    run_tool(
        registry,
        "cancel_photography_session",
        session_id=cancelled["session_id"],
        cancellation_reason="Rescheduled",
    )

    result = run_tool(
        registry,
        "check_calendar_availability",
        date="2025-03-10",
        duration_minutes=120,
        preferred_times=["15:00"],
    )

    availability = result["availability"]
    starts = [slot["start_time"] for slot in availability["available_slots"]]
    assert starts == ["12:00", "13:00", "14:00", "15:00", "16:00"]
    assert availability["booked_sessions"] == 1
    assert [slot["start_time"] for slot in availability["recommended_slots"]] == [
        "15:00"
    ]
