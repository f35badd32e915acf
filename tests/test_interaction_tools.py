"""Tests for the interaction log tool."""

from uuid import uuid4

from sqlalchemy import select

from studio_crm.adapters.sql_tables import interactions
from tests.conftest import create_client, run_tool


def test_log_interaction_persists_row(registry, database) -> None:
    client_id = create_client(registry)

    result = run_tool(
        registry,
        "log_interaction",
        interaction_type="request",
        user_message="Book Anna for next Monday",
        response_summary="Created a portrait session",
        client_id=client_id,
        context={"session_id": "chat-42"},
    )

    assert result["success"] is True
    assert result["message"] == "Interaction logged: request"
    assert result["logged_at"]
    with database.transaction() as connection:
        row = connection.execute(select(interactions)).mappings().one()
    assert str(row["id"]) == result["interaction_id"]
    assert str(row["client_id"]) == client_id
    assert row["context"] == {"session_id": "chat-42"}


def test_log_interaction_rejects_unknown_type(registry) -> None:
    result = run_tool(
        registry, "log_interaction", interaction_type="gossip", user_message="Hi"
    )

    assert result["error"].startswith("interaction_type: ")


def test_log_interaction_requires_message(registry) -> None:
    result = run_tool(
        registry, "log_interaction", interaction_type="greeting", user_message="  "
    )

    assert result["error"].startswith("user_message: ")


def test_log_interaction_for_unknown_client_is_a_storage_error(registry) -> None:
    result = run_tool(
        registry,
        "log_interaction",
        interaction_type="follow_up",
        user_message="Checked in",
        client_id=str(uuid4()),
    )

    assert result["error_kind"] == "storage"
