"""Tests for email drafting and sending tools."""

from tests.conftest import STUDIO_EMAIL, STUDIO_NAME, run_tool


def test_draft_email_uses_assistant(registry, assistant) -> None:
    result = run_tool(
        registry,
        "draft_email",
        to="anna@example.com",
        subject="Your gallery is ready",
        context="Gallery link goes out tomorrow",
        tone="friendly",
        email_type="follow_up",
    )

    assert result["success"] is True
    assert result["draft"]["body"].startswith("Dear client")
    assert result["draft"]["tone"] == "friendly"
    call = assistant.calls[0]
    assert call["model"] == "gpt-4o"
    assert STUDIO_NAME in call["instructions"]
    assert "warm and personal" in call["instructions"]
    assert "Gallery link goes out tomorrow" in call["prompt"]
    assert STUDIO_EMAIL in call["prompt"]


def test_draft_email_without_studio_info(registry, assistant) -> None:
    run_tool(
        registry,
        "draft_email",
        to="anna@example.com",
        subject="Hello",
        include_studio_info=False,
    )

    assert STUDIO_EMAIL not in assistant.calls[0]["prompt"]


def test_empty_draft_is_an_upstream_error(registry, assistant) -> None:
    assistant.reply = "   "

    result = run_tool(registry, "draft_email", to="anna@example.com", subject="Hi")

    assert result["success"] is False
    assert result["error_kind"] == "upstream"


def test_draft_email_rejects_unknown_tone(registry, assistant) -> None:
    result = run_tool(
        registry, "draft_email", to="anna@example.com", subject="Hi", tone="angry"
    )

    assert result["error"].startswith("tone: ")
    assert assistant.calls == []


def test_send_email_hands_message_to_sender(registry, email_sender) -> None:
    result = run_tool(
        registry,
        "send_email",
        to="anna@example.com",
        subject="Booking confirmed",
        content="See you on Monday.",
        cc=["ben@example.com"],
    )

    assert result["success"] is True
    assert result["message_id"].startswith("stub-")
    message = email_sender.sent[0]
    assert message.sender_email == STUDIO_EMAIL
    assert message.cc == ["ben@example.com"]
    assert message.body == "See you on Monday."
