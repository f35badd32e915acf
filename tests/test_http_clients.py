"""Tests for external service adapters."""

import asyncio

import httpx
import pytest

from studio_crm.adapters.logging_email_sender import LoggingEmailSender
from studio_crm.adapters.openai_assistant_client import OpenAIAssistantClient
from studio_crm.domain.messaging import OutgoingEmail
from studio_crm.errors import UpstreamError


class _FakeResponses:
    def __init__(
        self, output_text: str = "Hello there", error: Exception | None = None
    ) -> None:
        self.output_text = output_text
        self.error = error
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if self.error is not None:
            raise self.error
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, responses: _FakeResponses) -> None:
        self.responses = responses


def test_openai_assistant_client_returns_output_text() -> None:
    responses = _FakeResponses()
    client = OpenAIAssistantClient(client=_FakeOpenAI(responses))

    result = asyncio.run(
        client.complete(model="gpt-4o", instructions="Be brief.", prompt="Say hi")
    )

    assert result == "Hello there"
    assert responses.last_payload == {
        "model": "gpt-4o",
        "instructions": "Be brief.",
        "input": "Say hi",
    }


def test_openai_assistant_client_maps_transport_errors() -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/responses")
    responses = _FakeResponses(error=httpx.ConnectError("boom", request=request))
    client = OpenAIAssistantClient(client=_FakeOpenAI(responses))

    with pytest.raises(UpstreamError):
        asyncio.run(client.complete(model="gpt-4o", instructions="", prompt="Hi"))


def test_openai_assistant_client_rejects_empty_output() -> None:
    client = OpenAIAssistantClient(client=_FakeOpenAI(_FakeResponses(output_text="")))

    with pytest.raises(UpstreamError):
        asyncio.run(client.complete(model="gpt-4o", instructions="", prompt="Hi"))


def test_logging_email_sender_records_messages() -> None:
    sender = LoggingEmailSender()
    message = OutgoingEmail(
        to="anna@example.com",
        subject="Hi",
        body="Hello",
        sender_name="Studio",
        sender_email="studio@example.com",
    )

    first = asyncio.run(sender.send(message))
    second = asyncio.run(sender.send(message))

    assert first != second
    assert sender.sent == [message, message]
