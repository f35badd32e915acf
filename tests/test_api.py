"""Tests for HTTP endpoints."""

from fastapi.testclient import TestClient

from studio_crm.api.app import create_app

HEADERS = {"X-Api-Token": "api-token"}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_tools_require_token(container) -> None:
    client = TestClient(create_app(container))

    missing = client.get("/tools")
    wrong = client.get("/tools", headers={"X-Api-Token": "nope"})

    assert missing.status_code == 401
    assert wrong.status_code == 401


def test_list_tools(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/tools", headers=HEADERS)

    assert response.status_code == 200
    tools = response.json()["tools"]
    assert len(tools) == 51
    assert tools[0]["type"] == "function"


def test_call_tool_returns_envelope(container) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/tools/call",
        headers=HEADERS,
        json={
            "tool_name": "create_crm_client",
            "parameters": {
                "first_name": "Anna",
                "last_name": "Berger",
                "email": "anna@example.com",
            },
        },
    )
    listed = client.post(
        "/tools/call", headers=HEADERS, json={"tool_name": "read_crm_clients"}
    )

    assert created.status_code == 200
    assert created.json()["success"] is True
    assert listed.json()["count"] == 1


def test_call_tool_failure_is_still_ok(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/tools/call",
        headers=HEADERS,
        json={"tool_name": "no_such_tool", "parameters": {}},
    )

    assert response.status_code == 200
    assert response.json()["success"] is False


def test_call_tool_rejects_empty_name(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/tools/call", headers=HEADERS, json={"tool_name": ""})

    assert response.status_code == 422
