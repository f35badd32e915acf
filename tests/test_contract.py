"""Tests for parameter validation and result envelopes."""

import asyncio
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest
from pydantic import Field

from studio_crm.errors import NotFoundError, ValidationError
from studio_crm.tools.contract import (
    Tool,
    ToolParameters,
    failure,
    success,
    validate_parameters,
)
from tests.conftest import run_tool


class _SampleParams(ToolParameters):
    name: str = Field(min_length=1)
    client_id: UUID | None = None
    limit: int = Field(default=25, ge=1, le=100)


def test_validate_parameters_applies_defaults_and_ignores_unknown_fields() -> None:
    params = validate_parameters(_SampleParams, {"name": "  Anna  ", "extra": True})

    assert params.name == "Anna"
    assert params.limit == 25
    assert not hasattr(params, "extra")


def test_validate_parameters_names_missing_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_parameters(_SampleParams, {})

    assert excinfo.value.field == "name"
    assert excinfo.value.message.startswith("name: ")


def test_validate_parameters_names_malformed_uuid() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_parameters(_SampleParams, {"name": "Anna", "client_id": "nope"})

    assert excinfo.value.field == "client_id"


def test_validate_parameters_counts_additional_problems() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_parameters(_SampleParams, {"name": "", "limit": 0})

    assert excinfo.value.field == "name"
    assert "(and 1 more problem(s))" in excinfo.value.message


def test_changes_requires_at_least_one_field() -> None:
    params = validate_parameters(_SampleParams, {"name": "Anna"})

    assert params.changes("limit") == {"name": "Anna"}
    with pytest.raises(ValidationError):
        params.changes("name")


def test_success_envelope_is_json_compatible() -> None:
    identifier = uuid4()
    result = success(
        id=identifier, day=date(2025, 3, 10), at=datetime(2025, 3, 10, 9, 30)
    )

    assert result == {
        "success": True,
        "id": str(identifier),
        "day": "2025-03-10",
        "at": "2025-03-10T09:30:00",
    }


def test_failure_envelope_carries_kind() -> None:
    assert failure(NotFoundError("Client not found: 1")) == {
        "success": False,
        "error": "Client not found: 1",
        "error_kind": "not_found",
    }


def test_invoke_reports_unexpected_errors_generically() -> None:
    async def explode(params: _SampleParams) -> dict[str, object]:
        raise RuntimeError("postgres://user:secret@db/crm is down")

    tool = Tool(
        name="explode", description="Fails.", parameters=_SampleParams, execute=explode
    )

    result = asyncio.run(tool.invoke({"name": "Anna"}))

    assert result["success"] is False
    assert result["error_kind"] == "internal"
    assert "secret" not in result["error"]


def test_invoke_treats_missing_parameters_as_empty() -> None:
    async def echo(params: _SampleParams) -> dict[str, object]:
        return success(name=params.name)

    tool = Tool(
        name="echo", description="Echo.", parameters=_SampleParams, execute=echo
    )

    result = asyncio.run(tool.invoke(None))

    assert result["success"] is False
    assert result["error_kind"] == "validation"
    assert "name" in result["error"]


def test_definition_uses_openai_function_format() -> None:
    async def echo(params: _SampleParams) -> dict[str, object]:
        return success()

    definition = Tool(
        name="echo", description="Echo.", parameters=_SampleParams, execute=echo
    ).definition()

    assert definition["type"] == "function"
    function = definition["function"]
    assert function["name"] == "echo"
    assert function["parameters"]["required"] == ["name"]


@pytest.mark.parametrize(
    ("limit", "accepted"), [(0, False), (1, True), (100, True), (101, False)]
)
def test_limit_boundaries(registry, limit: int, accepted: bool) -> None:
    result = run_tool(registry, "read_crm_clients", limit=limit)

    assert result["success"] is accepted
    if not accepted:
        assert result["error_kind"] == "validation"
        assert result["error"].startswith("limit: ")
