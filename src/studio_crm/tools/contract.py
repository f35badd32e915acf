"""Tool contract: typed parameters, guarded execution and result envelopes."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict
from pydantic_core import to_jsonable_python

from studio_crm.errors import CrmError, ValidationError

logger = logging.getLogger(__name__)

ToolResult = dict[str, Any]


class ToolParameters(BaseModel):
    """Base model for tool arguments; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    def changes(self, *exclude: str) -> dict[str, object]:
        """Return the fields the caller actually supplied, minus identifiers."""
        values = self.model_dump(
            exclude_unset=True, exclude_none=True, exclude=set(exclude)
        )
        if not values:
            raise ValidationError("parameters", "Provide at least one field to update")
        return values


P = TypeVar("P", bound=ToolParameters)


def validate_parameters(model: type[P], raw: object) -> P:
    """Validate untrusted arguments, naming the first offending field."""
    try:
        return model.model_validate({} if raw is None else raw)
    except pydantic.ValidationError as exc:
        errors = exc.errors(include_url=False)
        first = errors[0]
        field = ".".join(str(part) for part in first["loc"]) or "parameters"
        constraint = first["msg"]
        if len(errors) > 1:
            constraint = f"{constraint} (and {len(errors) - 1} more problem(s))"
        raise ValidationError(field, constraint) from None


def success(**fields: object) -> ToolResult:
    """Build a success envelope with JSON-compatible values."""
    return {"success": True, **to_jsonable_python(fields)}


def failure(error: CrmError) -> ToolResult:
    """Build a failure envelope from a typed error."""
    return {"success": False, "error": error.message, "error_kind": error.kind}


@dataclass(frozen=True)
class Tool(Generic[P]):
    """A named operation the assistant can call."""

    name: str
    description: str
    parameters: type[P]
    execute: Callable[[P], Awaitable[ToolResult]]

    def definition(self) -> dict[str, object]:
        """Return the OpenAI function-tool definition for this tool."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters.model_json_schema(),
            },
        }

    async def invoke(self, raw: Mapping[str, object] | None) -> ToolResult:
        """Validate, execute and normalize; never raises."""
        try:
            params = validate_parameters(self.parameters, raw)
            return await self.execute(params)
        except CrmError as exc:
            logger.warning("Tool %s failed (%s): %s", self.name, exc.kind, exc.message)
            return failure(exc)
        except Exception:
            logger.exception("Tool %s raised an unexpected error", self.name)
            return failure(CrmError("Unexpected error while running the tool"))
