"""Tool endpoints for the orchestrator, guarded by an API token."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from studio_crm.containers import AppContainer

router = APIRouter(prefix="/tools", tags=["tools"])


class ToolCall(BaseModel):
    """A single tool invocation requested by the orchestrator."""

    tool_name: str = Field(min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("", dependencies=[Depends(require_api_token)])
async def list_tools(request: Request) -> dict[str, object]:
    """Return every tool as an OpenAI function definition."""
    container: AppContainer = request.app.state.container
    return {"tools": container.registry.openai_tools()}


@router.post("/call", dependencies=[Depends(require_api_token)])
async def call_tool(call: ToolCall, request: Request) -> dict[str, Any]:
    """Run a tool and return its result envelope."""
    container: AppContainer = request.app.state.container
    return await container.registry.dispatch(call.tool_name, call.parameters)
