"""Interaction logging tool."""

from typing import Any, Literal
from uuid import UUID

from pydantic import Field

from studio_crm.services.interactions import InteractionService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success


class LogInteractionParams(ToolParameters):
    interaction_type: Literal[
        "greeting", "request", "response", "task_completion", "error", "follow_up"
    ]
    user_message: str = Field(min_length=1)
    response_summary: str | None = Field(
        default=None, description="What the assistant answered or did"
    )
    client_id: UUID | None = None
    context: dict[str, Any] | None = None


def interaction_tools(interactions: InteractionService) -> list[Tool]:
    """Build the interaction logging tool."""

    async def log_interaction(params: LogInteractionParams) -> ToolResult:
        interaction = interactions.log_interaction(
            interaction_type=params.interaction_type,
            user_message=params.user_message,
            response_summary=params.response_summary,
            client_id=params.client_id,
            context=params.context,
        )
        return success(
            interaction_id=interaction.id,
            logged_at=interaction.created_at,
            message=f"Interaction logged: {params.interaction_type}",
        )

    return [
        Tool(
            name="log_interaction",
            description="Record a conversation turn for memory and audit.",
            parameters=LogInteractionParams,
            execute=log_interaction,
        ),
    ]
