"""Interaction logging service."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol
from uuid import UUID

from studio_crm.domain.interactions import Interaction

logger = logging.getLogger(__name__)


class InteractionRepository(Protocol):
    """Persistence interface for logged interactions."""

    def create_interaction(  # noqa: PLR0913
        self,
        *,
        interaction_type: str,
        user_message: str,
        response_summary: str | None,
        client_id: UUID | None,
        context: dict[str, Any] | None,
    ) -> Interaction:
        """Insert an interaction row and return it."""


@dataclass
class InteractionService:
    """Service for recording conversation history."""

    repository: InteractionRepository

    def log_interaction(  # noqa: PLR0913
        self,
        *,
        interaction_type: str,
        user_message: str,
        response_summary: str | None = None,
        client_id: UUID | None = None,
        context: dict[str, Any] | None = None,
    ) -> Interaction:
        """Persist an interaction for memory and audit."""
        interaction = self.repository.create_interaction(
            interaction_type=interaction_type,
            user_message=user_message,
            response_summary=response_summary,
            client_id=client_id,
            context=context,
        )
        logger.info(
            "Interaction logged id=%s type=%s", interaction.id, interaction_type
        )
        return interaction
