"""SQL repository for the interaction log."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import insert, select

from studio_crm.adapters.database import Database, row_to, utcnow
from studio_crm.adapters.sql_tables import interactions
from studio_crm.domain.interactions import Interaction
from studio_crm.services.interactions import InteractionRepository


@dataclass
class SqlInteractionRepository(InteractionRepository):
    """SQL-backed interaction repository."""

    database: Database

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
        interaction_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(interactions).values(
                    id=interaction_id,
                    interaction_type=interaction_type,
                    user_message=user_message,
                    response_summary=response_summary,
                    client_id=client_id,
                    context=context,
                    created_at=utcnow(),
                )
            )
            row = connection.execute(
                select(interactions).where(interactions.c.id == interaction_id)
            ).mappings().one()
        return row_to(Interaction, row)
