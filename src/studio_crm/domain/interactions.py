"""Domain models for the assistant's interaction log."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class Interaction:
    """One logged exchange between the studio and the assistant."""

    id: UUID
    interaction_type: str
    user_message: str
    response_summary: str | None
    client_id: UUID | None
    context: dict[str, Any] | None
    created_at: datetime
