"""Domain models for sales leads."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Lead:
    """An enquiry that has not become a client yet."""

    id: UUID
    name: str
    email: str
    phone: str | None
    company: str | None
    message: str | None
    source: str | None
    status: str
    priority: str
    value: float | None
    converted_client_id: UUID | None
    converted_at: datetime | None
    created_at: datetime
    updated_at: datetime
