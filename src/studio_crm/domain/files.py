"""Domain models for the digital file archive."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class DigitalFile:
    """Metadata for a stored file."""

    id: UUID
    folder_name: str
    file_name: str
    file_type: str
    file_size: int
    client_id: UUID | None
    session_id: UUID | None
    description: str | None
    tags: list[str]
    is_public: bool
    created_at: datetime
    updated_at: datetime
