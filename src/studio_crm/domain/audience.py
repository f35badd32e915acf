"""Domain models for message recipients."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Recipient:
    """A client or lead that can receive studio mail."""

    id: UUID | None
    kind: str
    email: str
    name: str | None
