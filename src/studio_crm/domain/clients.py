"""Domain models for studio clients."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from studio_crm.domain.invoices import Invoice
from studio_crm.domain.sessions import PhotographySession


@dataclass(frozen=True)
class Client:
    """A person or company the studio works for."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None
    address: str | None
    city: str | None
    country: str | None
    company: str | None
    notes: str | None
    status: str
    created_at: datetime
    updated_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ClientSummary:
    """Booking and billing overview for a single client."""

    session_count: int
    invoice_count: int
    total_paid: float
    pending_amount: float
    recent_sessions: list[PhotographySession] = field(default_factory=list)
    recent_invoices: list[Invoice] = field(default_factory=list)


@dataclass(frozen=True)
class TopClient:
    """Client ranked by revenue or activity."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    total_revenue: float
    invoice_count: int
    session_count: int
    last_session_at: datetime | None
