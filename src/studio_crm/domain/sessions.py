"""Domain models for photography sessions and calendar availability."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class PhotographySession:
    """A booked shoot. Times are studio wall-clock time."""

    id: UUID
    client_id: UUID
    title: str
    session_type: str
    status: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    location: str
    notes: str | None
    price: float | None
    deposit_required: float | None
    equipment_needed: list[str]
    cancellation_reason: str | None
    refund_amount: float | None
    created_at: datetime
    updated_at: datetime
    client_name: str | None = None


@dataclass(frozen=True)
class TimeSlot:
    """A bookable window on a single day."""

    start_time: str
    end_time: str
    preferred: bool = False


@dataclass(frozen=True)
class Availability:
    """Free slots for a day given the existing bookings."""

    date: date
    duration_minutes: int
    working_hours: str
    available_slots: list[TimeSlot] = field(default_factory=list)
    recommended_slots: list[TimeSlot] = field(default_factory=list)
    booked_sessions: int = 0
