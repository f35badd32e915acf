"""Services for booking photography sessions and checking availability."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID

from studio_crm.domain.sessions import Availability, PhotographySession, TimeSlot
from studio_crm.errors import NotFoundError, ValidationError

BLOCKING_STATUSES = ("CONFIRMED", "PENDING")
_RECOMMENDATION_COUNT = 3


class SessionRepository(Protocol):
    """Persistence interface for photography sessions."""

    def create_session(self, values: dict[str, object]) -> PhotographySession:
        """Insert a session and return it."""

    def update_session(
        self, session_id: UUID, values: dict[str, object]
    ) -> PhotographySession | None:
        """Update a session, returning None when no row matched."""

    def get_session(self, session_id: UUID) -> PhotographySession | None:
        """Return a session by id, if present."""

    def list_sessions(  # noqa: PLR0913
        self,
        *,
        start: datetime | None,
        end: datetime | None,
        client_id: UUID | None,
        session_type: str | None,
        status: str | None,
        limit: int,
    ) -> list[PhotographySession]:
        """Return sessions ordered by start time."""

    def client_exists(self, client_id: UUID) -> bool:
        """Return whether the client row exists."""


@dataclass
class CalendarService:
    """Application service for the studio calendar."""

    repository: SessionRepository
    opening_hour: int = 9
    closing_hour: int = 18

    def book_session(  # noqa: PLR0913
        self,
        *,
        client_id: UUID,
        session_type: str,
        session_date: date,
        session_time: time,
        duration_minutes: int,
        location: str,
        details: dict[str, object],
    ) -> PhotographySession:
        """Create a confirmed session for an existing client."""
        if not self.repository.client_exists(client_id):
            raise NotFoundError(f"Client not found: {client_id}")
        start = datetime.combine(session_date, session_time)
        return self.repository.create_session(
            {
                "client_id": client_id,
                "title": f"{session_type.title()} Session",
                "session_type": session_type,
                "status": "CONFIRMED",
                "start_time": start,
                "end_time": start + timedelta(minutes=duration_minutes),
                "duration_minutes": duration_minutes,
                "location": location,
                **details,
            }
        )

    def list_sessions(  # noqa: PLR0913
        self,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
        client_id: UUID | None = None,
        session_type: str | None = None,
        status: str | None = None,
        limit: int = 20,
    ) -> list[PhotographySession]:
        """Return sessions within an optional date range."""
        if start_date and end_date and end_date < start_date:
            raise ValidationError("end_date", "Must not be before start_date")
        return self.repository.list_sessions(
            start=datetime.combine(start_date, time.min) if start_date else None,
            end=datetime.combine(end_date + timedelta(days=1), time.min)
            if end_date
            else None,
            client_id=client_id,
            session_type=session_type,
            status=status,
            limit=limit,
        )

    def update_session(
        self, session_id: UUID, changes: dict[str, object]
    ) -> PhotographySession:
        """Update a session, recomputing its time range when rescheduled."""
        values = dict(changes)
        new_date = values.pop("session_date", None)
        new_time = values.pop("session_time", None)
        if new_date is not None or new_time is not None or "duration_minutes" in values:
            current = self.repository.get_session(session_id)
            if current is None:
                raise NotFoundError(f"Photography session not found: {session_id}")
            start = datetime.combine(
                new_date or current.start_time.date(),
                new_time or current.start_time.time(),
            )
            duration = int(values.get("duration_minutes", current.duration_minutes))
            values["start_time"] = start
            values["end_time"] = start + timedelta(minutes=duration)
        session = self.repository.update_session(session_id, values)
        if session is None:
            raise NotFoundError(f"Photography session not found: {session_id}")
        return session

    def cancel_session(
        self,
        session_id: UUID,
        *,
        reason: str,
        refund_amount: float | None = None,
    ) -> PhotographySession:
        """Mark a session cancelled and record the reason."""
        values: dict[str, object] = {
            "status": "CANCELLED",
            "cancellation_reason": reason,
        }
        if refund_amount is not None:
            values["refund_amount"] = refund_amount
        session = self.repository.update_session(session_id, values)
        if session is None:
            raise NotFoundError(f"Photography session not found: {session_id}")
        return session

    def check_availability(
        self,
        day: date,
        duration_minutes: int,
        preferred_times: list[time] | None = None,
    ) -> Availability:
        """Return hourly slots on a day that fit around existing bookings."""
        day_start = datetime.combine(day, time.min)
        booked = [
            session
            for session in self.repository.list_sessions(
                start=day_start,
                end=day_start + timedelta(days=1),
                client_id=None,
                session_type=None,
                status=None,
                limit=500,
            )
            if session.status in BLOCKING_STATUSES
        ]
        preferred_hours = {
            (value.hour, value.minute) for value in preferred_times or []
        }
        closing = day_start + timedelta(hours=self.closing_hour)
        duration = timedelta(minutes=duration_minutes)
        slots: list[TimeSlot] = []
        for hour in range(self.opening_hour, self.closing_hour):
            start = day_start + timedelta(hours=hour)
            end = start + duration
            if end > closing:
                break
            if any(
                start < session.end_time and end > session.start_time
                for session in booked
            ):
                continue
            slots.append(
                TimeSlot(
                    start_time=start.strftime("%H:%M"),
                    end_time=end.strftime("%H:%M"),
                    preferred=(start.hour, start.minute) in preferred_hours,
                )
            )
        recommended = [slot for slot in slots if slot.preferred]
        if not recommended:
            recommended = slots[:_RECOMMENDATION_COUNT]
        return Availability(
            date=day,
            duration_minutes=duration_minutes,
            working_hours=f"{self.opening_hour:02d}:00-{self.closing_hour:02d}:00",
            available_slots=slots,
            recommended_slots=recommended,
            booked_sessions=len(booked),
        )
