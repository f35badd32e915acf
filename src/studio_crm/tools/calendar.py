"""Photography session and availability tools."""

from datetime import date, time
from typing import Literal
from uuid import UUID

from pydantic import Field

from studio_crm.services.calendar import CalendarService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success

SessionType = Literal[
    "FAMILY",
    "NEWBORN",
    "MATERNITY",
    "BUSINESS",
    "WEDDING",
    "EVENT",
    "PORTRAIT",
    "HEADSHOT",
    "COUPLE",
    "ENGAGEMENT",
]
SessionStatus = Literal["CONFIRMED", "PENDING", "CANCELLED", "COMPLETED"]


class CreateSessionParams(ToolParameters):
    client_id: UUID
    session_type: SessionType
    session_date: date = Field(description="YYYY-MM-DD")
    session_time: time = Field(description="HH:MM, studio local time")
    duration_minutes: int = Field(default=120, ge=30, le=480)
    location: str = Field(min_length=1, max_length=255)
    notes: str | None = None
    price: float | None = Field(default=None, ge=0)
    deposit_required: float | None = Field(default=None, ge=0)
    equipment_needed: list[str] = Field(default_factory=list)


class ReadSessionsParams(ToolParameters):
    start_date: date | None = None
    end_date: date | None = None
    client_id: UUID | None = None
    session_type: SessionType | None = None
    status: SessionStatus | None = None
    limit: int = Field(default=20, ge=1, le=100)


class UpdateSessionParams(ToolParameters):
    session_id: UUID
    session_date: date | None = None
    session_time: time | None = None
    duration_minutes: int | None = Field(default=None, ge=30, le=480)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    notes: str | None = None
    price: float | None = Field(default=None, ge=0)
    status: SessionStatus | None = None
    cancellation_reason: str | None = None


class CancelSessionParams(ToolParameters):
    session_id: UUID
    cancellation_reason: str = Field(min_length=1)
    refund_amount: float | None = Field(default=None, ge=0)
    notify_client: bool = True


class AvailabilityParams(ToolParameters):
    date: date
    duration_minutes: int = Field(default=120, ge=30, le=480)
    preferred_times: list[time] = Field(default_factory=list)


def calendar_tools(calendar: CalendarService) -> list[Tool]:
    """Build tools for the studio calendar."""

    async def create_photography_session(params: CreateSessionParams) -> ToolResult:
        session = calendar.book_session(
            client_id=params.client_id,
            session_type=params.session_type,
            session_date=params.session_date,
            session_time=params.session_time,
            duration_minutes=params.duration_minutes,
            location=params.location,
            details=params.model_dump(
                include={"notes", "price", "deposit_required", "equipment_needed"}
            ),
        )
        return success(
            session_id=session.id,
            session=session,
            message=f"{session.title} booked for {session.start_time:%Y-%m-%d %H:%M}",
        )

    async def read_calendar_sessions(params: ReadSessionsParams) -> ToolResult:
        sessions = calendar.list_sessions(
            start_date=params.start_date,
            end_date=params.end_date,
            client_id=params.client_id,
            session_type=params.session_type,
            status=params.status,
            limit=params.limit,
        )
        return success(count=len(sessions), sessions=sessions)

    async def update_photography_session(params: UpdateSessionParams) -> ToolResult:
        session = calendar.update_session(
            params.session_id, params.changes("session_id")
        )
        return success(session=session, message="Photography session updated")

    async def cancel_photography_session(params: CancelSessionParams) -> ToolResult:
        session = calendar.cancel_session(
            params.session_id,
            reason=params.cancellation_reason,
            refund_amount=params.refund_amount,
        )
        return success(
            session=session,
            client_notification_requested=params.notify_client,
            message="Photography session cancelled",
        )

    async def check_calendar_availability(params: AvailabilityParams) -> ToolResult:
        availability = calendar.check_availability(
            params.date, params.duration_minutes, params.preferred_times
        )
        return success(
            available=bool(availability.available_slots),
            availability=availability,
        )

    return [
        Tool(
            name="create_photography_session",
            description="Book a photography session for an existing client.",
            parameters=CreateSessionParams,
            execute=create_photography_session,
        ),
        Tool(
            name="read_calendar_sessions",
            description="List booked sessions by date range, client, type or status.",
            parameters=ReadSessionsParams,
            execute=read_calendar_sessions,
        ),
        Tool(
            name="update_photography_session",
            description="Reschedule or edit a photography session.",
            parameters=UpdateSessionParams,
            execute=update_photography_session,
        ),
        Tool(
            name="cancel_photography_session",
            description="Cancel a photography session with a reason.",
            parameters=CancelSessionParams,
            execute=cancel_photography_session,
        ),
        Tool(
            name="check_calendar_availability",
            description="List free hourly slots on a day within working hours.",
            parameters=AvailabilityParams,
            execute=check_calendar_availability,
        ),
    ]
