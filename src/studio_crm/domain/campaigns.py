"""Domain models for email campaigns."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class EmailCampaign:
    """A marketing mail-out and its delivery state."""

    id: UUID
    name: str
    subject: str
    content: str
    sender_name: str
    sender_email: str
    campaign_type: str
    target_audience: str
    custom_segment: list[str] | None
    status: str
    scheduled_for: datetime | None
    sent_at: datetime | None
    recipient_count: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CampaignDispatch:
    """Outcome of a send, schedule or test action."""

    campaign: EmailCampaign
    action: str
    recipient_count: int
    message_ids: list[str]
