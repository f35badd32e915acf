"""Services for composing and sending email campaigns."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import NoReturn, Protocol
from uuid import UUID

from studio_crm.domain.audience import Recipient
from studio_crm.domain.campaigns import CampaignDispatch, EmailCampaign
from studio_crm.domain.messaging import OutgoingEmail
from studio_crm.errors import NotFoundError, ValidationError
from studio_crm.services.audience import AudienceService
from studio_crm.services.mail import EmailSender

logger = logging.getLogger(__name__)


class CampaignRepository(Protocol):
    """Persistence interface for email campaigns."""

    def create_campaign(self, values: dict[str, object]) -> EmailCampaign:
        """Insert a campaign and return it."""

    def get_campaign(self, campaign_id: UUID) -> EmailCampaign | None:
        """Return a campaign by id, if present."""

    def list_campaigns(
        self,
        *,
        status: str | None,
        campaign_type: str | None,
        target_audience: str | None,
        limit: int,
    ) -> list[EmailCampaign]:
        """Return campaigns, newest first."""

    def update_unsent_campaign(
        self, campaign_id: UUID, values: dict[str, object]
    ) -> EmailCampaign | None:
        """Update a campaign that has not been sent yet."""

    def delete_unsent_campaign(self, campaign_id: UUID) -> bool:
        """Delete a campaign that has not been sent yet."""

    def record_delivery(
        self, campaign_id: UUID, recipients: list[Recipient], sent_at: datetime
    ) -> EmailCampaign | None:
        """Store one delivery row per recipient and mark the campaign sent."""

    def record_test_delivery(
        self, campaign_id: UUID, email: str, sent_at: datetime
    ) -> None:
        """Store a delivery row for a test send."""


@dataclass
class CampaignService:
    """Application service for email campaigns."""

    repository: CampaignRepository
    audience: AudienceService
    sender: EmailSender

    def create_campaign(self, values: dict[str, object]) -> tuple[EmailCampaign, int]:
        """Create a campaign and report how many recipients it would reach."""
        if values.get("status") == "SCHEDULED" and values.get("scheduled_for") is None:
            raise ValidationError("scheduled_for", "Required when status is SCHEDULED")
        if values.get("status") == "SENT":
            raise ValidationError("status", "Use send_email_campaign to send")
        recipients = self._recipients(
            str(values["target_audience"]), values.get("custom_segment")
        )
        campaign = self.repository.create_campaign(_stored(values))
        return campaign, len(recipients)

    def list_campaigns(
        self,
        *,
        status: str | None = None,
        campaign_type: str | None = None,
        target_audience: str | None = None,
        limit: int = 10,
    ) -> list[EmailCampaign]:
        """Return campaigns matching the filters."""
        return self.repository.list_campaigns(
            status=status,
            campaign_type=campaign_type,
            target_audience=target_audience,
            limit=limit,
        )

    def update_campaign(
        self, campaign_id: UUID, values: dict[str, object]
    ) -> EmailCampaign:
        """Edit a campaign that has not been sent."""
        if values.get("status") == "SENT":
            raise ValidationError("status", "Use send_email_campaign to send")
        campaign = self.repository.update_unsent_campaign(campaign_id, _stored(values))
        if campaign is None:
            self._raise_missing_or_sent(campaign_id, "modified")
        return campaign

    def delete_campaign(self, campaign_id: UUID) -> None:
        """Delete a campaign that has not been sent."""
        if not self.repository.delete_unsent_campaign(campaign_id):
            self._raise_missing_or_sent(campaign_id, "deleted")

    async def send(
        self,
        campaign_id: UUID,
        *,
        action: str,
        scheduled_for: datetime | None = None,
        test_email: str | None = None,
    ) -> CampaignDispatch:
        """Send, schedule or test-send a campaign."""
        campaign = self.repository.get_campaign(campaign_id)
        if campaign is None:
            raise NotFoundError(f"Email campaign not found: {campaign_id}")
        if campaign.status == "SENT":
            raise ValidationError("campaign_id", "Campaign has already been sent")

        if action == "test_send":
            if not test_email:
                raise ValidationError("test_email", "Required for a test send")
            message_id = await self.sender.send(
                self._message(campaign, test_email, subject_prefix="[TEST] ")
            )
            self.repository.record_test_delivery(
                campaign_id, test_email, datetime.now(tz=UTC)
            )
            return CampaignDispatch(
                campaign=campaign,
                action=action,
                recipient_count=1,
                message_ids=[message_id],
            )

        if action == "schedule":
            if scheduled_for is None:
                raise ValidationError("scheduled_for", "Required to schedule a send")
            scheduled = self.update_campaign(
                campaign_id, {"status": "SCHEDULED", "scheduled_for": scheduled_for}
            )
            return CampaignDispatch(
                campaign=scheduled, action=action, recipient_count=0, message_ids=[]
            )

        recipients = self._recipients(campaign.target_audience, campaign.custom_segment)
        if not recipients:
            raise ValidationError("target_audience", "No recipients match the audience")
        sent = self.repository.record_delivery(
            campaign_id, recipients, datetime.now(tz=UTC)
        )
        if sent is None:
            self._raise_missing_or_sent(campaign_id, "sent again")
        message_ids = [
            await self.sender.send(self._message(sent, recipient.email))
            for recipient in recipients
        ]
        logger.info("Campaign %s sent to %d recipients", campaign_id, len(recipients))
        return CampaignDispatch(
            campaign=sent,
            action=action,
            recipient_count=len(recipients),
            message_ids=message_ids,
        )

    def _recipients(self, audience: str, custom_segment: object) -> list[Recipient]:
        segment = custom_segment or []
        custom_ids = [UUID(str(item)) for item in segment]  # type: ignore[attr-defined]
        return self.audience.resolve(audience, custom_ids)

    def _raise_missing_or_sent(self, campaign_id: UUID, verb: str) -> NoReturn:
        if self.repository.get_campaign(campaign_id) is None:
            raise NotFoundError(f"Email campaign not found: {campaign_id}")
        raise ValidationError("campaign_id", f"Sent campaigns cannot be {verb}")

    @staticmethod
    def _message(
        campaign: EmailCampaign, to: str, subject_prefix: str = ""
    ) -> OutgoingEmail:
        return OutgoingEmail(
            to=to,
            subject=f"{subject_prefix}{campaign.subject}",
            body=campaign.content,
            sender_name=campaign.sender_name,
            sender_email=campaign.sender_email,
        )


def _stored(values: dict[str, object]) -> dict[str, object]:
    segment = values.get("custom_segment")
    if segment is None:
        return values
    stored = [str(value) for value in segment]  # type: ignore[attr-defined]
    return {**values, "custom_segment": stored}
