"""SQL implementation for email campaigns and their deliveries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import delete, insert, select, update

from studio_crm.adapters.database import Database, row_to, utcnow
from studio_crm.adapters.sql_tables import campaign_deliveries, email_campaigns
from studio_crm.domain.audience import Recipient
from studio_crm.domain.campaigns import EmailCampaign
from studio_crm.services.campaigns import CampaignRepository

_UNSENT = email_campaigns.c.status != "SENT"


@dataclass
class SqlCampaignRepository(CampaignRepository):
    """SQL-backed repository for email campaigns."""

    database: Database

    def create_campaign(self, values: dict[str, object]) -> EmailCampaign:
        """Insert a campaign and return it."""
        now = utcnow()
        campaign_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(email_campaigns).values(
                    id=campaign_id,
                    recipient_count=0,
                    **values,
                    created_at=now,
                    updated_at=now,
                )
            )
            row = connection.execute(
                select(email_campaigns).where(email_campaigns.c.id == campaign_id)
            ).mappings().one()
        return row_to(EmailCampaign, row)

    def get_campaign(self, campaign_id: UUID) -> EmailCampaign | None:
        """Return a campaign by id, if present."""
        with self.database.transaction() as connection:
            row = connection.execute(
                select(email_campaigns).where(email_campaigns.c.id == campaign_id)
            ).mappings().first()
        return row_to(EmailCampaign, row) if row else None

    def list_campaigns(
        self,
        *,
        status: str | None,
        campaign_type: str | None,
        target_audience: str | None,
        limit: int,
    ) -> list[EmailCampaign]:
        """Return campaigns, newest first."""
        statement = (
            select(email_campaigns)
            .order_by(email_campaigns.c.created_at.desc())
            .limit(limit)
        )
        if status:
            statement = statement.where(email_campaigns.c.status == status)
        if campaign_type:
            statement = statement.where(
                email_campaigns.c.campaign_type == campaign_type
            )
        if target_audience:
            statement = statement.where(
                email_campaigns.c.target_audience == target_audience
            )
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [row_to(EmailCampaign, row) for row in rows]

    def update_unsent_campaign(
        self, campaign_id: UUID, values: dict[str, object]
    ) -> EmailCampaign | None:
        """Update a campaign that has not been sent yet."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(email_campaigns)
                .where(email_campaigns.c.id == campaign_id, _UNSENT)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                select(email_campaigns).where(email_campaigns.c.id == campaign_id)
            ).mappings().one()
        return row_to(EmailCampaign, row)

    def delete_unsent_campaign(self, campaign_id: UUID) -> bool:
        """Delete a campaign that has not been sent yet."""
        with self.database.transaction() as connection:
            result = connection.execute(
                delete(email_campaigns).where(
                    email_campaigns.c.id == campaign_id, _UNSENT
                )
            )
        return result.rowcount > 0

    def record_delivery(
        self, campaign_id: UUID, recipients: list[Recipient], sent_at: datetime
    ) -> EmailCampaign | None:
        """Store one delivery row per recipient and mark the campaign sent."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(email_campaigns)
                .where(email_campaigns.c.id == campaign_id, _UNSENT)
                .values(
                    status="SENT",
                    sent_at=sent_at,
                    recipient_count=len(recipients),
                    updated_at=sent_at,
                )
            )
            if result.rowcount == 0:
                return None
            for recipient in recipients:
                connection.execute(
                    insert(campaign_deliveries).values(
                        id=uuid4(),
                        campaign_id=campaign_id,
                        recipient_id=recipient.id,
                        recipient_type=recipient.kind,
                        recipient_email=recipient.email,
                        recipient_name=recipient.name,
                        is_test=False,
                        status="SENT",
                        created_at=sent_at,
                        updated_at=sent_at,
                    )
                )
            row = connection.execute(
                select(email_campaigns).where(email_campaigns.c.id == campaign_id)
            ).mappings().one()
        return row_to(EmailCampaign, row)

    def record_test_delivery(
        self, campaign_id: UUID, email: str, sent_at: datetime
    ) -> None:
        """Store a delivery row for a test send."""
        with self.database.transaction() as connection:
            connection.execute(
                insert(campaign_deliveries).values(
                    id=uuid4(),
                    campaign_id=campaign_id,
                    recipient_id=None,
                    recipient_type="test",
                    recipient_email=email,
                    recipient_name=None,
                    is_test=True,
                    status="SENT",
                    created_at=sent_at,
                    updated_at=sent_at,
                )
            )
