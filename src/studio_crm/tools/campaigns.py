"""Email campaign tools."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import EmailStr, Field

from studio_crm.services.campaigns import CampaignService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success

CampaignType = Literal["newsletter", "promotional", "announcement", "follow_up"]
CampaignAudience = Literal[
    "all_clients", "leads", "high_value_clients", "recent_clients", "custom"
]
CampaignStatus = Literal["DRAFT", "SCHEDULED", "SENT"]


class CreateCampaignParams(ToolParameters):
    name: str = Field(min_length=1, max_length=255)
    subject: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=50)
    sender_name: str | None = Field(default=None, min_length=1, max_length=255)
    sender_email: EmailStr | None = None
    campaign_type: CampaignType = "newsletter"
    target_audience: CampaignAudience = "all_clients"
    custom_segment: list[UUID] | None = Field(
        default=None, description="Client ids, required for the custom audience"
    )
    scheduled_for: datetime | None = None
    status: Literal["DRAFT", "SCHEDULED"] = "DRAFT"


class ReadCampaignsParams(ToolParameters):
    status: CampaignStatus | None = None
    campaign_type: CampaignType | None = None
    target_audience: CampaignAudience | None = None
    limit: int = Field(default=10, ge=1, le=50)


class UpdateCampaignParams(ToolParameters):
    campaign_id: UUID
    name: str | None = Field(default=None, min_length=1, max_length=255)
    subject: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=50)
    sender_name: str | None = Field(default=None, min_length=1, max_length=255)
    sender_email: EmailStr | None = None
    campaign_type: CampaignType | None = None
    target_audience: CampaignAudience | None = None
    custom_segment: list[UUID] | None = None
    scheduled_for: datetime | None = None
    status: Literal["DRAFT", "SCHEDULED"] | None = None


class SendCampaignParams(ToolParameters):
    campaign_id: UUID
    action: Literal["send_now", "schedule", "test_send"] = "send_now"
    scheduled_for: datetime | None = None
    test_email: EmailStr | None = None


class DeleteCampaignParams(ToolParameters):
    campaign_id: UUID
    reason: str = Field(min_length=1)


def campaign_tools(
    campaigns: CampaignService, *, sender_name: str, sender_email: str
) -> list[Tool]:
    """Build tools for email campaigns, defaulting the sender to the studio."""

    async def create_email_campaign(params: CreateCampaignParams) -> ToolResult:
        values = params.model_dump(exclude_none=True)
        values.setdefault("sender_name", sender_name)
        values.setdefault("sender_email", sender_email)
        campaign, audience_size = campaigns.create_campaign(values)
        return success(
            campaign_id=campaign.id,
            estimated_audience=audience_size,
            campaign=campaign,
            message=f"Campaign '{campaign.name}' saved as {campaign.status}",
        )

    async def read_email_campaigns(params: ReadCampaignsParams) -> ToolResult:
        found = campaigns.list_campaigns(
            status=params.status,
            campaign_type=params.campaign_type,
            target_audience=params.target_audience,
            limit=params.limit,
        )
        return success(count=len(found), campaigns=found)

    async def update_email_campaign(params: UpdateCampaignParams) -> ToolResult:
        campaign = campaigns.update_campaign(
            params.campaign_id, params.changes("campaign_id")
        )
        return success(campaign=campaign, message=f"Campaign '{campaign.name}' updated")

    async def send_email_campaign(params: SendCampaignParams) -> ToolResult:
        dispatch = await campaigns.send(
            params.campaign_id,
            action=params.action,
            scheduled_for=params.scheduled_for,
            test_email=params.test_email,
        )
        return success(
            action=dispatch.action,
            recipient_count=dispatch.recipient_count,
            message_ids=dispatch.message_ids,
            campaign=dispatch.campaign,
        )

    async def delete_email_campaign(params: DeleteCampaignParams) -> ToolResult:
        campaigns.delete_campaign(params.campaign_id)
        return success(
            campaign_id=params.campaign_id,
            reason=params.reason,
            message="Campaign deleted",
        )

    return [
        Tool(
            name="create_email_campaign",
            description="Draft or schedule an email campaign for an audience.",
            parameters=CreateCampaignParams,
            execute=create_email_campaign,
        ),
        Tool(
            name="read_email_campaigns",
            description="List email campaigns by status, type or audience.",
            parameters=ReadCampaignsParams,
            execute=read_email_campaigns,
        ),
        Tool(
            name="update_email_campaign",
            description="Edit a campaign that has not been sent yet.",
            parameters=UpdateCampaignParams,
            execute=update_email_campaign,
        ),
        Tool(
            name="send_email_campaign",
            description="Send a campaign now, schedule it or send a test copy.",
            parameters=SendCampaignParams,
            execute=send_email_campaign,
        ),
        Tool(
            name="delete_email_campaign",
            description="Delete a campaign that has not been sent.",
            parameters=DeleteCampaignParams,
            execute=delete_email_campaign,
        ),
    ]
