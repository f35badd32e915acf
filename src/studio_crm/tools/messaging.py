"""Email drafting and sending tools."""

from typing import Literal

from pydantic import EmailStr, Field

from studio_crm.services.messaging import MessagingService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success


class DraftEmailParams(ToolParameters):
    to: EmailStr
    subject: str = Field(min_length=1, max_length=255)
    context: str | None = Field(
        default=None, description="What the email should say or respond to"
    )
    tone: Literal["professional", "friendly", "casual", "formal"] = "professional"
    email_type: Literal[
        "follow_up", "booking_confirmation", "invoice_reminder", "thank_you", "custom"
    ] = "custom"
    include_studio_info: bool = True


class SendEmailParams(ToolParameters):
    to: EmailStr
    subject: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    cc: list[EmailStr] = Field(default_factory=list)


def messaging_tools(messaging: MessagingService) -> list[Tool]:
    """Build tools for one-off client emails."""

    async def draft_email(params: DraftEmailParams) -> ToolResult:
        draft = await messaging.draft_email(
            to=params.to,
            subject=params.subject,
            context=params.context,
            tone=params.tone,
            email_type=params.email_type,
            include_studio_info=params.include_studio_info,
        )
        return success(draft=draft)

    async def send_email(params: SendEmailParams) -> ToolResult:
        message_id = await messaging.send_email(
            to=params.to, subject=params.subject, content=params.content, cc=params.cc
        )
        return success(message_id=message_id, message=f"Email sent to {params.to}")

    return [
        Tool(
            name="draft_email",
            description="Draft an email to a client for review before sending.",
            parameters=DraftEmailParams,
            execute=draft_email,
        ),
        Tool(
            name="send_email",
            description="Send an email from the studio address.",
            parameters=SendEmailParams,
            execute=send_email,
        ),
    ]
