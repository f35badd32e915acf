"""Services for drafting and sending one-off client emails."""

from dataclasses import dataclass
from typing import Protocol

from studio_crm.domain.messaging import EmailDraft, OutgoingEmail
from studio_crm.errors import UpstreamError
from studio_crm.services.mail import EmailSender

_TONES = {
    "professional": "clear, courteous and businesslike",
    "friendly": "warm and personal while staying professional",
    "casual": "relaxed and conversational",
    "formal": "formal and polite, using complete sentences",
}

_PURPOSES = {
    "follow_up": "Follow up on a recent conversation or enquiry.",
    "booking_confirmation": "Confirm a photography session booking.",
    "invoice_reminder": "Politely remind the client about an outstanding invoice.",
    "thank_you": "Thank the client for choosing the studio.",
    "custom": "Write the email described in the context.",
}


class AssistantClient(Protocol):
    """Text generation backend."""

    async def complete(self, *, model: str, instructions: str, prompt: str) -> str:
        """Return generated text for a prompt."""


@dataclass
class MessagingService:
    """Drafts emails with the assistant and hands messages to the sender."""

    assistant: AssistantClient
    sender: EmailSender
    model: str
    studio_name: str
    studio_email: str
    studio_phone: str | None = None

    async def draft_email(  # noqa: PLR0913
        self,
        *,
        to: str,
        subject: str,
        context: str | None,
        tone: str,
        email_type: str,
        include_studio_info: bool,
    ) -> EmailDraft:
        """Generate an email body for review before sending."""
        instructions = (
            f"You write emails on behalf of {self.studio_name}, a photography "
            f"studio. Use a tone that is {_TONES[tone]}. Reply with the email "
            "body only, without a subject line."
        )
        prompt_lines = [
            _PURPOSES[email_type],
            f"Recipient: {to}",
            f"Subject: {subject}",
        ]
        if context:
            prompt_lines.append(f"Context: {context}")
        if include_studio_info:
            prompt_lines.append(f"Sign off with: {self._signature()}")
        body = await self.assistant.complete(
            model=self.model,
            instructions=instructions,
            prompt="\n".join(prompt_lines),
        )
        if not body.strip():
            raise UpstreamError("The assistant returned an empty draft")
        return EmailDraft(
            to=to,
            subject=subject,
            body=body.strip(),
            tone=tone,
            email_type=email_type,
        )

    async def send_email(
        self, *, to: str, subject: str, content: str, cc: list[str] | None = None
    ) -> str:
        """Send a single email from the studio address."""
        return await self.sender.send(
            OutgoingEmail(
                to=to,
                subject=subject,
                body=content,
                sender_name=self.studio_name,
                sender_email=self.studio_email,
                cc=list(cc or []),
            )
        )

    def _signature(self) -> str:
        parts = [self.studio_name, self.studio_email]
        if self.studio_phone:
            parts.append(self.studio_phone)
        return " | ".join(parts)
