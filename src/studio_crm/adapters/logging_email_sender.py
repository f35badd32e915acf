"""Email sender that records messages in the log instead of delivering them."""

import logging
from dataclasses import dataclass, field
from uuid import uuid4

from studio_crm.domain.messaging import OutgoingEmail
from studio_crm.services.mail import EmailSender

logger = logging.getLogger(__name__)


@dataclass
class LoggingEmailSender(EmailSender):
    """Stub sender used until a mail provider is configured."""

    sent: list[OutgoingEmail] = field(default_factory=list)

    async def send(self, message: OutgoingEmail) -> str:
        """Log the message and return a generated message id."""
        message_id = f"stub-{uuid4().hex}"
        self.sent.append(message)
        logger.info(
            "Email queued id=%s to=%s subject=%r",
            message_id,
            message.to,
            message.subject,
        )
        return message_id
