"""Outgoing mail interface."""

from typing import Protocol

from studio_crm.domain.messaging import OutgoingEmail


class EmailSender(Protocol):
    """Delivers a message and returns a provider message id."""

    async def send(self, message: OutgoingEmail) -> str:
        """Send a message."""
