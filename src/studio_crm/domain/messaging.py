"""Domain models for outgoing mail."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OutgoingEmail:
    """A message handed to the email sender."""

    to: str
    subject: str
    body: str
    sender_name: str
    sender_email: str
    cc: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EmailDraft:
    """Generated email text awaiting review."""

    to: str
    subject: str
    body: str
    tone: str
    email_type: str
