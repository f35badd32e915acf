"""Recipient selection for campaigns and questionnaires."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from studio_crm.domain.audience import Recipient
from studio_crm.errors import NotFoundError, ValidationError


class AudienceRepository(Protocol):
    """Read-only queries that produce recipients."""

    def all_clients(self) -> list[Recipient]:
        """Return every active client."""

    def open_leads(self) -> list[Recipient]:
        """Return leads that are neither converted nor lost."""

    def clients_with_revenue_above(self, threshold: float) -> list[Recipient]:
        """Return clients whose paid invoices exceed the threshold."""

    def clients_created_since(self, since: datetime) -> list[Recipient]:
        """Return clients created at or after a point in time."""

    def clients_created_before(self, before: datetime) -> list[Recipient]:
        """Return clients created before a point in time."""

    def clients_by_ids(self, client_ids: list[UUID]) -> list[Recipient]:
        """Return the clients with the given ids."""


@dataclass
class AudienceService:
    """Resolves named audiences into concrete recipients."""

    repository: AudienceRepository
    high_value_threshold: float = 500.0
    recent_days: int = 30

    def resolve(
        self, audience: str, custom_ids: list[UUID] | None = None
    ) -> list[Recipient]:
        """Return recipients for an audience name."""
        recent_cutoff = datetime.now(tz=UTC) - timedelta(days=self.recent_days)
        if audience == "all_clients":
            return self.repository.all_clients()
        if audience == "leads":
            return self.repository.open_leads()
        if audience == "high_value_clients":
            return self.repository.clients_with_revenue_above(self.high_value_threshold)
        if audience in {"recent_clients", "new_clients"}:
            return self.repository.clients_created_since(recent_cutoff)
        if audience == "existing_clients":
            return self.repository.clients_created_before(recent_cutoff)
        if audience == "custom":
            if not custom_ids:
                raise ValidationError(
                    "custom_segment", "Required when the audience is custom"
                )
            return unique_by_email(self.clients(custom_ids))
        raise ValidationError("target_audience", f"Unknown audience: {audience}")

    def clients(self, client_ids: list[UUID]) -> list[Recipient]:
        """Return one recipient per client id; every id must exist."""
        recipients = self.repository.clients_by_ids(client_ids)
        found = {recipient.id for recipient in recipients}
        missing = [str(client_id) for client_id in client_ids if client_id not in found]
        if missing:
            raise NotFoundError(f"Client not found: {', '.join(missing)}")
        return recipients


def unique_by_email(recipients: Iterable[Recipient]) -> list[Recipient]:
    """Keep the first recipient for each address so nobody is mailed twice."""
    seen: set[str] = set()
    unique: list[Recipient] = []
    for recipient in recipients:
        key = recipient.email.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(recipient)
    return unique
