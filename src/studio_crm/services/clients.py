"""Services for managing studio clients."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from studio_crm.domain.clients import Client, ClientSummary, TopClient
from studio_crm.errors import NotFoundError, ValidationError


class ClientRepository(Protocol):
    """Persistence interface for clients."""

    def list_clients(
        self, *, search: str | None, status: str | None, limit: int
    ) -> list[Client]:
        """Return clients, newest first."""

    def create_client(self, values: dict[str, object]) -> Client:
        """Insert a client and return it."""

    def update_client(
        self, client_id: UUID, values: dict[str, object]
    ) -> Client | None:
        """Update a client, returning None when no row matched."""

    def get_client(self, client_id: UUID) -> Client | None:
        """Return a client by id, if present."""

    def find_by_email(self, email: str) -> Client | None:
        """Return the client with this email, if any."""

    def summarize_client(self, client_id: UUID) -> ClientSummary:
        """Aggregate sessions and invoices for a client."""

    def list_top_clients(
        self,
        *,
        order_by: str,
        min_revenue: float | None,
        year: int | None,
        limit: int,
    ) -> list[TopClient]:
        """Rank clients by revenue or activity."""


@dataclass
class ClientService:
    """Application service for client records."""

    repository: ClientRepository

    def list_clients(
        self, *, search: str | None = None, status: str | None = None, limit: int = 25
    ) -> list[Client]:
        """Search clients by name, email or phone."""
        return self.repository.list_clients(search=search, status=status, limit=limit)

    def create_client(self, values: dict[str, object]) -> Client:
        """Create a client with a normalized email address."""
        return self.repository.create_client(_normalize(values))

    def update_client(self, client_id: UUID, values: dict[str, object]) -> Client:
        """Update an existing client."""
        client = self.repository.update_client(client_id, _normalize(values))
        if client is None:
            raise NotFoundError(f"Client not found: {client_id}")
        return client

    def lookup(
        self, *, client_id: UUID | None = None, email: str | None = None
    ) -> tuple[Client, ClientSummary]:
        """Return a client and their booking and billing summary."""
        if client_id is not None:
            client = self.repository.get_client(client_id)
        elif email:
            client = self.repository.find_by_email(email.lower())
        else:
            raise ValidationError("client_id", "Provide either client_id or email")
        if client is None:
            raise NotFoundError(f"Client not found: {client_id or email}")
        return client, self.repository.summarize_client(client.id)

    def top_clients(
        self,
        *,
        order_by: str = "lifetime_value",
        min_revenue: float | None = None,
        year: int | None = None,
        limit: int = 10,
    ) -> list[TopClient]:
        """Rank clients for the dashboard."""
        return self.repository.list_top_clients(
            order_by=order_by, min_revenue=min_revenue, year=year, limit=limit
        )


def _normalize(values: dict[str, object]) -> dict[str, object]:
    email = values.get("email")
    if isinstance(email, str):
        return {**values, "email": email.lower()}
    return values
