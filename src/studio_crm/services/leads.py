"""Services for managing leads and converting them into clients."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from studio_crm.domain.clients import Client
from studio_crm.domain.leads import Lead
from studio_crm.errors import NotFoundError, ValidationError


class LeadRepository(Protocol):
    """Persistence interface for leads."""

    def list_leads(
        self, *, search: str | None, status: str | None, limit: int
    ) -> list[Lead]:
        """Return leads, newest first."""

    def create_lead(self, values: dict[str, object]) -> Lead:
        """Insert a lead and return it."""

    def update_lead(self, lead_id: UUID, values: dict[str, object]) -> Lead | None:
        """Update a lead, returning None when no row matched."""

    def get_lead(self, lead_id: UUID) -> Lead | None:
        """Return a lead by id, if present."""

    def convert_lead(
        self, lead_id: UUID, client_values: dict[str, object]
    ) -> tuple[Lead, Client] | None:
        """Create a client and mark the lead converted in one transaction."""


@dataclass
class LeadService:
    """Application service for leads."""

    repository: LeadRepository

    def list_leads(
        self, *, search: str | None = None, status: str | None = None, limit: int = 25
    ) -> list[Lead]:
        """Search leads by name, email or company."""
        return self.repository.list_leads(search=search, status=status, limit=limit)

    def create_lead(self, values: dict[str, object]) -> Lead:
        """Create a new lead."""
        return self.repository.create_lead(
            {**values, "email": str(values["email"]).lower(), "status": "NEW"}
        )

    def update_lead(self, lead_id: UUID, values: dict[str, object]) -> Lead:
        """Update an existing lead."""
        if values.get("status") == "CONVERTED":
            raise ValidationError("status", "Use convert_lead to convert a lead")
        lead = self.repository.update_lead(lead_id, values)
        if lead is None:
            raise NotFoundError(f"Lead not found: {lead_id}")
        return lead

    def convert(
        self, lead_id: UUID, overrides: dict[str, object]
    ) -> tuple[Lead, Client]:
        """Turn a lead into a client record."""
        lead = self.repository.get_lead(lead_id)
        if lead is None:
            raise NotFoundError(f"Lead not found: {lead_id}")
        if lead.status == "CONVERTED":
            raise ValidationError("lead_id", "Lead has already been converted")
        first_name, _, last_name = lead.name.strip().partition(" ")
        client_values: dict[str, object] = {
            "first_name": first_name or lead.name,
            "last_name": last_name.strip(),
            "email": lead.email,
            "phone": lead.phone,
            "company": lead.company,
            "notes": lead.message,
            "status": "ACTIVE",
            **overrides,
        }
        converted = self.repository.convert_lead(lead_id, client_values)
        if converted is None:
            raise NotFoundError(f"Lead not found: {lead_id}")
        return converted
