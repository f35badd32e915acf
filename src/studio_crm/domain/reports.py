"""Domain models for dashboards and search."""

from dataclasses import dataclass, field
from datetime import datetime

from studio_crm.domain.clients import Client
from studio_crm.domain.invoices import Invoice
from studio_crm.domain.leads import Lead
from studio_crm.domain.sessions import PhotographySession


@dataclass(frozen=True)
class PipelineSummary:
    """Sales and booking figures for a reporting period."""

    period: str
    period_start: datetime
    period_end: datetime
    new_leads: int
    converted_leads: int
    conversion_rate: float
    new_clients: int
    sessions_booked: int
    paid_revenue: float
    pending_revenue: float


@dataclass(frozen=True)
class SearchResults:
    """Matches for a free-text search across the CRM."""

    term: str
    clients: list[Client] = field(default_factory=list)
    leads: list[Lead] = field(default_factory=list)
    invoices: list[Invoice] = field(default_factory=list)
    sessions: list[PhotographySession] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(
            len(group)
            for group in (self.clients, self.leads, self.invoices, self.sessions)
        )
