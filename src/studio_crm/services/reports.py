"""Services for pipeline reporting and cross-entity search."""

from dataclasses import dataclass
from datetime import UTC, datetime, time, timedelta
from typing import Protocol

from studio_crm.domain.reports import PipelineSummary, SearchResults


class ReportRepository(Protocol):
    """Aggregate queries across CRM tables."""

    def pipeline_counts(self, start: datetime, end: datetime) -> dict[str, float]:
        """Return lead, session and revenue figures for a time range."""

    def search(self, term: str, limit: int) -> SearchResults:
        """Search clients, leads, invoices and sessions."""


@dataclass
class ReportService:
    """Application service for dashboards."""

    repository: ReportRepository
    search_limit: int = 10

    def pipeline_summary(
        self, period: str, now: datetime | None = None
    ) -> PipelineSummary:
        """Summarize the sales pipeline for a period ending now."""
        current = now or datetime.now(tz=UTC)
        start = period_start(period, current)
        counts = self.repository.pipeline_counts(start, current)
        new_leads = int(counts["new_leads"])
        converted = int(counts["converted_leads"])
        return PipelineSummary(
            period=period,
            period_start=start,
            period_end=current,
            new_leads=new_leads,
            converted_leads=converted,
            conversion_rate=round(converted / new_leads * 100, 1) if new_leads else 0.0,
            new_clients=int(counts["new_clients"]),
            sessions_booked=int(counts["sessions_booked"]),
            paid_revenue=round(float(counts["paid_revenue"]), 2),
            pending_revenue=round(float(counts["pending_revenue"]), 2),
        )

    def search(self, term: str) -> SearchResults:
        """Search the CRM for a term."""
        return self.repository.search(term.strip(), self.search_limit)


def period_start(period: str, now: datetime) -> datetime:
    """Return the start of the reporting period containing now."""
    midnight = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    if period == "today":
        return midnight
    if period == "week":
        return midnight - timedelta(days=now.weekday())
    if period == "month":
        return midnight.replace(day=1)
    if period == "quarter":
        first_month = (now.month - 1) // 3 * 3 + 1
        return midnight.replace(month=first_month, day=1)
    return midnight.replace(month=1, day=1)
