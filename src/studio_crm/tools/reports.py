"""Reporting and search tools."""

from typing import Literal

from pydantic import Field

from studio_crm.services.reports import ReportService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success


class PipelineSummaryParams(ToolParameters):
    period: Literal["today", "week", "month", "quarter", "year"] = "month"


class GlobalSearchParams(ToolParameters):
    term: str = Field(min_length=2, max_length=120)


def report_tools(reports: ReportService) -> list[Tool]:
    """Build tools for dashboards and search."""

    async def pipeline_summary(params: PipelineSummaryParams) -> ToolResult:
        return success(summary=reports.pipeline_summary(params.period))

    async def global_search(params: GlobalSearchParams) -> ToolResult:
        results = reports.search(params.term)
        return success(total=results.total, results=results)

    return [
        Tool(
            name="pipeline_summary",
            description="Summarize leads, conversions, bookings and revenue.",
            parameters=PipelineSummaryParams,
            execute=pipeline_summary,
        ),
        Tool(
            name="global_search",
            description="Search clients, leads, invoices and sessions at once.",
            parameters=GlobalSearchParams,
            execute=global_search,
        ),
    ]
