"""Client and lead tools."""

from typing import Literal
from uuid import UUID

from pydantic import EmailStr, Field

from studio_crm.services.clients import ClientService
from studio_crm.services.leads import LeadService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success

ClientStatus = Literal["ACTIVE", "INACTIVE", "ARCHIVED"]
LeadStatus = Literal["NEW", "CONTACTED", "QUALIFIED", "CONVERTED", "LOST"]
LeadPriority = Literal["low", "medium", "high"]


class ReadClientsParams(ToolParameters):
    search: str | None = Field(
        default=None, description="Matches name, email, phone or company"
    )
    status: ClientStatus | None = None
    limit: int = Field(default=25, ge=1, le=100)


class CreateClientParams(ToolParameters):
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = None
    city: str | None = None
    country: str | None = None
    company: str | None = None
    notes: str | None = None
    status: ClientStatus = "ACTIVE"


class UpdateClientParams(ToolParameters):
    client_id: UUID
    first_name: str | None = Field(default=None, min_length=1, max_length=120)
    last_name: str | None = Field(default=None, min_length=1, max_length=120)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = None
    city: str | None = None
    country: str | None = None
    company: str | None = None
    notes: str | None = None
    status: ClientStatus | None = None


class LookupClientParams(ToolParameters):
    client_id: UUID | None = None
    email: EmailStr | None = None


class TopClientsParams(ToolParameters):
    order_by: Literal["lifetime_value", "session_count", "recent_activity"] = (
        "lifetime_value"
    )
    min_revenue: float | None = Field(default=None, ge=0)
    year: int | None = Field(default=None, ge=2000, le=2100)
    limit: int = Field(default=10, ge=1, le=100)


class ReadLeadsParams(ToolParameters):
    search: str | None = None
    status: LeadStatus | None = None
    limit: int = Field(default=25, ge=1, le=100)


class CreateLeadParams(ToolParameters):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = None
    message: str | None = None
    source: str | None = Field(default=None, description="e.g. website, referral")
    priority: LeadPriority = "medium"
    value: float | None = Field(default=None, ge=0)


class UpdateLeadParams(ToolParameters):
    lead_id: UUID
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = None
    message: str | None = None
    source: str | None = None
    status: LeadStatus | None = None
    priority: LeadPriority | None = None
    value: float | None = Field(default=None, ge=0)


class ConvertLeadParams(ToolParameters):
    lead_id: UUID
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)
    phone: str | None = None
    company: str | None = None
    notes: str | None = None


def client_tools(clients: ClientService, leads: LeadService) -> list[Tool]:
    """Build tools for clients and leads."""

    async def read_crm_clients(params: ReadClientsParams) -> ToolResult:
        found = clients.list_clients(
            search=params.search, status=params.status, limit=params.limit
        )
        return success(count=len(found), clients=found)

    async def create_crm_client(params: CreateClientParams) -> ToolResult:
        client = clients.create_client(params.model_dump())
        return success(
            client_id=client.id,
            client=client,
            message=f"Client {client.full_name} created",
        )

    async def update_crm_client(params: UpdateClientParams) -> ToolResult:
        client = clients.update_client(params.client_id, params.changes("client_id"))
        return success(client=client, message=f"Client {client.full_name} updated")

    async def lookup_client(params: LookupClientParams) -> ToolResult:
        client, summary = clients.lookup(client_id=params.client_id, email=params.email)
        return success(client=client, summary=summary)

    async def list_top_clients(params: TopClientsParams) -> ToolResult:
        ranked = clients.top_clients(
            order_by=params.order_by,
            min_revenue=params.min_revenue,
            year=params.year,
            limit=params.limit,
        )
        return success(count=len(ranked), clients=ranked)

    async def read_crm_leads(params: ReadLeadsParams) -> ToolResult:
        found = leads.list_leads(
            search=params.search, status=params.status, limit=params.limit
        )
        return success(count=len(found), leads=found)

    async def create_crm_lead(params: CreateLeadParams) -> ToolResult:
        lead = leads.create_lead(params.model_dump())
        return success(lead_id=lead.id, lead=lead)

    async def update_crm_lead(params: UpdateLeadParams) -> ToolResult:
        lead = leads.update_lead(params.lead_id, params.changes("lead_id"))
        return success(lead=lead)

    async def convert_lead(params: ConvertLeadParams) -> ToolResult:
        overrides = params.model_dump(exclude_none=True, exclude={"lead_id"})
        lead, client = leads.convert(params.lead_id, overrides)
        return success(
            lead_id=lead.id,
            client_id=client.id,
            client=client,
            message=f"Lead {lead.name} converted to client",
        )

    return [
        Tool(
            name="read_crm_clients",
            description="Search and list studio clients.",
            parameters=ReadClientsParams,
            execute=read_crm_clients,
        ),
        Tool(
            name="create_crm_client",
            description="Create a new client record.",
            parameters=CreateClientParams,
            execute=create_crm_client,
        ),
        Tool(
            name="update_crm_client",
            description="Update fields on an existing client.",
            parameters=UpdateClientParams,
            execute=update_crm_client,
        ),
        Tool(
            name="lookup_client",
            description=(
                "Find a client by id or email with their sessions, invoices "
                "and payment totals."
            ),
            parameters=LookupClientParams,
            execute=lookup_client,
        ),
        Tool(
            name="list_top_clients",
            description="Rank clients by lifetime value, session count or activity.",
            parameters=TopClientsParams,
            execute=list_top_clients,
        ),
        Tool(
            name="read_crm_leads",
            description="Search and list sales leads.",
            parameters=ReadLeadsParams,
            execute=read_crm_leads,
        ),
        Tool(
            name="create_crm_lead",
            description="Record a new enquiry as a lead.",
            parameters=CreateLeadParams,
            execute=create_crm_lead,
        ),
        Tool(
            name="update_crm_lead",
            description="Update a lead's details or pipeline status.",
            parameters=UpdateLeadParams,
            execute=update_crm_lead,
        ),
        Tool(
            name="convert_lead",
            description="Convert a lead into a client record.",
            parameters=ConvertLeadParams,
            execute=convert_lead,
        ),
    ]

