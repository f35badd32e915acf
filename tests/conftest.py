"""Shared test fixtures."""

import asyncio
from collections.abc import Iterator
from dataclasses import dataclass, field
from uuid import UUID

import pytest

from studio_crm.adapters.database import Database
from studio_crm.adapters.logging_email_sender import LoggingEmailSender
from studio_crm.adapters.sql_audience_repository import SqlAudienceRepository
from studio_crm.adapters.sql_blog_repository import SqlBlogRepository
from studio_crm.adapters.sql_campaign_repository import SqlCampaignRepository
from studio_crm.adapters.sql_client_repository import SqlClientRepository
from studio_crm.adapters.sql_file_repository import SqlFileRepository
from studio_crm.adapters.sql_gallery_repository import SqlGalleryRepository
from studio_crm.adapters.sql_interaction_repository import SqlInteractionRepository
from studio_crm.adapters.sql_invoice_repository import SqlInvoiceRepository
from studio_crm.adapters.sql_lead_repository import SqlLeadRepository
from studio_crm.adapters.sql_questionnaire_repository import (
    SqlQuestionnaireRepository,
)
from studio_crm.adapters.sql_report_repository import SqlReportRepository
from studio_crm.adapters.sql_session_repository import SqlSessionRepository
from studio_crm.adapters.sql_voucher_repository import SqlVoucherRepository
from studio_crm.config import Settings
from studio_crm.containers import AppContainer
from studio_crm.domain.blog import BlogPost, BlogStats
from studio_crm.services.audience import AudienceService
from studio_crm.services.blog import BlogRepository, BlogService
from studio_crm.services.calendar import CalendarService
from studio_crm.services.campaigns import CampaignService
from studio_crm.services.clients import ClientService
from studio_crm.services.files import FileService
from studio_crm.services.galleries import GalleryService
from studio_crm.services.interactions import InteractionService
from studio_crm.services.invoices import InvoiceService
from studio_crm.services.leads import LeadService
from studio_crm.services.messaging import AssistantClient, MessagingService
from studio_crm.services.questionnaires import QuestionnaireService
from studio_crm.services.reports import ReportService
from studio_crm.services.vouchers import VoucherService
from studio_crm.tools.catalog import StudioServices, build_registry
from studio_crm.tools.contract import ToolResult
from studio_crm.tools.registry import ToolRegistry

STUDIO_NAME = "Test Studio"
STUDIO_EMAIL = "studio@example.com"
LONG_CONTENT = (
    "Family portraits in the studio are a relaxed affair. We plan the session "
    "together, pick outfits that work well on camera and leave plenty of time."
)


@dataclass
class FakeAssistantClient(AssistantClient):
    """Assistant that returns a canned reply and records prompts."""

    reply: str = "Dear client,\n\nThank you for your enquiry.\n\nBest regards"
    calls: list[dict[str, str]] = field(default_factory=list)

    async def complete(self, *, model: str, instructions: str, prompt: str) -> str:
        self.calls.append(
            {"model": model, "instructions": instructions, "prompt": prompt}
        )
        return self.reply


@dataclass
class SpyBlogRepository(BlogRepository):
    """Blog repository that only records which methods were called."""

    calls: list[str] = field(default_factory=list)

    def create_post(self, values: dict[str, object]) -> BlogPost:
        self.calls.append("create_post")
        raise AssertionError("storage must not be reached")

    def list_posts(self, **filters: object) -> list[BlogPost]:
        self.calls.append("list_posts")
        return []

    def update_post(self, post_id: UUID, values: dict[str, object]) -> BlogPost | None:
        self.calls.append("update_post")
        return None

    def delete_post(self, post_id: UUID) -> BlogPost | None:
        self.calls.append("delete_post")
        return None

    def stats(self) -> BlogStats:
        self.calls.append("stats")
        return BlogStats(total=0, published=0, drafts=0, scheduled=0, featured=0)


def run_tool(
    registry: ToolRegistry, name: str, /, **parameters: object
) -> ToolResult:
    """Dispatch a tool synchronously."""
    return asyncio.run(registry.dispatch(name, parameters))


def create_client(registry: ToolRegistry, **overrides: object) -> str:
    """Create a client through the tool layer and return its id."""
    parameters: dict[str, object] = {
        "first_name": "Anna",
        "last_name": "Berger",
        "email": "anna@example.com",
        **overrides,
    }
    result = run_tool(registry, "create_crm_client", **parameters)
    assert result["success"] is True, result
    return result["client_id"]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        api_token="api-token",
        openai_api_key="openai-key",
        studio_name=STUDIO_NAME,
        studio_email=STUDIO_EMAIL,
    )


@pytest.fixture
def database() -> Iterator[Database]:
    db = Database.create("sqlite://")
    db.create_schema()
    yield db
    db.close()


@pytest.fixture
def email_sender() -> LoggingEmailSender:
    return LoggingEmailSender()


@pytest.fixture
def assistant() -> FakeAssistantClient:
    return FakeAssistantClient()


@pytest.fixture
def services(
    database: Database,
    email_sender: LoggingEmailSender,
    assistant: FakeAssistantClient,
) -> StudioServices:
    audience = AudienceService(SqlAudienceRepository(database))
    return StudioServices(
        clients=ClientService(SqlClientRepository(database)),
        leads=LeadService(SqlLeadRepository(database)),
        calendar=CalendarService(SqlSessionRepository(database)),
        invoices=InvoiceService(SqlInvoiceRepository(database)),
        blog=BlogService(SqlBlogRepository(database)),
        campaigns=CampaignService(
            SqlCampaignRepository(database), audience=audience, sender=email_sender
        ),
        questionnaires=QuestionnaireService(
            SqlQuestionnaireRepository(database),
            audience=audience,
            sender=email_sender,
            studio_name=STUDIO_NAME,
            studio_email=STUDIO_EMAIL,
        ),
        galleries=GalleryService(SqlGalleryRepository(database)),
        files=FileService(SqlFileRepository(database)),
        vouchers=VoucherService(SqlVoucherRepository(database)),
        reports=ReportService(SqlReportRepository(database)),
        messaging=MessagingService(
            assistant=assistant,
            sender=email_sender,
            model="gpt-4o",
            studio_name=STUDIO_NAME,
            studio_email=STUDIO_EMAIL,
        ),
        interactions=InteractionService(SqlInteractionRepository(database)),
    )


@pytest.fixture
def registry(services: StudioServices) -> ToolRegistry:
    return build_registry(services, sender_name=STUDIO_NAME, sender_email=STUDIO_EMAIL)


@pytest.fixture
def container(
    settings: Settings,
    database: Database,
    services: StudioServices,
    email_sender: LoggingEmailSender,
    registry: ToolRegistry,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        database=database,
        services=services,
        email_sender=email_sender,
        registry=registry,
        close_resources=close_resources,
    )
