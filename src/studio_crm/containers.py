"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from studio_crm.adapters.database import Database
from studio_crm.adapters.logging_email_sender import LoggingEmailSender
from studio_crm.adapters.openai_assistant_client import OpenAIAssistantClient
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
from studio_crm.config import Settings, normalize_database_url
from studio_crm.services.audience import AudienceService
from studio_crm.services.blog import BlogService
from studio_crm.services.calendar import CalendarService
from studio_crm.services.campaigns import CampaignService
from studio_crm.services.clients import ClientService
from studio_crm.services.files import FileService
from studio_crm.services.galleries import GalleryService
from studio_crm.services.interactions import InteractionService
from studio_crm.services.invoices import InvoiceService
from studio_crm.services.leads import LeadService
from studio_crm.services.mail import EmailSender
from studio_crm.services.messaging import MessagingService
from studio_crm.services.questionnaires import QuestionnaireService
from studio_crm.services.reports import ReportService
from studio_crm.services.vouchers import VoucherService
from studio_crm.tools.catalog import StudioServices, build_registry
from studio_crm.tools.registry import ToolRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    database: Database
    services: StudioServices
    email_sender: EmailSender
    registry: ToolRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    database = Database.create(
        normalize_database_url(resolved_settings.database_url),
        echo=resolved_settings.database_echo,
    )
    if resolved_settings.auto_create_schema:
        database.create_schema()
    email_sender = LoggingEmailSender()
    assistant_client = OpenAIAssistantClient.create(resolved_settings.openai_api_key)
    audience_service = AudienceService(
        SqlAudienceRepository(database),
        high_value_threshold=resolved_settings.high_value_threshold,
        recent_days=resolved_settings.recent_client_days,
    )
    services = StudioServices(
        clients=ClientService(SqlClientRepository(database)),
        leads=LeadService(SqlLeadRepository(database)),
        calendar=CalendarService(
            SqlSessionRepository(database),
            opening_hour=resolved_settings.working_hours_start,
            closing_hour=resolved_settings.working_hours_end,
        ),
        invoices=InvoiceService(
            SqlInvoiceRepository(database),
            default_tax_rate=resolved_settings.default_tax_rate,
            due_days=resolved_settings.invoice_due_days,
            currency=resolved_settings.currency,
        ),
        blog=BlogService(SqlBlogRepository(database)),
        campaigns=CampaignService(
            SqlCampaignRepository(database),
            audience=audience_service,
            sender=email_sender,
        ),
        questionnaires=QuestionnaireService(
            SqlQuestionnaireRepository(database),
            audience=audience_service,
            sender=email_sender,
            studio_name=resolved_settings.studio_name,
            studio_email=resolved_settings.studio_email,
        ),
        galleries=GalleryService(SqlGalleryRepository(database)),
        files=FileService(SqlFileRepository(database)),
        vouchers=VoucherService(SqlVoucherRepository(database)),
        reports=ReportService(SqlReportRepository(database)),
        messaging=MessagingService(
            assistant=assistant_client,
            sender=email_sender,
            model=resolved_settings.openai_model,
            studio_name=resolved_settings.studio_name,
            studio_email=resolved_settings.studio_email,
            studio_phone=resolved_settings.studio_phone,
        ),
        interactions=InteractionService(SqlInteractionRepository(database)),
    )
    registry = build_registry(
        services,
        sender_name=resolved_settings.studio_name,
        sender_email=resolved_settings.studio_email,
    )

    async def close_resources() -> None:
        await assistant_client.close()
        database.close()

    return AppContainer(
        settings=resolved_settings,
        database=database,
        services=services,
        email_sender=email_sender,
        registry=registry,
        close_resources=close_resources,
    )
