"""Assembles every feature toolset into one registry."""

from dataclasses import dataclass

from studio_crm.services.blog import BlogService
from studio_crm.services.calendar import CalendarService
from studio_crm.services.campaigns import CampaignService
from studio_crm.services.clients import ClientService
from studio_crm.services.files import FileService
from studio_crm.services.galleries import GalleryService
from studio_crm.services.interactions import InteractionService
from studio_crm.services.invoices import InvoiceService
from studio_crm.services.leads import LeadService
from studio_crm.services.messaging import MessagingService
from studio_crm.services.questionnaires import QuestionnaireService
from studio_crm.services.reports import ReportService
from studio_crm.services.vouchers import VoucherService
from studio_crm.tools.blog import blog_tools
from studio_crm.tools.calendar import calendar_tools
from studio_crm.tools.campaigns import campaign_tools
from studio_crm.tools.clients import client_tools
from studio_crm.tools.files import file_tools
from studio_crm.tools.galleries import gallery_tools
from studio_crm.tools.interactions import interaction_tools
from studio_crm.tools.invoices import invoice_tools
from studio_crm.tools.messaging import messaging_tools
from studio_crm.tools.questionnaires import questionnaire_tools
from studio_crm.tools.registry import ToolRegistry
from studio_crm.tools.reports import report_tools
from studio_crm.tools.vouchers import voucher_tools


@dataclass(frozen=True)
class StudioServices:
    """Services the tool layer is built on."""

    clients: ClientService
    leads: LeadService
    calendar: CalendarService
    invoices: InvoiceService
    blog: BlogService
    campaigns: CampaignService
    questionnaires: QuestionnaireService
    galleries: GalleryService
    files: FileService
    vouchers: VoucherService
    reports: ReportService
    messaging: MessagingService
    interactions: InteractionService


def build_registry(
    services: StudioServices, *, sender_name: str, sender_email: str
) -> ToolRegistry:
    """Register every tool; duplicate names fail here, at startup."""
    return ToolRegistry(
        [
            *client_tools(services.clients, services.leads),
            *calendar_tools(services.calendar),
            *invoice_tools(services.invoices),
            *blog_tools(services.blog),
            *campaign_tools(
                services.campaigns, sender_name=sender_name, sender_email=sender_email
            ),
            *questionnaire_tools(services.questionnaires),
            *gallery_tools(services.galleries),
            *file_tools(services.files),
            *voucher_tools(services.vouchers),
            *report_tools(services.reports),
            *messaging_tools(services.messaging),
            *interaction_tools(services.interactions),
        ]
    )
