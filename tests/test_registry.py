"""Tests for the tool registry."""

import asyncio

import pytest

from studio_crm.errors import ToolConfigurationError
from studio_crm.tools.contract import Tool, ToolParameters, success
from studio_crm.tools.registry import ToolRegistry

EXPECTED_TOOLS = {
    "read_crm_clients",
    "create_crm_client",
    "update_crm_client",
    "lookup_client",
    "list_top_clients",
    "read_crm_leads",
    "create_crm_lead",
    "update_crm_lead",
    "convert_lead",
    "create_photography_session",
    "read_calendar_sessions",
    "update_photography_session",
    "cancel_photography_session",
    "check_calendar_availability",
    "create_invoice",
    "read_crm_invoices",
    "update_invoice_status",
    "read_crm_invoice_payments",
    "create_crm_invoice_payment",
    "update_crm_invoice_payment",
    "create_blog_post",
    "read_blog_posts",
    "update_blog_post",
    "delete_blog_post",
    "publish_blog_post",
    "create_email_campaign",
    "read_email_campaigns",
    "update_email_campaign",
    "send_email_campaign",
    "delete_email_campaign",
    "create_questionnaire",
    "read_questionnaires",
    "send_questionnaire",
    "read_questionnaire_responses",
    "create_gallery",
    "add_image_to_gallery",
    "read_galleries",
    "update_gallery",
    "upload_file",
    "read_digital_files",
    "update_digital_file",
    "delete_digital_file",
    "create_voucher_product",
    "sell_voucher",
    "read_voucher_sales",
    "redeem_voucher",
    "pipeline_summary",
    "global_search",
    "draft_email",
    "send_email",
    "log_interaction",
}


class _EmptyParams(ToolParameters):
    pass


async def _noop(params: _EmptyParams) -> dict[str, object]:
    return success(done=True)


def _tool(name: str) -> Tool:
    return Tool(name=name, description="No-op.", parameters=_EmptyParams, execute=_noop)


def test_registry_rejects_duplicate_names() -> None:
    registry = ToolRegistry([_tool("ping")])

    with pytest.raises(ToolConfigurationError):
        registry.register(_tool("ping"))


def test_registry_reports_unknown_tool() -> None:
    registry = ToolRegistry([_tool("ping")])

    result = asyncio.run(registry.dispatch("pong", {}))

    assert result == {
        "success": False,
        "error": "Unknown tool: pong",
        "error_kind": "not_found",
    }


def test_registry_dispatches_by_name() -> None:
    registry = ToolRegistry([_tool("ping")])

    assert asyncio.run(registry.dispatch("ping", None)) == {
        "success": True,
        "done": True,
    }
    assert "ping" in registry
    assert registry.get("ping").name == "ping"
    assert registry.get("pong") is None
    assert len(registry) == 1


def test_catalog_registers_every_tool(registry) -> None:
    assert set(registry.names()) == EXPECTED_TOOLS
    assert len(registry) == len(EXPECTED_TOOLS)


def test_openai_tools_describe_every_tool(registry) -> None:
    definitions = registry.openai_tools()

    names = {definition["function"]["name"] for definition in definitions}
    assert names == EXPECTED_TOOLS
    for definition in definitions:
        assert definition["function"]["parameters"]["type"] == "object"
