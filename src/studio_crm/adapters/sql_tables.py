"""Table definitions for the CRM store."""

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)

metadata = MetaData()


def _money(name: str, *, nullable: bool = True) -> Column:
    return Column(name, Numeric(10, 2, asdecimal=False), nullable=nullable)


def _timestamps() -> tuple[Column, Column]:
    return (
        Column("created_at", DateTime(timezone=True), nullable=False),
        Column("updated_at", DateTime(timezone=True), nullable=False),
    )


clients = Table(
    "crm_clients",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("first_name", String(120), nullable=False),
    Column("last_name", String(120), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(50)),
    Column("address", Text),
    Column("city", String(120)),
    Column("country", String(120)),
    Column("company", String(255)),
    Column("notes", Text),
    Column("status", String(20), nullable=False),
    *_timestamps(),
)

leads = Table(
    "crm_leads",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(50)),
    Column("company", String(255)),
    Column("message", Text),
    Column("source", String(120)),
    Column("status", String(20), nullable=False),
    Column("priority", String(20), nullable=False),
    _money("value"),
    Column("converted_client_id", Uuid, ForeignKey("crm_clients.id")),
    Column("converted_at", DateTime(timezone=True)),
    *_timestamps(),
)

photography_sessions = Table(
    "photography_sessions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("client_id", Uuid, ForeignKey("crm_clients.id"), nullable=False),
    Column("title", String(255), nullable=False),
    Column("session_type", String(20), nullable=False),
    Column("status", String(20), nullable=False),
    # Studio wall-clock time, no offset.
    Column("start_time", DateTime, nullable=False),
    Column("end_time", DateTime, nullable=False),
    Column("duration_minutes", Integer, nullable=False),
    Column("location", String(255), nullable=False),
    Column("notes", Text),
    _money("price"),
    _money("deposit_required"),
    Column("equipment_needed", JSON),
    Column("cancellation_reason", Text),
    _money("refund_amount"),
    *_timestamps(),
)

invoices = Table(
    "crm_invoices",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("invoice_number", String(40), nullable=False, unique=True),
    Column("client_id", Uuid, ForeignKey("crm_clients.id"), nullable=False),
    Column("issue_date", Date, nullable=False),
    Column("due_date", Date, nullable=False),
    _money("subtotal", nullable=False),
    _money("tax_amount", nullable=False),
    _money("total", nullable=False),
    Column("currency", String(3), nullable=False),
    Column("status", String(20), nullable=False),
    Column("notes", Text),
    Column("paid_at", DateTime(timezone=True)),
    *_timestamps(),
)

invoice_items = Table(
    "crm_invoice_items",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "invoice_id",
        Uuid,
        ForeignKey("crm_invoices.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("description", Text, nullable=False),
    Column("quantity", Numeric(10, 2, asdecimal=False), nullable=False),
    _money("unit_price", nullable=False),
    Column("tax_rate", Numeric(5, 2, asdecimal=False), nullable=False),
    _money("line_total", nullable=False),
    Column("sort_order", Integer, nullable=False),
    *_timestamps(),
)

invoice_payments = Table(
    "crm_invoice_payments",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "invoice_id",
        Uuid,
        ForeignKey("crm_invoices.id", ondelete="CASCADE"),
        nullable=False,
    ),
    _money("amount", nullable=False),
    Column("payment_method", String(30), nullable=False),
    Column("payment_reference", String(255)),
    Column("payment_date", Date, nullable=False),
    Column("status", String(20), nullable=False),
    Column("notes", Text),
    *_timestamps(),
)

blog_posts = Table(
    "blog_posts",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("title", String(255), nullable=False),
    Column("slug", String(255), nullable=False, unique=True),
    Column("content", Text, nullable=False),
    Column("excerpt", Text),
    Column("image_url", Text),
    Column("tags", JSON, nullable=False),
    Column("meta_title", String(255)),
    Column("meta_description", Text),
    Column("status", String(20), nullable=False),
    Column("category", String(120), nullable=False),
    Column("featured", Boolean, nullable=False),
    Column("view_count", Integer, nullable=False, default=0),
    Column("published_at", DateTime(timezone=True)),
    Column("scheduled_for", DateTime(timezone=True)),
    *_timestamps(),
)

email_campaigns = Table(
    "email_campaigns",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("subject", String(255), nullable=False),
    Column("content", Text, nullable=False),
    Column("sender_name", String(255), nullable=False),
    Column("sender_email", String(255), nullable=False),
    Column("campaign_type", String(30), nullable=False),
    Column("target_audience", String(30), nullable=False),
    Column("custom_segment", JSON),
    Column("status", String(20), nullable=False),
    Column("scheduled_for", DateTime(timezone=True)),
    Column("sent_at", DateTime(timezone=True)),
    Column("recipient_count", Integer, nullable=False, default=0),
    *_timestamps(),
)

campaign_deliveries = Table(
    "email_campaign_deliveries",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "campaign_id",
        Uuid,
        ForeignKey("email_campaigns.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("recipient_id", Uuid),
    Column("recipient_type", String(20), nullable=False),
    Column("recipient_email", String(255), nullable=False),
    Column("recipient_name", String(255)),
    Column("is_test", Boolean, nullable=False),
    Column("status", String(20), nullable=False),
    *_timestamps(),
)

questionnaires = Table(
    "questionnaires",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("questionnaire_type", String(30), nullable=False),
    Column("active", Boolean, nullable=False),
    Column("target_audience", String(30), nullable=False),
    Column("auto_send", Boolean, nullable=False),
    Column("send_trigger", String(50), nullable=False),
    *_timestamps(),
)

questionnaire_questions = Table(
    "questionnaire_questions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "questionnaire_id",
        Uuid,
        ForeignKey("questionnaires.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("question_text", Text, nullable=False),
    Column("question_type", String(20), nullable=False),
    Column("options", JSON),
    Column("required", Boolean, nullable=False),
    Column("order_index", Integer, nullable=False),
    UniqueConstraint("questionnaire_id", "order_index"),
    *_timestamps(),
)

questionnaire_responses = Table(
    "questionnaire_responses",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "questionnaire_id",
        Uuid,
        ForeignKey("questionnaires.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("client_id", Uuid, ForeignKey("crm_clients.id")),
    Column("lead_id", Uuid, ForeignKey("crm_leads.id")),
    Column("recipient_email", String(255), nullable=False),
    Column("recipient_name", String(255)),
    Column("send_method", String(30), nullable=False),
    Column("custom_message", Text),
    Column("status", String(20), nullable=False),
    Column("due_date", Date),
    Column("answers", JSON),
    Column("sent_at", DateTime(timezone=True), nullable=False),
    Column("completed_at", DateTime(timezone=True)),
    *_timestamps(),
)

galleries = Table(
    "galleries",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("title", String(255), nullable=False),
    Column("slug", String(255), nullable=False, unique=True),
    Column("description", Text),
    Column("client_id", Uuid, ForeignKey("crm_clients.id")),
    Column("is_public", Boolean, nullable=False),
    Column("is_password_protected", Boolean, nullable=False),
    Column("password_hash", String(128)),
    *_timestamps(),
)

gallery_images = Table(
    "gallery_images",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "gallery_id",
        Uuid,
        ForeignKey("galleries.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("filename", String(255), nullable=False),
    Column("url", Text, nullable=False),
    Column("title", String(255)),
    Column("description", Text),
    Column("sort_order", Integer, nullable=False),
    *_timestamps(),
)

digital_files = Table(
    "digital_files",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("folder_name", String(255), nullable=False),
    Column("file_name", String(255), nullable=False),
    Column("file_type", String(20), nullable=False),
    Column("file_size", BigInteger, nullable=False),
    Column("client_id", Uuid, ForeignKey("crm_clients.id")),
    Column("session_id", Uuid, ForeignKey("photography_sessions.id")),
    Column("description", Text),
    Column("tags", JSON, nullable=False),
    Column("is_public", Boolean, nullable=False),
    *_timestamps(),
)

voucher_products = Table(
    "voucher_products",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("description", Text),
    _money("price", nullable=False),
    Column("validity_months", Integer, nullable=False),
    Column("is_active", Boolean, nullable=False),
    *_timestamps(),
)

voucher_sales = Table(
    "voucher_sales",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("product_id", Uuid, ForeignKey("voucher_products.id"), nullable=False),
    Column("voucher_code", String(8), nullable=False, unique=True),
    Column("buyer_name", String(255), nullable=False),
    Column("buyer_email", String(255), nullable=False),
    Column("client_id", Uuid, ForeignKey("crm_clients.id")),
    _money("amount", nullable=False),
    Column("payment_status", String(20), nullable=False),
    Column("status", String(20), nullable=False),
    Column("expires_on", Date, nullable=False),
    Column("redeemed_at", DateTime(timezone=True)),
    Column("redemption_notes", Text),
    *_timestamps(),
)

interactions = Table(
    "crm_interactions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("interaction_type", String(30), nullable=False),
    Column("user_message", Text, nullable=False),
    Column("response_summary", Text),
    Column("client_id", Uuid, ForeignKey("crm_clients.id", ondelete="SET NULL")),
    Column("context", JSON),
    Column("created_at", DateTime(timezone=True), nullable=False),
)
