"""Domain models for client questionnaires."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class Question:
    """One question within a questionnaire."""

    id: UUID
    questionnaire_id: UUID
    question_text: str
    question_type: str
    options: list[str] | None
    required: bool
    order_index: int


@dataclass(frozen=True)
class Questionnaire:
    """A form sent to clients or leads."""

    id: UUID
    title: str
    description: str | None
    questionnaire_type: str
    active: bool
    target_audience: str
    auto_send: bool
    send_trigger: str
    created_at: datetime
    updated_at: datetime
    question_count: int = 0
    response_count: int = 0
    questions: list[Question] = field(default_factory=list)


@dataclass(frozen=True)
class QuestionnaireResponse:
    """A questionnaire delivered to one recipient."""

    id: UUID
    questionnaire_id: UUID
    client_id: UUID | None
    lead_id: UUID | None
    recipient_email: str
    recipient_name: str | None
    send_method: str
    custom_message: str | None
    status: str
    due_date: date | None
    answers: dict[str, object] | None
    sent_at: datetime
    completed_at: datetime | None
    questionnaire_title: str | None = None
