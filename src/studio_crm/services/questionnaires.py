"""Services for questionnaires and their responses."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from studio_crm.domain.audience import Recipient
from studio_crm.domain.messaging import OutgoingEmail
from studio_crm.domain.questionnaires import Questionnaire, QuestionnaireResponse
from studio_crm.errors import NotFoundError, ValidationError
from studio_crm.services.audience import AudienceService
from studio_crm.services.mail import EmailSender

CHOICE_QUESTION_TYPES = frozenset({"select", "radio", "checkbox"})


class QuestionnaireRepository(Protocol):
    """Persistence interface for questionnaires."""

    def create_questionnaire(
        self, values: dict[str, object], questions: list[dict[str, object]]
    ) -> Questionnaire:
        """Insert a questionnaire and its questions atomically."""

    def get_questionnaire(self, questionnaire_id: UUID) -> Questionnaire | None:
        """Return a questionnaire by id, if present."""

    def list_questionnaires(
        self,
        *,
        questionnaire_type: str | None,
        active: bool | None,
        target_audience: str | None,
        include_questions: bool,
        limit: int,
    ) -> list[Questionnaire]:
        """Return questionnaires with question and response counts."""

    def record_sends(  # noqa: PLR0913
        self,
        questionnaire_id: UUID,
        recipients: list[Recipient],
        *,
        send_method: str,
        custom_message: str | None,
        due_date: date | None,
    ) -> list[QuestionnaireResponse]:
        """Create one pending response per recipient atomically."""

    def list_responses(
        self,
        *,
        questionnaire_id: UUID | None,
        client_id: UUID | None,
        status: str | None,
        limit: int,
    ) -> list[QuestionnaireResponse]:
        """Return responses, most recently sent first."""


@dataclass
class QuestionnaireService:
    """Application service for questionnaires."""

    repository: QuestionnaireRepository
    audience: AudienceService
    sender: EmailSender
    studio_name: str
    studio_email: str

    def create_questionnaire(
        self, values: dict[str, object], questions: list[dict[str, object]]
    ) -> Questionnaire:
        """Create a questionnaire together with its questions."""
        for index, question in enumerate(questions):
            if question["question_type"] in CHOICE_QUESTION_TYPES and not question.get(
                "options"
            ):
                raise ValidationError(
                    f"questions.{index}.options", "Required for choice questions"
                )
        return self.repository.create_questionnaire(values, questions)

    def list_questionnaires(
        self,
        *,
        questionnaire_type: str | None = None,
        active: bool | None = None,
        target_audience: str | None = None,
        include_questions: bool = False,
        limit: int = 10,
    ) -> list[Questionnaire]:
        """Return questionnaires matching the filters."""
        return self.repository.list_questionnaires(
            questionnaire_type=questionnaire_type,
            active=active,
            target_audience=target_audience,
            include_questions=include_questions,
            limit=limit,
        )

    async def send(  # noqa: PLR0913
        self,
        questionnaire_id: UUID,
        *,
        send_method: str,
        recipient_ids: list[UUID] | None = None,
        target_group: str | None = None,
        custom_message: str | None = None,
        due_date: date | None = None,
    ) -> tuple[Questionnaire, list[QuestionnaireResponse]]:
        """Deliver a questionnaire to explicit clients or a target group."""
        questionnaire = self.repository.get_questionnaire(questionnaire_id)
        if questionnaire is None:
            raise NotFoundError(f"Questionnaire not found: {questionnaire_id}")
        if not questionnaire.active:
            raise ValidationError("questionnaire_id", "Questionnaire is not active")
        if recipient_ids:
            recipients = self.audience.clients(recipient_ids)
        else:
            recipients = self.audience.resolve(
                target_group or questionnaire.target_audience
            )
        if not recipients:
            raise ValidationError("recipients", "No recipients to send to")
        responses = self.repository.record_sends(
            questionnaire_id,
            recipients,
            send_method=send_method,
            custom_message=custom_message,
            due_date=due_date,
        )
        if send_method == "email":
            for response in responses:
                await self.sender.send(self._message(questionnaire, response))
        return questionnaire, responses

    def list_responses(
        self,
        *,
        questionnaire_id: UUID | None = None,
        client_id: UUID | None = None,
        status: str | None = None,
        limit: int = 20,
    ) -> list[QuestionnaireResponse]:
        """Return questionnaire responses."""
        return self.repository.list_responses(
            questionnaire_id=questionnaire_id,
            client_id=client_id,
            status=status,
            limit=limit,
        )

    def _message(
        self, questionnaire: Questionnaire, response: QuestionnaireResponse
    ) -> OutgoingEmail:
        name = response.recipient_name
        lines = [
            f"Hello {name}," if name else "Hello,",
            "",
            f"Please take a moment to complete: {questionnaire.title}.",
        ]
        if response.custom_message:
            lines += ["", response.custom_message]
        if response.due_date:
            lines += ["", f"Please reply by {response.due_date:%d.%m.%Y}."]
        lines += ["", self.studio_name]
        return OutgoingEmail(
            to=response.recipient_email,
            subject=questionnaire.title,
            body="\n".join(lines),
            sender_name=self.studio_name,
            sender_email=self.studio_email,
        )
