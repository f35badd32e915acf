"""SQL implementation for questionnaires, questions and responses."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection

from studio_crm.adapters.database import Database, row_to, utcnow
from studio_crm.adapters.sql_tables import (
    questionnaire_questions,
    questionnaire_responses,
    questionnaires,
)
from studio_crm.domain.audience import Recipient
from studio_crm.domain.questionnaires import (
    Question,
    Questionnaire,
    QuestionnaireResponse,
)
from studio_crm.services.questionnaires import QuestionnaireRepository

_QUESTION_COUNT = (
    select(func.count())
    .where(questionnaire_questions.c.questionnaire_id == questionnaires.c.id)
    .scalar_subquery()
    .label("question_count")
)
_RESPONSE_COUNT = (
    select(func.count())
    .where(questionnaire_responses.c.questionnaire_id == questionnaires.c.id)
    .scalar_subquery()
    .label("response_count")
)


def _parse_question(row: Mapping[str, Any]) -> Question:
    options = row["options"]
    return row_to(Question, row, options=list(options) if options else None)


@dataclass
class SqlQuestionnaireRepository(QuestionnaireRepository):
    """SQL-backed repository for questionnaires."""

    database: Database

    def create_questionnaire(
        self, values: dict[str, object], questions: list[dict[str, object]]
    ) -> Questionnaire:
        """Insert a questionnaire and its questions atomically."""
        now = utcnow()
        questionnaire_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(questionnaires).values(
                    id=questionnaire_id, **values, created_at=now, updated_at=now
                )
            )
            for question in questions:
                connection.execute(
                    insert(questionnaire_questions).values(
                        id=uuid4(),
                        questionnaire_id=questionnaire_id,
                        **question,
                        created_at=now,
                        updated_at=now,
                    )
                )
            return self._load(connection, questionnaire_id, include_questions=True)

    def get_questionnaire(self, questionnaire_id: UUID) -> Questionnaire | None:
        """Return a questionnaire by id, if present."""
        with self.database.transaction() as connection:
            found = connection.execute(
                select(questionnaires.c.id).where(
                    questionnaires.c.id == questionnaire_id
                )
            ).first()
            if found is None:
                return None
            return self._load(connection, questionnaire_id, include_questions=True)

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
        statement = (
            select(questionnaires, _QUESTION_COUNT, _RESPONSE_COUNT)
            .order_by(questionnaires.c.created_at.desc())
            .limit(limit)
        )
        if questionnaire_type:
            statement = statement.where(
                questionnaires.c.questionnaire_type == questionnaire_type
            )
        if active is not None:
            statement = statement.where(questionnaires.c.active == active)
        if target_audience:
            statement = statement.where(
                questionnaires.c.target_audience == target_audience
            )
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
            questions: dict[UUID, list[Question]] = {}
            if include_questions and rows:
                question_rows = connection.execute(
                    select(questionnaire_questions)
                    .where(
                        questionnaire_questions.c.questionnaire_id.in_(
                            [row["id"] for row in rows]
                        )
                    )
                    .order_by(questionnaire_questions.c.order_index)
                ).mappings().all()
                for question_row in question_rows:
                    questions.setdefault(question_row["questionnaire_id"], []).append(
                        _parse_question(question_row)
                    )
        return [
            row_to(Questionnaire, row, questions=questions.get(row["id"], []))
            for row in rows
        ]

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
        now = utcnow()
        response_ids = [uuid4() for _ in recipients]
        with self.database.transaction() as connection:
            for response_id, recipient in zip(response_ids, recipients, strict=True):
                connection.execute(
                    insert(questionnaire_responses).values(
                        id=response_id,
                        questionnaire_id=questionnaire_id,
                        client_id=recipient.id if recipient.kind == "client" else None,
                        lead_id=recipient.id if recipient.kind == "lead" else None,
                        recipient_email=recipient.email,
                        recipient_name=recipient.name,
                        send_method=send_method,
                        custom_message=custom_message,
                        status="SENT",
                        due_date=due_date,
                        sent_at=now,
                        created_at=now,
                        updated_at=now,
                    )
                )
            rows = connection.execute(
                self._select_responses().where(
                    questionnaire_responses.c.id.in_(response_ids)
                )
            ).mappings().all()
        by_id = {row["id"]: row_to(QuestionnaireResponse, row) for row in rows}
        return [by_id[response_id] for response_id in response_ids]

    def list_responses(
        self,
        *,
        questionnaire_id: UUID | None,
        client_id: UUID | None,
        status: str | None,
        limit: int,
    ) -> list[QuestionnaireResponse]:
        """Return responses, most recently sent first."""
        statement = (
            self._select_responses()
            .order_by(
                questionnaire_responses.c.sent_at.desc(),
                questionnaire_responses.c.recipient_email,
            )
            .limit(limit)
        )
        if questionnaire_id is not None:
            statement = statement.where(
                questionnaire_responses.c.questionnaire_id == questionnaire_id
            )
        if client_id is not None:
            statement = statement.where(
                questionnaire_responses.c.client_id == client_id
            )
        if status:
            statement = statement.where(questionnaire_responses.c.status == status)
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [row_to(QuestionnaireResponse, row) for row in rows]

    @staticmethod
    def _select_responses():  # type: ignore[no-untyped-def]
        return select(
            questionnaire_responses,
            questionnaires.c.title.label("questionnaire_title"),
        ).join(
            questionnaires,
            questionnaires.c.id == questionnaire_responses.c.questionnaire_id,
        )

    @staticmethod
    def _load(
        connection: Connection, questionnaire_id: UUID, *, include_questions: bool
    ) -> Questionnaire:
        row = connection.execute(
            select(questionnaires, _QUESTION_COUNT, _RESPONSE_COUNT).where(
                questionnaires.c.id == questionnaire_id
            )
        ).mappings().one()
        questions: list[Question] = []
        if include_questions:
            question_rows = connection.execute(
                select(questionnaire_questions)
                .where(questionnaire_questions.c.questionnaire_id == questionnaire_id)
                .order_by(questionnaire_questions.c.order_index)
            ).mappings().all()
            questions = [_parse_question(question) for question in question_rows]
        return row_to(Questionnaire, row, questions=questions)
