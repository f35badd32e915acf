"""Questionnaire tools."""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import Field

from studio_crm.services.questionnaires import QuestionnaireService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success

QuestionnaireType = Literal[
    "client_intake", "feedback", "survey", "pre_session", "post_session"
]
QuestionType = Literal[
    "text", "textarea", "select", "radio", "checkbox", "rating", "date"
]
QuestionnaireAudience = Literal[
    "new_clients", "existing_clients", "all_clients", "leads"
]


class QuestionParams(ToolParameters):
    question_text: str = Field(min_length=1)
    question_type: QuestionType
    options: list[str] | None = None
    required: bool = False
    order_index: int = Field(ge=0)


class CreateQuestionnaireParams(ToolParameters):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    questionnaire_type: QuestionnaireType
    questions: list[QuestionParams] = Field(min_length=1)
    active: bool = True
    target_audience: QuestionnaireAudience = "all_clients"
    auto_send: bool = False
    send_trigger: str = Field(default="manual", min_length=1, max_length=50)


class ReadQuestionnairesParams(ToolParameters):
    questionnaire_type: QuestionnaireType | None = None
    active: bool | None = None
    target_audience: QuestionnaireAudience | None = None
    include_questions: bool = False
    limit: int = Field(default=10, ge=1, le=50)


class SendQuestionnaireParams(ToolParameters):
    questionnaire_id: UUID
    recipients: list[UUID] | None = Field(
        default=None, description="Client ids; overrides target_group"
    )
    target_group: QuestionnaireAudience | None = None
    send_method: Literal["email", "sms", "portal_notification"] = "email"
    custom_message: str | None = None
    due_date: date | None = None


class ReadResponsesParams(ToolParameters):
    questionnaire_id: UUID | None = None
    client_id: UUID | None = None
    status: Literal["SENT", "STARTED", "COMPLETED", "EXPIRED"] | None = None
    limit: int = Field(default=20, ge=1, le=100)


def questionnaire_tools(questionnaires: QuestionnaireService) -> list[Tool]:
    """Build tools for questionnaires."""

    async def create_questionnaire(params: CreateQuestionnaireParams) -> ToolResult:
        questionnaire = questionnaires.create_questionnaire(
            params.model_dump(exclude={"questions"}),
            [question.model_dump() for question in params.questions],
        )
        return success(
            questionnaire_id=questionnaire.id,
            questionnaire=questionnaire,
            message=(
                f"Questionnaire '{questionnaire.title}' created with "
                f"{questionnaire.question_count} questions"
            ),
        )

    async def read_questionnaires(params: ReadQuestionnairesParams) -> ToolResult:
        found = questionnaires.list_questionnaires(
            questionnaire_type=params.questionnaire_type,
            active=params.active,
            target_audience=params.target_audience,
            include_questions=params.include_questions,
            limit=params.limit,
        )
        return success(count=len(found), questionnaires=found)

    async def send_questionnaire(params: SendQuestionnaireParams) -> ToolResult:
        questionnaire, responses = await questionnaires.send(
            params.questionnaire_id,
            send_method=params.send_method,
            recipient_ids=params.recipients,
            target_group=params.target_group,
            custom_message=params.custom_message,
            due_date=params.due_date,
        )
        return success(
            questionnaire_id=questionnaire.id,
            sent_count=len(responses),
            responses=responses,
            message=f"'{questionnaire.title}' sent to {len(responses)} recipients",
        )

    async def read_questionnaire_responses(params: ReadResponsesParams) -> ToolResult:
        found = questionnaires.list_responses(
            questionnaire_id=params.questionnaire_id,
            client_id=params.client_id,
            status=params.status,
            limit=params.limit,
        )
        return success(count=len(found), responses=found)

    return [
        Tool(
            name="create_questionnaire",
            description="Create a questionnaire together with its questions.",
            parameters=CreateQuestionnaireParams,
            execute=create_questionnaire,
        ),
        Tool(
            name="read_questionnaires",
            description="List questionnaires with question and response counts.",
            parameters=ReadQuestionnairesParams,
            execute=read_questionnaires,
        ),
        Tool(
            name="send_questionnaire",
            description="Send an active questionnaire to clients or a target group.",
            parameters=SendQuestionnaireParams,
            execute=send_questionnaire,
        ),
        Tool(
            name="read_questionnaire_responses",
            description="List sent questionnaires and their answers.",
            parameters=ReadResponsesParams,
            execute=read_questionnaire_responses,
        ),
    ]
