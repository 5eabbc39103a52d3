from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from lxpfeedback.constants import FeedbackKind

RESPONSE_MAX_LENGTH = 1000
OPTION_TEXT_MAX_LENGTH = 200


class _FeedbackResponseBase(BaseModel):
    learner_id: UUID
    response: Optional[str] = Field(default=None, max_length=RESPONSE_MAX_LENGTH)
    option_text: Optional[str] = Field(default=None, max_length=OPTION_TEXT_MAX_LENGTH)


class QuizFeedbackResponse(_FeedbackResponseBase):
    quiz_feedback_question_id: UUID
    quiz_id: Optional[UUID] = None


class TopicFeedbackResponse(_FeedbackResponseBase):
    topic_feedback_question_id: UUID
    topic_id: Optional[UUID] = None


class LearnerFeedbackStatus(BaseModel):
    learner_id: UUID
    is_quiz_feedback_submitted: bool = False
    is_topic_feedback_submitted: bool = False


SUBMISSION_SCHEMAS = {
    FeedbackKind.QUIZ: QuizFeedbackResponse,
    FeedbackKind.TOPIC: TopicFeedbackResponse,
}
