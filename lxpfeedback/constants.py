import enum
from typing import NamedTuple
from uuid import UUID


class FeedbackKind(str, enum.Enum):
    """Which container a feedback question belongs to."""

    QUIZ = "quiz"
    TOPIC = "topic"

    @property
    def question_field(self) -> str:
        # quiz_feedback_question_id / topic_feedback_question_id
        return f"{self.value}_feedback_question_id"

    @property
    def container_field(self) -> str:
        # quiz_id / topic_id
        return f"{self.value}_id"


class QuestionRef(NamedTuple):
    kind: FeedbackKind
    question_id: UUID


class FeedbackQuestionTypes:
    MULTI_CHOICE_QUESTION = "MCQ"
    DESCRIPTIVE_QUESTION = "DESCRIPTIVE"

    @classmethod
    def is_multi_choice(cls, question_type):
        return (question_type or "").upper() == cls.MULTI_CHOICE_QUESTION


SUBMITTER_TAG = "learner"
