import datetime
import logging
from collections.abc import Mapping, MutableMapping

from lxpfeedback.constants import SUBMITTER_TAG, FeedbackKind, FeedbackQuestionTypes
from lxpfeedback.errors import DuplicateSubmission, FeedbackError, InvalidArgument
from lxpfeedback.models import FeedbackResponse
from lxpfeedback.repositories.feedback_response_repository import SqlAlchemyFeedbackResponseRepository
from lxpfeedback.schemas import SUBMISSION_SCHEMAS, LearnerFeedbackStatus
from lxpfeedback.services.validation_service import validate_submission

logger = logging.getLogger(__name__)


def _learner_id_of(payload):
    if isinstance(payload, Mapping):
        return payload.get("learner_id")
    return getattr(payload, "learner_id", None)


class FeedbackResponseService:
    """
    Accepts learner feedback for quiz and topic questions and reports whether a
    learner has answered every question of a quiz or topic.

    Quiz and topic feedback go through the same routine; ``FeedbackKind``
    decides which question ids and container fields are used.
    """

    def __init__(self, repository=None):
        self.repository = repository or SqlAlchemyFeedbackResponseRepository()

    # ---------------------------
    # SUBMISSION
    # ---------------------------
    def submit_quiz_feedback(self, payload):
        return self.submit(FeedbackKind.QUIZ, payload)

    def submit_topic_feedback(self, payload):
        return self.submit(FeedbackKind.TOPIC, payload)

    def submit_quiz_feedbacks(self, payloads):
        return self.submit_many(FeedbackKind.QUIZ, payloads)

    def submit_topic_feedbacks(self, payloads):
        return self.submit_many(FeedbackKind.TOPIC, payloads)

    def submit_many(self, kind, payloads):
        """
        Submit items one by one. Stops at the first failing item: items before
        it stay stored, items after it are never attempted.
        """
        submitted = []
        for index, payload in enumerate(payloads):
            try:
                submitted.append(self.submit(kind, payload))
            except FeedbackError as exc:
                exc.failed_index = index
                exc.submitted = len(submitted)
                logger.warning(
                    "Batch %s feedback stopped at item %d (%d stored)",
                    kind.value, index, len(submitted),
                )
                raise
        return submitted

    def submit(self, kind, payload):
        """
        Validate and store one feedback response.

        Returns the validated view model with ``quiz_id``/``topic_id`` filled
        in. The same field is written back onto ``payload`` when it is the
        matching view model or a mutable mapping.
        """
        try:
            return self._submit(kind, payload)
        except FeedbackError as exc:
            logger.warning(
                "Rejected %s feedback from learner %s: %s",
                kind.value, _learner_id_of(payload), exc,
            )
            raise

    def _submit(self, kind, payload):
        if payload is None:
            raise InvalidArgument("Feedback response must not be empty.", field="feedback_response")

        submission = validate_submission(kind, payload)
        question_id = getattr(submission, kind.question_field)

        question = self.repository.get_question(kind, question_id)
        if question is None:
            raise InvalidArgument("Invalid feedback question ID.", field=kind.question_field)

        learner = self.repository.get_learner(submission.learner_id)
        if learner is None:
            raise InvalidArgument("Invalid learner ID.", field="learner_id")

        existing = self.repository.get_existing_response(kind, question_id, submission.learner_id)
        if existing is not None:
            raise DuplicateSubmission()

        option_id = None
        if FeedbackQuestionTypes.is_multi_choice(question.question_type):
            if not submission.option_text:
                raise InvalidArgument("Option text must be provided for MCQ responses.", field="option_text")

            option_id = self.repository.get_option_id_by_text(kind, question_id, submission.option_text)
            if option_id is None:
                raise InvalidArgument("Invalid option text provided.", field="option_text")

            submission.response = None
        elif not submission.response:
            raise InvalidArgument("Response text must be provided for descriptive responses.", field="response")

        response = FeedbackResponse(
            question_id=question_id,
            learner_id=submission.learner_id,
            response=submission.response,
            option_id=option_id,
            generated_at=datetime.datetime.utcnow(),
            generated_by=SUBMITTER_TAG,
        )
        self.repository.add_response(response)

        setattr(submission, kind.container_field, question.container_id)
        if isinstance(payload, SUBMISSION_SCHEMAS[kind]):
            setattr(payload, kind.container_field, question.container_id)
            if option_id is not None:
                payload.response = None
        elif isinstance(payload, MutableMapping):
            payload[kind.container_field] = question.container_id
            if option_id is not None:
                payload["response"] = None

        logger.info(
            "Stored %s feedback from learner %s for question %s",
            kind.value, submission.learner_id, question_id,
        )
        return submission

    # ---------------------------
    # STATUS
    # ---------------------------
    def is_complete(self, kind, learner_id, container_id):
        """
        True when the learner answered every question of the quiz/topic.
        A quiz or topic without questions is never complete.
        """
        questions = self.repository.get_questions_by_container(kind, container_id)
        submitted = self.repository.get_responses_by_learner(kind, container_id, learner_id)
        return len(questions) > 0 and len(questions) == len(submitted)

    def get_quiz_feedback_status(self, learner_id, quiz_id):
        return LearnerFeedbackStatus(
            learner_id=learner_id,
            is_quiz_feedback_submitted=self.is_complete(FeedbackKind.QUIZ, learner_id, quiz_id),
        )

    def get_topic_feedback_status(self, learner_id, topic_id):
        return LearnerFeedbackStatus(
            learner_id=learner_id,
            is_topic_feedback_submitted=self.is_complete(FeedbackKind.TOPIC, learner_id, topic_id),
        )
