import abc
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from lxpfeedback.errors import DuplicateSubmission, PersistenceError
from lxpfeedback.models import FeedbackOption, FeedbackQuestion, FeedbackResponse, Learner

logger = logging.getLogger(__name__)


class FeedbackResponseRepository(abc.ABC):
    """Data access needed by the feedback submission workflow."""

    @abc.abstractmethod
    def get_question(self, kind, question_id):
        """Return the question of ``kind`` with ``question_id``, or None."""

    @abc.abstractmethod
    def get_learner(self, learner_id):
        """Return the learner, or None."""

    @abc.abstractmethod
    def get_existing_response(self, kind, question_id, learner_id):
        """Return the learner's response to the question, or None."""

    @abc.abstractmethod
    def get_option_id_by_text(self, kind, question_id, text):
        """Return the id of the option whose text is exactly ``text``, or None."""

    @abc.abstractmethod
    def add_response(self, response):
        """Store a new response. Raises PersistenceError or DuplicateSubmission."""

    @abc.abstractmethod
    def get_questions_by_container(self, kind, container_id):
        """All questions defined under a quiz or topic."""

    @abc.abstractmethod
    def get_responses_by_learner(self, kind, container_id, learner_id):
        """All responses the learner gave to questions under a quiz or topic."""


class SqlAlchemyFeedbackResponseRepository(FeedbackResponseRepository):

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get_question(self, kind, question_id):
        return self.session.query(FeedbackQuestion).filter_by(id=question_id, kind=kind).first()

    def get_learner(self, learner_id):
        return self.session.get(Learner, learner_id)

    def get_existing_response(self, kind, question_id, learner_id):
        return (
            self.session.query(FeedbackResponse)
            .join(FeedbackQuestion, FeedbackResponse.question_id == FeedbackQuestion.id)
            .filter(FeedbackQuestion.kind == kind)
            .filter(FeedbackResponse.question_id == question_id)
            .filter(FeedbackResponse.learner_id == learner_id)
            .first()
        )

    def get_option_id_by_text(self, kind, question_id, text):
        # Exact, case-sensitive match; option text is unique per question.
        return (
            self.session.query(FeedbackOption.id)
            .join(FeedbackQuestion, FeedbackOption.question_id == FeedbackQuestion.id)
            .filter(FeedbackQuestion.kind == kind)
            .filter(FeedbackOption.question_id == question_id)
            .filter(FeedbackOption.option_text == text)
            .scalar()
        )

    def add_response(self, response):
        try:
            self.session.add(response)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            # The unique constraint catches submissions that raced past the
            # existence check; anything else is a genuine storage failure.
            duplicate = (
                self.session.query(FeedbackResponse.id)
                .filter_by(question_id=response.question_id, learner_id=response.learner_id)
                .first()
            )
            if duplicate is not None:
                raise DuplicateSubmission() from exc
            logger.exception("Storing feedback response failed")
            raise PersistenceError("Could not store feedback response.") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Storing feedback response failed")
            raise PersistenceError("Could not store feedback response.") from exc

    def get_questions_by_container(self, kind, container_id):
        return (
            self.session.query(FeedbackQuestion)
            .filter_by(kind=kind, container_id=container_id)
            .order_by(FeedbackQuestion.question_no)
            .all()
        )

    def get_responses_by_learner(self, kind, container_id, learner_id):
        return (
            self.session.query(FeedbackResponse)
            .join(FeedbackQuestion, FeedbackResponse.question_id == FeedbackQuestion.id)
            .filter(FeedbackQuestion.kind == kind)
            .filter(FeedbackQuestion.container_id == container_id)
            .filter(FeedbackResponse.learner_id == learner_id)
            .all()
        )
