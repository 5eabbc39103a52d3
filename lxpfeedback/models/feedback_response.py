import uuid

from extensions import db
from lxpfeedback.constants import QuestionRef


class FeedbackResponse(db.Model):
    """
    A learner's answer to one feedback question.
    Exactly one of ``response`` (descriptive) and ``option_id`` (MCQ) is set.
    The quiz/topic kind comes from the linked question.
    """
    __tablename__ = "feedback_response"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    question_id = db.Column(db.Uuid, db.ForeignKey("feedback_question.id"), nullable=False)
    learner_id = db.Column(db.Uuid, db.ForeignKey("learner.id"), nullable=False)

    response = db.Column(db.Text, nullable=True)
    option_id = db.Column(db.Uuid, db.ForeignKey("feedback_option.id"), nullable=True)

    generated_at = db.Column(db.DateTime, nullable=False)
    generated_by = db.Column(db.String(50), nullable=False)

    question = db.relationship("FeedbackQuestion")
    option = db.relationship("FeedbackOption")

    __table_args__ = (
        db.UniqueConstraint("question_id", "learner_id", name="uq_feedback_response_question_learner"),
        db.CheckConstraint(
            "(response IS NULL) <> (option_id IS NULL)",
            name="ck_feedback_response_text_or_option",
        ),
        db.Index("ix_feedback_response_learner", "learner_id"),
    )

    @property
    def question_ref(self):
        return QuestionRef(self.question.kind, self.question_id)
