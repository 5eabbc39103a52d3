import uuid

from extensions import db


class FeedbackOption(db.Model):
    """Selectable option of a multiple choice feedback question."""
    __tablename__ = "feedback_option"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    question_id = db.Column(db.Uuid, db.ForeignKey("feedback_question.id", ondelete="CASCADE"), nullable=False)
    option_text = db.Column(db.String(200), nullable=False)

    question = db.relationship("FeedbackQuestion", back_populates="options")

    __table_args__ = (
        db.UniqueConstraint("question_id", "option_text", name="uq_feedback_option_question_text"),
        db.Index("ix_feedback_option_question", "question_id"),
    )
