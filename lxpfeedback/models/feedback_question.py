import datetime
import uuid

from extensions import db
from lxpfeedback.constants import FeedbackKind


class FeedbackQuestion(db.Model):
    """
    Feedback question defined under a container (a quiz or a topic).
    Supports:
    - Multiple choice (MCQ), answered by picking one of ``options``
    - Descriptive, answered with free text
    """
    __tablename__ = "feedback_question"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    kind = db.Column(
        db.Enum(FeedbackKind, name="feedback_kind", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    container_id = db.Column(db.Uuid, nullable=False)   # quiz id or topic id, depending on kind
    question_no = db.Column(db.Integer, default=1)
    question_type = db.Column(db.String(20), nullable=False)
    question = db.Column(db.String(500), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)

    options = db.relationship(
        "FeedbackOption",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="FeedbackOption.option_text",
    )

    __table_args__ = (
        db.UniqueConstraint("kind", "container_id", "question_no", name="uq_feedback_question_container_no"),
        db.Index("ix_feedback_question_container", "kind", "container_id"),
    )
