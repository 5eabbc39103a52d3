import datetime
import uuid

from extensions import db


class Learner(db.Model):
    __tablename__ = "learner"
    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)
