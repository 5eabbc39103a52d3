import pytest

from app import create_app
from config import TestConfig
from extensions import db
from lxpfeedback.services.feedback_response_service import FeedbackResponseService
from tests.setup_db import seed_demo_data


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    return seed_demo_data()


@pytest.fixture
def learner(seeded):
    return seeded["learners"]["alice"]


@pytest.fixture
def questions(seeded):
    return seeded["questions"]


@pytest.fixture
def service(app):
    return FeedbackResponseService()
