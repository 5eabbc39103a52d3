import uuid

from sqlalchemy.exc import OperationalError

from extensions import db
from lxpfeedback.models import FeedbackResponse
from tests.setup_db import QUIZ_ID, TOPIC_ID


def _quiz_body(question, learner, **extra):
    body = {"quiz_feedback_question_id": str(question.id), "learner_id": str(learner.id)}
    body.update(extra)
    return body


def test_submit_quiz_feedback(client, questions, learner):
    res = client.post("/feedback/quiz", json=_quiz_body(questions["quiz_text"], learner, response="Great course"))

    assert res.status_code == 201
    data = res.get_json()
    assert data["status"] == "ok"
    assert data["feedback"]["quiz_id"] == str(QUIZ_ID)


def test_duplicate_submission_is_conflict(client, questions, learner):
    body = _quiz_body(questions["quiz_text"], learner, response="Great course")
    client.post("/feedback/quiz", json=body)

    res = client.post("/feedback/quiz", json=body)

    assert res.status_code == 409
    assert res.get_json()["status"] == "error"
    assert FeedbackResponse.query.count() == 1


def test_validation_errors_are_listed(client):
    res = client.post("/feedback/topic", json={"learner_id": "nope"})

    assert res.status_code == 400
    fields = {e["field"] for e in res.get_json()["errors"]}
    assert fields == {"topic_feedback_question_id", "learner_id", "response"}


def test_unknown_option_names_the_field(client, questions, learner):
    res = client.post("/feedback/quiz", json=_quiz_body(questions["quiz_mcq"], learner, option_text="Meh"))

    assert res.status_code == 400
    assert res.get_json()["field"] == "option_text"


def test_unknown_kind_is_rejected(client):
    res = client.post("/feedback/course", json={})

    assert res.status_code == 400
    assert res.get_json()["field"] == "kind"


def test_body_must_be_json(client):
    res = client.post("/feedback/quiz", data="response=hi")

    assert res.status_code == 400


def test_batch_is_fail_fast(client, questions, learner):
    res = client.post("/feedback/quiz/batch", json=[
        _quiz_body(questions["quiz_text"], learner, response="Great course"),
        _quiz_body(questions["quiz_mcq"], learner),
    ])

    assert res.status_code == 400
    assert FeedbackResponse.query.count() == 1


def test_batch_body_must_be_a_list(client, questions, learner):
    res = client.post("/feedback/topic/batch", json={"learner_id": str(learner.id)})

    assert res.status_code == 400


def test_topic_batch_and_status(client, questions, learner):
    res = client.post("/feedback/topic/batch", json=[
        {"topic_feedback_question_id": str(questions["topic_text"].id), "learner_id": str(learner.id), "response": "Clear"},
        {"topic_feedback_question_id": str(questions["topic_mcq"].id), "learner_id": str(learner.id), "option_text": "Good"},
    ])
    assert res.status_code == 201
    assert res.get_json()["submitted"] == 2

    res = client.get(f"/feedback/topic/{TOPIC_ID}/status/{learner.id}")

    assert res.status_code == 200
    status = res.get_json()["feedback_status"]
    assert status["learner_id"] == str(learner.id)
    assert status["is_topic_feedback_submitted"] is True


def test_quiz_status_for_new_learner(client, seeded):
    res = client.get(f"/feedback/quiz/{QUIZ_ID}/status/{uuid.uuid4()}")

    assert res.status_code == 200
    assert res.get_json()["feedback_status"]["is_quiz_feedback_submitted"] is False


def test_status_with_malformed_id(client):
    res = client.get(f"/feedback/quiz/not-a-uuid/status/{uuid.uuid4()}")

    assert res.status_code == 400
    assert res.get_json()["field"] == "quiz_id"


def test_storage_failure_is_service_unavailable(client, questions, learner, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db.session, "commit", broken_commit)

    res = client.post("/feedback/quiz", json=_quiz_body(questions["quiz_text"], learner, response="Great course"))

    assert res.status_code == 503
    assert res.get_json()["status"] == "error"


def test_failed_batch_reports_position_and_stored_count(client, questions, learner):
    res = client.post("/feedback/quiz/batch", json=[
        _quiz_body(questions["quiz_text"], learner, response="Great course"),
        _quiz_body(questions["quiz_mcq"], learner, option_text="Excellent"),
        _quiz_body(questions["quiz_mcq"], learner, option_text="Good"),
    ])

    assert res.status_code == 400
    data = res.get_json()
    assert data["field"] == "option_text"
    assert data["failed_index"] == 1
    assert data["submitted"] == 1


def test_single_submission_error_has_no_batch_fields(client, questions, learner):
    res = client.post("/feedback/quiz", json=_quiz_body(questions["quiz_mcq"], learner, option_text="Excellent"))

    assert "failed_index" not in res.get_json()
