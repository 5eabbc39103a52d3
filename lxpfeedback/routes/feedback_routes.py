import uuid

from flask import Blueprint, jsonify, request

from lxpfeedback.constants import FeedbackKind
from lxpfeedback.errors import DuplicateSubmission, InvalidArgument, PersistenceError, ValidationError
from lxpfeedback.services.feedback_response_service import FeedbackResponseService

feedback_bp = Blueprint("feedback", __name__)


def _service():
    return FeedbackResponseService()


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise InvalidArgument("Request body must be JSON.")
    return data


def _parse_uuid(value, field):
    try:
        return uuid.UUID(value)
    except ValueError:
        raise InvalidArgument(f"Invalid {field}.", field=field)


# -------------------
# ERROR MAPPING
# -------------------
def _error(exc, code, **body):
    body = {"status": "error", **body}
    if exc.failed_index is not None:
        body["failed_index"] = exc.failed_index
        body["submitted"] = exc.submitted
    return jsonify(body), code


@feedback_bp.errorhandler(ValidationError)
def handle_validation_error(exc):
    errors = [{"field": e.field, "msg": e.message} for e in exc.errors]
    return _error(exc, 400, msg="Validation failed", errors=errors)


@feedback_bp.errorhandler(InvalidArgument)
def handle_invalid_argument(exc):
    return _error(exc, 400, msg=exc.message, field=exc.field)


@feedback_bp.errorhandler(DuplicateSubmission)
def handle_duplicate(exc):
    return _error(exc, 409, msg=str(exc))


@feedback_bp.errorhandler(PersistenceError)
def handle_persistence_error(exc):
    return _error(exc, 503, msg=str(exc))


# -------------------
# SUBMIT
# -------------------
@feedback_bp.route("/<kind>", methods=["POST"])
def submit_feedback(kind):
    feedback_kind = _parse_kind(kind)
    submission = _service().submit(feedback_kind, _json_body())
    return jsonify({"status": "ok", "feedback": submission.model_dump(mode="json")}), 201


@feedback_bp.route("/<kind>/batch", methods=["POST"])
def submit_feedback_batch(kind):
    feedback_kind = _parse_kind(kind)
    items = _json_body()
    if not isinstance(items, list):
        raise InvalidArgument("Batch body must be a JSON list.")

    submitted = _service().submit_many(feedback_kind, items)
    return jsonify({
        "status": "ok",
        "submitted": len(submitted),
        "feedback": [s.model_dump(mode="json") for s in submitted],
    }), 201


# -------------------
# STATUS
# -------------------
@feedback_bp.route("/quiz/<quiz_id>/status/<learner_id>", methods=["GET"])
def quiz_feedback_status(quiz_id, learner_id):
    status = _service().get_quiz_feedback_status(
        _parse_uuid(learner_id, "learner_id"),
        _parse_uuid(quiz_id, "quiz_id"),
    )
    return jsonify({"status": "ok", "feedback_status": status.model_dump(mode="json")})


@feedback_bp.route("/topic/<topic_id>/status/<learner_id>", methods=["GET"])
def topic_feedback_status(topic_id, learner_id):
    status = _service().get_topic_feedback_status(
        _parse_uuid(learner_id, "learner_id"),
        _parse_uuid(topic_id, "topic_id"),
    )
    return jsonify({"status": "ok", "feedback_status": status.model_dump(mode="json")})


def _parse_kind(kind):
    try:
        return FeedbackKind(kind)
    except ValueError:
        raise InvalidArgument(f"Unknown feedback kind '{kind}'.", field="kind")
