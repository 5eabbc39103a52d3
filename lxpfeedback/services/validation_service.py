from collections.abc import Mapping

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from lxpfeedback.errors import FieldError, ValidationError
from lxpfeedback.schemas import SUBMISSION_SCHEMAS


def _as_mapping(payload):
    if isinstance(payload, BaseModel):
        return payload.model_dump()
    if isinstance(payload, Mapping):
        return dict(payload)
    raise ValidationError([FieldError("feedback_response", "Expected an object with feedback fields.")])


def _field_name(loc):
    return ".".join(str(part) for part in loc) or "feedback_response"


def validate_submission(kind, payload):
    """
    Check a quiz/topic feedback payload against the field rules and return the
    validated view model.

    Rules:
    - question id and learner id present and well formed
    - response and option text within their length bounds
    - at least one of response / option text given

    Every failing rule is reported, not just the first one.
    """
    schema = SUBMISSION_SCHEMAS[kind]
    data = _as_mapping(payload)
    errors = []
    submission = None

    try:
        submission = schema.model_validate(data)
    except PydanticValidationError as exc:
        errors.extend(FieldError(_field_name(e["loc"]), e["msg"]) for e in exc.errors())

    if not data.get("response") and not data.get("option_text"):
        errors.append(FieldError("response", "Either a response or an option text must be provided."))

    if errors:
        raise ValidationError(errors)
    return submission
