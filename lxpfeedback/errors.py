from typing import NamedTuple


class FieldError(NamedTuple):
    field: str
    message: str


class FeedbackError(Exception):
    """Base class for everything the feedback workflow raises."""

    # Set by batch submission on the error that stopped the batch.
    failed_index = None
    submitted = None


class ValidationError(FeedbackError):
    """One or more field rules failed. All violations are collected in ``errors``."""

    def __init__(self, errors):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")


class InvalidArgument(FeedbackError, ValueError):
    """Unknown id or a missing conditional field."""

    def __init__(self, message, field=None):
        self.message = message
        self.field = field
        super().__init__(message)


class DuplicateSubmission(FeedbackError):
    """The learner already answered this question."""

    def __init__(self, message="User has already submitted a response for this question."):
        super().__init__(message)


class PersistenceError(FeedbackError):
    """Storage failed; safe to retry."""
