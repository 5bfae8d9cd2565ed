"""Exceptions raised inside the validation pipeline.

`DecodeError` and `NegotiationError` never escape `Validator.validate`: the
orchestrator turns them into invalid field outcomes.
"""

from .models import ErrorDetailModel


class ValidatorError(Exception):
    """Base class for apivalidator errors."""


class DecodeError(ValidatorError):
    """Raised when a payload cannot be parsed by a decode method.

    Attributes:
        method: Name of the decode method that failed.
    """

    def __init__(self, method: str, message: str | None = None):
        self.method = method
        super().__init__(message or f"failed to parse {method}")


class NegotiationError(ValidatorError):
    """Raised when no decode method can be picked for a content-type.

    Attributes:
        reason: Short machine-friendly reason ("unsupported content-type"
            or "unknown decode method").
        content_type: The content-type, parameters stripped.
        method: The decode method that was rejected, if any.
    """

    UNSUPPORTED_CONTENT_TYPE = "unsupported content-type"
    UNKNOWN_METHOD = "unknown decode method"

    def __init__(self, reason: str, content_type: str, method: str | None = None):
        self.reason = reason
        self.content_type = content_type
        self.method = method
        subject = method if reason == self.UNKNOWN_METHOD else content_type
        super().__init__(f"{reason}: {subject}")

    def to_detail(self) -> ErrorDetailModel:
        return ErrorDetailModel(
            message=str(self),
            content_type=self.content_type,
            method=self.method,
        )
