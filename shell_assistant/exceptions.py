"""
Custom exceptions for the application.
"""

from enum import Enum
from typing import Any, Optional


class LLMErrorKind(str, Enum):
    """Structured classification of an upstream generation failure."""

    OVERLOADED = "overloaded"
    TIMEOUT = "timeout"
    INVALID_CREDENTIAL = "invalid_credential"
    MALFORMED = "malformed"
    # The call succeeded but the model returned no text.
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


class BaseAppError(Exception):
    """Base exception class for application errors."""

    pass


class LLMError(BaseAppError):
    """Exception raised for LLM-related errors.

    The ``kind`` attribute carries the classification the resolution
    engine branches on.
    """

    def __init__(self, message: str, kind: LLMErrorKind = LLMErrorKind.UNKNOWN):
        super().__init__(message)
        self.kind = kind


class ConfigurationError(BaseAppError):
    """Exception raised for configuration errors."""

    pass


class InvalidInputError(BaseAppError):
    """Exception raised when a user request is rejected before resolution."""

    pass


class ResolutionExhaustedError(BaseAppError):
    """Exception raised when every model candidate used up its attempts."""

    def __init__(self, attempts: list[Any]):
        """
        Args:
            attempts: AttemptRecord entries in the order they were made
        """
        self.attempts = list(attempts)
        last = self.last_failure
        if last is None:
            message = "No model candidates were attempted"
        else:
            message = (
                f"All model candidates exhausted after {len(self.attempts)} attempts; "
                f"last error ({last.error_kind.value}): {last.message}"
            )
        super().__init__(message)

    @property
    def last_failure(self) -> Optional[Any]:
        """The most recently recorded failed attempt, if any."""
        for record in reversed(self.attempts):
            if not record.succeeded:
                return record
        return None

    @property
    def last_error_kind(self) -> LLMErrorKind:
        last = self.last_failure
        return last.error_kind if last is not None else LLMErrorKind.UNKNOWN

    @property
    def last_error_message(self) -> str:
        last = self.last_failure
        return last.message if last is not None else str(self)

    @property
    def is_overloaded(self) -> bool:
        return self.last_error_kind is LLMErrorKind.OVERLOADED
