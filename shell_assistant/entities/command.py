"""
Command domain entities.
"""

from dataclasses import dataclass
from typing import Any, Optional

from shell_assistant.exceptions import InvalidInputError, LLMErrorKind


@dataclass(frozen=True)
class UserRequest:
    """Free-text task description submitted by the caller."""

    text: str

    @classmethod
    def from_input(cls, raw: Optional[str], max_length: Optional[int] = None) -> "UserRequest":
        """
        Build a request from raw caller input.

        Args:
            raw: Text as received from the caller (may be None)
            max_length: Longest accepted text, or None for no limit

        Returns:
            UserRequest with the text left as submitted

        Raises:
            InvalidInputError: If the text is missing, blank or too long
        """
        if raw is None or not isinstance(raw, str) or not raw.strip():
            raise InvalidInputError("Please enter a request.")
        if max_length is not None and len(raw) > max_length:
            raise InvalidInputError(
                f"Request is too long ({len(raw)} characters). "
                f"Please keep requests under {max_length} characters."
            )
        return cls(text=raw)


@dataclass(frozen=True)
class ModelCandidate:
    """One upstream model identifier, ranked by preference (0 is tried first)."""

    identifier: str
    priority: int

    @staticmethod
    def from_identifiers(identifiers: list[str]) -> tuple["ModelCandidate", ...]:
        return tuple(
            ModelCandidate(identifier=name, priority=index)
            for index, name in enumerate(identifiers)
        )


@dataclass(frozen=True)
class AttemptRecord:
    """Outcome of one generation call against one candidate."""

    model_identifier: str
    attempt_number: int
    raw_text: Optional[str] = None
    error_kind: Optional[LLMErrorKind] = None
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, model_identifier: str, attempt_number: int, raw_text: str) -> "AttemptRecord":
        return cls(model_identifier, attempt_number, raw_text=raw_text)

    @classmethod
    def failure(
        cls,
        model_identifier: str,
        attempt_number: int,
        error_kind: LLMErrorKind,
        message: str,
    ) -> "AttemptRecord":
        return cls(model_identifier, attempt_number, error_kind=error_kind, message=message)


@dataclass(frozen=True)
class Resolution:
    """Raw text produced by the first successful attempt."""

    raw_text: str
    model_used: str
    attempt_number: int


@dataclass(frozen=True)
class StructuredResult:
    """Validated command suggestion returned to the caller."""

    command: str
    explanation: str
    model_used: str = ""
    attempt: int = 0

    def with_origin(self, model_used: str, attempt: int) -> "StructuredResult":
        return StructuredResult(self.command, self.explanation, model_used, attempt)

    def get_details(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "explanation": self.explanation,
            "model_used": self.model_used,
            "attempt": self.attempt,
        }


FALLBACK_COMMAND = "echo 'Error parsing AI response'"
FALLBACK_EXPLANATION = (
    "The assistant's response could not be interpreted. Please try rephrasing your request."
)

FALLBACK_RESULT = StructuredResult(command=FALLBACK_COMMAND, explanation=FALLBACK_EXPLANATION)
