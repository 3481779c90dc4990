"""
Turn raw model output into a validated command suggestion.
"""

import json
import logging
import re
from typing import Any, Optional

from pydantic import BaseModel, ValidationError, field_validator

from shell_assistant.entities.command import FALLBACK_RESULT, StructuredResult

# Opening fence with optional language tag, and the matching closing fence.
_FENCE_RE = re.compile(r"^\s*```[\w+-]*[ \t]*\r?\n?(.*?)\r?\n?```\s*$", re.DOTALL)

log = logging.getLogger(__name__)


class _CommandPayload(BaseModel):
    command: str
    explanation: str

    @field_validator("command", "explanation")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if there is one."""
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def _outermost_object(text: str) -> Optional[str]:
    """Return the span from the first ``{`` to the last ``}``."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def _validate(data: Any) -> Optional[StructuredResult]:
    if not isinstance(data, dict):
        return None
    try:
        payload = _CommandPayload.model_validate(data)
    except ValidationError as e:
        log.debug("model output failed validation: %s", e)
        return None
    return StructuredResult(command=payload.command, explanation=payload.explanation)


def _parse(candidate: Optional[str]) -> Optional[StructuredResult]:
    if candidate is None:
        return None
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return _validate(data)


def normalize_response(raw_text: str) -> StructuredResult:
    """Extract ``{command, explanation}`` from raw model text.

    Tries the fence-stripped text first, then the outermost brace span of
    the raw text. Anything that does not yield two non-empty string fields
    returns ``FALLBACK_RESULT``. Never raises.
    """
    if not isinstance(raw_text, str):
        return FALLBACK_RESULT

    result = _parse(strip_code_fence(raw_text))
    if result is None:
        result = _parse(_outermost_object(raw_text))
    if result is None:
        log.warning("could not interpret model output, using fallback")
        log.debug("uninterpretable output: %r", raw_text)
        return FALLBACK_RESULT
    return result
