"""
Use case for turning a natural-language request into a shell command.
"""

import logging
from typing import Callable, Optional

from shell_assistant.entities.command import StructuredResult, UserRequest
from shell_assistant.exceptions import LLMErrorKind, ResolutionExhaustedError
from shell_assistant.use_cases.command.normalize_response import normalize_response
from shell_assistant.use_cases.command.prompt_builder import build_prompt
from shell_assistant.use_cases.command.resolve_model import ResolutionEngine


class GenerateCommandUseCase:
    """Use case for generating a shell command from free text."""

    def __init__(
        self,
        engine_factory: Callable[[], ResolutionEngine],
        max_input_length: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            engine_factory: Returns the resolution engine; called only after the
                input is validated, so a missing credential surfaces after 400s
            max_input_length: Longest accepted request text
            logger: Logger instance to use for logging
        """
        self._engine_factory = engine_factory
        self._max_input_length = max_input_length
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, user_input: Optional[str]) -> StructuredResult:
        """
        Generate a command suggestion for the given request.

        Args:
            user_input: Raw request text from the caller

        Returns:
            StructuredResult, or the fallback result when the model output
            could not be interpreted or the last attempt came back blank

        Raises:
            InvalidInputError: If the request is blank or too long
            ConfigurationError: If the upstream credential is missing
            ResolutionExhaustedError: If every model attempt failed and the
                last one was not a blank reply
        """
        request = UserRequest.from_input(user_input, self._max_input_length)
        engine = self._engine_factory()

        self._logger.info(f"Generating command for request: '{request.text}'")
        try:
            resolution = engine.resolve(build_prompt(request.text))
        except ResolutionExhaustedError as e:
            last = e.last_failure
            if last is None or last.error_kind is not LLMErrorKind.EMPTY_RESPONSE:
                raise
            # The upstream answered, just with nothing usable.
            self._logger.warning(
                f"{last.model_identifier} returned blank text on its last attempt, "
                "using the fallback command"
            )
            return normalize_response("").with_origin(
                last.model_identifier, last.attempt_number
            )

        result = normalize_response(resolution.raw_text)
        self._logger.info(
            f"Command generated by {resolution.model_used} on attempt {resolution.attempt_number}"
        )
        return result.with_origin(resolution.model_used, resolution.attempt_number)
