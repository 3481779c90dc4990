"""
OpenAI adapter implementation for LLM operations.

Talks to any OpenAI-compatible chat completions endpoint (Gemini's by
default) and translates SDK exceptions into ``LLMErrorKind`` values.
"""

import logging
from typing import Any, Optional, cast

import openai
from openai import OpenAI
from openai.types.chat import ChatCompletionMessageParam
from typing_extensions import override

from shell_assistant.config.settings import settings
from shell_assistant.exceptions import LLMError, LLMErrorKind
from shell_assistant.ports.llm.llm_port import LLMPort

# Upstream statuses that mean "temporarily unavailable, try again later".
OVERLOAD_STATUS_CODES = frozenset({429, 502, 503, 504, 529})


def classify_error(error: Exception) -> LLMErrorKind:
    """
    Map an exception raised by the OpenAI SDK to an error kind.

    Args:
        error: Exception raised while calling the API

    Returns:
        The matching LLMErrorKind
    """
    if isinstance(error, openai.APITimeoutError):
        return LLMErrorKind.TIMEOUT
    if isinstance(error, openai.RateLimitError):
        return LLMErrorKind.OVERLOADED
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return LLMErrorKind.INVALID_CREDENTIAL
    if isinstance(
        error,
        (openai.BadRequestError, openai.NotFoundError, openai.UnprocessableEntityError),
    ):
        return LLMErrorKind.MALFORMED
    if isinstance(error, openai.APIStatusError):
        if error.status_code in OVERLOAD_STATUS_CODES:
            return LLMErrorKind.OVERLOADED
        return LLMErrorKind.UNKNOWN
    return LLMErrorKind.UNKNOWN


class OpenAIAdapter(LLMPort):
    """OpenAI-compatible implementation of the LLM port."""

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 512,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the OpenAI adapter.

        Args:
            api_key: Upstream API key (defaults to settings)
            api_base: API base URL (defaults to settings)
            temperature: Sampling temperature sent with every request
            max_tokens: Completion token cap sent with every request
            timeout: HTTP timeout in seconds for each upstream call (defaults to
                settings), so an abandoned call does not outlive its attempt for long
            logger: Logger instance to use for logging. If None, a default logger will be created.

        Raises:
            ConfigurationError: If no API key is given or configured
        """
        self.api_key: str = api_key or settings.require_api_key()
        self.api_base: str | None = api_base or settings.api_base
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout: float = timeout if timeout is not None else settings.timeout_seconds
        self._logger: logging.Logger = logger or logging.getLogger(__name__)

        # Retries belong to the resolution engine, not the SDK.
        self.client: OpenAI = OpenAI(
            api_key=self.api_key,
            base_url=self.api_base,
            timeout=self.timeout,
            max_retries=0,
        )

    def _prepare_messages(self, prompt: str) -> list[ChatCompletionMessageParam]:
        return cast(
            list[ChatCompletionMessageParam],
            [{"role": "user", "content": prompt}],
        )

    def _extract_response_content(self, response: Any) -> str:
        """
        Extract content from the OpenAI response.

        Args:
            response: The response from OpenAI API

        Returns:
            The extracted content

        Raises:
            LLMError: If response is empty or invalid
        """
        choices = getattr(response, "choices", None) or []
        if not choices:
            raise LLMError("No response generated from the model")
        message = getattr(choices[0], "message", None)
        if message is None:
            raise LLMError("Malformed response: missing message")
        content: Optional[str] = getattr(message, "content", None)
        if content and content.strip():
            return content.strip()
        raise LLMError("Empty response received from the model", kind=LLMErrorKind.EMPTY_RESPONSE)

    @override
    def generate(self, model: str, prompt: str) -> str:
        """
        Generate raw text from an OpenAI-compatible model.

        Args:
            model: Model identifier understood by the endpoint
            prompt: The fully rendered prompt

        Returns:
            Generated text response

        Raises:
            LLMError: If text generation fails
        """
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=self._prepare_messages(prompt),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            kind = classify_error(e)
            self._logger.debug(f"Upstream call to {model} failed ({kind.value}): {e}")
            raise LLMError(f"Failed to generate response: {str(e)}", kind=kind) from e

        return self._extract_response_content(response)

    @override
    def get_model_info(self) -> dict[str, Any]:
        return {"provider": "openai-compatible", "api_base": self.api_base}
