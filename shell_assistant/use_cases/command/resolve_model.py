"""
Use case for resolving a prompt against a prioritized list of models.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from shell_assistant.entities.command import AttemptRecord, ModelCandidate, Resolution
from shell_assistant.exceptions import LLMError, LLMErrorKind, ResolutionExhaustedError
from shell_assistant.ports.llm.llm_port import LLMPort


@dataclass(frozen=True)
class ResolutionConfig:
    """Read-only retry policy shared by every request."""

    candidates: tuple[ModelCandidate, ...]
    max_attempts: int = 3
    timeout_seconds: float = 8.0
    overload_cooldown_seconds: float = 2.0

    @classmethod
    def from_settings(cls, settings: Any) -> "ResolutionConfig":
        return cls(
            candidates=ModelCandidate.from_identifiers(settings.models),
            max_attempts=settings.max_attempts,
            timeout_seconds=settings.timeout_seconds,
            overload_cooldown_seconds=settings.overload_cooldown_seconds,
        )


class ResolutionEngine:
    """Drive candidates in priority order until one attempt returns text.

    Candidates are the outer loop and attempts the inner one. Every call is
    raced against ``timeout_seconds``; a call that loses the race is
    abandoned and its eventual result discarded. Only overload failures
    wait ``overload_cooldown_seconds`` before the next attempt on the same
    candidate.
    """

    def __init__(
        self,
        llm_adapter: LLMPort,
        config: ResolutionConfig,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the engine.

        Args:
            llm_adapter: Adapter for LLM operations
            config: Candidates and retry/timeout constants
            logger: Logger instance to use for logging
            sleep: Blocking delay used for the overload cooldown
        """
        self._llm_adapter = llm_adapter
        self._config = config
        self._logger = logger or logging.getLogger(__name__)
        self._sleep = sleep

    @property
    def config(self) -> ResolutionConfig:
        return self._config

    def resolve(
        self, prompt: str, candidates: Optional[Sequence[ModelCandidate]] = None
    ) -> Resolution:
        """
        Run the prompt through the candidates until one succeeds.

        Args:
            prompt: The fully rendered prompt
            candidates: Override for the configured candidates

        Returns:
            Resolution holding the raw text, the model used and its attempt number

        Raises:
            ResolutionExhaustedError: If every attempt on every candidate failed
        """
        ordered = sorted(
            candidates if candidates is not None else self._config.candidates,
            key=lambda c: c.priority,
        )
        max_attempts = self._config.max_attempts
        attempts: list[AttemptRecord] = []

        # One worker per possible attempt so an abandoned call never delays the next.
        executor = ThreadPoolExecutor(
            max_workers=max(1, len(ordered) * max_attempts),
            thread_name_prefix="llm-attempt",
        )
        try:
            for candidate in ordered:
                self._logger.info(f"Trying model {candidate.identifier}")
                for attempt_number in range(1, max_attempts + 1):
                    record = self._attempt(executor, candidate, attempt_number, prompt)
                    attempts.append(record)

                    if record.succeeded:
                        self._logger.info(
                            f"Model {candidate.identifier} answered on attempt {attempt_number}"
                        )
                        return Resolution(
                            raw_text=record.raw_text or "",
                            model_used=candidate.identifier,
                            attempt_number=attempt_number,
                        )

                    self._logger.warning(
                        f"Attempt {attempt_number}/{max_attempts} on {candidate.identifier} "
                        f"failed ({record.error_kind.value}): {record.message}"
                    )
                    if (
                        record.error_kind is LLMErrorKind.OVERLOADED
                        and attempt_number < max_attempts
                    ):
                        cooldown = self._config.overload_cooldown_seconds
                        self._logger.info(
                            f"{candidate.identifier} is overloaded, waiting {cooldown}s"
                        )
                        self._sleep(cooldown)
                self._logger.warning(f"Model {candidate.identifier} exhausted")
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        error = ResolutionExhaustedError(attempts)
        self._logger.error(str(error))
        raise error

    def _attempt(
        self,
        executor: ThreadPoolExecutor,
        candidate: ModelCandidate,
        attempt_number: int,
        prompt: str,
    ) -> AttemptRecord:
        """Make one timed call and record its outcome."""
        model = candidate.identifier
        future: Future[str] = executor.submit(self._llm_adapter.generate, model, prompt)
        try:
            raw_text = future.result(timeout=self._config.timeout_seconds)
        except FutureTimeoutError:
            future.cancel()
            return AttemptRecord.failure(
                model,
                attempt_number,
                LLMErrorKind.TIMEOUT,
                f"No response from {model} within {self._config.timeout_seconds}s",
            )
        except LLMError as e:
            return AttemptRecord.failure(model, attempt_number, e.kind, str(e))
        except Exception as e:
            return AttemptRecord.failure(model, attempt_number, LLMErrorKind.UNKNOWN, str(e))

        if not isinstance(raw_text, str) or not raw_text.strip():
            return AttemptRecord.failure(
                model,
                attempt_number,
                LLMErrorKind.EMPTY_RESPONSE,
                "Empty response received from the model",
            )
        self._logger.debug(f"Raw response from {model}: {raw_text}")
        return AttemptRecord.success(model, attempt_number, raw_text)
