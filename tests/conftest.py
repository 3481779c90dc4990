"""
Pytest configuration and shared fixtures.
"""

import threading
from unittest.mock import MagicMock

import pytest

from shell_assistant.entities.command import ModelCandidate
from shell_assistant.ports.llm.llm_port import LLMPort
from shell_assistant.use_cases.command.resolve_model import (
    ResolutionConfig,
    ResolutionEngine,
)

# Sentinel outcome: the fake blocks until the test releases it.
HANG = object()


class FakeLLM(LLMPort):
    """LLMPort that replays a scripted outcome per model and records calls.

    Each script entry is a string (returned), an exception (raised) or
    ``HANG`` (blocks until released). The last entry repeats once the script
    runs out.
    """

    def __init__(self, scripts: dict, release: threading.Event):
        self._scripts = {model: list(outcomes) for model, outcomes in scripts.items()}
        self._release = release
        self._lock = threading.Lock()
        self.calls: list[tuple[str, str]] = []

    def generate(self, model: str, prompt: str) -> str:
        with self._lock:
            self.calls.append((model, prompt))
            outcomes = self._scripts[model]
            outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if outcome is HANG:
            self._release.wait(timeout=10)
            return '{"command": "too late", "explanation": "abandoned"}'
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def models_called(self) -> list[str]:
        return [model for model, _ in self.calls]


@pytest.fixture
def mock_logger():
    """
    Create a mock logger for testing.

    Returns:
        Mock logger instance
    """
    return MagicMock()


@pytest.fixture
def release_event():
    """Event that unblocks hanging fake calls once the test is done."""
    event = threading.Event()
    yield event
    event.set()


@pytest.fixture
def hang():
    """Script entry that makes a FakeLLM call block past any timeout."""
    return HANG


@pytest.fixture
def fake_llm(release_event):
    """Factory for scripted FakeLLM instances."""

    def _make(scripts: dict) -> FakeLLM:
        return FakeLLM(scripts, release_event)

    return _make


@pytest.fixture
def sleeps():
    """Records the cooldowns requested by the engine instead of sleeping."""
    return []


@pytest.fixture
def make_engine(sleeps, mock_logger):
    """Build a ResolutionEngine over the given adapter and model names."""

    def _make(
        llm_adapter: LLMPort,
        models: list[str],
        max_attempts: int = 3,
        timeout_seconds: float = 1.0,
        overload_cooldown_seconds: float = 2.0,
    ) -> ResolutionEngine:
        config = ResolutionConfig(
            candidates=ModelCandidate.from_identifiers(models),
            max_attempts=max_attempts,
            timeout_seconds=timeout_seconds,
            overload_cooldown_seconds=overload_cooldown_seconds,
        )
        return ResolutionEngine(llm_adapter, config, logger=mock_logger, sleep=sleeps.append)

    return _make
