"""
Tests for the API router endpoints.
"""

from unittest.mock import MagicMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from shell_assistant.entities.command import FALLBACK_RESULT, AttemptRecord, StructuredResult
from shell_assistant.exceptions import (
    ConfigurationError,
    LLMErrorKind,
    ResolutionExhaustedError,
)
from shell_assistant.main import app
from shell_assistant.use_cases.command.generate_command import GenerateCommandUseCase

client = TestClient(app)


@pytest.fixture
def mock_settings():
    """Settings stub used by the router for retry hints and health."""
    settings = Mock()
    settings.retry_after_seconds = 30
    settings.models = ["gemini-a", "gemini-b"]
    with patch("shell_assistant.api.routers.get_settings", return_value=settings):
        yield settings


def exhausted(kind: LLMErrorKind, message: str) -> ResolutionExhaustedError:
    return ResolutionExhaustedError(
        [
            AttemptRecord.failure("gemini-a", 1, LLMErrorKind.TIMEOUT, "timed out"),
            AttemptRecord.failure("gemini-b", 1, kind, message),
        ]
    )


class TestCommandAPI:
    """Test cases for the command API endpoint."""

    def test_generate_command_success(self):
        """Test successful command generation."""
        with patch("shell_assistant.api.routers.get_generate_command_uc") as mock_uc:
            mock_uc.return_value.execute.return_value = StructuredResult(
                command="ls -la",
                explanation="Lists all files.",
                model_used="gemini-a",
                attempt=1,
            )

            response = client.post("/api/command", json={"userInput": "list all files"})

            assert response.status_code == 200
            assert response.json() == {
                "command": "ls -la",
                "explanation": "Lists all files.",
                "model_used": "gemini-a",
                "attempt": 1,
            }
            mock_uc.return_value.execute.assert_called_once_with("list all files")

    def test_fallback_payload_is_a_success(self):
        with patch("shell_assistant.api.routers.get_generate_command_uc") as mock_uc:
            mock_uc.return_value.execute.return_value = FALLBACK_RESULT.with_origin("gemini-a", 2)

            response = client.post("/api/command", json={"userInput": "do a thing"})

            assert response.status_code == 200
            data = response.json()
            assert data["command"] == "echo 'Error parsing AI response'"
            assert data["attempt"] == 2

    def test_blank_model_reply_returns_fallback(self, fake_llm, make_engine):
        """A model that only ever answers with whitespace still yields a 200."""
        engine = make_engine(fake_llm({"gemini-a": ["   "]}), ["gemini-a"], max_attempts=1)
        use_case = GenerateCommandUseCase(lambda: engine)
        with patch("shell_assistant.api.routers.get_generate_command_uc", return_value=use_case):
            response = client.post("/api/command", json={"userInput": "list files"})

        assert response.status_code == 200
        assert response.json() == {
            "command": FALLBACK_RESULT.command,
            "explanation": FALLBACK_RESULT.explanation,
            "model_used": "gemini-a",
            "attempt": 1,
        }

    @pytest.mark.parametrize("body", [{"userInput": ""}, {"userInput": "   "}, {}])
    def test_empty_input_rejected_before_resolution(self, body):
        engine_factory = MagicMock()
        use_case = GenerateCommandUseCase(engine_factory)
        with patch("shell_assistant.api.routers.get_generate_command_uc", return_value=use_case):
            response = client.post("/api/command", json=body)

        assert response.status_code == 400
        assert "error" in response.json()
        engine_factory.assert_not_called()

    def test_malformed_body_rejected(self):
        with patch("shell_assistant.api.routers.get_generate_command_uc") as mock_uc:
            response = client.post(
                "/api/command",
                content="not json",
                headers={"Content-Type": "application/json"},
            )

            assert response.status_code == 400
            assert response.json() == {"error": "Invalid request body."}
            mock_uc.return_value.execute.assert_not_called()

    def test_get_not_allowed(self):
        response = client.get("/api/command")
        assert response.status_code == 405

    def test_preflight_has_no_body(self):
        response = client.options("/api/command")
        assert response.status_code == 204
        assert response.content == b""

    def test_missing_credential_is_server_error(self):
        with patch("shell_assistant.api.routers.get_generate_command_uc") as mock_uc:
            mock_uc.return_value.execute.side_effect = ConfigurationError("no key")

            response = client.post("/api/command", json={"userInput": "list files"})

            assert response.status_code == 500
            data = response.json()
            assert "error" in data
            assert "no key" not in data["error"]

    def test_overload_exhaustion_is_service_unavailable(self, mock_settings):
        with patch("shell_assistant.api.routers.get_generate_command_uc") as mock_uc:
            mock_uc.return_value.execute.side_effect = exhausted(
                LLMErrorKind.OVERLOADED, "503 Service Unavailable"
            )

            response = client.post("/api/command", json={"userInput": "list files"})

            assert response.status_code == 503
            data = response.json()
            assert data["error"]
            assert data["suggestion"] == "retry_later"
            assert data["retry_after"] == 30
            assert response.headers["Retry-After"] == "30"

    def test_retry_after_is_always_positive(self, mock_settings):
        mock_settings.retry_after_seconds = 0
        with patch("shell_assistant.api.routers.get_generate_command_uc") as mock_uc:
            mock_uc.return_value.execute.side_effect = exhausted(
                LLMErrorKind.OVERLOADED, "overloaded"
            )

            response = client.post("/api/command", json={"userInput": "list files"})

            assert response.status_code == 503
            assert response.json()["retry_after"] > 0

    def test_terminal_exhaustion_is_internal_error(self, mock_settings):
        with patch("shell_assistant.api.routers.get_generate_command_uc") as mock_uc:
            mock_uc.return_value.execute.side_effect = exhausted(
                LLMErrorKind.INVALID_CREDENTIAL, "API key not valid"
            )

            response = client.post("/api/command", json={"userInput": "list files"})

            assert response.status_code == 500
            data = response.json()
            assert data["error"] == "An internal server error occurred."
            assert data["debug"] == "API key not valid"
            assert "retry_after" not in data

    def test_unexpected_error_is_generic(self):
        with patch("shell_assistant.api.routers.get_generate_command_uc") as mock_uc:
            mock_uc.return_value.execute.side_effect = RuntimeError("secret stack detail")

            response = client.post("/api/command", json={"userInput": "list files"})

            assert response.status_code == 500
            assert response.json() == {"error": "An internal server error occurred."}


class TestHealthAPI:
    def test_health(self, mock_settings):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "models": ["gemini-a", "gemini-b"]}
