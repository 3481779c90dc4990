"""Unit tests for the server launcher CLI."""

from unittest.mock import patch

import pytest

from shell_assistant.cli_serve import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("HOST", "PORT", "RELOAD", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    with patch("shell_assistant.cli_serve.uvicorn.run") as mock_run:
        code = main([])

    assert code == 0
    mock_run.assert_called_once_with(
        "shell_assistant.main:app",
        host="127.0.0.1",
        port=8000,
        reload=False,
        log_level="info",
    )


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("RELOAD", "1")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    with patch("shell_assistant.cli_serve.uvicorn.run") as mock_run:
        main([])

    kwargs = mock_run.call_args.kwargs
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is True
    assert kwargs["log_level"] == "debug"


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")

    with patch("shell_assistant.cli_serve.uvicorn.run") as mock_run:
        main(["--host", "localhost", "--port", "8123", "--reload"])

    kwargs = mock_run.call_args.kwargs
    assert kwargs["host"] == "localhost"
    assert kwargs["port"] == 8123
    assert kwargs["reload"] is True


def test_invalid_port_flag_exits():
    with patch("shell_assistant.cli_serve.uvicorn.run") as mock_run:
        with pytest.raises(SystemExit) as exc_info:
            main(["--port", "http"])

    assert exc_info.value.code == 2
    mock_run.assert_not_called()
