"""
Configuration settings for the application.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from shell_assistant.exceptions import ConfigurationError

# Load environment variables from .env file
_ = load_dotenv()

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODELS = "gemini-2.0-flash-lite,gemini-2.0-flash,gemini-2.5-flash"
API_KEY_ENV_VARS = ("GOOGLE_API_KEY", "GEMINI_API_KEY", "LLM_API_KEY")


class Settings:
    """Application settings loaded from environment variables.

    The credential is optional at load time so the server can start and
    answer with a misconfiguration error instead of crashing on import.
    """

    def __init__(self):
        self.api_key: Optional[str] = self._get_first_env(API_KEY_ENV_VARS)
        self.api_base: str = self._get_env("LLM_API_BASE", DEFAULT_API_BASE)
        self.models: list[str] = self._get_list_env("LLM_MODELS", DEFAULT_MODELS)
        self.max_attempts: int = self._get_int_env("LLM_MAX_ATTEMPTS", 3)
        self.timeout_seconds: float = self._get_float_env("LLM_TIMEOUT_SECONDS", 8.0)
        self.overload_cooldown_seconds: float = self._get_float_env(
            "LLM_OVERLOAD_COOLDOWN_SECONDS", 2.0
        )
        self.retry_after_seconds: int = self._get_int_env("LLM_RETRY_AFTER_SECONDS", 30)
        self.max_input_length: int = self._get_int_env("MAX_INPUT_LENGTH", 1000)
        self.cors_allow_origins: list[str] = self._get_list_env("CORS_ALLOW_ORIGINS", "*")
        self.log_level: str = self._get_env("LOG_LEVEL", "INFO").upper()

        if not self.models:
            raise ConfigurationError("LLM_MODELS must name at least one model")
        if self.max_attempts < 1:
            raise ConfigurationError("LLM_MAX_ATTEMPTS must be at least 1")
        if self.timeout_seconds <= 0:
            raise ConfigurationError("LLM_TIMEOUT_SECONDS must be positive")
        if self.overload_cooldown_seconds < 0:
            raise ConfigurationError("LLM_OVERLOAD_COOLDOWN_SECONDS must not be negative")
        if self.retry_after_seconds < 1:
            raise ConfigurationError("LLM_RETRY_AFTER_SECONDS must be at least 1")

    def require_api_key(self) -> str:
        """Return the upstream credential, raise error if missing."""
        if not self.api_key:
            raise ConfigurationError(
                "No upstream API key configured. Set one of: " + ", ".join(API_KEY_ENV_VARS)
            )
        return self.api_key

    def _get_first_env(self, keys: tuple[str, ...]) -> Optional[str]:
        """Get the first non-empty environment variable among keys."""
        for key in keys:
            value = os.getenv(key)
            if value:
                return value
        return None

    def _get_env(self, key: str, default: str) -> str:
        """Get an environment variable with a default value."""
        return os.getenv(key, default)

    def _get_list_env(self, key: str, default: str) -> list[str]:
        """Get a comma-separated environment variable as a list."""
        raw = self._get_env(key, default)
        return [item.strip() for item in raw.split(",") if item.strip()]

    def _get_int_env(self, key: str, default: int) -> int:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"Environment variable {key} must be an integer, got {raw!r}")

    def _get_float_env(self, key: str, default: float) -> float:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        try:
            return float(raw)
        except ValueError:
            raise ConfigurationError(f"Environment variable {key} must be a number, got {raw!r}")


# Global settings instance
settings = Settings()
