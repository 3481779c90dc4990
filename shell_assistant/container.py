"""
Dependency injection container for managing application dependencies.
"""

import logging
from typing import Any, Optional

from shell_assistant.adapters.llm.openai_adapter import OpenAIAdapter
from shell_assistant.config.settings import settings as default_settings
from shell_assistant.ports.llm.llm_port import LLMPort
from shell_assistant.use_cases.command.generate_command import GenerateCommandUseCase
from shell_assistant.use_cases.command.resolve_model import (
    ResolutionConfig,
    ResolutionEngine,
)


class DependencyContainer:
    """
    Container for managing application dependencies using dependency injection.
    """

    def __init__(self, settings: Optional[Any] = None):
        self._settings = settings or default_settings
        self._instances = {}
        self._logger = logging.getLogger(__name__)

    @property
    def settings(self) -> Any:
        return self._settings

    def get_llm_adapter(self) -> LLMPort:
        """
        Get LLM adapter instance.

        Returns:
            LLMPort implementation

        Raises:
            ConfigurationError: If the upstream credential is missing
        """
        if "llm_adapter" not in self._instances:
            self._instances["llm_adapter"] = OpenAIAdapter(
                api_key=self._settings.require_api_key(),
                api_base=self._settings.api_base,
                timeout=self._settings.timeout_seconds,
                logger=self._logger,
            )
        return self._instances["llm_adapter"]

    def get_resolution_config(self) -> ResolutionConfig:
        if "resolution_config" not in self._instances:
            self._instances["resolution_config"] = ResolutionConfig.from_settings(
                self._settings
            )
        return self._instances["resolution_config"]

    def get_resolution_engine(self) -> ResolutionEngine:
        """
        Get resolution engine with injected dependencies.

        Returns:
            Configured ResolutionEngine
        """
        if "resolution_engine" not in self._instances:
            llm_adapter = self.get_llm_adapter()
            self._instances["resolution_engine"] = ResolutionEngine(
                llm_adapter, self.get_resolution_config()
            )
        return self._instances["resolution_engine"]

    def get_generate_command_use_case(self) -> GenerateCommandUseCase:
        """
        Get generate command use case with injected dependencies.

        Returns:
            Configured GenerateCommandUseCase
        """
        if "generate_command_use_case" not in self._instances:
            self._instances["generate_command_use_case"] = GenerateCommandUseCase(
                self.get_resolution_engine,
                max_input_length=self._settings.max_input_length,
            )
        return self._instances["generate_command_use_case"]

    def reset(self):
        """Reset all instances (useful for testing)."""
        self._instances.clear()


# Global container instance
container = DependencyContainer()
