"""
FastAPI dependency functions for retrieving use cases from the container.
"""

from typing import Any

from shell_assistant.container import container
from shell_assistant.use_cases.command.generate_command import GenerateCommandUseCase


def get_generate_command_uc() -> GenerateCommandUseCase:
    """
    Get the generate command use case from the container.

    Returns:
        GenerateCommandUseCase: The generate command use case instance
    """
    return container.get_generate_command_use_case()


def get_settings() -> Any:
    """
    Get the settings the container was built with.

    Returns:
        Settings instance
    """
    return container.settings
