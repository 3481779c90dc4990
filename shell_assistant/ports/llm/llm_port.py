"""
LLM port interface defining the contract for language model implementations.
"""

from abc import ABC, abstractmethod
from typing import Any


class LLMPort(ABC):
    """Port interface for language model operations."""

    @abstractmethod
    def generate(self, model: str, prompt: str) -> str:
        """
        Generate raw text from the named model.

        Args:
            model: Identifier of the model to call
            prompt: The fully rendered prompt

        Returns:
            Raw text produced by the model

        Raises:
            LLMError: If generation fails; ``kind`` classifies the failure
        """
        pass

    def get_model_info(self) -> dict[str, Any]:
        """
        Get information about the current provider configuration.

        Returns:
            Dictionary with provider configuration details
        """
        return {"provider": "Unknown"}
