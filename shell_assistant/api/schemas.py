"""
Pydantic models for API requests and responses.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from shell_assistant.entities.command import StructuredResult


class CommandRequest(BaseModel):
    """Schema for a command generation request."""

    model_config = ConfigDict(populate_by_name=True)

    user_input: Optional[str] = Field(
        None, alias="userInput", description="Natural-language task description"
    )


class CommandResponse(BaseModel):
    """Schema for a generated command."""

    command: str = Field(..., description="Suggested shell command")
    explanation: str = Field(..., description="What the command does")
    model_used: str = Field(..., description="Model that produced the answer")
    attempt: int = Field(..., description="Attempt number on that model")

    @classmethod
    def from_entity(cls, result: StructuredResult):
        """Create a CommandResponse schema from a StructuredResult entity."""
        return cls(**result.get_details())


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    error: str = Field(..., description="Error message")
    debug: Optional[str] = Field(None, description="Diagnostic detail for operators")


class OverloadedResponse(BaseModel):
    """Schema for the response sent when every model is overloaded."""

    error: str = Field(..., description="Error message")
    suggestion: str = Field("retry_later", description="Machine-readable next step")
    retry_after: int = Field(..., description="Seconds to wait before retrying")


class HealthResponse(BaseModel):
    """Schema for the health check."""

    status: str = Field("ok", description="Service status")
    models: List[str] = Field(default_factory=list, description="Model candidates in priority order")
