"""
FastAPI router definitions for the API endpoints.
"""

import logging

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from shell_assistant.api.dependencies import get_generate_command_uc, get_settings
from shell_assistant.api.schemas import (
    CommandRequest,
    CommandResponse,
    ErrorResponse,
    HealthResponse,
    OverloadedResponse,
)
from shell_assistant.exceptions import (
    ConfigurationError,
    InvalidInputError,
    ResolutionExhaustedError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/api/command",
    response_model=CommandResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": OverloadedResponse},
    },
)
def generate_command(body: CommandRequest):
    """
    Generate a shell command for a natural-language request.

    Args:
        body: Request body containing userInput

    Returns:
        CommandResponse on success (including the fallback payload when the
        model output could not be interpreted), otherwise an error payload
    """
    try:
        result = get_generate_command_uc().execute(body.user_input)
        return CommandResponse.from_entity(result)
    except InvalidInputError as e:
        return _error(400, ErrorResponse(error=str(e)))
    except ConfigurationError as e:
        logger.error(f"Server misconfiguration: {e}")
        return _error(500, ErrorResponse(error="The server is not configured correctly."))
    except ResolutionExhaustedError as e:
        if e.is_overloaded:
            retry_after = max(1, int(get_settings().retry_after_seconds))
            payload = OverloadedResponse(
                error="The AI service is currently overloaded. Please try again shortly.",
                retry_after=retry_after,
            )
            return JSONResponse(
                status_code=503,
                content=payload.model_dump(),
                headers={"Retry-After": str(retry_after)},
            )
        return _error(
            500,
            ErrorResponse(error="An internal server error occurred.", debug=e.last_error_message),
        )
    except Exception:
        logger.exception("Unexpected error while generating a command")
        return _error(500, ErrorResponse(error="An internal server error occurred."))


@router.options("/api/command", status_code=204)
def command_preflight():
    """Answer a bare preflight request with no body."""
    return Response(status_code=204)


@router.get("/health", response_model=HealthResponse)
def health():
    """Report liveness and the configured model candidates."""
    return HealthResponse(status="ok", models=list(get_settings().models))
