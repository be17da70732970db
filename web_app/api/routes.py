"""API routes implementation."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from shortener.errors import (
    AliasTaken,
    ExhaustedRetries,
    ShortenerError,
    ValidationError,
)
from .schemas import (
    ShortenRequest,
    ShortenResponse,
    HealthResponse,
    ErrorResponse,
)

router = APIRouter()
logger = logging.getLogger("shortener.web")

GENERIC_SERVER_ERROR = "Internal server error. Please try again."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or alias taken"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a custom name.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    try:
        result = await service.create_short_url(
            original_url=body.original_url,
            custom_name=body.custom_name,
        )
    except (ValidationError, AliasTaken) as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)
    except ExhaustedRetries as e:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)
    except ShortenerError as e:
        logger.error(f"Error shortening URL: {e!r}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)

    return ShortenResponse(
        short_url=result["short_url"],
        short_code=result["short_code"],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Liveness check for load balancers and monitoring.",
)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="OK", timestamp=datetime.now(timezone.utc))
