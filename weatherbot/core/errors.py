"""Exception types and handlers."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("weatherbot.errors")


class WeatherbotError(Exception):
    """Base class for failures raised by the conversation core."""


class DialogueUnavailable(WeatherbotError):
    """The dialogue service could not be reached or returned an error."""


class WeatherLookupFailed(WeatherbotError):
    """The weather service failed or did not recognise the location."""


class InvalidInput(WeatherbotError, ValueError):
    """The caller submitted something the core refuses to process."""


async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    """Map rejected input to a 400 response."""

    logger.warning("Rejected input on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"error": "invalid_input", "message": str(exc)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    """Return a generic JSON error response while logging the exception."""

    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "Something unexpected happened. Please try again later.",
        },
    )
