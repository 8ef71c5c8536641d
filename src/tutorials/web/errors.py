"""Error responses for the Web API.

Handlers raise ApiError (or TutorialValidationError) and the exception
handlers registered here render the JSON bodies clients expect.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tutorials.core.tutorial import TutorialValidationError

logger = structlog.get_logger(__name__)

TUTORIALS_PREFIX = "/tutorials"
TUTORIALS_NOT_FOUND_MESSAGE = "TUTORIALS: what???"
NOT_FOUND_MESSAGE = "WHAT???"


class ApiError(Exception):
    """An error with a status code and a message for the client."""

    def __init__(self, status_code: int, msg: str):
        self.status_code = status_code
        self.msg = msg
        super().__init__(msg)


def fallback_message(path: str) -> str:
    """Catch-all message for an unmatched path."""
    if path == TUTORIALS_PREFIX or path.startswith(TUTORIALS_PREFIX + "/"):
        return TUTORIALS_NOT_FOUND_MESSAGE
    return NOT_FOUND_MESSAGE


def _request_error_message(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    msg = error.get("msg", "invalid request")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "msg": exc.msg},
    )


async def validation_error_handler(
    request: Request, exc: TutorialValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "msgs": exc.messages},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or a non-object body is a 400, not a 422."""
    msgs = [_request_error_message(error) for error in exc.errors()]
    logger.debug("request.invalid", path=request.url.path, msgs=msgs)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "msgs": msgs},
    )


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched routes and methods fall through to a 404 message."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": fallback_message(request.url.path)},
        )
    return await http_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(TutorialValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
