from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .utils import error_envelope, fail_envelope

logger = logging.getLogger(__name__)

CREATE_BODY_MESSAGE = "A string value for tasks is required in your JSON body"
INVALID_ID_MESSAGE = "The id path parameter must be an integer"
GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


# PUBLIC_INTERFACE
class TodoApiError(Exception):
    """
    Base class for errors surfaced to HTTP clients.

    Attributes:
    - kind: machine readable error category
    - message: human readable description
    - status_code: HTTP status the error maps to
    - field: key the message is reported under in a 'fail' envelope
    """

    kind = "error"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, field: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.status_code = status_code or self.default_status


class InvalidInputError(TodoApiError):
    """The request body or a path parameter has the wrong shape."""

    kind = "invalid_input"
    default_status = status.HTTP_400_BAD_REQUEST


class NotFoundError(TodoApiError):
    """No row matched the requested id."""

    kind = "not_found"
    default_status = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str, *, field: Optional[str] = "id", status_code: Optional[int] = None) -> None:
        super().__init__(message, field=field, status_code=status_code)


class StoreError(TodoApiError):
    """The record store failed to run a statement."""

    kind = "store"


async def todo_api_error_handler(request: Request, exc: TodoApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content=error_envelope(exc.kind, GENERIC_ERROR_MESSAGE))
    return JSONResponse(
        status_code=exc.status_code,
        content=fail_envelope({exc.field or "message": exc.message}),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Map FastAPI request validation errors onto 'fail' envelopes.

    A path id that is not an integer yields the id message; anything else
    (e.g. a malformed JSON body) yields the create body message.
    """
    for err in exc.errors():
        loc = err.get("loc") or ()
        if len(loc) >= 2 and loc[0] == "path" and loc[1] == "todo_id":
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=fail_envelope({"id": INVALID_ID_MESSAGE}),
            )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=fail_envelope({"name": CREATE_BODY_MESSAGE}),
    )


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected exception and build the generic 500 envelope for it."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope("internal", GENERIC_ERROR_MESSAGE),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return internal_error_response(request, exc)


# PUBLIC_INTERFACE
def register_exception_handlers(app: FastAPI) -> None:
    """Install the uniform error boundary on the app."""
    app.add_exception_handler(TodoApiError, todo_api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
