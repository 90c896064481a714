"""
Exception handlers for the FastAPI application.

Every failure leaves the API as a JSON body with an "error" key.
Domain exceptions are mapped to status codes by their base class;
anything unexpected becomes a generic 500 without internals.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from modules.todos.exceptions import ShareAlreadyExistsError
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    TodoApiError,
    ValidationError,
)

from .models.errors import ErrorResponse, FieldError, ValidationErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Most specific classes first; the first match along the MRO wins.
STATUS_CODES: dict[type[TodoApiError], int] = {
    # Existing clients observe 400 for duplicate shares
    ShareAlreadyExistsError: 400,
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    ExternalServiceError: 500,
}


def status_code_for(exc: TodoApiError) -> int:
    """Resolve the HTTP status code for a domain exception."""
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 500


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI adds
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


async def todo_api_error_handler(request: Request, exc: TodoApiError) -> JSONResponse:
    status_code = status_code_for(exc)

    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.to_dict())
        body = ErrorResponse(error=INTERNAL_ERROR_MESSAGE)
    else:
        body = ErrorResponse(error=exc.message, code=exc.code)

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        FieldError(field=_field_name(tuple(err.get("loc", ()))), message=err.get("msg", ""))
        for err in exc.errors()
    ]
    body = ValidationErrorResponse(details=details)
    return JSONResponse(status_code=400, content=body.model_dump())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=INTERNAL_ERROR_MESSAGE).model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all exception handlers on the application."""
    app.add_exception_handler(TodoApiError, todo_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
