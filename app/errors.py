"""
Error Handling Module

One error type for the whole service layer: BookServiceError, tagged
with an ErrorKind and optionally carrying the offending field, its
value, and the underlying error text.

Services raise it; FastAPI exception handlers (installed by
register_exception_handlers) turn it into an HTTP response using the
configured ErrorMessages.

Status Mapping:
===============
- Request validation failure  -> 400, {"detail": {field: message}}
- INVALID_PARAM               -> 400
- NOT_FOUND                   -> 404
- DUPLICATE_KEY               -> 409
- FOREIGN_KEY_VIOLATION       -> 409
- BATCH_FAILED                -> 500 (no per-item detail)
- UNEXPECTED / anything else  -> 500, raw error text appended

A book that isn't there on a read is not a service error: the query
service returns None and the router raises NOT_FOUND.
"""

import logging
from enum import Enum
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.config import ErrorMessages
from app.utils.db_errors import (
    extract_foreign_key_column,
    is_duplicate_key,
    is_foreign_key_violation,
)
from app.utils.strings import to_camel_case

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Categories of service failures."""

    INVALID_PARAM = "invalid_param"
    NOT_FOUND = "not_found"
    DUPLICATE_KEY = "duplicate_key"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    BATCH_FAILED = "batch_failed"
    UNEXPECTED = "unexpected"


class BookServiceError(Exception):
    """
    Tagged service error.

    Args:
        kind: What went wrong
        field: API field name (camelCase) the error is about, if any
        value: The offending value, if any
        detail: Underlying error text, appended to 500 responses
    """

    def __init__(
        self,
        kind: ErrorKind,
        field: str | None = None,
        value: Any = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(detail or kind.value)
        self.kind = kind
        self.field = field
        self.value = value
        self.detail = detail

    def __repr__(self) -> str:
        return (
            f"BookServiceError(kind={self.kind.value}, field={self.field!r}, "
            f"value={self.value!r}, detail={self.detail!r})"
        )


def translate_integrity_error(exc: IntegrityError, payload: BaseModel) -> BookServiceError:
    """
    Convert a driver integrity error into a BookServiceError.

    For foreign key failures the column named in the driver message is
    mapped back to the request payload to report which value was bad.

    Args:
        exc: The IntegrityError raised on insert/update
        payload: The request model whose values were written
    """
    if is_foreign_key_violation(exc):
        column = extract_foreign_key_column(str(exc.orig))
        return BookServiceError(
            ErrorKind.FOREIGN_KEY_VIOLATION,
            field=to_camel_case(column) if column else None,
            value=getattr(payload, column, None) if column else None,
            detail=str(exc.orig),
        )
    if is_duplicate_key(exc):
        return BookServiceError(
            ErrorKind.DUPLICATE_KEY,
            field="id",
            value=getattr(payload, "id", None),
            detail=str(exc.orig),
        )
    return BookServiceError(ErrorKind.UNEXPECTED, detail=str(exc.orig))


_STATUS_BY_KIND = {
    ErrorKind.INVALID_PARAM: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_KEY: status.HTTP_409_CONFLICT,
    ErrorKind.FOREIGN_KEY_VIOLATION: status.HTTP_409_CONFLICT,
    ErrorKind.BATCH_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ErrorResponder:
    """
    Builds JSON error responses from the message catalog.

    The catalog is handed in at construction, so different apps (or
    tests) can run with different messages side by side.
    """

    def __init__(self, messages: ErrorMessages) -> None:
        self.messages = messages

    def message_for(self, kind: ErrorKind) -> str:
        return {
            ErrorKind.INVALID_PARAM: self.messages.invalid_value,
            ErrorKind.NOT_FOUND: self.messages.non_existent_book,
            ErrorKind.DUPLICATE_KEY: self.messages.duplicate_key,
            ErrorKind.FOREIGN_KEY_VIOLATION: self.messages.non_existent_fk,
            ErrorKind.BATCH_FAILED: self.messages.batch_failed,
            ErrorKind.UNEXPECTED: self.messages.unexpected_error,
        }[kind]

    def service_error(self, exc: BookServiceError) -> JSONResponse:
        status_code = _STATUS_BY_KIND[exc.kind]
        message = self.message_for(exc.kind)

        if exc.kind is ErrorKind.INVALID_PARAM and exc.field:
            return JSONResponse(
                status_code=status_code,
                content={"detail": {exc.field: message}},
            )

        if status_code >= 500:
            return JSONResponse(
                status_code=status_code,
                content={"detail": message + (exc.detail or "")},
            )

        content: dict[str, Any] = {"detail": message}
        if exc.field is not None:
            content["field"] = exc.field
            content["value"] = exc.value
        return JSONResponse(status_code=status_code, content=content)

    def validation_error(self, exc: RequestValidationError) -> JSONResponse:
        errors: dict[str, str] = {}
        for error in exc.errors():
            # loc is ("body" | "query" | "path", *field path)
            location = error.get("loc", ())
            field = ".".join(str(part) for part in location[1:]) or str(location[0])
            errors[field] = self.messages.invalid_value
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": errors},
        )

    def unexpected(self, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": self.messages.unexpected_error + str(exc)},
        )


def register_exception_handlers(app: FastAPI, messages: ErrorMessages) -> None:
    """
    Install the global exception handlers on an application.

    Args:
        app: The FastAPI application
        messages: Message catalog used in every error body
    """
    responder = ErrorResponder(messages)

    @app.exception_handler(BookServiceError)
    async def book_service_exception_handler(
        request: Request,
        exc: BookServiceError,
    ) -> JSONResponse:
        if _STATUS_BY_KIND[exc.kind] >= 500:
            logger.error(f"Service error on {request.url.path}: {exc!r}")
        else:
            logger.info(f"Rejected request on {request.url.path}: {exc!r}")
        return responder.service_error(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        logger.info(f"Validation failed on {request.url.path}: {exc.errors()}")
        return responder.validation_error(exc)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle database errors that escaped the service layer.

        Integrity errors are still classified so that a duplicate or a
        dangling reference answers 409 rather than 500.
        """
        if isinstance(exc, IntegrityError):
            if is_duplicate_key(exc):
                return responder.service_error(
                    BookServiceError(ErrorKind.DUPLICATE_KEY, detail=str(exc.orig))
                )
            if is_foreign_key_violation(exc):
                return responder.service_error(
                    BookServiceError(ErrorKind.FOREIGN_KEY_VIOLATION, detail=str(exc.orig))
                )
        logger.error(f"Database error: {exc}")
        return responder.unexpected(exc)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return responder.unexpected(exc)
