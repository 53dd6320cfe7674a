from __future__ import annotations

import enum
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCode(enum.IntEnum):
    ok = 0
    not_authorized = 401
    not_found = 404
    invalid_fields = 406
    token_expired = 498
    prepare_failed = 500
    execute_failed = 501


class ServiceError(Exception):
    """Failure carried back to the caller in-band as an error code."""

    error_code: ErrorCode = ErrorCode.prepare_failed
    default_detail = "internal error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidFields(ServiceError):
    error_code = ErrorCode.invalid_fields

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"invalid fields: {','.join(self.fields)}")


class RecordNotFound(ServiceError):
    error_code = ErrorCode.not_found
    default_detail = "not found"


class StatementPrepareError(ServiceError):
    error_code = ErrorCode.prepare_failed
    default_detail = "statement preparation failed"


class QueryError(ServiceError):
    error_code = ErrorCode.prepare_failed
    default_detail = "query failed"


class StatementExecutionError(ServiceError):
    error_code = ErrorCode.execute_failed
    default_detail = "statement execution failed"


def _error_payload(code: int, message: str, details: object = None) -> dict:
    payload = {"error_code": code, "error_message": message, "data": None}
    if details is not None:
        payload["details"] = details
    return payload


def register_error_handlers(app) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
        return JSONResponse(
            status_code=422,
            content=_error_payload(
                ErrorCode.invalid_fields,
                f"invalid fields: {','.join(fields)}",
                fields,
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_payload(ErrorCode.prepare_failed, "internal error"),
        )
