import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas.common import ErrorDetail, ErrorResponse
from services.errors import ConstraintViolation, DomainError, NotFoundError, ValidationFailed

logger = logging.getLogger(__name__)

INTERNAL_MESSAGE = "An unexpected error occurred. Please try again later."

STATUS_BY_ERROR = {
    ValidationFailed: 400,
    NotFoundError: 404,
    ConstraintViolation: 409,
}


def _error_response(status_code: int, code: str, message: str, errors=None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message), errors=errors or [])
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _describe(error: dict) -> str:
    """One readable line per pydantic error, e.g. 'studentCount: Input should be a valid integer'."""
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    prefix = ".".join(location)
    return f"{prefix}: {error.get('msg')}" if prefix else str(error.get("msg"))


def add_error_handlers(app: FastAPI):
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = STATUS_BY_ERROR.get(type(exc), 400)
        if status_code != 404:
            logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.errors)
        return _error_response(status_code, exc.code, exc.message, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [_describe(err) for err in exc.errors()]
        logger.warning("%s %s malformed request: %s", request.method, request.url.path, errors)
        return _error_response(400, ValidationFailed.code, "Validation failed", errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return _error_response(exc.status_code, code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        # full detail stays in the log; the caller only learns the category
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _error_response(500, "INTERNAL_ERROR", INTERNAL_MESSAGE)
