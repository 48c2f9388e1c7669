
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    message = "internal"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "invalid request"


class DuplicateEmail(AppError):
    status_code = 400
    message = "User already exists"


class InvalidCredentials(AppError):
    status_code = 400
    message = "invalid"


class Unauthorized(AppError):
    status_code = 401
    message = "Invalid token"


class Forbidden(AppError):
    status_code = 403
    message = "forbidden"


class NotFound(AppError):
    status_code = 404
    message = "not found"


class DatabaseUnavailable(AppError):
    status_code = 500
    message = "database unavailable"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = f"invalid or missing: {', '.join(fields)}" if fields else ValidationError.message
    return error_response(ValidationError.status_code, message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
