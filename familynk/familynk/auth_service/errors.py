"""
Error taxonomy for the auth service and the single place where errors are
translated into HTTP responses.

    AppError (base, carries message + status_code)
    ├── UnauthorizedError   401
    ├── ForbiddenError      403
    ├── NotFoundError       404
    │   └── LoginFailedError
    ├── ConflictError       409
    └── InternalError       500
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from typing import Any
import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    An expected, already-classified failure.

    Attributes:
        message: Client-safe description
        status_code: HTTP status the boundary layer responds with
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class LoginFailedError(NotFoundError):
    """Bad credentials and unknown accounts are reported identically."""
    default_message = "Login Failed"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def is_app_error(err: Any) -> bool:
    """True for AppError instances and for any object exposing message and status_code."""
    if isinstance(err, AppError):
        return True
    return err is not None and hasattr(err, "message") and hasattr(err, "status_code")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Errors shaped like AppError but raised outside its hierarchy keep their status
    if is_app_error(exc) and isinstance(exc.status_code, int) and exc.status_code < 500:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.message)})

    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": InternalError.default_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
