"""FastAPI middleware for logging and error handling."""
import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from constants import ACCOUNT_ID_HEADER, REQUEST_ID_HEADER
from exceptions import (
    KathaEngineException,
    ValidationError,
    CapExceededError,
    PreconditionError,
    InvalidTransitionError,
    NotFoundError,
)
from logging_config import get_logger, bind_context, clear_context

logger = get_logger(__name__)

# Most specific first
ERROR_STATUS_CODES = (
    (CapExceededError, 422),
    (ValidationError, 422),
    (NotFoundError, HTTP_404_NOT_FOUND),
    (PreconditionError, HTTP_409_CONFLICT),
    (InvalidTransitionError, HTTP_400_BAD_REQUEST),
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all API requests and responses.

    Binds the request ID and operator account to all logs and tracks
    request duration.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        """
        Process request and log details.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/endpoint handler

        Returns:
            HTTP response
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        bind_context(
            request_id=request_id,
            account_id=request.headers.get(ACCOUNT_ID_HEADER),
            method=request.method,
            path=request.url.path,
        )

        logger.info(
            "request_started",
            query=str(request.query_params) if request.query_params else None,
        )

        start_time = time.time()

        try:
            response = await call_next(request)

            duration_ms = (time.time() - start_time) * 1000
            response.headers[REQUEST_ID_HEADER] = request_id

            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

            return response

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000

            logger.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
                exc_info=True,
            )

            raise

        finally:
            clear_context()


def status_code_for(exc: KathaEngineException) -> int:
    """HTTP status for an engine exception."""
    for error_cls, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_cls):
            return status_code
    return HTTP_500_INTERNAL_SERVER_ERROR


async def engine_exception_handler(request: Request, exc: KathaEngineException) -> JSONResponse:
    """Convert engine exceptions to JSON error responses."""
    status_code = status_code_for(exc)

    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("engine_error", error=str(exc), error_type=type(exc).__name__)
        message = "An unexpected error occurred. Please try again."
    else:
        logger.warning("engine_rejected_request", error=str(exc), error_type=type(exc).__name__)
        message = str(exc)

    content = {
        "error": type(exc).__name__,
        "message": message,
        "detail": None,
    }
    if isinstance(exc, CapExceededError):
        content["detail"] = {
            "reason": exc.reason,
            "remaining": str(exc.remaining) if exc.remaining is not None else None,
        }

    return JSONResponse(status_code=status_code, content=content)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything the engine did not classify."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
    )
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "InternalServerError",
            "message": "An unexpected error occurred. Please try again.",
            "detail": None,
        },
    )


def setup_middleware(app: FastAPI) -> None:
    """
    Add middleware and exception handlers to the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(KathaEngineException, engine_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.add_middleware(RequestLoggingMiddleware)

    logger.info("middleware_configured")
