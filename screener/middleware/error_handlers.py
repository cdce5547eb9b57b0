"""
Global Exception Handling for the Resume Screener API
"""
import time
import traceback
import uuid
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from screener.utils.exceptions import ScreenerBaseException, map_to_http_exception
from screener.utils.logging_config import get_logger

logger = get_logger(__name__)


def create_error_response(request_id: str, status_code: int, detail: Any) -> JSONResponse:
    """Create standardized error response"""

    if isinstance(detail, str):
        detail = {"message": detail}
    elif not isinstance(detail, dict):
        detail = {"message": str(detail)}

    error_response = {
        "success": False,
        "timestamp": datetime.utcnow().isoformat(),
        "request_id": request_id,
        "status_code": status_code,
        **detail
    }

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_response),
        headers={"X-Request-ID": request_id}
    )


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', None) or str(uuid.uuid4())


async def screener_exception_handler(request: Request, exc: ScreenerBaseException) -> JSONResponse:
    request_id = _request_id(request)
    http_exc = map_to_http_exception(exc)

    log = logger.warning if http_exc.status_code < 500 else logger.error
    log(
        f"{exc.__class__.__name__} in {request.method} {request.url.path}: {exc.message}",
        extra={
            "request_id": request_id,
            "error_code": exc.error_code,
            "details": exc.details,
        }
    )
    return create_error_response(request_id, http_exc.status_code, http_exc.detail)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    request_id = _request_id(request)
    logger.warning(
        f"Validation error in {request.method} {request.url.path}: {exc}",
        extra={"request_id": request_id}
    )
    return create_error_response(request_id, 422, {
        "error": "Validation failed",
        "message": "Request data validation failed",
        "validation_errors": exc.errors(),
    })


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ScreenerBaseException, screener_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id, logs it and hides unexpected failures"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "client_ip": request.client.host if request.client else "unknown"
            }
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}",
                extra={
                    "request_id": request_id,
                    "exception_type": exc.__class__.__name__,
                    "traceback": traceback.format_exc(),
                },
                exc_info=True
            )

            # Don't expose internal errors
            return create_error_response(request_id, 500, {
                "error": "Internal server error",
                "message": "An unexpected error occurred. Please try again later.",
            })

        processing_time = time.time() - start_time
        logger.info(
            f"Request completed: {request.method} {request.url.path} - {response.status_code} in {processing_time:.3f}s",
            extra={"request_id": request_id, "status_code": response.status_code}
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        return response
