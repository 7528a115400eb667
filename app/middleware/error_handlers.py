"""
Exception handlers and middleware for the Hiring AI API
"""
import time
import traceback
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from pydantic import ValidationError

from app.utils.exceptions import HiringAIException, map_to_http_exception
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def create_error_response(
    request_id: str, status_code: int, detail: Any, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
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
        content=error_response,
        headers={**(headers or {}), "X-Request-ID": request_id}
    )


async def hiring_ai_exception_handler(request: Request, exc: HiringAIException) -> JSONResponse:
    request_id = _request_id(request)
    logger.error(
        f"Custom exception in {request.method} {request.url.path}: {exc.message}",
        extra={
            "request_id": request_id,
            "exception_type": exc.__class__.__name__,
            "error_code": exc.error_code,
            "details": exc.details,
        }
    )
    http_exc = map_to_http_exception(exc)
    return create_error_response(request_id, http_exc.status_code, http_exc.detail)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    request_id = _request_id(request)
    logger.warning(
        f"HTTP exception in {request.method} {request.url.path}: {exc.detail}",
        extra={"request_id": request_id, "status_code": exc.status_code}
    )
    return create_error_response(request_id, exc.status_code, exc.detail, getattr(exc, "headers", None))


def register_exception_handlers(app: FastAPI) -> None:
    """Route raised HiringAIException / HTTPException through the error envelope"""
    app.add_exception_handler(HiringAIException, hiring_ai_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Assigns request ids; turns anything the exception handlers missed into a 4xx/5xx envelope"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        except ValidationError as exc:
            # Pydantic errors raised while building responses from model output
            logger.error(
                f"Pydantic validation error in {request.method} {request.url.path}: {exc}",
                extra={"request_id": request_id, "validation_errors": exc.errors()}
            )
            validation_details = {
                "error": "Data validation failed",
                "message": "Invalid data format or values",
                "validation_errors": exc.errors(include_url=False, include_context=False),
            }
            return create_error_response(request_id, 400, validation_details)

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
            error_detail = {
                "error": "Internal server error",
                "message": "An unexpected error occurred. Please try again later.",
            }
            return create_error_response(request_id, 500, error_detail)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        request_id = getattr(request.state, 'request_id', str(uuid.uuid4()))

        content_type = request.headers.get("content-type", "")
        logger.debug(
            f"Request details: {request.method} {request.url}",
            extra={
                "request_id": request_id,
                "content_type": content_type,
                "content_length": request.headers.get("content-length"),
                "client_ip": request.client.host if request.client else "unknown"
            }
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            processing_time = time.time() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path} after {processing_time:.3f}s",
                extra={"request_id": request_id, "exception": str(exc)}
            )
            raise

        processing_time = time.time() - start_time
        logger.info(
            f"Response: {request.method} {request.url.path} - {response.status_code} in {processing_time:.3f}s",
            extra={"request_id": request_id, "status_code": response.status_code}
        )
        return response


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Middleware for performance monitoring"""

    def __init__(self, app, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        processing_time = time.time() - start_time
        if processing_time > self.slow_request_threshold:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path} took {processing_time:.3f}s",
                extra={"processing_time": processing_time, "threshold": self.slow_request_threshold}
            )

        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        return response
