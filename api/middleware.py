"""
Consolidated middleware for the MenuHub demo API
"""

import time
import logging
from datetime import datetime
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import ConflictError, MenuHubError, NotFoundError, ValidationError

logger = logging.getLogger("menuhub.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def error_body(code: str, message, details=None) -> dict:
    """Standard error envelope"""
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {
        "success": False,
        "error": error,
        "timestamp": datetime.utcnow().isoformat(),
    }


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        # Generate unique request ID
        request_id = str(uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed: %s %s (%s) after %.4fs",
                request.method,
                request.url.path,
                exc,
                process_time,
                extra={"request_id": request_id},
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            "%s %s -> %d (%.4fs)",
            request.method,
            request.url.path,
            response.status_code,
            process_time,
            extra={"request_id": request_id},
        )

        # Add custom headers
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    return JSONResponse(
        status_code=422,
        content=error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(f"HTTP_{exc.status_code}", exc.detail),
    )


async def menuhub_exception_handler(request: Request, exc: MenuHubError):
    """Handle typed MenuHub errors (not found, conflict, invalid input)"""
    if isinstance(exc, NotFoundError):
        code = "NOT_FOUND"
    elif isinstance(exc, ConflictError):
        code = "CONFLICT"
    elif isinstance(exc, ValidationError):
        code = "SERVICE_VALIDATION_ERROR"
    else:
        code = exc.code or "ERROR"
    logger.warning(f"{code} on {request.url}: {exc}")

    return JSONResponse(status_code=exc.http_status, content=error_body(code, exc.message))


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_SERVER_ERROR", "An unexpected error occurred"),
    )
