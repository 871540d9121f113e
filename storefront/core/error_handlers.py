# storefront/core/error_handlers.py

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
import logging
import traceback
import uuid

from .exceptions import StorefrontError, ErrorCode

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = {
    "error": {
        "code": ErrorCode.INTERNAL_SERVER_ERROR.value,
        "message": "Server error",
    }
}

def setup_error_handlers(app: FastAPI):
    """Set up global error handlers for the FastAPI application."""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        """Handle storefront domain and store errors."""
        logger.log(
            exc.log_level,
            f"Storefront Error: {exc.code.value} on {request.method} {request.url.path}",
            extra={
                "error_code": exc.code.value,
                "technical_details": exc.technical_details,
                "request_method": request.method,
                "client_ip": request.client.host if request.client else None
            }
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed ids and form fields are reported as INVALID_INPUT."""
        errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
            })

        logger.warning(f"Validation error on {request.method} {request.url.path}: {errors}")

        return JSONResponse(
            status_code=400,
            content={
                "error": {
                    "code": ErrorCode.INVALID_INPUT.value,
                    "message": "Request validation failed",
                    "details": errors
                }
            }
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle standard HTTP exceptions with consistent format."""

        if isinstance(exc.detail, dict) and "error" in exc.detail:
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.detail
            )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": f"HTTP_{exc.status_code}",
                    "message": exc.detail,
                }
            }
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        """A store call that escaped the service boundary still fails fast."""
        logger.error(
            f"Database error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}"
        )
        return JSONResponse(status_code=500, content=GENERIC_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions with proper logging."""
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}\n{traceback.format_exc()}"
        )
        return JSONResponse(status_code=500, content=GENERIC_SERVER_ERROR)


# Middleware for request ID tracking
async def add_request_id_middleware(request: Request, call_next):
    """Add request ID for better error tracking."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response
