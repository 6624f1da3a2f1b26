"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class StorefrontException(HTTPException):
    """Base exception class for the storefront application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationException(StorefrontException):
    """400 Bad Request - malformed input"""

    def __init__(self, detail: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )


class ConflictException(StorefrontException):
    """400 Bad Request - resource already exists"""

    def __init__(self, detail: str = "This email address is already registered", error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )


class AuthenticationException(StorefrontException):
    """401 Unauthorized - bad credentials or missing session"""

    def __init__(self, detail: str = "Unauthorized. Please log in.", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code
        )


class NotFoundException(StorefrontException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )


class StoreException(StorefrontException):
    """500 Internal Server Error - persistence failure"""

    def __init__(self, detail: str = "Internal server error", error_code: str = "STORE_ERROR"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code
        )


def _error_body(request: Request, code: str, message: str, **extra) -> Dict[str, Any]:
    error = {
        "code": code,
        "message": message,
        "request_id": getattr(request.state, "request_id", None),
    }
    error.update(extra)
    return {"error": error}


async def storefront_exception_handler(request: Request, exc: StorefrontException) -> JSONResponse:
    """Render domain exceptions with the standard error envelope"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.error_code, exc.detail),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/path validation failures are client errors (400)"""
    fields: List[Dict[str, Any]] = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(request, "VALIDATION_ERROR", "Invalid request", fields=fields),
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Persistence failures are logged and surfaced as a generic 500"""
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
    error = StoreException()
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(request, error.error_code, error.detail),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application"""
    app.add_exception_handler(StorefrontException, storefront_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
