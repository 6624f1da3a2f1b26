"""Security middleware and utilities"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import bleach
from typing import Optional

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; "
    "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
    "font-src 'self' https://fonts.gstatic.com; "
    "script-src 'self' 'unsafe-inline'; "
    "img-src 'self' data: https:"
)

DOCS_CONTENT_SECURITY_POLICY = (
    "default-src 'self' 'unsafe-inline' https: data:; "
    "script-src 'self' 'unsafe-inline' https:; "
    "img-src 'self' data: https:"
)


class SecurityMiddleware(BaseHTTPMiddleware):
    """Security headers for every response"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Swagger UI pulls its assets from a CDN
        path = request.url.path
        if path.startswith("/api/docs") or path.startswith("/api/redoc"):
            response.headers["Content-Security-Policy"] = DOCS_CONTENT_SECURITY_POLICY
        else:
            response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY

        return response


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """Strip all markup and collapse whitespace in a plain-text field"""
    if value is None:
        return None

    value = value.replace("\x00", "")
    value = bleach.clean(value, tags=[], strip=True)
    return " ".join(value.split())
