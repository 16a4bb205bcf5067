"""Security middleware for VidTube API."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        # Control referrer information
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # API responses carry credentials and must never be cached
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
            response.headers["Pragma"] = "no-cache"

        return response


class RequestValidationMiddleware(BaseHTTPMiddleware):
    """Validate incoming requests for security."""

    # Maximum request body size (16KB of JSON; media is referenced by URL)
    MAX_BODY_SIZE = 16 * 1024

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Check content length
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.MAX_BODY_SIZE:
            return Response(
                content='{"success": false, "status_code": 413, "detail": "Request body too large", "error_code": "PAYLOAD_TOO_LARGE"}',
                status_code=413,
                media_type="application/json",
            )

        # Validate content type for POST/PUT/PATCH
        if request.method in ("POST", "PUT", "PATCH"):
            content_type = request.headers.get("content-type", "")
            allowed_types = [
                "application/json",
                "application/x-www-form-urlencoded",
            ]
            if content_type and not any(t in content_type for t in allowed_types):
                return Response(
                    content='{"success": false, "status_code": 415, "detail": "Unsupported content type", "error_code": "UNSUPPORTED_MEDIA_TYPE"}',
                    status_code=415,
                    media_type="application/json",
                )

        return await call_next(request)
