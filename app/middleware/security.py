"""Security middleware"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

DOCS_PREFIXES = ("/api/docs", "/api/redoc", "/api/openapi.json")

class SecurityMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Swagger UI pulls its assets from a CDN
        if request.url.path.startswith(DOCS_PREFIXES):
            response.headers["Content-Security-Policy"] = (
                "default-src 'self' 'unsafe-inline' https: data:; "
                "img-src 'self' data: https:"
            )
        else:
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        return response
