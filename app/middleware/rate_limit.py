"""Rate limiting using slowapi"""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from app.core.config import settings
from app.core.exceptions import error_response

# Custom key function that considers the gateway-supplied user id
def get_rate_limit_key(request: Request) -> str:
    """Get rate limit key based on user or IP"""
    user_id = request.headers.get(settings.USER_ID_HEADER)

    if user_id:
        return f"user:{user_id}"

    # Fall back to IP address
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
    else:
        ip = request.client.host if request.client else "unknown"

    return f"ip:{ip}"

# Create limiter instance
limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

# Custom rate limit exceeded handler
async def custom_rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    return error_response(
        request,
        429,
        "RATE_LIMIT_EXCEEDED",
        f"Too many requests. {exc.detail}",
    )

# Short-window limit for mutating endpoints
burst_limit = limiter.shared_limit(settings.RATE_LIMIT_BURST, scope="wishlist-burst")
