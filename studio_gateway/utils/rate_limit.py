"""
Rate limiting utilities for API endpoints.
Uses slowapi to slow down login brute forcing and mail or chatbot abuse.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from studio_gateway.config import settings


def get_client_identifier(request: Request) -> str:
    """
    Get client identifier for rate limiting.
    Uses forwarded IP if behind proxy, otherwise remote address.

    Args:
        request: FastAPI request object

    Returns:
        str: Client identifier (IP address)
    """
    # Check for forwarded IP (if behind reverse proxy)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Get first IP in chain (original client)
        return forwarded.split(",")[0].strip()

    # Fall back to direct remote address
    return get_remote_address(request)


# Create limiter instance
limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri="memory://",
    enabled=settings.RATE_LIMIT_ENABLED,
)


# Rate limit configurations for specific use cases
RATE_LIMITS = {
    "login": "5/minute",  # Allow only 5 login attempts per minute per IP
    "email": "10/minute",  # Booking notification sends
    "chatbot": "30/minute",
}
