"""
Rate limiting configuration and utilities
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, status
from fastapi.responses import JSONResponse
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

def user_rate_limit(request: Request):
    """Rate limiting per authenticated user"""
    # get_current_user stores the id on request.state
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"
    return f"{get_remote_address(request)}"

# Create rate limiter instance
limiter = Limiter(
    key_func=user_rate_limit,
    default_limits=["1000/day", "200/hour"],
    enabled=settings.RATE_LIMIT_ENABLED,
)

# Custom rate limit exceeded handler
def custom_rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Custom handler for rate limit exceeded"""
    logger.warning(f"Rate limit exceeded for {user_rate_limit(request)}: {exc.detail}")

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "success": False,
            "error": f"Too many requests. Limit: {exc.detail}",
        }
    )

# Rate limit configurations
RATE_LIMITS = {
    "logo_generation": "10/hour",    # each job makes up to four image calls
    "name_generation": "30/hour",
    "social_generation": "30/hour",
    "slogan_generation": "30/hour",
    "domain_check": "20/hour",
    "report_export": "20/hour",
}
