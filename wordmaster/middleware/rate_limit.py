"""Rate limiting (one flat limit per client, from settings.RATE_LIMIT).

Applied to every route by SlowAPIMiddleware in main.py. Behind a proxy the
first X-Forwarded-For hop identifies the client.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from wordmaster.core.config import settings

logger = logging.getLogger(__name__)


def client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(
    key_func=client_key,
    default_limits=[settings.RATE_LIMIT],
    enabled=True,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit {exc.detail} exceeded by {client_key(request)} on {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": f"Too many requests (limit {exc.detail}).",
        },
        headers={"Retry-After": "1"},
    )
