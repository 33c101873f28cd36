"""
Rate limiting for the public API.

Every route shares a per-IP budget. The view and like counters are public
and never deduplicated, so they also get a much smaller budget keyed on the
reader *and* the article: refreshing one article in a loop is throttled
without affecting normal browsing of the feed.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .config import config

# Seconds a client is told to wait after a 429
RETRY_AFTER_SECONDS = 60

_UNLIMITED = "1000000/minute"


def _per_minute(limit: int) -> str:
    return f"{limit}/minute" if limit > 0 else _UNLIMITED


def get_rate_limit() -> str:
    """Per-IP budget for all routes. <= 0 disables it."""
    return _per_minute(config.RATE_LIMIT_PER_MINUTE)


def get_counter_rate_limit() -> str:
    """Per-IP, per-article budget for view and like requests. Read on every request."""
    return _per_minute(config.COUNTER_RATE_LIMIT_PER_MINUTE)


def article_counter_key(request: Request) -> str:
    """Bucket counter requests by client address and article."""
    return f"{get_remote_address(request)}:article:{request.path_params.get('article_id')}"


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_rate_limit()],
    storage_uri="memory://",  # Per process, cleared on restart
)

# Decorator for routes that bump a public counter
limit_article_counter = limiter.limit(get_counter_rate_limit, key_func=article_counter_key)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer with 429 and a Retry-After header."""
    return JSONResponse(
        status_code=429,
        content={
            "detail": f"Too many requests: {exc.detail}",
            "retry_after": RETRY_AFTER_SECONDS,
        },
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


def setup_rate_limiting(app):
    """Attach the limiter, its middleware and the 429 handler to ``app``."""
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
