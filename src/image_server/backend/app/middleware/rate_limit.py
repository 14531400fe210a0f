"""
Per-client rate limiting.

Every request is counted against the caller's IP before it reaches a route.
Rejected requests get a 429 envelope; every response carries the
``RateLimit-*`` headers (IETF draft names, no legacy ``X-RateLimit-*``).
"""

import logging
import math

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from image_server.backend.app.domain.security.interfaces import RateLimitDecision, RateLimiter

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    # socket peer only; proxy headers are not trusted
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def _rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(math.ceil(decision.reset_after)),
    }


def default_rate_limit_message(window_seconds: float) -> str:
    minutes = max(1, math.ceil(window_seconds / 60))
    unit = "minute" if minutes == 1 else "minutes"
    return f"Too many requests from this IP, please try again after {minutes} {unit}"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, limiter: RateLimiter, message: str) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.message = message

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_ip = get_client_ip(request)
        decision = self.limiter.hit(client_ip)
        headers = _rate_limit_headers(decision)

        if not decision.allowed:
            logger.warning("Rejected %s %s from %s: rate limit", request.method, request.url.path, client_ip)
            headers["Retry-After"] = headers["RateLimit-Reset"]
            return JSONResponse(
                status_code=429,
                content={"success": False, "error": self.message},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
