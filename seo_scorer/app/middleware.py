"""Custom middleware for the application."""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from seo_scorer.app.config import settings

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all HTTP responses.

    The content security policy admits the inline script and styles of the
    bundled UI page and the Swagger UI assets served from cdn.jsdelivr.net.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' https://cdn.jsdelivr.net 'unsafe-inline'; "
            "style-src 'self' https://cdn.jsdelivr.net 'unsafe-inline'; "
            "img-src 'self' data: https://fastapi.tiangolo.com; "
            "font-src 'self'; "
            "connect-src 'self';"
        )
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        return response


class RateLimiterMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce rate limiting per client IP address.

    Each analysis request costs an upstream API call, so clients are held to
    a sliding one-minute window and blocked for a while when they burst.

    Attributes:
        requests_per_minute: Allowed requests per minute.
        burst_limit: Requests within a minute that trigger a block.
        block_duration: Duration in seconds to block IPs exceeding limits.
    """

    def __init__(
        self,
        app: Any,
        requests_per_minute: int | None = None,
        burst_limit: int | None = None,
        block_duration: int | None = None,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute or settings.REQUESTS_PER_MINUTE
        self.burst_limit = burst_limit or settings.BURST_LIMIT
        self.block_duration = block_duration or settings.BLOCK_DURATION
        self.requests: dict[str, list[float]] = defaultdict(list)
        self.blocked_ips: dict[str, datetime] = {}
        self._last_sweep = 0.0
        self._lock = asyncio.Lock()

    def _drop_idle_clients(self, now_ts: float) -> None:
        """Forget clients with no request inside the window, at most once a minute."""
        if now_ts - self._last_sweep < 60:
            return
        self._last_sweep = now_ts
        idle = [
            ip
            for ip, times in self.requests.items()
            if not times or now_ts - times[-1] >= 60
        ]
        for ip in idle:
            del self.requests[ip]

    def _too_many_requests(self, detail: str, retry_after: int) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"detail": detail, "retry_after": retry_after},
            headers={"Retry-After": str(retry_after)},
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        client_ip = request.client.host if request.client else "unknown_client"
        now = datetime.now(timezone.utc)
        now_ts = now.timestamp()

        async with self._lock:
            self._drop_idle_clients(now_ts)

            blocked_until = self.blocked_ips.get(client_ip)
            if blocked_until is not None:
                if now < blocked_until:
                    return self._too_many_requests(
                        "IP address blocked due to rate limit violation",
                        int((blocked_until - now).total_seconds()),
                    )
                del self.blocked_ips[client_ip]

            window = [
                req_time for req_time in self.requests[client_ip] if now_ts - req_time < 60
            ]
            self.requests[client_ip] = window

            if len(window) >= self.burst_limit:
                self.blocked_ips[client_ip] = now + timedelta(seconds=self.block_duration)
                logger.warning("IP %s blocked for burst limit violation", client_ip)
                return self._too_many_requests(
                    "Too many requests - IP blocked", self.block_duration
                )

            # Rejected attempts still count towards the burst limit
            if len(window) >= self.requests_per_minute:
                window.append(now_ts)
                return self._too_many_requests(
                    "Too many requests", int(60 - (now_ts - window[0]))
                )

            window.append(now_ts)
            remaining = self.requests_per_minute - len(window)

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
