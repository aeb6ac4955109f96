# middleware.py
import logging
import math
import threading
import time
from typing import Callable, Dict, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from config import RATE_LIMIT_WINDOW_SECONDS, RATE_LIMIT_MAX_REQUESTS

logger = logging.getLogger(__name__)


# ======================================================
# SECURITY HEADERS
# ======================================================

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    # the frontend runs on another origin and must be able to read responses
    "Cross-Origin-Resource-Policy": "cross-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


# ======================================================
# RATE LIMIT (fixed window per client host)
# ======================================================

class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # host -> (window start, hits in window)
        self._hits: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def _client_key(self, request: Request) -> str:
        return request.client.host if request.client else "unknown"

    def _evict_expired(self, now: float):
        """Forget clients whose window has ended. Caller holds the lock."""
        self._hits = {
            host: (start, count)
            for host, (start, count) in self._hits.items()
            if now - start < self.window_seconds
        }
        self._last_sweep = now

    def hit(self, key: str) -> Tuple[int, float]:
        """Count one request for `key`. Returns (hits in window, seconds until reset)."""
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._evict_expired(now)
            start, count = self._hits.get(key, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0
            count += 1
            self._hits[key] = (start, count)
        return count, self.window_seconds - (now - start)

    async def dispatch(self, request: Request, call_next):
        key = self._client_key(request)
        count, reset_in = self.hit(key)
        reset_in = max(math.ceil(reset_in), 0)

        headers = {
            "RateLimit-Limit": str(self.max_requests),
            "RateLimit-Remaining": str(max(self.max_requests - count, 0)),
            "RateLimit-Reset": str(reset_in),
        }

        if count > self.max_requests:
            logger.warning(f"⚠ Rate limit exceeded for {key}")
            headers["Retry-After"] = str(reset_in)
            return JSONResponse(
                status_code=429,
                content={"message": "Too many requests"},
                headers=headers,
            )

        response = await call_next(request)
        for name, value in headers.items():
            response.headers[name] = value
        return response
