import os
import time
import logging
from collections import defaultdict
from threading import Lock

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "30"))         # requests per window
RATE_LIMIT_WINDOW = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))     # window in seconds

# only endpoints that fan out to remote sites are limited
NETWORK_BOUND_PATHS = ("/links/classify", "/documents/check-links")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window per-IP limit on the endpoints that run liveness checks."""

    def __init__(
        self,
        app,
        requests_per_window: int = RATE_LIMIT_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW,
        limited_paths: tuple[str, ...] = NETWORK_BOUND_PATHS,
    ):
        super().__init__(app)
        self.requests_per_window = requests_per_window
        self.window_seconds = window_seconds
        self.limited_paths = limited_paths
        self._hits: dict[str, list[float]] = defaultdict(list)
        self._lock = Lock()

    def _client_ip(self, request: Request) -> str:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _retry_after(self, ip: str, now: float) -> int:
        """Seconds until a slot frees up, or 0 if the request may proceed (and is recorded)."""
        with self._lock:
            hits = [t for t in self._hits[ip] if t > now - self.window_seconds]
            if len(hits) >= self.requests_per_window:
                self._hits[ip] = hits
                return int(self.window_seconds - (now - hits[0])) + 1
            hits.append(now)
            self._hits[ip] = hits
            return 0

    async def dispatch(self, request: Request, call_next):
        if request.url.path not in self.limited_paths:
            return await call_next(request)

        ip = self._client_ip(request)
        retry_after = self._retry_after(ip, time.time())
        if retry_after:
            logger.warning("Rate limit hit for IP %s on %s", ip, request.url.path)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many link checks. Please slow down.", "code": "rate_limit_exceeded"},
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration_ms = int((time.time() - start) * 1000)
        logger.info(
            "%s %s -> %d (%dms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response
