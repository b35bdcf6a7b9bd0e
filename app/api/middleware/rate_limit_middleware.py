# ===== app/api/middleware/rate_limit_middleware.py =====
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import time


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-client rate limit on public booking writes.

    The booking page is unauthenticated, so POSTs under /api/v1/public/ are
    limited per client IP over a sliding one-minute window.
    """

    def __init__(self, app, requests_per_minute: int = 20):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.request_times = {}  # In production, use Redis

    async def dispatch(self, request: Request, call_next):
        # Only apply to public write routes
        if request.method != "POST" or not request.url.path.startswith("/api/v1/public/"):
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        current_time = time.time()

        # Remove old timestamps (older than 1 minute)
        self.request_times[client_id] = [
            t for t in self.request_times.get(client_id, [])
            if current_time - t < 60.0
        ]

        # Check if rate limit exceeded
        if len(self.request_times[client_id]) >= self.requests_per_minute:
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Too many booking attempts. Please wait a minute.",
                    "retry_after": 60
                },
                headers={"Retry-After": "60"}
            )

        # Add current request timestamp
        self.request_times[client_id].append(current_time)

        return await call_next(request)
