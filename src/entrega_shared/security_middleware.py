"""
Security middleware: response headers and login rate limiting.
"""

import os
import time
from collections import defaultdict
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus

from flask import current_app, jsonify, request

from entrega_shared.serializers import error_response


def get_client_ip() -> str:
    """
    Get real client IP considering proxies.

    Returns:
        Client IP address string
    """
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    if forwarded_for:
        # X-Forwarded-For: client, proxy1, proxy2
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP", "")
    if real_ip:
        return real_ip.strip()

    return request.remote_addr or "unknown"


class RateLimiter:
    """Simple in-memory sliding-window rate limiter keyed by IP and path."""

    def __init__(self, cleanup_interval: int = 300):
        self.requests: dict[str, list] = defaultdict(list)
        self.cleanup_interval = cleanup_interval
        self._last_cleanup = time.time()

    def is_allowed(self, key: str, max_requests: int, window_seconds: int) -> tuple[bool, int]:
        """
        Check if request is allowed based on rate limit.

        Stale keys of every caller are pruned at most once per
        ``cleanup_interval`` seconds.

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        now = time.time()
        if now - self._last_cleanup >= self.cleanup_interval:
            self.clean_old_entries()
            self._last_cleanup = now

        cutoff = now - window_seconds
        self.requests[key] = [t for t in self.requests[key] if t > cutoff]

        if len(self.requests[key]) >= max_requests:
            return False, 0

        self.requests[key].append(now)
        return True, max_requests - len(self.requests[key])

    def clean_old_entries(self, max_age_seconds: int = 3600) -> None:
        """Remove entries older than max_age and drop keys left empty."""
        cutoff = time.time() - max_age_seconds

        for key in list(self.requests.keys()):
            self.requests[key] = [t for t in self.requests[key] if t > cutoff]
            if not self.requests[key]:
                del self.requests[key]


_rate_limiter = RateLimiter()


def _testing_mode() -> bool:
    if current_app and current_app.config.get("TESTING"):
        return True
    return os.getenv("TESTING", "").lower() in {"1", "true", "yes", "on"}


def rate_limit(max_requests: int = 5, window_seconds: int = 60, key_prefix: str = ""):
    """
    Decorator to rate limit endpoints. Disabled while testing.

    Args:
        max_requests: Maximum requests allowed per window
        window_seconds: Time window in seconds
        key_prefix: Optional prefix for the rate limit key
    """

    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if _testing_mode():
                return f(*args, **kwargs)

            key = f"{get_client_ip()}:{key_prefix}{request.path}"
            is_allowed, remaining = _rate_limiter.is_allowed(key, max_requests, window_seconds)

            if not is_allowed:
                response = jsonify(
                    error_response("Too many requests. Try again later.", code="AUTH_003")
                )
                response.status_code = HTTPStatus.TOO_MANY_REQUESTS
                response.headers["Retry-After"] = str(window_seconds)
                response.headers["X-RateLimit-Limit"] = str(max_requests)
                response.headers["X-RateLimit-Remaining"] = "0"
                return response

            return f(*args, **kwargs)

        return decorated_function

    return decorator


def configure_security_headers(app):
    """
    Configure security headers for a JSON API app.

    API responses carry per-user data and are never cached.
    """

    @app.after_request
    def add_security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"

        if request.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"

        return response
