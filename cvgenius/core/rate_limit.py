"""
Sliding-window rate limiter for API endpoints.

One instance lives on ``app.state.rate_limiter``; requests are keyed by user id
when authenticated, otherwise by client IP.
"""
import logging
import time
from typing import Callable, Dict, List, Optional
from fastapi import Request, HTTPException, status

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    # Check for forwarded IP (from proxy/load balancer)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


class RateLimiter:
    """Allow at most ``max_requests`` per ``window_seconds`` for each key."""

    def __init__(self, max_requests: int = 10, window_seconds: int = 60,
                 clock: Callable[[], float] = time.time):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, List[float]] = {}
        self._last_sweep = clock()

    def _sweep(self, cutoff: float) -> None:
        # Forget keys with no hits left in the window
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= cutoff]:
            del self._hits[key]
        self._last_sweep = self._clock()

    def check(self, key: str) -> None:
        """
        Record a hit for ``key``.

        Raises:
            HTTPException: 429 if the key already used up its window
        """
        now = self._clock()
        cutoff = now - self.window_seconds

        if now - self._last_sweep >= self.window_seconds:
            self._sweep(cutoff)

        # Drop entries older than the window
        hits = [timestamp for timestamp in self._hits.get(key, []) if timestamp > cutoff]

        if len(hits) >= self.max_requests:
            self._hits[key] = hits
            logger.warning(
                f"Rate limit exceeded for {key} ({len(hits)} requests in {self.window_seconds}s)"
            )
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"Rate limit exceeded. Maximum {self.max_requests} requests per {self.window_seconds} seconds."
            )

        hits.append(now)
        self._hits[key] = hits
        logger.debug(f"Rate limit check passed for {key} ({len(hits)}/{self.max_requests})")

    def tracked_keys(self) -> List[str]:
        return list(self._hits)

    def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            self._hits.clear()
        else:
            self._hits.pop(key, None)


def enforce_rate_limit(request: Request, user_id: Optional[str]) -> None:
    """
    Apply the app-wide limiter to the caller.

    Routes call this after validating the request body, so rejected requests
    do not use up the caller's window.
    """
    limiter: Optional[RateLimiter] = getattr(request.app.state, "rate_limiter", None)
    if limiter is not None:
        limiter.check(f"user:{user_id}" if user_id else f"ip:{get_client_ip(request)}")
