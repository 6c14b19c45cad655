"""In-process sliding-window rate limiting.

Each key keeps the timestamps of its hits inside the current window; a hit is
refused once the window already holds ``limit`` entries. Refused hits are
counted as well, so hammering an endpoint keeps the caller locked out.
"""

import math
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from renoplan.config import Settings
from renoplan.errors import RateLimitExceeded

logger = structlog.get_logger()


@dataclass(frozen=True)
class RateLimitPolicy:
    name: str
    limit: int
    window_seconds: int
    error: str

    @property
    def message(self) -> str:
        minutes = math.ceil(self.window_seconds / 60)
        return f"Too many requests. Please try again in {minutes} minute{'s' if minutes > 1 else ''}."


@dataclass(frozen=True)
class RateLimitResult:
    limit: int
    remaining: int
    reset_after: int


def build_policies(settings: Settings) -> dict[str, RateLimitPolicy]:
    return {
        "create": RateLimitPolicy(
            "create", settings.create_limit, settings.create_window_seconds,
            "Too many project creation attempts",
        ),
        "generate": RateLimitPolicy(
            "generate", settings.generate_limit, settings.generate_window_seconds,
            "Too many AI generation attempts",
        ),
        "plan": RateLimitPolicy(
            "plan", settings.plan_limit, settings.plan_window_seconds,
            "Too many project planning attempts",
        ),
        "general": RateLimitPolicy(
            "general", settings.general_limit, settings.general_window_seconds,
            "Too many requests",
        ),
    }


class SlidingWindowRateLimiter:
    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_interval: float = 60.0) -> None:
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()
        self._hits: dict[RateLimitPolicy, dict[str, deque[float]]] = {}

    @property
    def bucket_count(self) -> int:
        return sum(len(buckets) for buckets in self._hits.values())

    def hit(self, policy: RateLimitPolicy, key: str) -> RateLimitResult:
        """Record a hit for ``key`` under ``policy``. Raises RateLimitExceeded when over the limit."""
        now = self._clock()
        if now - self._last_sweep >= self._sweep_interval:
            self.sweep(now)

        hits = self._hits.setdefault(policy, {}).setdefault(key, deque())
        cutoff = now - policy.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()

        hits.append(now)
        reset_after = math.ceil(hits[0] + policy.window_seconds - now)
        if len(hits) > policy.limit:
            logger.warning(
                "rate_limit_exceeded",
                policy=policy.name,
                key=key,
                count=len(hits),
                limit=policy.limit,
            )
            raise RateLimitExceeded(policy.error, policy.message, policy.window_seconds)
        return RateLimitResult(policy.limit, policy.limit - len(hits), reset_after)

    def sweep(self, now: float | None = None) -> int:
        """Drop every bucket whose newest hit has left its window. Returns how many were dropped."""
        now = self._clock() if now is None else now
        self._last_sweep = now
        dropped = 0
        for policy, buckets in self._hits.items():
            cutoff = now - policy.window_seconds
            stale = [key for key, hits in buckets.items() if not hits or hits[-1] <= cutoff]
            for key in stale:
                del buckets[key]
            dropped += len(stale)
        if dropped:
            logger.debug("rate_limit_buckets_swept", dropped=dropped, remaining=self.bucket_count)
        return dropped
