"""
Per-client request rate limiting.

A sliding one-window counter keyed by client identity. One instance lives on
the application context and is handed to the HTTP middleware; there is no
module-level limiter.
"""

from collections import defaultdict, deque
from dataclasses import dataclass
from time import monotonic
from typing import Callable, Deque, Dict


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: float = 0.0


class ClientRateLimiter:
    """Fixed quota of requests per window for each client key"""

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets: Dict[str, Deque[float]] = defaultdict(deque)

    def _prune(self, bucket: Deque[float], now: float) -> None:
        window_start = now - self.window_seconds
        while bucket and bucket[0] <= window_start:
            bucket.popleft()

    def check(self, client_id: str) -> RateLimitDecision:
        """Record a request for client_id unless it is over quota"""
        now = self._clock()
        bucket = self._buckets[client_id]
        self._prune(bucket, now)

        if len(bucket) >= self.max_requests:
            retry_after = bucket[0] + self.window_seconds - now
            return RateLimitDecision(allowed=False, remaining=0, retry_after=max(retry_after, 0.0))

        bucket.append(now)
        return RateLimitDecision(allowed=True, remaining=self.max_requests - len(bucket))

    def current_count(self, client_id: str) -> int:
        bucket = self._buckets.get(client_id)
        if not bucket:
            return 0
        self._prune(bucket, self._clock())
        return len(bucket)

    def reset(self) -> None:
        self._buckets.clear()
