"""Blocking token-bucket rate limiter for the embedding API."""

from __future__ import annotations

import threading
import time


class RateLimiter:
    """Allow at most ``requests_per_minute`` calls to pass ``acquire``.

    Tokens refill continuously at ``requests_per_minute / 60`` per second up
    to a full bucket. ``None`` or a non-positive limit disables limiting.
    Safe to share between the threads of an indexing batch.
    """

    def __init__(self, requests_per_minute: int | None) -> None:
        enabled = requests_per_minute is not None and requests_per_minute > 0
        self.capacity: float | None = float(requests_per_minute) if enabled else None
        self.rate = self.capacity / 60.0 if self.capacity else 0.0
        self.tokens = self.capacity or 0.0
        self.updated_at = time.monotonic()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.capacity is not None

    def _refill(self, now: float) -> None:
        elapsed = now - self.updated_at
        self.tokens = min(self.capacity or 0.0, self.tokens + elapsed * self.rate)
        self.updated_at = now

    def acquire(self) -> None:
        """Block until a token is available, then consume it."""
        if not self.enabled:
            return

        while True:
            with self._lock:
                self._refill(time.monotonic())
                if self.tokens >= 1:
                    self.tokens -= 1
                    return
                wait_time = (1 - self.tokens) / self.rate

            # Sleep outside the lock so other threads can check in
            time.sleep(wait_time)
