"""
Request deadlines.

A Deadline is the cancellation signal every network operation accepts.
It is an absolute point on the monotonic clock, so one deadline can be
shared across retries or split into sub-deadlines per provider.
"""

import time
from typing import Callable, Optional

Clock = Callable[[], float]


class Deadline:
    """Absolute expiry on a monotonic clock. None means unbounded."""

    def __init__(self, expires_at: Optional[float], clock: Clock = time.monotonic):
        """
        Initialize deadline.

        Args:
            expires_at: Clock reading after which the deadline has fired
            clock: Monotonic clock (injectable for tests)
        """
        self._expires_at = expires_at
        self._clock = clock

    @classmethod
    def after(cls, seconds: float, clock: Clock = time.monotonic) -> "Deadline":
        """Create a deadline that fires `seconds` from now."""
        return cls(clock() + seconds, clock)

    @classmethod
    def never(cls, clock: Clock = time.monotonic) -> "Deadline":
        """Create an unbounded deadline."""
        return cls(None, clock)

    @property
    def expires_at(self) -> Optional[float]:
        """Get absolute expiry (None when unbounded)."""
        return self._expires_at

    @property
    def expired(self) -> bool:
        """Check whether the deadline has fired."""
        return self._expires_at is not None and self._clock() >= self._expires_at

    def remaining(self) -> Optional[float]:
        """Get seconds left (never negative), or None when unbounded."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    def bound(self, timeout: float) -> float:
        """Clamp a per-operation timeout to the time left."""
        remaining = self.remaining()
        if remaining is None:
            return timeout
        return min(timeout, remaining)

    def child(self, seconds: float) -> "Deadline":
        """
        Create a sub-deadline that fires after `seconds` or with this one.

        Args:
            seconds: Maximum lifetime of the sub-deadline

        Returns:
            Deadline never later than this one
        """
        return Deadline(self._clock() + self.bound(seconds), self._clock)

    def __repr__(self) -> str:
        remaining = self.remaining()
        if remaining is None:
            return "Deadline(never)"
        return f"Deadline(remaining={remaining:.3f}s)"
