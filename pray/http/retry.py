"""
Retry logic for remote requests.

Sandi Metz Principles:
- Single Responsibility: Manage retry logic
- Small methods: Each method < 10 lines
- Dependency Injection: Configuration injected
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from pray.exceptions import RequestCancelledError, RetryExhaustedError, TransportError
from pray.http.deadline import Deadline
from pray.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Retry configuration."""

    max_retries: int = 3
    base_delay: float = 0.1


class RetryHandler:
    """
    Quadratic backoff retry handler.

    Makes at most max_retries + 1 attempts, waiting attempt² × base_delay
    before each retry. A fired deadline stops retrying immediately.
    """

    def __init__(self, config: RetryConfig | None = None):
        """
        Initialize retry handler.

        Args:
            config: Retry configuration (uses defaults if None)
        """
        self._config = config or RetryConfig()

    @property
    def max_attempts(self) -> int:
        """Get total number of attempts."""
        return self._config.max_retries + 1

    async def execute(
        self,
        func: Callable[[], Awaitable[T]],
        deadline: Optional[Deadline] = None,
    ) -> T:
        """
        Execute function with retry logic.

        Args:
            func: Async function performing one attempt
            deadline: Cancellation signal shared by all attempts

        Returns:
            Function result

        Raises:
            RequestCancelledError: If the deadline fired
            RetryExhaustedError: If all attempts failed
        """
        deadline = deadline or Deadline.never()
        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                await self._backoff(attempt - 1, deadline, last_error)

            self._check_deadline(deadline, last_error)

            try:
                return await func()
            except self._get_retryable_exceptions() as e:
                last_error = e
                self._check_deadline(deadline, e)
                logger.warning(f"Attempt {attempt} failed", error=str(e))

        logger.error(f"All {self.max_attempts} attempts failed", error=str(last_error))
        raise RetryExhaustedError(self.max_attempts, last_error) from last_error

    def _calculate_delay(self, retry: int) -> float:
        """
        Calculate delay before a retry.

        Args:
            retry: Retry number (1-indexed)

        Returns:
            Delay in seconds
        """
        return retry * retry * self._config.base_delay

    async def _backoff(
        self, retry: int, deadline: Deadline, last_error: Exception | None
    ) -> None:
        """Sleep before a retry unless the deadline would fire first."""
        delay = self._calculate_delay(retry)
        remaining = deadline.remaining()
        if remaining is not None and remaining <= delay:
            raise RequestCancelledError(
                "deadline exceeded before next retry"
            ) from last_error
        await asyncio.sleep(delay)

    @staticmethod
    def _check_deadline(deadline: Deadline, error: Exception | None) -> None:
        """Raise if the deadline has fired."""
        if deadline.expired:
            raise RequestCancelledError("deadline exceeded") from error

    @staticmethod
    def _get_retryable_exceptions() -> tuple:
        """
        Get tuple of retryable exceptions.

        Returns:
            Tuple of exception types that should be retried
        """
        return (TransportError,)
