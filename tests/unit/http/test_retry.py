"""
Tests for retry handler.
"""

import pytest

from pray.exceptions import RequestCancelledError, RetryExhaustedError, TransportError
from pray.http.deadline import Deadline
from pray.http.retry import RetryConfig, RetryHandler


class TestRetryHandler:
    """Test retry handler functionality."""

    @pytest.fixture
    def retry_handler(self) -> RetryHandler:
        """Create retry handler instance."""
        return RetryHandler(RetryConfig(max_retries=3, base_delay=0.1))

    @pytest.mark.asyncio
    async def test_execute_success_first_attempt(
        self, retry_handler: RetryHandler, no_sleep
    ) -> None:
        """Test successful execution on first attempt."""
        call_count = 0

        async def success_func() -> str:
            nonlocal call_count
            call_count += 1
            return "success"

        result = await retry_handler.execute(success_func)
        assert result == "success"
        assert call_count == 1
        no_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_execute_retry_on_transport_error(
        self, retry_handler: RetryHandler, no_sleep
    ) -> None:
        """Test retry on transport errors."""
        call_count = 0

        async def failing_then_success() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise TransportError("connection reset")
            return "success"

        result = await retry_handler.execute(failing_then_success)
        assert result == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_execute_exhausts_retries(
        self, retry_handler: RetryHandler, no_sleep
    ) -> None:
        """Test max_retries + 1 attempts on persistent failure."""
        call_count = 0

        async def always_fails() -> str:
            nonlocal call_count
            call_count += 1
            raise TransportError("unexpected status code: 503", status_code=503)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await retry_handler.execute(always_fails)

        assert call_count == 4
        assert exc_info.value.attempts == 4
        assert exc_info.value.last_error.status_code == 503
        assert "after 4 attempts" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_backoff_is_quadratic(
        self, retry_handler: RetryHandler, no_sleep
    ) -> None:
        """Test delays of 100ms, 400ms and 900ms between attempts."""

        async def always_fails() -> str:
            raise TransportError("down")

        with pytest.raises(RetryExhaustedError):
            await retry_handler.execute(always_fails)

        delays = [call.args[0] for call in no_sleep.call_args_list]
        assert delays == pytest.approx([0.1, 0.4, 0.9])

    def test_calculate_delay(self, retry_handler: RetryHandler) -> None:
        """Test delay calculation."""
        assert retry_handler._calculate_delay(1) == pytest.approx(0.1)
        assert retry_handler._calculate_delay(2) == pytest.approx(0.4)
        assert retry_handler._calculate_delay(3) == pytest.approx(0.9)

    def test_max_attempts(self) -> None:
        """Test attempt count."""
        assert RetryHandler(RetryConfig(max_retries=0)).max_attempts == 1
        assert RetryHandler().max_attempts == 4

    def test_get_retryable_exceptions(self, retry_handler: RetryHandler) -> None:
        """Test retryable exceptions list."""
        assert retry_handler._get_retryable_exceptions() == (TransportError,)

    @pytest.mark.asyncio
    async def test_non_retryable_error_fails_immediately(
        self, retry_handler: RetryHandler, no_sleep
    ) -> None:
        """Test non-retryable errors propagate unchanged."""
        call_count = 0

        async def raises_value_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            await retry_handler.execute(raises_value_error)

        assert call_count == 1

    @pytest.mark.asyncio
    async def test_expired_deadline_wins_over_retry(
        self, retry_handler: RetryHandler, no_sleep
    ) -> None:
        """Test cancellation precedence after a failed attempt."""
        now = [0.0]
        deadline = Deadline.after(1.0, clock=lambda: now[0])
        call_count = 0

        async def fails_after_deadline() -> str:
            nonlocal call_count
            call_count += 1
            now[0] = 5.0
            raise TransportError("timeout")

        with pytest.raises(RequestCancelledError):
            await retry_handler.execute(fails_after_deadline, deadline)

        assert call_count == 1
        no_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_deadline_shorter_than_backoff_aborts(
        self, retry_handler: RetryHandler, no_sleep
    ) -> None:
        """Test backoff is skipped when the deadline would fire during it."""
        deadline = Deadline.after(0.05, clock=lambda: 0.0)

        async def always_fails() -> str:
            raise TransportError("down")

        with pytest.raises(RequestCancelledError):
            await retry_handler.execute(always_fails, deadline)

        no_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_already_expired_deadline_makes_no_attempt(
        self, retry_handler: RetryHandler
    ) -> None:
        """Test nothing is sent after the deadline fired."""
        deadline = Deadline(expires_at=0.0, clock=lambda: 1.0)
        called = False

        async def func() -> str:
            nonlocal called
            called = True
            return "x"

        with pytest.raises(RequestCancelledError):
            await retry_handler.execute(func, deadline)

        assert called is False
