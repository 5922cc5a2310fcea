"""Tests for request deadlines."""

from pray.http.deadline import Deadline


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestDeadline:
    """Test deadline arithmetic."""

    def test_never_is_unbounded(self):
        """Test unbounded deadline."""
        deadline = Deadline.never()
        assert deadline.expired is False
        assert deadline.remaining() is None
        assert deadline.bound(30.0) == 30.0

    def test_after_counts_down(self):
        """Test remaining time follows the clock."""
        clock = FakeClock()
        deadline = Deadline.after(10.0, clock)
        assert deadline.remaining() == 10.0
        clock.now += 4
        assert deadline.remaining() == 6.0
        assert deadline.expired is False

    def test_expires_and_never_goes_negative(self):
        """Test expiry."""
        clock = FakeClock()
        deadline = Deadline.after(1.0, clock)
        clock.now += 5
        assert deadline.expired is True
        assert deadline.remaining() == 0.0

    def test_bound_clamps_timeout(self):
        """Test per-operation timeout clamping."""
        clock = FakeClock()
        deadline = Deadline.after(2.0, clock)
        assert deadline.bound(30.0) == 2.0
        assert deadline.bound(1.0) == 1.0

    def test_child_never_outlives_parent(self):
        """Test sub-deadlines."""
        clock = FakeClock()
        parent = Deadline.after(3.0, clock)
        assert parent.child(10.0).remaining() == 3.0
        assert parent.child(1.0).remaining() == 1.0

    def test_child_of_unbounded_deadline(self):
        """Test sub-deadline of an unbounded parent."""
        clock = FakeClock()
        child = Deadline.never(clock).child(5.0)
        assert child.remaining() == 5.0
