"""Tests for the calculation method catalogue."""

import pytest

from pray.prayer.methods import (
    CALCULATION_METHODS,
    get_method,
    get_method_name,
    valid_method_id,
)


class TestCalculationMethods:
    """Test method lookups."""

    def test_catalogue_covers_all_ids(self):
        """Test IDs 0 through 23 are present in order."""
        assert [method.id for method in CALCULATION_METHODS] == list(range(24))

    def test_get_method_name(self):
        """Test known method name."""
        assert get_method_name(5) == "Egyptian General Authority of Survey"
        assert get_method_name(4) == "Umm Al-Qura University, Makkah"

    def test_unknown_method_name(self):
        """Test fallback name."""
        assert get_method_name(99) == "Unknown"

    @pytest.mark.parametrize(
        "method_id,expected", [(0, True), (23, True), (24, False), (-1, False)]
    )
    def test_valid_method_id(self, method_id, expected):
        """Test ID validity."""
        assert valid_method_id(method_id) is expected

    def test_get_method(self):
        """Test full record lookup."""
        method = get_method(16)
        assert method is not None
        assert method.name == "JAKIM"
        assert get_method(42) is None
