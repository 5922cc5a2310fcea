"""Test hash utilities."""

from pray.utils.hasher import format_coordinate, generate_cache_key, normalize_address


class TestHashUtilities:
    """Test hash utility functions."""

    def test_should_normalize_address(self):
        """Test address normalization."""
        assert normalize_address("  Cairo,   EGYPT ") == "cairo, egypt"

    def test_should_format_coordinate_with_fixed_precision(self):
        """Test coordinate formatting."""
        assert format_coordinate(30.04443) == "30.044430"
        assert format_coordinate(31) == "31.000000"
        assert format_coordinate(30.04443, 4) == "30.0444"

    def test_should_drop_sign_of_negative_zero(self):
        """Test -0.0 and tiny negatives format like zero."""
        assert format_coordinate(-0.0) == "0.000000"
        assert format_coordinate(-0.00001, 4) == "0.0000"

    def test_should_generate_consistent_cache_keys(self):
        """Test cache key generation consistency."""
        key1 = generate_cache_key("times", "30.0444", "31.2357", "15-03-2025", 5)
        key2 = generate_cache_key("times", "30.0444", "31.2357", "15-03-2025", 5)
        assert key1 == key2

    def test_should_generate_different_keys_for_different_parts(self):
        """Test different parameters generate different keys."""
        key1 = generate_cache_key("times", "15-03-2025", 5)
        key2 = generate_cache_key("times", "15-03-2025", 4)
        assert key1 != key2

    def test_should_keep_part_boundaries(self):
        """Test ("ab", "c") and ("a", "bc") do not collide."""
        assert generate_cache_key("ab", "c") != generate_cache_key("a", "bc")

    def test_cache_key_should_be_hex_sha256(self):
        """Test cache key format."""
        key = generate_cache_key("qibla", "1.0000", "2.0000")
        assert len(key) == 64
        assert all(char in "0123456789abcdef" for char in key)
