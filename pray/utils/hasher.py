"""
Cache key generation utilities.

Sandi Metz Principles:
- Single Responsibility: Hash generation
- Small functions: Each does one thing
- Pure functions: No side effects
"""

import hashlib
import json
from typing import Any

COORDINATE_PRECISION = 6
QIBLA_COORDINATE_PRECISION = 4


def normalize_address(address: str) -> str:
    """
    Normalize address for comparison.

    Args:
        address: Free-text address

    Returns:
        Normalized address (lowercase, trimmed, single-spaced)
    """
    return " ".join(address.strip().lower().split())


def format_coordinate(value: float, precision: int = COORDINATE_PRECISION) -> str:
    """
    Format a coordinate with fixed precision.

    The default matches the precision sent in API queries.

    Args:
        value: Latitude or longitude in decimal degrees
        precision: Decimal places

    Returns:
        Coordinate string, stable across float representations
    """
    formatted = f"{value:.{precision}f}"
    if formatted.startswith("-") and float(formatted) == 0:
        return formatted[1:]
    return formatted


def generate_cache_key(*parts: Any) -> str:
    """
    Generate cache key from request parts.

    Parts are encoded as a JSON array so that part boundaries
    are preserved: ("ab", "c") and ("a", "bc") hash differently.

    Args:
        *parts: Logical request parameters

    Returns:
        Cache key (64 hex characters)
    """
    encoded = json.dumps([str(part) for part in parts], separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()
