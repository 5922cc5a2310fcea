"""File-backed response cache."""
