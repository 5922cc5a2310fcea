"""Prayer times API clients."""
