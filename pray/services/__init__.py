"""Services composed from the API clients."""
