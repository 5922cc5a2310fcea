"""HTTP transport with retries and deadlines."""
