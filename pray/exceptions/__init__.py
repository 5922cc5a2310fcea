"""
Custom exceptions for the pray core.
"""


class PrayError(Exception):
    """Base exception for pray errors."""

    pass


class TransportError(PrayError):
    """Raised when a single HTTP attempt fails (network error or non-2xx)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RequestCancelledError(PrayError):
    """Raised when the caller's deadline fires. Never retried."""

    pass


class RetryExhaustedError(PrayError):
    """Raised when every retry attempt has failed."""

    def __init__(self, attempts: int, last_error: Exception | None):
        message = f"request failed after {attempts} attempts"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class RemoteAPIError(PrayError):
    """Raised when the API answers 2xx but reports a non-success code."""

    def __init__(self, code: int | None, status: str | None):
        super().__init__(f"API error: {status} (code: {code})")
        self.code = code
        self.status = status


class ResponseParseError(PrayError):
    """Raised when a remote body cannot be parsed."""

    pass


class FetchError(PrayError):
    """Raised when a remote fetch fails, tagged with the endpoint kind."""

    def __init__(self, endpoint: str, cause: Exception):
        super().__init__(f"failed to fetch {endpoint}: {cause}")
        self.endpoint = endpoint
        self.cause = cause

    @property
    def attempts(self) -> int | None:
        """Attempt count when the failure came from exhausted retries."""
        if isinstance(self.cause, RetryExhaustedError):
            return self.cause.attempts
        return None

    @property
    def is_cancelled(self) -> bool:
        """True when the caller's deadline fired."""
        return isinstance(self.cause, RequestCancelledError)

    @property
    def is_rejected(self) -> bool:
        """True when the remote service rejected the request semantically."""
        return isinstance(self.cause, RemoteAPIError)


class ComparisonError(PrayError):
    """Raised when one side of a location comparison cannot be fetched."""

    def __init__(self, location: str, cause: Exception):
        super().__init__(f"failed to fetch prayer times for {location}: {cause}")
        self.location = location
        self.cause = cause


class GeolocationProviderError(PrayError):
    """Raised when one geolocation provider fails or reports an error."""

    pass


class CacheError(PrayError):
    """Raised when cache operations fail."""

    pass


class LocationDetectionError(PrayError):
    """Raised when no geolocation provider produced a valid location."""

    def __init__(self, failures: dict[str, str]):
        details = "; ".join(f"{name}: {reason}" for name, reason in failures.items())
        message = "failed to detect location from IP: all services failed"
        if details:
            message = f"{message} ({details})"
        super().__init__(message)
        self.failures = failures


class ValidationError(PrayError):
    """Raised when request parameters are invalid."""

    pass


class ConfigurationError(PrayError):
    """Raised when configuration is invalid."""

    pass
