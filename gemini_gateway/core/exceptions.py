"""Custom exceptions for the Gemini gateway core library."""

from enum import Enum


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ProviderErrorKind(str, Enum):
    """Coarse classification of a failed provider call."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    BAD_REQUEST = "bad_request"
    UNKNOWN = "unknown"

    @classmethod
    def from_status(cls, status: int | None) -> "ProviderErrorKind":
        """Classify an HTTP status code returned by the provider."""
        if status in (401, 403):
            return cls.AUTH
        if status == 429:
            return cls.RATE_LIMIT
        if status == 400:
            return cls.BAD_REQUEST
        return cls.UNKNOWN


class ProviderError(GatewayError):
    """Raised when a call to the generative model provider fails."""

    def __init__(
        self,
        message: str,
        kind: ProviderErrorKind = ProviderErrorKind.UNKNOWN,
        status: int | None = None,
    ):
        self.kind = kind
        self.status = status
        super().__init__(message)

    @classmethod
    def from_status(cls, status: int, message: str) -> "ProviderError":
        """Build an error whose kind is derived from the provider status."""
        return cls(message, kind=ProviderErrorKind.from_status(status), status=status)


class UpstreamUnreachableError(ProviderError):
    """Raised when the provider cannot be reached."""

    def __init__(self, message: str, upstream: str | None = None):
        self.upstream = upstream
        super().__init__(message)


class UpstreamTimeoutError(ProviderError):
    """Raised when a request to the provider times out."""

    def __init__(self, message: str, upstream: str | None = None):
        self.upstream = upstream
        super().__init__(message)


class InvalidResponseError(ProviderError):
    """Raised when the provider answers with a body that cannot be decoded."""

    pass
