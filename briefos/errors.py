"""
Error taxonomy for the brief pipeline.

Missing credentials are not represented here: they are a supported state
that routes generation through the mock provider.
"""

from typing import Optional


class BriefOSError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


# ============== Upstream (Gemini) ==============

class UpstreamError(BriefOSError):
    """A generation call to the AI provider failed."""

    kind = "upstream"


class UpstreamTimeout(UpstreamError):
    """The provider did not answer within the wall-clock budget."""

    kind = "timeout"


class UpstreamTransportFailure(UpstreamError):
    """The provider call raised before returning any text."""

    kind = "transport"


class InvalidUpstreamResponse(UpstreamError):
    """The provider answered, but the text is not a valid document."""

    kind = "invalid_response"


# ============== Storage ==============

class StoreUnavailable(BriefOSError):
    """The durable brief store could not be opened."""

    pass


# ============== Client ==============

class ClientError(BriefOSError):
    """Base exception for ResilientClient failures."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code


class ServiceError(ClientError):
    """The server answered with a structured error payload."""

    pass


class ClientExhausted(ClientError):
    """All attempts failed with transient errors."""

    def __init__(self, message: str, attempts: int, last_error: Optional[Exception] = None):
        super().__init__(message, details=str(last_error) if last_error else None)
        self.attempts = attempts
        self.last_error = last_error
