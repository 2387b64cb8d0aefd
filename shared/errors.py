"""
Shared error handling for the Food Data Proxy.

Every error the proxy reports to a caller is a ``ProxyError`` subclass. Each
one knows its HTTP status and renders to the ``{error, status?}`` body shape
used by all JSON error responses.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorBody(BaseModel):
    """Standard error response format."""

    error: str
    status: Optional[int] = None


class ProxyError(Exception):
    """Base exception for proxy failures surfaced to the caller."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorBody:
        """Convert to error response."""
        return ErrorBody(error=self.message)

    def headers(self) -> Dict[str, str]:
        """Extra response headers for this error."""
        return {}


class ValidationError(ProxyError):
    """Missing or invalid client input."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class RateLimitedError(ProxyError):
    """Caller exceeded its request budget for the current window."""

    status_code = 429

    def __init__(self, retry_after: int, message: str = "Rate limit exceeded"):
        self.retry_after = retry_after
        super().__init__(message, {"retry_after": retry_after})

    def headers(self) -> Dict[str, str]:
        return {"Retry-After": str(self.retry_after)}


class UpstreamError(ProxyError):
    """Upstream API answered with a non-success status."""

    status_code = 502

    def __init__(self, service: str, upstream_status: int, message: Optional[str] = None):
        self.service = service
        self.upstream_status = upstream_status
        super().__init__(message or f"{service} API error", {"upstream_status": upstream_status})

    def to_response(self) -> ErrorBody:
        return ErrorBody(error=self.message, status=self.upstream_status)


class TransportFailure(ProxyError):
    """Network or decoding failure while talking to an upstream."""

    status_code = 500

    def __init__(self, service: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.service = service
        super().__init__(message, details)

