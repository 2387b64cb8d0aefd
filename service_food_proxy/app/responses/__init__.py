"""
Response builders shared by the router and every handler.
"""

from .envelope import (
    CORS_HEADERS,
    cors_response,
    error_response,
    json_response,
    not_found_response,
    passthrough_response,
)

__all__ = [
    "CORS_HEADERS",
    "cors_response",
    "error_response",
    "json_response",
    "not_found_response",
    "passthrough_response",
]
