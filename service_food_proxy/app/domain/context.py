"""
Per-request context derived from the inbound HTTP request.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import List, Mapping, Optional
from urllib.parse import parse_qsl

from fastapi import Request

SENTINEL_IDENTITY = "0.0.0.0"


def _parse_query(query_string: str) -> Mapping[str, str]:
    params = {}
    for key, value in parse_qsl(query_string, keep_blank_values=True):
        # First occurrence wins, as with URLSearchParams.get
        params.setdefault(key, value)
    return MappingProxyType(params)


@dataclass(frozen=True)
class RequestContext:
    """Immutable view of one inbound request."""

    method: str
    path: str
    query_string: str = ""
    identity: str = SENTINEL_IDENTITY
    query_params: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "query_params", _parse_query(self.query_string))

    @property
    def segments(self) -> List[str]:
        """Path split on "/"; index 1 is the upstream, index 2 the endpoint."""
        return self.path.split("/")

    def segment(self, index: int) -> Optional[str]:
        """Path segment at ``index``, or None when absent or empty."""
        parts = self.segments
        if index < len(parts) and parts[index]:
            return parts[index]
        return None

    def param(self, name: str) -> Optional[str]:
        """Query parameter value, or None when absent or empty."""
        value = self.query_params.get(name)
        return value or None

    def with_path(self, path: str) -> "RequestContext":
        """Copy of this context pointing at a different path."""
        return replace(self, path=path)

    @classmethod
    def from_request(cls, request: Request, identity_header: str) -> "RequestContext":
        """Build a context from a Starlette request."""
        identity = request.headers.get(identity_header) or SENTINEL_IDENTITY
        return cls(
            method=request.method.upper(),
            path=request.url.path,
            query_string=request.url.query,
            identity=identity,
        )
