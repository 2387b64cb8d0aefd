"""
Adapters package for the proxy.

Contains the HTTP client wrapper used to reach the upstream food APIs. The
adapter owns timing, logging and the mapping of transport exceptions to
shared errors; it does not retry.
"""

from .upstream_client import UpstreamClient

__all__ = ["UpstreamClient"]
