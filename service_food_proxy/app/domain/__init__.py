"""
Domain types for the proxy: per-request context and product enrichment.
"""

from .context import RequestContext, SENTINEL_IDENTITY
from .products import enrich_product, enrich_search_payload

__all__ = [
    "RequestContext",
    "SENTINEL_IDENTITY",
    "enrich_product",
    "enrich_search_payload",
]
