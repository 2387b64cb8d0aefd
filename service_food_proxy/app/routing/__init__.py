"""
Top-level request dispatch.
"""

from .router import Router, endpoint_label, rewrite_legacy_request, NOT_FOUND_MESSAGE

__all__ = ["Router", "endpoint_label", "rewrite_legacy_request", "NOT_FOUND_MESSAGE"]
