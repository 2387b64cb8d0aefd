"""
Per-upstream request handlers.
"""

from .base import BaseHandler
from .usda import USDAHandler
from .off import OFFHandler

__all__ = ["BaseHandler", "USDAHandler", "OFFHandler"]
