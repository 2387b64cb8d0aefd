"""
Router: dispatches requests to the USDA or OFF handler.

Requests for ``/?query=...`` predate the ``/usda`` prefix. They are rewritten
to ``/usda/search`` with the query string untouched before dispatch.
"""

from fastapi import Response

from shared.logging import get_logger
from ..domain.context import RequestContext
from ..handlers.base import BaseHandler
from ..responses.envelope import json_response, not_found_response

NOT_FOUND_MESSAGE = "Not found. Use /usda/search or /off/search endpoints."
LEGACY_SEARCH_PATH = "/usda/search"


def rewrite_legacy_request(ctx: RequestContext) -> RequestContext:
    """Map a root-path search onto ``/usda/search``; other requests pass through."""
    if ctx.path == "/" and ctx.param("query"):
        return ctx.with_path(LEGACY_SEARCH_PATH)
    return ctx


def endpoint_label(ctx: RequestContext) -> str:
    """Collapse a request onto one of a fixed set of endpoint names."""
    ctx = rewrite_legacy_request(ctx)
    endpoint = ctx.segment(2)
    if ctx.path.startswith("/usda/"):
        return "/usda/search" if endpoint == "search" else "/usda/other"
    if ctx.path.startswith("/off/"):
        if endpoint in ("search", "product"):
            return f"/off/{endpoint}"
        return "/off/other"
    return "other"


class Router:
    """Prefix-based dispatcher over the upstream handlers."""

    def __init__(self, usda_handler: BaseHandler, off_handler: BaseHandler):
        self.usda_handler = usda_handler
        self.off_handler = off_handler
        self.logger = get_logger("food_proxy.router")

    def resolve(self, ctx: RequestContext):
        """Return the handler responsible for ``ctx``, or None."""
        if ctx.path.startswith("/usda/"):
            return self.usda_handler
        if ctx.path.startswith("/off/"):
            return self.off_handler
        return None

    async def dispatch(self, ctx: RequestContext) -> Response:
        rewritten = rewrite_legacy_request(ctx)
        if rewritten is not ctx:
            self.logger.info("Rewrote legacy request", original_path=ctx.path, path=rewritten.path)

        handler = self.resolve(rewritten)
        if handler is None:
            return not_found_response(NOT_FOUND_MESSAGE)

        try:
            return await handler.handle(rewritten)
        except Exception as e:
            self.logger.error("Unhandled handler error", path=rewritten.path, error=str(e), exc_info=True)
            return json_response({"error": "Internal server error"}, status_code=500)
