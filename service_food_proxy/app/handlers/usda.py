"""
USDA FoodData Central handler.
"""

from typing import Optional, TYPE_CHECKING

import httpx
from fastapi import Response

from shared.config import ProxyConfig
from shared.errors import ValidationError
from ..adapters.upstream_client import UpstreamClient
from ..domain.context import RequestContext
from ..ratelimit.fixed_window import RateGate
from ..responses.envelope import passthrough_response
from .base import BaseHandler

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector

SEARCH_CACHE_SECONDS = 300
PAGE_SIZE = 20
DATA_TYPE = "Foundation"


class USDAHandler(BaseHandler):
    """Serves ``/usda/search`` by forwarding to the FDC foods search API."""

    upstream = "USDA"

    def __init__(
        self,
        config: ProxyConfig,
        rate_gate: RateGate,
        http_client: httpx.AsyncClient,
        metrics: Optional["MetricsCollector"] = None,
    ):
        super().__init__(config, rate_gate, config.usda_rate_limit)
        self.client = UpstreamClient(
            self.upstream,
            config.usda_base_url,
            http_client,
            failure_message="Failed to fetch from USDA API",
            metrics=metrics,
        )

    async def _dispatch(self, ctx: RequestContext) -> Response:
        if ctx.segment(2) != "search":
            raise ValidationError("Invalid endpoint. Use /usda/search")

        query = ctx.param("query")
        if not query:
            raise ValidationError("Missing ?query parameter")

        params = {
            "query": query,
            "dataType": DATA_TYPE,
            "pageSize": PAGE_SIZE,
            "api_key": self.config.usda_key.get_secret_value(),
        }
        response = await self.client.get("/foods/search", params, redact=("api_key",))
        return passthrough_response(response.content, response.status_code, SEARCH_CACHE_SECONDS)
