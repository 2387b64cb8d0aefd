"""
Open Food Facts handler.

OFF asks API consumers to identify themselves with a descriptive User-Agent,
so every upstream call carries the configured one.
"""

from typing import Optional, TYPE_CHECKING
from urllib.parse import quote

import httpx
from fastapi import Response

from shared.config import ProxyConfig
from shared.errors import ValidationError
from ..adapters.upstream_client import UpstreamClient
from ..domain.context import RequestContext
from ..domain.products import enrich_search_payload
from ..ratelimit.fixed_window import RateGate
from ..responses.envelope import json_response, passthrough_response
from .base import BaseHandler

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector

SEARCH_CACHE_SECONDS = 300
PRODUCT_CACHE_SECONDS = 86400
PAGE_SIZE = 20

SEARCH_FIELDS = [
    "code", "product_name", "product_name_en", "brands", "categories", "nutriments",
    "nutrition_grades_tags", "image_url", "image_small_url", "serving_size", "quantity",
]

PRODUCT_FIELDS = [
    "code", "product_name", "product_name_en", "product_name_fr", "product_name_de",
    "product_name_it", "product_name_es", "brands", "categories", "ingredients_text",
    "nutriments", "nutrition_grades_tags", "nova_group", "nutriscore_grade", "ecoscore_grade",
    "image_url", "image_small_url", "serving_size", "quantity", "packaging",
]


class OFFHandler(BaseHandler):
    """Serves ``/off/search`` and ``/off/product`` against the OFF v2 API."""

    upstream = "OFF"

    def __init__(
        self,
        config: ProxyConfig,
        rate_gate: RateGate,
        http_client: httpx.AsyncClient,
        metrics: Optional["MetricsCollector"] = None,
    ):
        super().__init__(config, rate_gate, config.off_rate_limit)
        self.client = UpstreamClient(
            self.upstream,
            config.off_base_url,
            http_client,
            failure_message="Failed to fetch from Open Food Facts API",
            headers={"User-Agent": config.off_user_agent},
            metrics=metrics,
        )

    async def _dispatch(self, ctx: RequestContext) -> Response:
        endpoint = ctx.segment(2)
        if endpoint == "search":
            return await self._search(ctx)
        if endpoint == "product":
            return await self._product(ctx)
        raise ValidationError("Invalid endpoint. Use /off/search or /off/product")

    async def _search(self, ctx: RequestContext) -> Response:
        query = ctx.param("query")
        if not query:
            raise ValidationError("Missing ?query parameter")

        params = {
            "search_terms": query,
            "page_size": PAGE_SIZE,
            "lc": "en",
            "fields": ",".join(SEARCH_FIELDS),
        }
        response = await self.client.get("/search", params)
        payload = self.client.decode_json(response)
        if not isinstance(payload, dict):
            payload = {}

        return json_response(
            enrich_search_payload(payload),
            status_code=response.status_code,
            extra_headers={"Cache-Control": f"s-maxage={SEARCH_CACHE_SECONDS}"},
        )

    async def _product(self, ctx: RequestContext) -> Response:
        # Path segment wins over ?code=
        code = ctx.segment(3) or ctx.param("code")
        if not code:
            raise ValidationError("Missing product code. Use /off/product/{code} or ?code parameter")

        params = {"fields": ",".join(PRODUCT_FIELDS)}
        response = await self.client.get(f"/product/{quote(code, safe='')}", params)
        return passthrough_response(response.content, response.status_code, PRODUCT_CACHE_SECONDS)
