"""
Food Data Proxy service.
"""

from typing import Any, Dict, Optional

import httpx
from fastapi import Request, Response

from shared.base_service import BaseService
from shared.config import ProxyConfig
from shared.logging import set_client_context
from service_food_proxy.app.domain.context import RequestContext
from service_food_proxy.app.handlers.off import OFFHandler
from service_food_proxy.app.handlers.usda import USDAHandler
from service_food_proxy.app.ratelimit.fixed_window import RateGate
from service_food_proxy.app.ratelimit.stores import CounterStore, RedisCounterStore
from service_food_proxy.app.responses.envelope import CORS_HEADERS
from service_food_proxy.app.routing.router import Router, endpoint_label

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

_UNSET: Any = object()


class FoodProxyService(BaseService):
    """Proxy service wiring config, counter store, upstream client and router."""

    def __init__(
        self,
        config: Optional[ProxyConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        counter_store: Optional[CounterStore] = _UNSET,
    ):
        super().__init__("food_proxy", config)

        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=self.config.upstream_timeout_seconds)

        if counter_store is _UNSET:
            counter_store = RedisCounterStore(self.config.redis_url) if self.config.redis_url else None
        self.counter_store = counter_store
        if self.counter_store is None:
            self.logger.warning("No counter store configured, rate limiting disabled")

        self.rate_gate = RateGate(self.counter_store, metrics=self.metrics)
        self.router = Router(
            USDAHandler(self.config, self.rate_gate, self.http_client, metrics=self.metrics),
            OFFHandler(self.config, self.rate_gate, self.http_client, metrics=self.metrics),
        )

        self._setup_proxy_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.food_proxy_service = self

    def _setup_proxy_routes(self):
        """Register the catch-all route; everything not matched above goes to the router."""

        @self.app.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
        async def proxy(request: Request) -> Response:
            ctx = RequestContext.from_request(request, self.config.client_ip_header)
            set_client_context(ctx.identity)
            return await self.router.dispatch(ctx)

    def _endpoint_label(self, request: Request) -> str:
        label = super()._endpoint_label(request)
        if label != "other":
            return label
        return endpoint_label(RequestContext.from_request(request, self.config.client_ip_header))

    def _default_headers(self) -> Dict[str, str]:
        # Covers /health, /metrics and framework responses such as 405
        return CORS_HEADERS

    async def _on_shutdown(self):
        if self._owns_http_client:
            await self.http_client.aclose()
        if isinstance(self.counter_store, RedisCounterStore):
            await self.counter_store.close()

    async def _check_dependencies(self) -> Dict[str, str]:
        if self.counter_store is None:
            return {"counter_store": "disabled"}
        if isinstance(self.counter_store, RedisCounterStore):
            try:
                await self.counter_store.ping()
                return {"counter_store": "ok"}
            except Exception as e:
                self.logger.warning("Counter store ping failed", error=str(e))
                return {"counter_store": "unavailable"}
        return {"counter_store": "ok"}


def create_app(
    config: Optional[ProxyConfig] = None,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    counter_store: Optional[CounterStore] = _UNSET,
):
    """Create FastAPI application."""
    service = FoodProxyService(config, http_client=http_client, counter_store=counter_store)
    return service.app


if __name__ == "__main__":
    service = FoodProxyService()
    service.run()
