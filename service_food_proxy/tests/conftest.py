"""
Shared fixtures for Food Data Proxy tests.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from shared.config import ProxyConfig


class InMemoryCounterStore:
    """Counter store double with a controllable clock."""

    def __init__(self):
        self.now = 0.0
        self._data: Dict[str, Tuple[str, float]] = {}
        self.puts: List[Tuple[str, str, int]] = []

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.now >= expires_at:
            del self._data[key]
            return None
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        self.puts.append((key, value, ttl_seconds))
        self._data[key] = (value, self.now + ttl_seconds)


class UpstreamRecorder:
    """httpx MockTransport handler that records requests and replies per host."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = self.default_response

    @staticmethod
    def default_response(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/search"):
            if "openfoodfacts" in request.url.host:
                body: Any = {"count": 1, "products": [{"code": "3017620422003", "product_name": "Nutella"}]}
            else:
                body = {"totalHits": 1, "foods": [{"fdcId": 123, "description": "Apple"}]}
        else:
            body = {"code": request.url.path.rsplit("/", 1)[-1], "status": 1, "product": {"product_name": "Nutella"}}
        return httpx.Response(200, content=json.dumps(body), headers={"Content-Type": "application/json"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def proxy_config():
    """Deterministic proxy configuration."""
    return ProxyConfig(
        usda_key="test-api-key",
        redis_url=None,
        env="test",
        usda_rate_limit=10,
        off_rate_limit=6,
        rate_window_seconds=60,
    )


@pytest.fixture
def counter_store():
    """In-memory counter store."""
    return InMemoryCounterStore()


@pytest.fixture
def upstream():
    """Recorder for upstream calls."""
    return UpstreamRecorder()


@pytest.fixture
def http_client(upstream):
    """httpx client routed to the upstream recorder."""
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))
