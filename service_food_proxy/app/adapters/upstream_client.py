"""
Upstream HTTP client for the proxy.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING
import time

import httpx

from shared.logging import get_logger
from shared.errors import TransportFailure, UpstreamError

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


class UpstreamClient:
    """Issues GET requests to one upstream API through a shared httpx client."""

    def __init__(
        self,
        service: str,
        base_url: str,
        http_client: httpx.AsyncClient,
        *,
        failure_message: str,
        headers: Optional[Dict[str, str]] = None,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.service = service
        self.base_url = base_url.rstrip("/")
        self.http_client = http_client
        self.failure_message = failure_message
        self.headers = headers or {}
        self.metrics = metrics
        self.logger = get_logger(f"food_proxy.upstream.{service.lower()}")

    async def get(self, path: str, params: Dict[str, Any], *, redact: tuple = ()) -> httpx.Response:
        """Fetch ``path`` and return the response if its status is 2xx.

        Raises ``UpstreamError`` for any other status and ``TransportFailure``
        when the request cannot be completed.
        """
        url = f"{self.base_url}{path}"
        log_params = {k: ("***" if k in redact else v) for k, v in params.items()}
        start_time = time.time()

        try:
            response = await self.http_client.get(url, params=params, headers=self.headers)
        except httpx.HTTPError as e:
            self._observe("transport_error", start_time)
            self.logger.error("Upstream request failed", url=url, params=log_params, error=str(e))
            raise TransportFailure(self.service, self.failure_message, details={"error": str(e)})

        if not response.is_success:
            self._observe("upstream_error", start_time)
            self.logger.warning(
                "Upstream returned error status",
                url=url,
                params=log_params,
                status_code=response.status_code
            )
            raise UpstreamError(self.service, response.status_code)

        self._observe("ok", start_time)
        self.logger.debug("Upstream response received", url=url, params=log_params, status_code=response.status_code)
        return response

    def decode_json(self, response: httpx.Response) -> Any:
        """Parse a response body, mapping decode failures to ``TransportFailure``."""
        try:
            return response.json()
        except ValueError as e:
            self.logger.error("Upstream returned invalid JSON", error=str(e))
            raise TransportFailure(self.service, self.failure_message, details={"error": str(e)})

    def _observe(self, outcome: str, start_time: float) -> None:
        if self.metrics is None:
            return
        self.metrics.increment_counter("upstream_requests_total", upstream=self.service, outcome=outcome)
        metric = self.metrics.get_metric("upstream_request_duration_seconds")
        if metric is not None:
            metric.labels(upstream=self.service).observe(time.time() - start_time)
