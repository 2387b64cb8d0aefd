"""
Common request pipeline shared by the upstream handlers.
"""

from fastapi import Response

from shared.config import ProxyConfig
from shared.errors import ProxyError, RateLimitedError
from shared.logging import get_logger
from ..domain.context import RequestContext
from ..ratelimit.fixed_window import RateGate
from ..responses.envelope import cors_response, error_response


class BaseHandler:
    """Preflight short-circuit, rate gating and error conversion.

    Subclasses implement ``_dispatch`` and raise ``ProxyError`` subclasses for
    every failure; ``handle`` turns them into envelopes so nothing escapes.
    """

    upstream = "unknown"

    def __init__(self, config: ProxyConfig, rate_gate: RateGate, rate_limit: int):
        self.config = config
        self.rate_gate = rate_gate
        self.rate_limit = rate_limit
        self.logger = get_logger(f"food_proxy.handler.{self.upstream.lower()}")

    async def handle(self, ctx: RequestContext) -> Response:
        if ctx.method == "OPTIONS":
            return cors_response(None)

        try:
            await self._enforce_rate_limit(ctx)
            return await self._dispatch(ctx)
        except ProxyError as exc:
            self.logger.info(
                "Request rejected",
                path=ctx.path,
                status_code=exc.status_code,
                error=exc.message
            )
            return error_response(exc)

    async def _enforce_rate_limit(self, ctx: RequestContext) -> None:
        decision = await self.rate_gate.check(
            ctx.identity,
            self.rate_limit,
            self.config.rate_window_seconds,
            upstream=self.upstream,
        )
        if not decision.allowed:
            raise RateLimitedError(decision.retry_after_seconds)

    async def _dispatch(self, ctx: RequestContext) -> Response:
        raise NotImplementedError
