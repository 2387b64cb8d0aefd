"""
Fixed-window rate gate keyed by caller identity.

The counter for an identity lives in the external store under
``rl:<identity>`` with a TTL equal to the window. Reading and writing the
counter are two separate store calls, so concurrent requests from the same
identity may both observe the same count and both be admitted.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from shared.logging import get_logger
from .stores import CounterStore

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector

KEY_PREFIX = "rl:"


@dataclass(frozen=True)
class GateDecision:
    """Outcome of a single rate gate check."""

    allowed: bool
    retry_after_seconds: int = 0


class RateGate:
    """Admit or reject callers against a per-window hit budget."""

    def __init__(self, store: Optional[CounterStore], metrics: Optional["MetricsCollector"] = None):
        self.store = store
        self.metrics = metrics
        self.logger = get_logger("food_proxy.rate_gate")

    @staticmethod
    def make_key(identity: str) -> str:
        """Generate rate limit key."""
        return f"{KEY_PREFIX}{identity}"

    async def check(self, identity: str, limit: int, window_seconds: int, upstream: str = "unknown") -> GateDecision:
        """Count one hit for ``identity`` unless it is already at ``limit``."""
        if self.store is None:
            return self._record(GateDecision(allowed=True), upstream)

        key = self.make_key(identity)
        try:
            raw = await self.store.get(key)
            hits = int(raw) if raw is not None else 0

            if hits >= limit:
                self.logger.warning(
                    "Rate limit exceeded",
                    identity=identity,
                    upstream=upstream,
                    current_count=hits,
                    limit=limit
                )
                return self._record(GateDecision(allowed=False, retry_after_seconds=window_seconds), upstream)

            await self.store.put(key, str(hits + 1), window_seconds)
        except Exception as e:
            # Store unreachable: degrade to unlimited rather than fail the request
            self.logger.error("Rate limit check error", identity=identity, error=str(e))
            return self._record(GateDecision(allowed=True), upstream, outcome="store_error")

        return self._record(GateDecision(allowed=True), upstream)

    def _record(self, decision: GateDecision, upstream: str, outcome: Optional[str] = None) -> GateDecision:
        if self.metrics is not None:
            label = outcome or ("allowed" if decision.allowed else "rejected")
            self.metrics.increment_counter("rate_limit_decisions_total", upstream=upstream, decision=label)
        return decision
