"""
Rate limiting package for the proxy.

Holds the fixed-window rate gate and the counter stores it reads and writes.
"""

from .fixed_window import GateDecision, RateGate
from .stores import CounterStore, RedisCounterStore

__all__ = ["GateDecision", "RateGate", "CounterStore", "RedisCounterStore"]
