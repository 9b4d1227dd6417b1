"""Use cases orchestrating record dispatch."""

from __future__ import annotations

from .dispatch import DispatchEngine, ThrottleState, flush_pending_engines
from .pause import SuppressionCoordinator, default_coordinator

__all__ = ["DispatchEngine", "SuppressionCoordinator", "ThrottleState", "default_coordinator", "flush_pending_engines"]
