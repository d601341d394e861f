"""Core state for httpr"""

from httpr.core.failure import FailureCycle, FailureCycleState, CyclePhase
from httpr.core.context import Context

__all__ = [
    "FailureCycle",
    "FailureCycleState",
    "CyclePhase",
    "Context",
]
