"""Transient failure cycle for httpr"""

from dataclasses import dataclass, replace
from enum import Enum
from threading import Lock

from httpr.config.schema import FailureCycleConfig


class CyclePhase(str, Enum):
    """Phase the next response will be served from"""
    DISABLED = "disabled"
    IDLE = "idle"  # enabled, but both counts are zero
    FAILURE = "failure"
    SUCCESS = "success"


@dataclass
class FailureCycleState:
    """Counters of the current cycle"""
    failure_iteration: int = 0
    success_iteration: int = 0


class FailureCycle:
    """
    Deterministic failure/success status code cycle.

    Each call to evaluate() returns the status code for this request and
    advances the counters for the next one: failure_count responses with
    failure_code, then success_count responses with success_code, repeating.
    A phase with a zero count is skipped entirely. When the simulation is
    disabled, or both counts are zero, the default code is returned.

    Safe to call from any number of threads; the whole read-decide-mutate
    step runs under a single lock.
    """

    def __init__(self, config: FailureCycleConfig, default_code: int = 200):
        self.config = config
        self.default_code = default_code
        self._state = FailureCycleState()
        self._lock = Lock()

    @property
    def is_degenerate(self) -> bool:
        return self.config.is_degenerate

    @property
    def phase(self) -> CyclePhase:
        cfg = self.config
        if not cfg.enabled:
            return CyclePhase.DISABLED
        with self._lock:
            if self._state.failure_iteration < cfg.failure_count:
                return CyclePhase.FAILURE
            if self._state.success_iteration < cfg.success_count:
                return CyclePhase.SUCCESS
        return CyclePhase.IDLE

    def snapshot(self) -> FailureCycleState:
        """Consistent copy of the counters"""
        with self._lock:
            return replace(self._state)

    def evaluate(self) -> int:
        """Return the status code for this call and advance the cycle"""
        cfg = self.config
        if not cfg.enabled:
            return self.default_code

        with self._lock:
            state = self._state
            outcome = self.default_code

            if state.failure_iteration < cfg.failure_count:
                outcome = cfg.failure_code
                state.failure_iteration += 1

                if state.failure_iteration == cfg.failure_count:
                    # Arm the success phase, or start over when there is none
                    if cfg.success_count > 0:
                        state.success_iteration = 0
                    else:
                        state.failure_iteration = 0

            elif state.success_iteration < cfg.success_count:
                outcome = cfg.success_code
                state.success_iteration += 1

                if state.success_iteration == cfg.success_count:
                    if cfg.failure_count > 0:
                        state.failure_iteration = 0
                    else:
                        state.success_iteration = 0

            assert 0 <= state.failure_iteration <= cfg.failure_count, state
            assert 0 <= state.success_iteration <= cfg.success_count, state

        return outcome
