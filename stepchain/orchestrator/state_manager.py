"""
State Manager
-------------
Tracks the phase of a single pipeline run.
"""

import time
import uuid
from enum import Enum
from typing import Any


class RunPhase(str, Enum):
    IDLE = "idle"
    ORDERING = "ordering"
    RUNNING = "running"
    FILTERING = "filtering"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS = {
    RunPhase.IDLE: {RunPhase.ORDERING},
    RunPhase.ORDERING: {RunPhase.RUNNING, RunPhase.FILTERING},
    RunPhase.RUNNING: {RunPhase.RUNNING, RunPhase.FILTERING, RunPhase.FAILED},
    RunPhase.FILTERING: {RunPhase.DONE},
    RunPhase.DONE: set(),
    RunPhase.FAILED: set(),
}


class StateManager:
    """Maintains the phase, current step and timings of one run."""

    def __init__(self):
        self.run_id = str(uuid.uuid4())
        self.phase = RunPhase.IDLE
        self.step_index: int | None = None
        self.step_name: str | None = None
        self.executed: list[str] = []
        self.durations_ms: dict[str, float] = {}
        self.error: Exception | None = None
        self._started = time.perf_counter()

    def transition(self, phase: RunPhase, step_index: int | None = None, step_name: str | None = None):
        """Move to a new phase, rejecting transitions the run cannot make."""
        if phase not in _TRANSITIONS[self.phase]:
            raise RuntimeError(f"invalid run transition {self.phase.value} -> {phase.value}")
        self.phase = phase
        if phase == RunPhase.RUNNING:
            self.step_index = step_index
            self.step_name = step_name

    def record_step(self, name: str, duration_ms: float):
        self.executed.append(name)
        self.durations_ms[name] = self.durations_ms.get(name, 0.0) + duration_ms

    def fail(self, error: Exception):
        self.error = error
        self.transition(RunPhase.FAILED)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._started) * 1000

    def export(self) -> dict[str, Any]:
        """Export the run state as plain data."""
        return {
            "run_id": self.run_id,
            "phase": self.phase.value,
            "step_index": self.step_index,
            "step_name": self.step_name,
            "executed": list(self.executed),
            "durations_ms": dict(self.durations_ms),
            "error": str(self.error) if self.error else None,
        }
