"""
Orchestration Layer
-------------------
step order → argument resolution → invocation → output filtering.
"""

from .orchestrator import Orchestrator
from .output_filter import filter_outputs
from .pipeline import Pipeline
from .state_manager import RunPhase, StateManager
from .step_orderer import order_steps


__all__ = [
    "Orchestrator",
    "Pipeline",
    "StateManager",
    "RunPhase",
    "order_steps",
    "filter_outputs",
]
