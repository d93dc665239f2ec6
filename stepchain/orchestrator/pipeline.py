"""
Pipeline
--------
Registers steps and initial inputs, then executes them in order with
automatically supplied arguments.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..context import ExecutionContext
from ..models import PipelineConfig
from ..steps import Step
from .orchestrator import Orchestrator
from .state_manager import StateManager


class Pipeline:
    """Ordered, reorderable chain of steps sharing one value store."""

    def __init__(
        self,
        config: PipelineConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration; defaults to PipelineConfig()
            logger: Sink for run events. When omitted, the shared
                "stepchain.pipeline" logger is used, so its level and
                handlers are common to every pipeline built without one.
                Pass a dedicated logger to control a pipeline in isolation.
        """
        self.config = config if config is not None else PipelineConfig()
        self.logger = logger or logging.getLogger("stepchain.pipeline")
        self.context = ExecutionContext()
        self._steps: list[Step] = []
        self._outputs: dict[str, list[Any]] = {}
        self._last_run: StateManager | None = None

    @property
    def steps(self) -> tuple[Step, ...]:
        """Registered steps in registration order."""
        return tuple(self._steps)

    @property
    def outputs(self) -> dict[str, list[Any]]:
        """Unfiltered step output log."""
        return {name: list(vals) for name, vals in self._outputs.items()}

    @property
    def last_run(self) -> StateManager | None:
        return self._last_run

    def set_logger(self, logger: logging.Logger | None):
        """Replace the logger; None keeps the current one."""
        if logger is not None:
            self.logger = logger

    def set_log_level(self, level: int | str):
        """
        Set the level of this pipeline's logger.

        With the default logger this changes the shared "stepchain.pipeline"
        logger, and with it every pipeline that uses the default.
        """
        self.logger.setLevel(level)

    def add_step(
        self,
        name: str,
        func: Callable[..., Any],
        *,
        params: Sequence[Any] | None = None,
        returns: Sequence[Any] | None = None,
    ) -> Step:
        """
        Register a step.

        Parameter and return types come from annotations unless given
        explicitly. Nothing is checked against the store until the step runs.
        """
        step = Step.from_callable(name, func, params=params, returns=returns)
        if any(existing.name == name for existing in self._steps):
            self.logger.warning(
                "Step name %r registered more than once; outputs will accumulate under it",
                name,
            )
        self._steps.append(step)
        self.logger.debug("Added step %r", name)
        return step

    def add_initial_inputs(self, *inputs: Any):
        self.context.add_inputs(*inputs)
        self.logger.debug("Added %d initial inputs", len(inputs))

    def execute(self) -> dict[str, list[Any]]:
        """
        Run every registered step once.

        Returns:
            Outputs by step name, filtered by config.output_filter

        Raises:
            PipelineError: The first error encountered; no outputs are returned
        """
        orchestrator = Orchestrator(logger=self.logger)
        try:
            return orchestrator.run(self._steps, self.context, self.config, self._outputs)
        finally:
            self._last_run = orchestrator.state
