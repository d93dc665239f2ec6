"""
Orchestrator
------------
Drives one pipeline run: orders steps, resolves each step's arguments,
invokes it, and records what it produced. Aborts on the first error.
"""

import logging
import time
from collections.abc import Sequence
from typing import Any

from ..context import ExecutionContext
from ..errors import PipelineError, StepExecutionError
from ..models import PipelineConfig
from ..policies import ArgumentResolver
from ..steps import Step
from .output_filter import filter_outputs
from .state_manager import RunPhase, StateManager
from .step_orderer import order_steps


class Orchestrator:
    """Runs steps sequentially against a shared execution context."""

    def __init__(self, logger: logging.Logger | None = None):
        """
        Initialize the orchestrator.

        Args:
            logger: Sink for run events; defaults to this module's logger
        """
        self.logger = logger or logging.getLogger(__name__)
        self.state = StateManager()

    def run(
        self,
        steps: Sequence[Step],
        context: ExecutionContext,
        config: PipelineConfig,
        output_log: dict[str, list[Any]],
    ) -> dict[str, list[Any]]:
        """
        Execute every step once and return the filtered output log.

        Args:
            steps: Registered steps in registration order
            context: Value store shared with earlier runs of the same pipeline
            config: Pipeline configuration; a snapshot is taken here
            output_log: Per-step output record, appended to in place

        Returns:
            Outputs by step name, restricted to config.output_filter

        Raises:
            PipelineError: The first resolution or invocation failure
        """
        self.state = StateManager()
        log = self._run_logger()
        config = config.model_copy(deep=True)

        log.info("Run %s started", self.state.run_id)
        self.state.transition(RunPhase.ORDERING)
        ordered = order_steps(steps, config.step_order, log)

        resolver = ArgumentResolver(
            context,
            output_log,
            policy=config.missing_arg_policy,
            logger=log,
        )

        for index, step in enumerate(ordered):
            self.state.transition(RunPhase.RUNNING, step_index=index, step_name=step.name)
            log.info("Run %s: executing step %r", self.state.run_id, step.name)

            try:
                self._execute_step(step, context, config, output_log, resolver, log)
            except PipelineError as e:
                self.state.fail(e)
                log.error("Run %s: step %r failed: %s", self.state.run_id, step.name, e)
                raise

        self.state.transition(RunPhase.FILTERING)
        registration_order = [step.name for step in steps]
        outputs = filter_outputs(output_log, config.output_filter, order=registration_order)

        self.state.transition(RunPhase.DONE)
        log.info(
            "Run %s: pipeline execution complete (%d steps, %.2f ms)",
            self.state.run_id,
            len(ordered),
            self.state.elapsed_ms,
        )
        return outputs

    def _run_logger(self) -> logging.LoggerAdapter:
        """Logger that tags every record of the current run with its run_id"""
        return logging.LoggerAdapter(self.logger, {"run_id": self.state.run_id})

    def _execute_step(
        self,
        step: Step,
        context: ExecutionContext,
        config: PipelineConfig,
        output_log: dict[str, list[Any]],
        resolver: ArgumentResolver,
        log: logging.LoggerAdapter,
    ) -> None:
        context.reset_pick_counters()
        args = resolver.resolve_arguments(step, config.bindings_for(step.name))

        start_time = time.perf_counter()
        try:
            result = step.func(*args)
        except Exception as e:
            raise StepExecutionError(
                f"step {step.name}: raised {type(e).__name__}: {e}",
                step=step.name,
            ) from e
        duration_ms = (time.perf_counter() - start_time) * 1000

        results = step.collect_results(result)
        context.store_results(results)
        output_log.setdefault(step.name, []).extend(results)
        self.state.record_step(step.name, duration_ms)

        log.debug(
            "Run %s: step %r produced %d outputs in %.2f ms",
            self.state.run_id,
            step.name,
            len(results),
            duration_ms,
        )
