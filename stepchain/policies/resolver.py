"""
Argument Resolver
-----------------
Produces the concrete argument list for a step from the execution context,
using explicit bindings where configured and the missing-argument policy
everywhere else.
"""

import logging
from typing import Any

from ..context import ExecutionContext
from ..models import ArgBinding, ArgSource, MissingArgPolicy, StepConfig
from ..steps import Step, type_name
from .bindings import resolve_function_output, resolve_initial
from .missing_arg import resolve_default


class ArgumentResolver:
    """Fills step parameters from the value store and the step output log."""

    def __init__(
        self,
        context: ExecutionContext,
        output_log: dict[str, list[Any]],
        policy: MissingArgPolicy = MissingArgPolicy.USE_LATEST,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self.context = context
        self.output_log = output_log
        self.policy = policy
        self.logger = logger or logging.getLogger(__name__)

    def resolve_arguments(
        self,
        step: Step,
        step_config: StepConfig | None = None,
    ) -> list[Any]:
        """
        Resolve every parameter of a step, left to right

        The first failure propagates; values already resolved for this step
        are discarded.
        """
        args = []
        for position, param_type in enumerate(step.param_types):
            binding = step_config.binding_for(position) if step_config else None
            source = binding.source if binding else ArgSource.DEFAULT
            args.append(self.resolve(step, param_type, binding))
            self.logger.debug(
                "Step %r arg %d (%s) resolved via %s",
                step.name,
                position,
                type_name(param_type),
                getattr(source, "value", source),
            )
        return args

    def resolve(
        self,
        step: Step,
        param_type: Any,
        binding: ArgBinding | None = None,
    ) -> Any:
        """Resolve a single parameter"""
        if binding is None:
            return resolve_default(self.policy, self.context, step, param_type)

        if binding.source == ArgSource.INITIAL:
            return resolve_initial(self.context, step, param_type, binding.index)
        if binding.source == ArgSource.FUNCTION_OUTPUT:
            return resolve_function_output(
                self.output_log,
                step,
                param_type,
                binding.name,
                binding.index,
            )
        return resolve_default(self.policy, self.context, step, param_type)
