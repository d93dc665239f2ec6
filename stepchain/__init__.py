"""
stepchain
Function-chaining execution engine: runs a reorderable sequence of steps,
supplying their arguments by type or by explicit binding
"""

import logging

__version__ = "0.1.0"

from .context import ExecutionContext
from .errors import (
    IndexOutOfRangeError,
    InvalidIndexError,
    MissingArgumentError,
    PipelineError,
    StepExecutionError,
    TypeMismatchError,
    UnknownPolicyError,
    UnknownProducerError,
    ValueNotFoundError,
)
from .loader import ConfigLoadError, lint_config, load_config
from .models import ArgBinding, ArgSource, MissingArgPolicy, PipelineConfig, StepConfig
from .orchestrator import Pipeline
from .steps import Step


logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Pipeline",
    "PipelineConfig",
    "StepConfig",
    "ArgBinding",
    "ArgSource",
    "MissingArgPolicy",
    "Step",
    "ExecutionContext",
    "load_config",
    "lint_config",
    "ConfigLoadError",
    "PipelineError",
    "ValueNotFoundError",
    "InvalidIndexError",
    "IndexOutOfRangeError",
    "TypeMismatchError",
    "MissingArgumentError",
    "UnknownProducerError",
    "UnknownPolicyError",
    "StepExecutionError",
]
