"""
Pydantic models for pipeline configuration
Describes step order, argument bindings, and output filtering
"""

from enum import Enum

from pydantic import BaseModel, Field


class MissingArgPolicy(str, Enum):
    """Strategy applied when a parameter has no explicit binding"""

    USE_LATEST = "use_latest"
    FAIL = "fail"


class ArgSource(str, Enum):
    """Where a bound argument comes from"""

    DEFAULT = "default"
    INITIAL = "initial"
    FUNCTION_OUTPUT = "function_output"


class ArgBinding(BaseModel):
    """How to fill one parameter slot of one step"""

    source: ArgSource = ArgSource.DEFAULT
    name: str | None = Field(
        None,
        description="Producing step name when source is function_output",
    )
    index: int = Field(
        0,
        description="Position in the initial inputs or in the producer's outputs",
    )

    @classmethod
    def initial(cls, index: int) -> "ArgBinding":
        return cls(source=ArgSource.INITIAL, index=index)

    @classmethod
    def function_output(cls, name: str, index: int = 0) -> "ArgBinding":
        return cls(source=ArgSource.FUNCTION_OUTPUT, name=name, index=index)


class StepConfig(BaseModel):
    """Bindings aligned to a step's parameters; None means default resolution"""

    arg_bindings: list[ArgBinding | None] = Field(default_factory=list)

    def binding_for(self, position: int) -> ArgBinding | None:
        if 0 <= position < len(self.arg_bindings):
            return self.arg_bindings[position]
        return None


class PipelineConfig(BaseModel):
    """Root pipeline configuration, fixed before execution"""

    step_order: list[str] = Field(
        default_factory=list,
        description="Desired order; unlisted steps follow in registration order",
    )
    missing_arg_policy: MissingArgPolicy = MissingArgPolicy.USE_LATEST
    output_filter: list[str] = Field(
        default_factory=list,
        description="Step names to return; empty returns every step",
    )
    step_configs: dict[str, StepConfig] = Field(default_factory=dict)

    def bindings_for(self, step_name: str) -> StepConfig | None:
        return self.step_configs.get(step_name)
