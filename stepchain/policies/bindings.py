"""
Explicit binding resolution
Pulls arguments from the initial inputs or a named step's outputs by position
"""

from typing import Any

from ..context import ExecutionContext
from ..errors import IndexOutOfRangeError, TypeMismatchError, UnknownProducerError
from ..steps import Step, is_assignable, type_name


def resolve_initial(
    context: ExecutionContext,
    step: Step,
    param_type: Any,
    index: int,
) -> Any:
    """
    Get the initial input at index

    Raises:
        IndexOutOfRangeError: index outside the initial inputs
        TypeMismatchError: value not assignable to param_type
    """
    initial = context.initial_values
    if index < 0 or index >= len(initial):
        raise IndexOutOfRangeError(
            f"step {step.name}: initial input index {index} out of range ({len(initial)} total)",
            step=step.name,
        )

    value = initial[index]
    if not is_assignable(value, param_type):
        raise TypeMismatchError(
            f"step {step.name}: initial input {index} has type {type_name(type(value))}, "
            f"not assignable to {type_name(param_type)}",
            step=step.name,
        )
    return value


def resolve_function_output(
    output_log: dict[str, list[Any]],
    step: Step,
    param_type: Any,
    producer: str | None,
    index: int,
) -> Any:
    """
    Get output number index of a step that already ran

    Raises:
        UnknownProducerError: producer has no recorded outputs
        IndexOutOfRangeError: index outside the producer's outputs
        TypeMismatchError: value not assignable to param_type
    """
    if producer not in output_log:
        raise UnknownProducerError(
            f"step {step.name}: function {producer} has no recorded outputs",
            step=step.name,
        )

    outputs = output_log[producer]
    if index < 0 or index >= len(outputs):
        raise IndexOutOfRangeError(
            f"step {step.name}: requested output index {index} of function {producer} "
            f"but it has {len(outputs)} outputs",
            step=step.name,
        )

    value = outputs[index]
    if not is_assignable(value, param_type):
        raise TypeMismatchError(
            f"step {step.name}: output type {type_name(type(value))} from function {producer} "
            f"not assignable to {type_name(param_type)}",
            step=step.name,
        )
    return value
