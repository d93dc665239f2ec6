"""
Missing-argument policy engine
Resolves parameters that have no explicit binding
"""

from typing import Any

from ..context import ExecutionContext
from ..errors import (
    InvalidIndexError,
    MissingArgumentError,
    UnknownPolicyError,
    ValueNotFoundError,
)
from ..models import MissingArgPolicy
from ..steps import Step, type_key, type_name


def use_latest(
    context: ExecutionContext,
    step: Step,
    param_type: Any,
) -> Any:
    """
    Take the next stored value of the parameter's type

    Same-typed parameters of one step walk forward through the stored
    values, then hold at the last one once exhausted. The counters are
    reset by the orchestrator before every step.
    """
    key = type_key(param_type)
    idx = context.pick_counter(key)

    try:
        value = context.value_at(key, idx)
    except (ValueNotFoundError, InvalidIndexError) as e:
        raise type(e)(
            f"step {step.name}: cannot find value for type {type_name(param_type)}: {e}",
            step=step.name,
        ) from e

    if idx < context.count(key) - 1:
        context.advance_pick_counter(key)
    return value


def fail(
    context: ExecutionContext,
    step: Step,
    param_type: Any,
) -> Any:
    """Refuse default resolution regardless of what the store holds"""
    raise MissingArgumentError(
        f"step {step.name}: missing argument for type {type_name(param_type)} (policy=fail)",
        step=step.name,
    )


POLICIES = {
    MissingArgPolicy.USE_LATEST: use_latest,
    MissingArgPolicy.FAIL: fail,
}


def resolve_default(
    policy: MissingArgPolicy,
    context: ExecutionContext,
    step: Step,
    param_type: Any,
) -> Any:
    """
    Apply the configured missing-argument policy

    Raises:
        UnknownPolicyError: policy is not a recognized MissingArgPolicy
    """
    try:
        handler = POLICIES[MissingArgPolicy(policy)]
    except (ValueError, KeyError) as e:
        raise UnknownPolicyError(
            f"step {step.name}: unknown missing_arg_policy {policy!r}",
            step=step.name,
        ) from e
    return handler(context, step, param_type)
