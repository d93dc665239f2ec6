"""
Step Orderer
------------
Rewrites the execution sequence from a partial explicit order.
"""

import logging
from collections.abc import Sequence

from ..steps import Step


def order_steps(
    steps: Sequence[Step],
    step_order: Sequence[str],
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[Step]:
    """
    Order steps: names from step_order first, then the rest as registered

    Args:
        steps: Registered steps in registration order
        step_order: Desired partial order of step names
        logger: Receives a warning for each unknown name

    Returns:
        New list of steps; the input sequence is left untouched
    """
    logger = logger or logging.getLogger(__name__)

    if not step_order:
        return list(steps)

    # All steps sharing a name move together
    by_name: dict[str, list[Step]] = {}
    for step in steps:
        by_name.setdefault(step.name, []).append(step)

    used: set[str] = set()
    ordered: list[Step] = []

    for desired in step_order:
        if desired not in by_name:
            logger.warning("Step name %r in step_order does not exist in pipeline steps", desired)
            continue
        if desired in used:
            logger.debug("Step name %r repeated in step_order, ignoring", desired)
            continue
        ordered.extend(by_name[desired])
        used.add(desired)

    ordered.extend(step for step in steps if step.name not in used)
    return ordered
