"""
Output Filter
-------------
Projects the step output log onto a requested set of step names.
"""

from collections.abc import Iterable, Sequence
from typing import Any


def filter_outputs(
    output_log: dict[str, list[Any]],
    output_filter: Iterable[str],
    order: Sequence[str] | None = None,
) -> dict[str, list[Any]]:
    """
    Keep only the log entries whose step name is in output_filter

    An empty filter keeps everything. Names that never produced output get
    no entry. When order is given, the result follows it, and names not in
    it come last in log order.
    """
    wanted = set(output_filter)

    names = list(dict.fromkeys(order or ()))
    names += [name for name in output_log if name not in names]

    return {
        name: list(output_log[name])
        for name in names
        if name in output_log and (not wanted or name in wanted)
    }
