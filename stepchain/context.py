"""
Execution Context
-----------------
Type-indexed pool of every value a run has seen: initial inputs and step
outputs. Sequences only grow; indices handed out stay valid for the run.
"""

from typing import Any

from .errors import InvalidIndexError, ValueNotFoundError
from .steps import type_name


class ExecutionContext:
    """Stores values by exact runtime type plus the ordered initial inputs."""

    def __init__(self):
        self._values: dict[Any, list[Any]] = {}
        self._initial_values: list[Any] = []
        self._pick_counters: dict[Any, int] = {}

    @property
    def values(self) -> dict[Any, list[Any]]:
        """Stored values keyed by type, in first-insertion order of types."""
        return {t: list(vals) for t, vals in self._values.items()}

    @property
    def initial_values(self) -> list[Any]:
        return list(self._initial_values)

    def add_inputs(self, *inputs: Any) -> None:
        """Store initial inputs under their type and in the initial list."""
        for value in inputs:
            self._store_value(value)
            self._initial_values.append(value)

    def store_results(self, results: list[Any]) -> None:
        """Add step outputs to the store (not to the initial list)."""
        for value in results:
            self._store_value(value)

    def count(self, type_: Any) -> int:
        return len(self._values.get(type_, ()))

    def value_at(self, type_: Any, index: int) -> Any:
        """
        Get the value of a type at a position

        Raises:
            ValueNotFoundError: No values of that type exist
            InvalidIndexError: index is negative

        An index past the end is clamped to the last value.
        """
        vals = self._values.get(type_)
        if not vals:
            raise ValueNotFoundError(f"no values found for type {type_name(type_)}")
        if index < 0:
            raise InvalidIndexError(f"invalid index (negative) for type {type_name(type_)}")
        if index >= len(vals):
            index = len(vals) - 1
        return vals[index]

    # --- Pick counters ---

    def reset_pick_counters(self) -> None:
        self._pick_counters.clear()

    def pick_counter(self, type_: Any) -> int:
        return self._pick_counters.get(type_, 0)

    def advance_pick_counter(self, type_: Any) -> None:
        self._pick_counters[type_] = self.pick_counter(type_) + 1

    def _store_value(self, value: Any) -> None:
        self._values.setdefault(type(value), []).append(value)
