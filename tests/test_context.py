"""
Tests for the execution context (value store)
"""

import pytest

from stepchain.context import ExecutionContext
from stepchain.errors import InvalidIndexError, ValueNotFoundError


def test_add_inputs_tracks_type_and_initial_order():
    """Initial inputs land in their type bucket and in the ordered initial list"""
    ctx = ExecutionContext()
    ctx.add_inputs("a", 1, "b")

    assert ctx.initial_values == ["a", 1, "b"]
    assert ctx.values[str] == ["a", "b"]
    assert ctx.values[int] == [1]


def test_store_results_skips_initial_list():
    """Step outputs are stored by type only"""
    ctx = ExecutionContext()
    ctx.add_inputs("a")
    ctx.store_results(["hello", 3.5])

    assert ctx.initial_values == ["a"]
    assert ctx.values[str] == ["a", "hello"]
    assert ctx.values[float] == [3.5]


def test_type_buckets_keep_first_insertion_order():
    """Type buckets iterate in the order types were first seen"""
    ctx = ExecutionContext()
    ctx.store_results([1, "x", 2.0, 3])

    assert list(ctx.values) == [int, str, float]


def test_exact_type_buckets():
    """bool values do not mix into the int bucket"""
    ctx = ExecutionContext()
    ctx.add_inputs(True, 1)

    assert ctx.count(bool) == 1
    assert ctx.count(int) == 1


def test_value_at_clamps_overflow():
    """An index past the end returns the last value"""
    ctx = ExecutionContext()
    ctx.add_inputs("a", "b")

    assert ctx.value_at(str, 0) == "a"
    assert ctx.value_at(str, 1) == "b"
    assert ctx.value_at(str, 10) == "b"


def test_value_at_errors():
    """Missing type and negative index both fail"""
    ctx = ExecutionContext()

    with pytest.raises(ValueNotFoundError):
        ctx.value_at(str, 0)

    ctx.add_inputs("a")
    with pytest.raises(InvalidIndexError):
        ctx.value_at(str, -1)


def test_pick_counters_reset():
    """Pick counters advance per type and clear on reset"""
    ctx = ExecutionContext()
    assert ctx.pick_counter(str) == 0

    ctx.advance_pick_counter(str)
    ctx.advance_pick_counter(str)
    assert ctx.pick_counter(str) == 2
    assert ctx.pick_counter(int) == 0

    ctx.reset_pick_counters()
    assert ctx.pick_counter(str) == 0


def test_views_are_copies():
    """Mutating returned views leaves the store untouched"""
    ctx = ExecutionContext()
    ctx.add_inputs("a")

    ctx.values[str].append("z")
    ctx.initial_values.append("z")

    assert ctx.values[str] == ["a"]
    assert ctx.initial_values == ["a"]
