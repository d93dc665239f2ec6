"""
Tests for step introspection, result collection and type assignability
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Protocol, TypeVar, runtime_checkable

import pytest

from stepchain import Pipeline
from stepchain.errors import StepExecutionError
from stepchain.steps import Step, is_assignable, type_key


class Named(Protocol):
    name: str

    def greet(self) -> str: ...


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None: ...


class Person:
    def __init__(self, name: str):
        self.name = name

    def greet(self) -> str:
        return f"hi {self.name}"


class Resource:
    def close(self) -> None:
        pass


Number = TypeVar("Number", int, float)
Bounded = TypeVar("Bounded", bound=str)


def test_from_callable_reads_annotations():
    """Parameter and return types come from annotations"""

    def step(a: str, b: int) -> float:
        return 1.0

    s = Step.from_callable("S", step)
    assert s.param_types == (str, int)
    assert s.return_types == (float,)


def test_from_callable_skips_keyword_only_and_varargs():
    """Only positional parameters take part in resolution"""

    def step(a: str, *rest, flag: bool = False, **extra) -> None:
        pass

    s = Step.from_callable("S", step)
    assert s.param_types == (str,)
    assert s.return_types == ()


def test_unannotated_parameter_is_object():
    """Missing annotations fall back to object"""

    def step(a):
        return a

    s = Step.from_callable("S", step)
    assert s.param_types == (object,)
    assert s.return_types is None


def test_explicit_types_override_annotations():
    """params/returns given at registration win"""
    s = Step.from_callable("Len", len, params=[str], returns=[int])
    assert s.param_types == (str,)
    assert s.return_types == (int,)


def test_tuple_return_declares_multiple_outputs():
    """tuple[X, Y] spreads into two outputs, tuple[X, ...] stays one"""

    def pair() -> tuple[int, str]:
        return 1, "x"

    def many() -> tuple[int, ...]:
        return (1, 2, 3)

    assert Step.from_callable("P", pair).return_types == (int, str)
    assert Step.from_callable("M", many).return_types == (tuple[int, ...],)


def test_collect_results():
    """Results are normalized according to declared return types"""
    undeclared = Step("U", lambda: None, (), None)
    assert undeclared.collect_results(None) == []
    assert undeclared.collect_results("x") == ["x"]

    nothing = Step("N", lambda: None, (), ())
    assert nothing.collect_results("ignored") == []

    single = Step("S", lambda: None, (), (tuple,))
    assert single.collect_results((1, 2)) == [(1, 2)]

    pair = Step("P", lambda: None, (), (int, str))
    assert pair.collect_results((1, "x")) == [1, "x"]


def test_collect_results_wrong_arity():
    """A multi-output step returning the wrong shape fails"""
    pair = Step("P", lambda: None, (), (int, str))

    with pytest.raises(StepExecutionError) as exc_info:
        pair.collect_results((1, "x", 2))
    assert exc_info.value.step == "P"

    with pytest.raises(StepExecutionError):
        pair.collect_results(1)


def test_not_callable_rejected():
    """Registration requires a callable"""
    with pytest.raises(TypeError):
        Step.from_callable("X", 42)


def test_type_key():
    """Generics key by origin, Annotated by its inner type"""
    assert type_key(str) is str
    assert type_key(list[int]) is list
    assert type_key(dict[str, int]) is dict
    assert type_key(Annotated[int, "meta"]) is int


def test_is_assignable_basics():
    """Classes, Any, None, unions and literals"""
    assert is_assignable("x", str)
    assert not is_assignable(1, str)
    assert is_assignable(True, int)
    assert is_assignable(object(), Any)
    assert is_assignable(None, None)
    assert not is_assignable(0, None)
    assert is_assignable(None, Optional[str])
    assert is_assignable(3, int | str)
    assert not is_assignable(3.0, int | str)
    assert is_assignable("a", Literal["a", "b"])
    assert not is_assignable("c", Literal["a", "b"])


def test_is_assignable_generics_and_typevars():
    """Generics check the container, type variables their bound or constraints"""
    assert is_assignable([1, 2], list[int])
    assert not is_assignable((1, 2), list[int])
    assert is_assignable("s", Bounded)
    assert not is_assignable(1, Bounded)
    assert is_assignable(1.5, Number)
    assert not is_assignable("1", Number)


def test_is_assignable_protocols():
    """Runtime-checkable protocols use isinstance, others are checked structurally"""
    assert is_assignable(Resource(), Closeable)
    assert not is_assignable("x", Closeable)
    assert is_assignable(Person("ada"), Named)
    assert not is_assignable(Resource(), Named)


def test_postponed_annotations_with_local_class():
    """String annotations resolve per parameter, including closure classes"""

    class Order:
        pass

    def consume(n: int, o: Order) -> int:
        assert isinstance(o, Order)
        return n

    s = Step.from_callable("Consume", consume)
    assert s.param_types == (int, Order)
    assert s.return_types == (int,)

    pipeline = Pipeline()
    pipeline.add_step("Consume", consume)
    pipeline.add_initial_inputs(5, Order())

    assert pipeline.execute() == {"Consume": [5]}


def test_unresolvable_annotation_rejected_at_registration():
    """A name that cannot be resolved fails registration, not the run"""

    def step(a: int, b: Missing) -> int:  # noqa: F821
        return a

    with pytest.raises(TypeError, match="pass params/returns explicitly"):
        Step.from_callable("S", step)


def test_unresolvable_annotation_overridden_explicitly():
    """Explicit params bypass annotations that cannot be resolved"""

    def step(a: Missing) -> int:  # noqa: F821
        return 1

    s = Step.from_callable("S", step, params=[str])
    assert s.param_types == (str,)
    assert s.return_types == (int,)
