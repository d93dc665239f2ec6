"""
Steps
-----
A step is a named callable with a fixed list of parameter types and an
optional list of return types. Types are read from annotations at
registration unless given explicitly.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Annotated, Any, Literal, TypeVar, Union

from .errors import StepExecutionError


_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def type_key(annotation: Any) -> Any:
    """
    Map a declared annotation to the key used by the value store

    Values are stored under their exact runtime type, so a parametrized
    generic such as list[int] is looked up under its origin (list).
    """
    origin = typing.get_origin(annotation)
    if origin is Annotated:
        return type_key(typing.get_args(annotation)[0])
    if origin is None or origin is Union or origin is types.UnionType:
        return annotation
    if origin is Literal:
        return annotation
    return origin


def type_name(annotation: Any) -> str:
    """Readable name of a type or annotation for messages"""
    if isinstance(annotation, type) and typing.get_origin(annotation) is None:
        return annotation.__qualname__
    return repr(annotation).replace("typing.", "")


def _protocol_members(proto: type) -> set[str]:
    members = set(getattr(proto, "__annotations__", {}))
    for klass in proto.__mro__:
        if klass is object or klass is typing.Generic:
            continue
        members.update(name for name in vars(klass) if not name.startswith("_"))
    return members


def is_assignable(value: Any, annotation: Any) -> bool:
    """
    Check whether a stored value may fill a parameter declared as annotation

    Follows Python's own conformance rules: isinstance for classes, member
    checks for unions, literals and type variables, and structural checks
    for protocols that are not runtime-checkable.
    """
    if annotation is Any or annotation is object or annotation is inspect.Parameter.empty:
        return True
    if annotation is None or annotation is type(None):
        return value is None

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is Annotated:
        return is_assignable(value, args[0])
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(value, arg) for arg in args)
    if origin is Literal:
        return value in args
    if origin is not None:
        return isinstance(origin, type) and isinstance(value, origin)

    if isinstance(annotation, TypeVar):
        if annotation.__bound__ is not None:
            return is_assignable(value, annotation.__bound__)
        if annotation.__constraints__:
            return any(is_assignable(value, c) for c in annotation.__constraints__)
        return True

    if not isinstance(annotation, type):
        return False

    try:
        return isinstance(value, annotation)
    except TypeError:
        # Non runtime-checkable Protocol
        if getattr(annotation, "_is_protocol", False):
            return all(hasattr(value, member) for member in _protocol_members(annotation))
        return False


def _declared_returns(annotation: Any) -> tuple[Any, ...] | None:
    if annotation is inspect.Signature.empty:
        return None
    if annotation is None or annotation is type(None):
        return ()
    if typing.get_origin(annotation) is tuple:
        args = typing.get_args(annotation)
        if args and args[-1] is not Ellipsis:
            return tuple(args)
    return (annotation,)


def _namespaces(func: Callable[..., Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Globals and closure nonlocals a callable's annotations may refer to"""
    target = inspect.unwrap(getattr(func, "__func__", func))
    if not inspect.isfunction(target):
        call = getattr(type(target), "__call__", None)
        target = getattr(call, "__func__", call)

    globalns = dict(getattr(target, "__globals__", {}))
    try:
        localns = dict(inspect.getclosurevars(target).nonlocals)
    except TypeError:
        localns = {}
    return globalns, localns


def _resolve_annotation(
    step_name: str,
    key: str,
    annotation: Any,
    globalns: dict[str, Any],
    localns: dict[str, Any],
) -> Any:
    if isinstance(annotation, typing.ForwardRef):
        annotation = annotation.__forward_arg__
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)  # noqa: S307
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        raise TypeError(
            f"step {step_name!r}: cannot resolve annotation {annotation!r} of {key!r}, "
            f"pass params/returns explicitly",
        ) from e


@dataclass(frozen=True)
class Step:
    """A single named unit of work in a pipeline"""

    name: str
    func: Callable[..., Any]
    param_types: tuple[Any, ...]
    return_types: tuple[Any, ...] | None = None

    @classmethod
    def from_callable(
        cls,
        name: str,
        func: Callable[..., Any],
        params: Sequence[Any] | None = None,
        returns: Sequence[Any] | None = None,
    ) -> Step:
        """
        Build a step from a callable

        Args:
            name: Step name used by ordering, bindings and the output log
            func: Any callable
            params: Explicit parameter types, overriding annotations
            returns: Explicit return types, overriding the return annotation

        Returns:
            Step with its parameter and return types fixed
        """
        if not callable(func):
            raise TypeError(f"step {name!r}: {func!r} is not callable")

        if params is not None and returns is not None:
            return cls(name, func, tuple(params), tuple(returns))

        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError) as e:
            if params is None:
                raise TypeError(
                    f"step {name!r}: cannot inspect signature, pass params explicitly",
                ) from e
            return cls(name, func, tuple(params), None if returns is None else tuple(returns))

        globalns, localns = _namespaces(func)
        try:
            hints = typing.get_type_hints(func, localns=localns, include_extras=True)
        except (NameError, TypeError, AttributeError, SyntaxError):
            # Resolve annotations one by one below
            hints = {}

        def resolved(key: str, annotation: Any) -> Any:
            if key in hints:
                return hints[key]
            return _resolve_annotation(name, key, annotation, globalns, localns)

        if params is None:
            params = [
                resolved(p.name, p.annotation) if p.annotation is not p.empty else object
                for p in signature.parameters.values()
                if p.kind in _POSITIONAL
            ]

        if returns is None:
            declared = signature.return_annotation
            if declared is not inspect.Signature.empty:
                declared = resolved("return", declared)
            return_types = _declared_returns(declared)
        else:
            return_types = tuple(returns)

        return cls(name, func, tuple(params), return_types)

    def collect_results(self, result: Any) -> list[Any]:
        """Normalize what the callable returned into a list of outputs"""
        if self.return_types is None:
            return [] if result is None else [result]
        if len(self.return_types) == 0:
            return []
        if len(self.return_types) == 1:
            return [result]

        expected = len(self.return_types)
        if not isinstance(result, (tuple, list)) or len(result) != expected:
            raise StepExecutionError(
                f"step {self.name}: expected {expected} return values, got {result!r}",
                step=self.name,
            )
        return list(result)
