"""Argument resolution policies"""

from .bindings import resolve_function_output, resolve_initial
from .missing_arg import fail, resolve_default, use_latest
from .resolver import ArgumentResolver


__all__ = [
    "ArgumentResolver",
    "resolve_default",
    "resolve_initial",
    "resolve_function_output",
    "use_latest",
    "fail",
]
