"""Host (Python) functions exposed to Kappa code.

A NativeFunction captures the declared signature of a Python callable once,
at registration time: the positional parameter types, how many of them are
required, the element type of a `*args` tail, and the shape of the result
(how many values it returns and whether its last slot is an error slot).
Calls are then validated against this record by the native bridge.
"""

from __future__ import annotations

import inspect
import types
import typing
from typing import Any, Callable

from kappa import LispValue
from kappa.errors import KappaArityError, KappaTypeError
from kappa.types.nil import Nil


def _is_union(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    return origin is typing.Union or origin is types.UnionType


def is_error_type(annotation: Any) -> bool:
    """True for an exception class, or a union of exception classes and None."""
    if _is_union(annotation):
        members = [a for a in typing.get_args(annotation) if a is not type(None)]
        return bool(members) and all(is_error_type(a) for a in members)
    return isinstance(annotation, type) and issubclass(annotation, BaseException)


def result_shape(annotation: Any) -> tuple[int | None, bool]:
    """Return (value count, has error slot) for a return annotation.

    A count of None means the shape is decided from the returned object.
    """
    if annotation is inspect.Signature.empty or isinstance(annotation, str):
        return None, False
    if annotation is None or annotation is type(None):
        return 0, False
    if is_error_type(annotation):
        return 0, True
    if typing.get_origin(annotation) is tuple:
        slots = typing.get_args(annotation)
        if Ellipsis in slots:
            return None, False
        has_error = bool(slots) and is_error_type(slots[-1])
        return len(slots) - int(has_error), has_error
    return 1, False


def accepts(expected: Any, value: LispValue) -> bool:
    """Check whether `value` may be passed where `expected` is declared."""
    if expected is object or expected is Any:
        return True
    if _is_union(expected):
        return any(accepts(member, value) for member in typing.get_args(expected))
    if expected is None or expected is type(None):
        return value is Nil
    origin = typing.get_origin(expected)
    if origin is not None:
        expected = origin
    if not isinstance(expected, type):
        # TypeVars, Literals and similar are not checked
        return True
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def type_name(expected: Any) -> str:
    if expected is None or expected is type(None):
        return "nil"
    return getattr(expected, "__name__", str(expected))


class NativeFunction:
    """A Python callable plus the signature it declares."""

    __slots__ = ("name", "fn", "params", "required", "variadic", "result_count", "error_slot")

    def __init__(
        self,
        name: str,
        fn: Callable[..., Any],
        params: tuple[Any, ...] = (),
        required: int = 0,
        variadic: Any = None,
        result_count: int | None = None,
        error_slot: bool = False,
    ):
        self.name = name
        self.fn = fn
        self.params = params
        self.required = required
        self.variadic = variadic
        self.result_count = result_count
        self.error_slot = error_slot

    @classmethod
    def wrap(cls, fn: Callable[..., Any], name: str | None = None) -> NativeFunction:
        """Build a NativeFunction by introspecting `fn`'s signature and annotations."""
        name = name or getattr(fn, "__name__", repr(fn))
        try:
            sig = inspect.signature(fn)
        except (TypeError, ValueError):
            # Some C builtins expose no signature: accept any arguments
            return cls(name, fn, variadic=object)
        try:
            hints = typing.get_type_hints(fn)
        except (NameError, TypeError):
            hints = {}

        params: list[Any] = []
        required = 0
        variadic = None
        for p in sig.parameters.values():
            annotation = hints.get(p.name, p.annotation)
            if annotation is p.empty or isinstance(annotation, str):
                annotation = object
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
                params.append(annotation)
                if p.default is p.empty:
                    required += 1
            elif p.kind is p.VAR_POSITIONAL:
                variadic = annotation
            elif p.kind is p.KEYWORD_ONLY and p.default is p.empty:
                raise KappaTypeError(
                    f"Native function {name} has a required keyword-only parameter: {p.name}"
                )

        result_count, error_slot = result_shape(hints.get("return", sig.return_annotation))
        return cls(name, fn, tuple(params), required, variadic, result_count, error_slot)

    def check_arguments(self, args: list[LispValue]) -> None:
        """Validate argument count, then each argument's runtime type."""
        count = len(args)
        if count < self.required or (self.variadic is None and count > len(self.params)):
            if self.variadic is not None:
                expected = f"at least {self.required}"
            elif self.required == len(self.params):
                expected = str(self.required)
            else:
                expected = f"{self.required} to {len(self.params)}"
            raise KappaArityError(
                f"Wrong number of args ({count}) passed to {self.name}, expected {expected}"
            )
        for i, value in enumerate(args):
            expected = self.params[i] if i < len(self.params) else self.variadic
            if not accepts(expected, value):
                raise KappaTypeError(
                    f"Argument {i + 1} to {self.name} must be {type_name(expected)}, "
                    f"got {type(value).__name__}"
                )

    def __repr__(self):
        return f"#<native {self.name}>"
