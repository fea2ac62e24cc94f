"""Wrappers that tag Python callables as primitives or special forms."""

from __future__ import annotations

from typing import Callable

from kappa import SExpression, LispValue, EvaluatorFn
from kappa.types.environment import Environment


class Primitive:
    """Built-in function receiving already-evaluated arguments: fn(env, args)."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable[[Environment, list[LispValue]], LispValue]):
        self.name = name
        self.fn = fn

    def __call__(self, env: Environment, args: list[LispValue]) -> LispValue:
        return self.fn(env, args)

    def __repr__(self):
        return f"#<primitive {self.name}>"


class SpecialForm:
    """Built-in construct receiving its arguments unevaluated: fn(tail, env, evaluate_fn)."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable[[list[SExpression], Environment, EvaluatorFn], LispValue]):
        self.name = name
        self.fn = fn

    def __call__(self, tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
        return self.fn(tail, env, evaluate_fn)

    def __repr__(self):
        return f"#<special-form {self.name}>"
