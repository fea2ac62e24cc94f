from __future__ import annotations

from typing import Any, Callable

from kappa import SExpression, LispValue
from kappa.builtin.env_builtin import register
from kappa.evaluation.evaluator import evaluate
from kappa.evaluation.native_bridge import register_native
from kappa.reader.parser import Reader
from kappa.types.environment import Environment
from kappa.types.native_fn import NativeFunction
from kappa.types.nil import Nil


class Interpreter:
    """
    Reads and evaluates Kappa code against one root environment.
    Definitions persist across calls; use one Interpreter per session.
    """
    def __init__(self, natives: dict[str, Callable[..., Any]] | None = None):
        self.env = Environment()
        register(self.env)
        for name, fn in (natives or {}).items():
            self.register(name, fn)

    def register(self, name: str, fn: Callable[..., Any]) -> NativeFunction:
        """Expose host function `fn` to Kappa code as `name`."""
        return register_native(self.env, name, fn)

    def read(self, code: str) -> list[SExpression]:
        return list(Reader(code).read_all())

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code` and return the last value (nil if none)."""
        result: LispValue = Nil
        for expr in Reader(code).read_all():
            result = evaluate(expr, self.env)
        return result
