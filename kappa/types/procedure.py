"""User-defined procedure representation and argument binding for Kappa."""

from __future__ import annotations

from io import StringIO

from kappa import SExpression, LispValue
from kappa.errors import KappaArityError, KappaInvalidSymbol
from kappa.types.environment import Environment
from kappa.types.symbol import Symbol

REST_MARKER = Symbol("&")


class Procedure:
    """A closure with positional parameters, an optional rest parameter, a body, and its defining env."""

    __slots__ = ("params", "rest", "body", "env", "name")

    def __init__(
        self,
        params: list[Symbol],
        body: list[SExpression],
        env: Environment,
        rest: Symbol | None = None,
        name: Symbol | None = None,
    ):
        self.params: list[Symbol] = params
        self.rest: Symbol | None = rest
        self.body: list[SExpression] = body
        self.env: Environment = env
        self.name: Symbol | None = name

    @staticmethod
    def parse_params(formals: list[LispValue]) -> tuple[list[Symbol], Symbol | None]:
        """Split a parameter vector into positional names and an optional `& rest` name."""
        params: list[Symbol] = []
        rest: Symbol | None = None
        items = list(formals)
        while items:
            item = items.pop(0)
            if not isinstance(item, Symbol):
                raise KappaInvalidSymbol(f"Parameter must be a symbol, got {item!r}")
            if item == REST_MARKER:
                if len(items) != 1 or not isinstance(items[0], Symbol) or items[0] == REST_MARKER:
                    raise KappaInvalidSymbol("& must be followed by exactly one parameter name")
                rest = items.pop(0)
                break
            params.append(item)
        return params, rest

    def bind(self, args: list[LispValue]) -> Environment:
        """Bind argument values to parameters in a fresh child of the closure env.

        The parent is the defining environment, which gives lexical scoping.
        """
        provided = len(args)
        arity = len(self.params)
        if provided < arity or (self.rest is None and provided > arity):
            expected = f"at least {arity}" if self.rest is not None else str(arity)
            raise KappaArityError(
                f"Wrong number of args ({provided}) passed to {self.display_name()}, expected {expected}"
            )
        local_env = self.env.child()
        for name, value in zip(self.params, args):
            local_env.define(name, value)
        if self.rest is not None:
            local_env.define(self.rest, list(args[arity:]))
        return local_env

    def display_name(self) -> str:
        return str(self.name) if self.name is not None else "fn"

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("#<fn ")
            if self.name is not None:
                buffer.write(f"{self.name} ")
            buffer.write("[")
            formals = [str(p) for p in self.params]
            if self.rest is not None:
                formals += ["&", str(self.rest)]
            buffer.write(" ".join(formals))
            buffer.write("]>")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)
