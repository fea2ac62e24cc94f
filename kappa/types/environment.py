"""Runtime environment for Kappa.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. Definitions always land in the frame that
receives them; lookups walk outward through the chain.
"""

from __future__ import annotations

from io import StringIO
from typing import Mapping, Optional

from kappa import LispValue
from kappa.errors import KappaInvalidSymbol, KappaUnboundSymbol
from kappa.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame, overwriting any previous binding.

        Raises KappaInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise KappaInvalidSymbol(f"Cannot define {name!r} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, innermost frame first.

        Raises KappaUnboundSymbol if no frame in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise KappaUnboundSymbol(f"Unable to resolve symbol: {name} in this context")
        return env.vars[name]

    def update(self, mapping: Mapping[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def child(self) -> Environment:
        return Environment(outer=self)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
