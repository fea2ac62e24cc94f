"""Calling host Python functions from Kappa code.

The host registers callables under a Symbol; each is wrapped once in a
NativeFunction that records its declared signature. At call time the bridge
checks arity and argument types against that record, converts arguments to
host values, invokes the function, surfaces a returned (or raised) error as
KappaNativeError, and converts the result back into Kappa values.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from kappa import LispValue
from kappa.errors import KappaError, KappaNativeError
from kappa.types.environment import Environment
from kappa.types.hash_map import Map
from kappa.types.native_fn import NativeFunction
from kappa.types.nil import Nil
from kappa.types.symbol import Symbol

logger = logging.getLogger(__name__)


def to_host(value: LispValue) -> Any:
    """Convert a Kappa value for a host call: Nil becomes None."""
    return None if value is Nil else value


def to_value(obj: Any) -> LispValue:
    """Convert a host result into Kappa values."""
    if obj is None:
        return Nil
    if type(obj) in (list, tuple):
        return [to_value(x) for x in obj]
    if isinstance(obj, dict):
        return Map((to_value(k), to_value(v)) for k, v in obj.items())
    return obj


def register_native(env: Environment, name: str | Symbol, fn: Callable[..., Any]) -> NativeFunction:
    """Bind host function `fn` under `name` in `env`."""
    symbol = name if isinstance(name, Symbol) else Symbol(name)
    native = fn if isinstance(fn, NativeFunction) else NativeFunction.wrap(fn, str(symbol))
    env.define(symbol, native)
    logger.debug(
        "registered native %s: params=%s required=%d variadic=%s results=%s error_slot=%s",
        symbol, native.params, native.required, native.variadic, native.result_count, native.error_slot,
    )
    return native


def _split_results(native: NativeFunction, result: Any) -> list[Any]:
    """Turn a raw host result into its list of value slots, raising on a set error slot."""
    if native.result_count is None:
        slots = list(result) if type(result) is tuple else ([] if result is None else [result])
    elif native.result_count + int(native.error_slot) > 1:
        slots = list(result) if isinstance(result, tuple) else [result]
    else:
        slots = [result]

    if native.error_slot:
        err = slots.pop() if slots else None
        if err is not None:
            raise KappaNativeError(f"{native.name}: {err}") from (err if isinstance(err, BaseException) else None)
    if native.result_count == 0:
        return []
    return slots


def invoke_native(native: NativeFunction, args: list[LispValue]) -> LispValue:
    """Validate `args`, call the host function and convert its result."""
    native.check_arguments(args)
    try:
        result = native.fn(*[to_host(a) for a in args])
    except (KappaError, RecursionError):
        raise
    except Exception as ex:
        raise KappaNativeError(f"{native.name}: {ex}") from ex

    values = [to_value(v) for v in _split_results(native, result)]
    if not values:
        return Nil
    if len(values) == 1:
        return values[0]
    return values
