"""Application engine for Kappa.

This module centralizes what it means to call a value with already-evaluated
arguments:
- Primitives are invoked directly with the caller's env.
- Procedures get a fresh child of their closure env; the body runs up to its
  last expression, which is handed back as a TailCall for the trampoline.
- Maps treat the arguments as a chain of key lookups.
- Native functions go through the native bridge.
"""

from __future__ import annotations

from kappa import LispValue, EvaluatorFn
from kappa.errors import KappaApplicationError
from kappa.evaluation.native_bridge import invoke_native
from kappa.printer import to_string
from kappa.types.builtin_fn import Primitive, SpecialForm
from kappa.types.environment import Environment
from kappa.types.hash_map import Map
from kappa.types.native_fn import NativeFunction
from kappa.types.nil import Nil
from kappa.types.procedure import Procedure
from kappa.types.tail_call import TailCall


def apply_procedure(fn: Procedure, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue | TailCall:
    new_env = fn.bind(args)
    if not fn.body:
        return Nil
    for expr in fn.body[:-1]:
        evaluate_fn(expr, new_env)
    return TailCall(fn.body[-1], new_env)


def lookup_path(m: Map, keys: list[LispValue]) -> LispValue:
    """Follow `keys` through nested maps: ({:a {:b 1}} :a :b) => 1."""
    value: LispValue = m
    for key in keys:
        if not isinstance(value, Map):
            raise KappaApplicationError(
                f"Cannot look up {to_string(key)} in non-map value {to_string(value)}"
            )
        if key not in value:
            raise KappaApplicationError(f"Key not found in map: {to_string(key)}")
        value = value[key]
    return value


def apply(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue | TailCall:
    match head:
        case Primitive():
            return head(env, args)
        case Procedure():
            return apply_procedure(head, args, evaluate_fn)
        case Map():
            return lookup_path(head, args)
        case NativeFunction():
            return invoke_native(head, args)
        case SpecialForm():
            raise KappaApplicationError(f"Cannot apply special form {head.name} to evaluated arguments")
        case _:
            raise KappaApplicationError(f"Invalid procedure: {to_string(head)}")
