"""Core evaluator and trampoline for the Kappa interpreter.

`evaluate0` performs one step: it resolves symbols, rebuilds vectors and maps
from their evaluated contents, and dispatches list forms on the evaluated
head. Forms that finish by evaluating a sub-expression (the last form of
`do`, the chosen branch of `if`/`cond`, the last body form of a procedure)
return a TailCall instead of recursing. `evaluate` unwraps TailCalls in a
loop, so tail-recursive procedures run in constant host stack.
"""

from __future__ import annotations

from kappa import SExpression, LispValue
from kappa.errors import KappaRecursionError
from kappa.evaluation.apply import apply
from kappa.types.builtin_fn import SpecialForm
from kappa.types.environment import Environment
from kappa.types.hash_map import Map
from kappa.types.symbol import Symbol
from kappa.types.tail_call import TailCall
from kappa.types.vector import Vector


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Trampoline evaluator: tail-call aware evaluation.
    """
    try:
        result = evaluate0(expr, env)
        while isinstance(result, TailCall):
            result = evaluate0(result.expr, result.env)
        return result
    except RecursionError as ex:
        raise KappaRecursionError("Stack exhausted: expression nested too deeply") from ex


def evaluate0(expr: SExpression, env: Environment) -> LispValue | TailCall:
    """
    Core evaluator: single-step evaluation.
    Returns either a value or a TailCall.
    """
    match expr:
        case Symbol():
            return env.lookup(expr)
        case list() if expr:
            head = evaluate(expr[0], env)
            tail = expr[1:]
            if isinstance(head, SpecialForm):
                return head(tail, env, evaluate)
            args = [evaluate(arg, env) for arg in tail]
            return apply(head, args, env, evaluate)
        case Vector():
            return Vector([evaluate(x, env) for x in expr])
        case Map():
            return Map((evaluate(k, env), evaluate(v, env)) for k, v in expr.items())

    # --- Atoms, the empty list and callables return as-is ---
    return expr


def call(fn: LispValue, args: list[LispValue], env: Environment) -> LispValue:
    """Apply `fn` outside tail position, running any TailCall to completion."""
    result = apply(fn, args, env, evaluate)
    if isinstance(result, TailCall):
        result = evaluate(result.expr, result.env)
    return result
