from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.tail_call import TailCall


def is_truthy(val: LispValue) -> bool:
    """Only nil and false are falsy; 0, "" and empty collections are truthy."""
    return not (val is Nil or val is False)


def and_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue | TailCall:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right until a falsy value
    is found, which is returned immediately. Otherwise the last operand is
    evaluated in tail position. With zero operands, returns true.
    """
    if not tail:
        return True
    for expr in tail[:-1]:
        val = evaluate_fn(expr, env)
        if not is_truthy(val):
            return val
    return TailCall(tail[-1], env)


def or_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue | TailCall:
    """Short-circuiting logical OR special form.

    (or a b c ...) returns the first truthy operand value; the last operand
    is evaluated in tail position. With zero operands, returns nil.
    """
    if not tail:
        return Nil
    for expr in tail[:-1]:
        val = evaluate_fn(expr, env)
        if is_truthy(val):
            return val
    return TailCall(tail[-1], env)
