from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.tail_call import TailCall


def do_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue | TailCall:
    """(do expr...): evaluate in order; the last expression is in tail position."""
    if not tail:
        return Nil
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return TailCall(tail[-1], env)
