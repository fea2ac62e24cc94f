from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaArityError
from kappa.types.environment import Environment


def quote_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    if len(tail) != 1:
        raise KappaArityError(f"quote expects exactly 1 argument, got {len(tail)}")
    return tail[0]
