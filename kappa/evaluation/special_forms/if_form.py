from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaArityError
from kappa.evaluation.special_forms.logic_forms import is_truthy
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.tail_call import TailCall


def if_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue | TailCall:
    if len(tail) not in (2, 3):
        raise KappaArityError(f"if requires a condition, a then-expression and an optional else-expression, got {len(tail)} arguments")

    if is_truthy(evaluate_fn(tail[0], env)):
        return TailCall(tail[1], env)
    if len(tail) == 3:
        return TailCall(tail[2], env)
    return Nil
