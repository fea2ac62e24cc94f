"""Special form: cond, a multi-branch conditional."""

from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaArityError
from kappa.evaluation.special_forms.logic_forms import is_truthy
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.symbol import Keyword
from kappa.types.tail_call import TailCall

ELSE = Keyword("else")


def cond_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue | TailCall:
    """Evaluate (cond test expr test expr ...).

    Tests are evaluated pairwise in order and the expression paired with the
    first truthy test is evaluated in tail position. An `:else` test is
    remembered rather than taken, and its expression is used only when no
    other test matches. With no match and no `:else`, returns nil.
    """
    if len(tail) % 2:
        raise KappaArityError("cond requires an even number of forms")

    fallback: SExpression | None = None
    for test, expr in zip(tail[::2], tail[1::2]):
        if test == ELSE:
            if fallback is None:
                fallback = expr
            continue
        if is_truthy(evaluate_fn(test, env)):
            return TailCall(expr, env)

    if fallback is not None:
        return TailCall(fallback, env)
    return Nil
