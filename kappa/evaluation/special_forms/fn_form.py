from kappa import EvaluatorFn
from kappa import SExpression
from kappa.errors import KappaArityError, KappaTypeError
from kappa.printer import to_string
from kappa.types.environment import Environment
from kappa.types.procedure import Procedure
from kappa.types.vector import Vector


def fn_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> Procedure:
    """(fn [params] body...): a closure over the defining environment.

    Multiple body forms run in order; an empty body returns nil when called.
    """
    if not tail:
        raise KappaArityError("fn requires at least a parameter vector")

    formals = tail[0]
    if not isinstance(formals, Vector):
        raise KappaTypeError(f"fn parameter list must be a vector, got {to_string(formals)}")

    params, rest = Procedure.parse_params(list(formals))
    return Procedure(params, list(tail[1:]), env, rest=rest)
