from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaArityError, KappaInvalidSymbol, KappaTypeError
from kappa.evaluation.special_forms.do_form import do_form
from kappa.printer import to_string
from kappa.types.environment import Environment
from kappa.types.symbol import Symbol
from kappa.types.tail_call import TailCall
from kappa.types.vector import Vector


def let_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue | TailCall:
    """(let [name expr ...] body...)

    Bindings are evaluated in order in a new child scope, so later
    expressions see earlier names. The body runs like `do` in that scope.
    """
    if not tail:
        raise KappaArityError("let requires a binding vector")

    bindings = tail[0]
    if not isinstance(bindings, Vector):
        raise KappaTypeError(f"let bindings must be a vector, got {to_string(bindings)}")
    if len(bindings) % 2:
        raise KappaArityError("let requires an even number of forms in its binding vector")

    local_env = env.child()
    for name, expr in zip(bindings[::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise KappaInvalidSymbol(f"let binding name must be a symbol, got {to_string(name)}")
        local_env.define(name, evaluate_fn(expr, local_env))

    return do_form(list(tail[1:]), local_env, evaluate_fn)
