from kappa import EvaluatorFn
from kappa import SExpression
from kappa.errors import KappaArityError, KappaInvalidSymbol
from kappa.evaluation.special_forms.fn_form import fn_form
from kappa.printer import to_string
from kappa.types.environment import Environment
from kappa.types.symbol import Symbol


def _check_name(form: str, name: SExpression) -> Symbol:
    if not isinstance(name, Symbol):
        raise KappaInvalidSymbol(f"{form} requires a symbol as its name, got {to_string(name)}")
    return name


def def_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> Symbol:
    """
    (def name value)
    Binds in the current frame only and returns the name.
    """
    if len(tail) != 2:
        raise KappaArityError(f"def requires exactly 2 arguments, got {len(tail)}")

    name = _check_name("def", tail[0])
    value = evaluate_fn(tail[1], env)
    env.define(name, value)
    return name


def defn_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> Symbol:
    """(defn name [params] body...) is (def name (fn [params] body...))."""
    if len(tail) < 2:
        raise KappaArityError("defn requires a name and a parameter vector")

    name = _check_name("defn", tail[0])
    procedure = fn_form(tail[1:], env, evaluate_fn)
    procedure.name = name
    env.define(name, procedure)
    return name
