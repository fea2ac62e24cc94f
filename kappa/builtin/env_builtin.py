"""Built-in functions for the Kappa runtime environment.

This module defines arithmetic, comparison, equality, collection helpers and
predicates exposed to Kappa code, and the registration that seeds a root
environment with them and with the special forms.
"""
from __future__ import annotations

import math
import operator
from typing import Callable

from kappa import LispValue
from kappa.comparer import equals
from kappa.errors import KappaArithmeticError, KappaArityError, KappaTypeError
from kappa.evaluation.evaluator import call
from kappa.evaluation.special_forms import SPECIAL_FORMS
from kappa.evaluation.special_forms.logic_forms import is_truthy
from kappa.printer import display, to_string
from kappa.types.builtin_fn import Primitive, SpecialForm
from kappa.types.environment import Environment
from kappa.types.hash_map import Map
from kappa.types.nil import Nil
from kappa.types.symbol import Symbol
from kappa.types.vector import Vector


def is_number(x: LispValue) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _check_number(name: str, x: LispValue) -> None:
    if not is_number(x):
        raise KappaTypeError(f"Invalid operand to {name}: {to_string(x)}")


# -------------------------------
# Arithmetic
# -------------------------------
def _text(x: LispValue) -> str:
    return x if isinstance(x, str) else to_string(x)


def add(env: Environment, expr: list[LispValue]) -> LispValue:
    """Sum the arguments left to right; a string operand switches to concatenation."""
    if not expr:
        return 0
    result = expr[0]
    if not (is_number(result) or isinstance(result, str)):
        raise KappaTypeError(f"Invalid operand to +: {to_string(result)}")
    for x in expr[1:]:
        if isinstance(result, str) or isinstance(x, str):
            if not (is_number(x) or isinstance(x, str)):
                raise KappaTypeError(f"Invalid operand to +: {to_string(x)}")
            result = _text(result) + _text(x)
        else:
            _check_number("+", x)
            if isinstance(result, int) and isinstance(x, int):
                result = result + x
            else:
                result = _promoting("+", operator.add, result, x)
    return result


def _promoting(name: str, op: Callable[[float, float], float], a: LispValue, b: LispValue) -> float:
    """Apply a float operation, converting Integer operands first."""
    try:
        return op(float(a), float(b))
    except OverflowError as ex:
        raise KappaArithmeticError(f"Integer operand to {name} is too large to convert to Float") from ex


def _int_div(a: int, b: int) -> int:
    # Truncates toward zero
    if b == 0:
        raise KappaArithmeticError("Integer division by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _float_div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        # IEEE semantics for float division by zero
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _fold(
    name: str,
    expr: list[LispValue],
    identity: int,
    int_op: Callable[[int, int], int],
    float_op: Callable[[float, float], float],
) -> LispValue:
    """Left fold; a single argument is folded against `identity`."""
    if not expr:
        raise KappaArityError(f"{name} requires at least 1 argument")
    for x in expr:
        _check_number(name, x)
    operands = [identity, *expr] if len(expr) == 1 else list(expr)
    result = operands[0]
    for x in operands[1:]:
        if isinstance(result, int) and isinstance(x, int):
            result = int_op(result, x)
        else:
            result = _promoting(name, float_op, result, x)
    return result


def sub(env: Environment, expr: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    return _fold("-", expr, 0, operator.sub, operator.sub)


def mul(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the product of all arguments; 1 with none."""
    if not expr:
        return 1
    return _fold("*", expr, 1, operator.mul, operator.mul)


def div(env: Environment, expr: list[LispValue]) -> LispValue:
    """Divide left-to-right; with one arg returns the reciprocal."""
    return _fold("/", expr, 1, _int_div, _float_div)


def mod(env: Environment, expr: list[LispValue]) -> LispValue:
    """(mod n d) => n % d. Exactly 2 integer arguments."""
    if len(expr) != 2:
        raise KappaArityError("mod requires exactly 2 arguments")
    n, d = expr
    if not (isinstance(n, int) and isinstance(d, int)) or isinstance(n, bool) or isinstance(d, bool):
        raise KappaTypeError("All arguments to mod must be integers")
    if d == 0:
        raise KappaArithmeticError("Modulo by zero")
    return n % d


# -------------------------------
# Comparison and equality
# -------------------------------
def _compare(name: str, expr: list[LispValue], op: Callable[[LispValue, LispValue], bool]) -> bool:
    """Chainable comparison: stops at the first pair that fails."""
    if not expr:
        raise KappaArityError(f"{name} requires at least 1 argument")
    for a, b in zip(expr, expr[1:]):
        _check_number(name, a)
        _check_number(name, b)
        if not op(a, b):
            return False
    return True


def lt(env: Environment, expr: list[LispValue]) -> bool:
    return _compare("<", expr, operator.lt)


def lte(env: Environment, expr: list[LispValue]) -> bool:
    return _compare("<=", expr, operator.le)


def gt(env: Environment, expr: list[LispValue]) -> bool:
    return _compare(">", expr, operator.gt)


def gte(env: Environment, expr: list[LispValue]) -> bool:
    return _compare(">=", expr, operator.ge)


def equals_builtin(env: Environment, expr: list[LispValue]) -> bool:
    """True if every argument has the type of the first and is structurally equal to it."""
    if not expr:
        raise KappaArityError("= requires at least 1 argument")
    first = expr[0]
    return all(type(x) is type(first) and equals(first, x) for x in expr[1:])


def not_equals(env: Environment, expr: list[LispValue]) -> bool:
    """Logical negation of =."""
    return not equals_builtin(env, expr)


def logical_not(env: Environment, expr: list[LispValue]) -> bool:
    """Logical NOT for a single value; only nil and false are falsy."""
    if len(expr) != 1:
        raise KappaArityError("not requires exactly 1 argument")
    return not is_truthy(expr[0])


def is_nil(env: Environment, expr: list[LispValue]) -> bool:
    if len(expr) != 1:
        raise KappaArityError("nil? requires exactly 1 argument")
    return expr[0] is Nil


# -------------------------------
# Collections
# -------------------------------
def list_builtin(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    """Construct a list from the provided arguments."""
    return list(expr)


def vector_builtin(env: Environment, expr: list[LispValue]) -> Vector:
    return Vector(expr)


def hash_map(env: Environment, expr: list[LispValue]) -> Map:
    """(hash-map k v ...) builds a map from alternating keys and values."""
    if len(expr) % 2:
        raise KappaArityError("hash-map requires an even number of arguments")
    return Map(zip(expr[::2], expr[1::2]))


def _as_sequence(name: str, xs: LispValue) -> list[LispValue]:
    if xs is Nil:
        return []
    if isinstance(xs, (list, Vector)):
        return list(xs)
    raise KappaTypeError(f"{name} expects a list or vector, got {to_string(xs)}")


def count(env: Environment, expr: list[LispValue]) -> int:
    if len(expr) != 1:
        raise KappaArityError("count requires exactly 1 argument")
    xs = expr[0]
    if isinstance(xs, (str, Map)):
        return len(xs)
    return len(_as_sequence("count", xs))


def first(env: Environment, expr: list[LispValue]) -> LispValue:
    """First element of a list or vector; nil when empty."""
    if len(expr) != 1:
        raise KappaArityError("first requires exactly 1 argument")
    xs = _as_sequence("first", expr[0])
    return xs[0] if xs else Nil


def rest(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    """All but the first element, as a list; empty for empty input."""
    if len(expr) != 1:
        raise KappaArityError("rest requires exactly 1 argument")
    return _as_sequence("rest", expr[0])[1:]


def cons(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    """(cons x seq) => a new list with x in front of seq's elements."""
    if len(expr) != 2:
        raise KappaArityError("cons requires exactly 2 arguments")
    head, tail = expr
    return [head, *_as_sequence("cons", tail)]


def get(env: Environment, expr: list[LispValue]) -> LispValue:
    """(get map key [default]) => value for key, else default (nil)."""
    if len(expr) not in (2, 3):
        raise KappaArityError("get requires a map, a key and an optional default")
    m, key = expr[0], expr[1]
    default = expr[2] if len(expr) == 3 else Nil
    if m is Nil:
        return default
    if not isinstance(m, Map):
        raise KappaTypeError(f"get expects a map, got {to_string(m)}")
    return m.get(key, default)


# -------------------------------
# Strings and output
# -------------------------------
def str_builtin(env: Environment, expr: list[LispValue]) -> str:
    """Concatenate display forms; nil contributes nothing."""
    return "".join("" if x is Nil else display(x) for x in expr)


def println(env: Environment, expr: list[LispValue]) -> LispValue:
    """Print space-separated display forms followed by newline; returns nil."""
    print(" ".join(display(x) for x in expr))
    return Nil


def apply_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """(apply f x ... seq) calls f with the leading args followed by seq's elements."""
    if len(expr) < 2:
        raise KappaArityError("apply requires a function and a sequence of arguments")
    fn, *leading, seq = expr
    return call(fn, [*leading, *_as_sequence("apply", seq)], env)


PRIMITIVES: dict[str, Callable[[Environment, list[LispValue]], LispValue]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "mod": mod,
    "<": lt,
    "<=": lte,
    ">": gt,
    ">=": gte,
    "=": equals_builtin,
    "not=": not_equals,
    "not": logical_not,
    "nil?": is_nil,
    "list": list_builtin,
    "vector": vector_builtin,
    "hash-map": hash_map,
    "count": count,
    "first": first,
    "rest": rest,
    "cons": cons,
    "get": get,
    "str": str_builtin,
    "println": println,
    "apply": apply_builtin,
}


def register(env: Environment) -> None:
    """Register all special forms and builtin functions into the given environment."""
    env.update({symbol: SpecialForm(symbol.id, fn) for symbol, fn in SPECIAL_FORMS.items()})
    env.update({Symbol(name): Primitive(name, fn) for name, fn in PRIMITIVES.items()})


def standard_env() -> Environment:
    """A fresh root environment seeded with the builtins."""
    env = Environment()
    register(env)
    return env
