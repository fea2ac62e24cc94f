# Core type aliases for Kappa's data model.
# Values are plain Python types where one fits (int, float, str, bool, list)
# plus small classes from kappa.types for the variants Python lacks
# (Symbol, Keyword, Char, Vector, Map, Nil, callables).
#
# Naming guidance:
# - SExpression: Use in reader code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (code and data share one representation)
SExpression = LispValue

# Evaluator function type: passed to special forms so they can evaluate sub-forms
EvaluatorFn = Callable[..., LispValue]
