from kappa import SExpression
from kappa.types.environment import Environment


class TailCall:
    """Marker returned from tail positions: continue with `expr` in `env`."""

    __slots__ = ("expr", "env")

    def __init__(self, expr: SExpression, env: Environment):
        self.expr = expr
        self.env = env
