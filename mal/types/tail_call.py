from mal import SExpression
from mal.types.environment import Environment


class TailCall:
    """Next (expr, env) state for the evaluator loop.

    Special forms return one instead of evaluating a form in tail position, so
    the loop continues without growing the Python stack.
    """

    __slots__ = ("expr", "env")

    def __init__(self, expr: SExpression, env: Environment):
        self.expr = expr
        self.env = env
