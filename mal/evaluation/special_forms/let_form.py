from mal import EvaluatorFn
from mal import SExpression
from mal.errors import MalTypeError
from mal.evaluation.special_forms.checks import check_arity, check_type
from mal.types.collections import List, Vector
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.tail_call import TailCall


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> TailCall:
    """
    (let* (name1 expr1 name2 expr2 ...) body)

    Each expression is evaluated in the new frame as it grows, so later
    bindings see earlier ones. The body is evaluated in tail position.
    """
    check_arity("let*", tail, 2, 2)
    check_type("let*", tail, 0, (List, Vector))

    bindings, body = tail
    if len(bindings) % 2 != 0:
        raise MalTypeError("let* requires an even number of forms in its binding list")

    let_env = Environment(outer=env)
    for name, expr in zip(bindings[::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise MalTypeError(f"let* binding name must be a Symbol, got {name!r}")
        let_env.define(name, evaluate_fn(expr, let_env))

    return TailCall(body, let_env)
