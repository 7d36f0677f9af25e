from mal import EvaluatorFn
from mal import SExpression
from mal.evaluation.special_forms.checks import check_arity
from mal.types.environment import Environment
from mal.types.tail_call import TailCall


def progn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> TailCall:
    """(do form... last): evaluate for effect, then continue with `last`."""
    check_arity("do", tail, 1)
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return TailCall(tail[-1], env)
