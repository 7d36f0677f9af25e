from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.evaluation.special_forms.checks import check_arity, check_type
from mal.types.bind import validate_formals
from mal.types.collections import List, Vector
from mal.types.environment import Environment
from mal.types.lambda_fn import Lambda


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(fn* (params...) body...) closes over `env`.

    Zero or more body forms; with several, all but the last run for effect.
    With none, calling the function yields nil.
    """
    check_arity("fn*", tail, 1)
    check_type("fn*", tail, 0, (List, Vector))

    formals = validate_formals(tail[0])
    return Lambda(formals, list(tail[1:]), env)
