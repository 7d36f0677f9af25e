from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.evaluation.special_forms.checks import check_arity
from mal.types.environment import Environment
from mal.types.nil import Nil
from mal.types.tail_call import TailCall
from mal.types.values import is_truthy


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue | TailCall:
    check_arity("if", tail, 2, 3)

    cond = evaluate_fn(tail[0], env)
    # Truthiness: anything but nil and false, 0 and empty collections included
    if is_truthy(cond):
        return TailCall(tail[1], env)
    elif len(tail) > 2:
        return TailCall(tail[2], env)
    else:
        return Nil
