"""Special form that exposes the macro expander to mal code.

macroexpand: expand the head position to a fixpoint and return the expansion,
             without evaluating it.

    (defmacro! unless (fn* (p a b) `(if ~p ~b ~a)))
    (macroexpand (unless false 1 2))  ; => (if false 2 1)
"""

from mal import SExpression, EvaluatorFn
from mal.evaluation.macroexpand import macroexpand
from mal.evaluation.special_forms.checks import check_arity
from mal.types.environment import Environment


def macroexpand_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> SExpression:
    """(macroexpand form): the argument is not evaluated."""
    check_arity("macroexpand", tail, 1, 1)
    return macroexpand(tail[0], env, evaluate_fn)
