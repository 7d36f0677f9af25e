"""Macro expansion.

A macro is a function value flagged `is_macro` and bound to the head symbol of a
list. Expansion applies it to the unevaluated argument forms and substitutes the
result, repeating until the head is no longer a macro. Termination is up to the
macro author.
"""

from __future__ import annotations

from mal import SExpression, EvaluatorFn
from mal.evaluation.apply import apply_function
from mal.types.collections import List
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.values import is_macro


def macro_for(form: SExpression, env: Environment):
    """Return the macro `form` calls, or None if it is not a macro call."""
    if isinstance(form, List) and form and isinstance(form[0], Symbol):
        candidate = env.get(form[0])
        if is_macro(candidate):
            return candidate
    return None


def expand_1(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand the head-position macro once; return `form` unchanged otherwise."""
    macro = macro_for(form, env)
    if macro is None:
        return form
    return apply_function(macro, list(form[1:]), env, evaluate_fn)


def macroexpand(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand head-position macros to a fixpoint."""
    while macro_for(form, env) is not None:
        form = expand_1(form, env, evaluate_fn)
    return form
