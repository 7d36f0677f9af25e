from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import MalTypeError
from mal.evaluation.special_forms.checks import check_arity, check_type
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.values import is_function


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def! name value)
    Binds name in the current frame and returns the value.
    """
    check_arity("def!", tail, 2, 2)
    check_type("def!", tail, 0, Symbol)

    name, val_expr = tail
    value = evaluate_fn(val_expr, env)
    return env.define(name, value)


def defmacro_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (defmacro! name fn)
    Like def!, but binds a macro copy of the function value.
    """
    check_arity("defmacro!", tail, 2, 2)
    check_type("defmacro!", tail, 0, Symbol)

    name, val_expr = tail
    value = evaluate_fn(val_expr, env)
    if not is_function(value):
        raise MalTypeError("defmacro! expects a function declaration as second parameter")
    return env.define(name, value.as_macro())
