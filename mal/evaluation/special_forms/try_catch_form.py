# try*/catch* handling
# Usage:
#
#   (try* (throw (list 1 2))
#         (catch* e (first e)))        ; => 1
#
#   (try* (undefined-fn)
#         (catch* e e))                ; => "'undefined-fn' not found"


from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import MalException, MalTypeError
from mal.evaluation.special_forms.checks import check_arity, check_type
from mal.types.collections import List
from mal.types.environment import Environment
from mal.types.symbol import Symbol

CATCH = Symbol("catch*")


def catch_value(error: Exception) -> LispValue:
    """The value bound by catch*: a thrown value as-is, else the error message."""
    if isinstance(error, MalException):
        return error.value
    return str(error) or type(error).__name__


def try_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (try* expr (catch* name handler))

    The handler runs eagerly in a child frame binding `name`; it is not a
    tail call, so errors it raises escape this try*.
    """
    check_arity("try*", tail, 2, 2)
    body_expr, catch_clause = tail
    if not (isinstance(catch_clause, List) and catch_clause and catch_clause[0] == CATCH):
        raise MalTypeError("a catch* form was expected as 2nd argument to try*")
    catch_args = list(catch_clause[1:])
    check_arity("catch*", catch_args, 2, 2)
    check_type("catch*", catch_args, 0, Symbol)
    name, handler_expr = catch_args

    try:
        return evaluate_fn(body_expr, env)
    except Exception as ex:
        # a single name, never a parameter list: `&` binds like any symbol
        catch_env = Environment(env)
        catch_env.define(name, catch_value(ex))
        return evaluate_fn(handler_expr, catch_env)
