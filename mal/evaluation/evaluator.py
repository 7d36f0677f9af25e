"""Core evaluator and trampoline for the mal interpreter.

Implements macro expansion, special-form dispatch and tail-call aware
application. `evaluate` is a loop over (expr, env): forms in tail position
(if branches, do/let* bodies, quasiquote expansions and closure bodies) replace
the loop state instead of recursing, so tail calls run in constant Python stack.
"""

from __future__ import annotations

from mal import SExpression, LispValue
from mal.errors import MalTypeError
from mal.evaluation.macroexpand import macroexpand
from mal.evaluation.special_forms import SPECIAL_FORMS
from mal.types.collections import HashMap, List, Vector
from mal.types.environment import Environment
from mal.types.lambda_fn import Builtin, Lambda
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.tail_call import TailCall
from mal.types.values import hash_key


def eval_ast(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate a non-list form structurally."""
    match expr:
        case Symbol():
            return env.lookup(expr)
        case Vector():
            return Vector(evaluate(x, env) for x in expr)
        case HashMap():
            return HashMap(
                (hash_key("hash-map literal", evaluate(k, env)), evaluate(v, env))
                for k, v in expr.items()
            )
    # --- Atoms return as-is ---
    return expr


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Trampoline evaluator: tail-call aware evaluation of `expr` in `env`.
    """
    while True:
        if expr is None:
            return Nil
        if not isinstance(expr, List):
            return eval_ast(expr, env)
        if not expr:
            return expr

        expr = macroexpand(expr, env, evaluate)
        if not isinstance(expr, List):
            return eval_ast(expr, env)
        if not expr:
            return expr

        head = expr[0]
        # --- Special forms handling ---
        if isinstance(head, Symbol) and head in SPECIAL_FORMS:
            result = SPECIAL_FORMS[head](list(expr[1:]), env, evaluate)
            if isinstance(result, TailCall):
                expr, env = result.expr, result.env
                continue
            return result

        fn, *args = [evaluate(x, env) for x in expr]

        if isinstance(fn, Lambda):
            # Tail call: run all but the last body form, then loop on the last
            fn_env = fn.extend_env(args)
            for form in fn.body[:-1]:
                evaluate(form, fn_env)
            expr, env = (fn.body[-1] if fn.body else None), fn_env
            continue

        if isinstance(fn, Builtin):
            return fn(env, args)

        raise MalTypeError(f"Cannot apply non-function {fn!r}")
