"""Application engine for mal.

The evaluator loop applies closures itself so that calls in tail position do not
grow the Python stack. Everything else that needs to call a function value
(macro expansion, and builtins such as `apply`, `map` and `swap!`) goes through
`apply_function`, which is an ordinary nested call.
"""

from mal import LispValue, EvaluatorFn
from mal.errors import MalTypeError
from mal.types.environment import Environment
from mal.types.lambda_fn import Builtin, Lambda
from mal.types.nil import Nil


def apply_lambda(fn: Lambda, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Bind args in a new frame under the closure env and run the whole body."""
    new_env = fn.extend_env(list(args))
    result: LispValue = Nil
    for form in fn.body:
        result = evaluate_fn(form, new_env)
    return result


def apply_function(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Lambda or a Builtin.

    - For Lambda, evaluate the body to completion.
    - For Builtin, invoke with the calling env and the list of args.
    - Otherwise, raise a type error.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn)
    elif isinstance(head, Builtin):
        return head(env, list(args))
    else:
        raise MalTypeError(f"Cannot apply non-function {head!r}")
