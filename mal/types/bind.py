from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from mal import LispValue
from mal.errors import MalArityError, MalTypeError
from mal.types.collections import List
from mal.types.symbol import Symbol

if TYPE_CHECKING:
    from mal.types.environment import Environment

VARIADIC = Symbol("&")


def validate_formals(formals: Sequence[LispValue]) -> list[Symbol]:
    """Check a parameter list at fn* construction time.

    Every entry must be a Symbol, and `&` may only appear once, directly before
    the final name.
    """
    for formal in formals:
        if not isinstance(formal, Symbol):
            raise MalTypeError(f"fn* params must be Symbols, got {formal!r}")
    if VARIADIC in formals:
        position = list(formals).index(VARIADIC)
        if position != len(formals) - 2:
            raise MalTypeError("Malformed parameter list: & must be followed by exactly one name")
    return list(formals)


def bind_arguments(
    env: Environment,
    formals: Sequence[Symbol],
    supplied_args: Sequence[LispValue],
) -> Environment:
    """
    Single source of truth for parameter binding.

    Positional formals are bound in order. If formal i is `&`, formal i+1
    receives a List of the supplied args from index i onward and binding stops.

    Binds into `env` (a fresh frame) and returns it.
    """
    for i, formal in enumerate(formals):
        if formal == VARIADIC:
            env.define(formals[i + 1], List(supplied_args[i:]))
            return env
        if i >= len(supplied_args):
            missing = list(formals[i:])
            if VARIADIC in missing:
                missing = missing[: missing.index(VARIADIC)]
            raise MalArityError(
                f"Too few arguments; missing {len(missing)} parameter(s): {[str(s) for s in missing]}"
            )
        env.define(formal, supplied_args[i])

    if len(supplied_args) > len(formals):
        extra = list(supplied_args[len(formals):])
        raise MalArityError(f"Too many arguments: {extra}")

    return env
