"""Function values: closures created by fn* and natively implemented builtins."""

from __future__ import annotations

import copy
from io import StringIO
from typing import Callable

from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.nil import Nil
from mal.types.symbol import Symbol


class Lambda:
    """A closure with formal parameters, a body of forms and its defining env.

    `is_macro` is fixed when the value is built; defmacro! binds a macro copy
    made by `as_macro` rather than flipping the flag on a shared closure.
    """

    __slots__ = ("formals", "body", "env", "is_macro", "meta")

    def __init__(
        self,
        formals: list[Symbol],
        body: list[SExpression],
        env: Environment,
        is_macro: bool = False,
        meta: LispValue = Nil,
    ):
        self.formals: list[Symbol] = formals
        self.body: list[SExpression] = body
        self.env: Environment = env
        self.is_macro: bool = is_macro
        self.meta: LispValue = meta

    def extend_env(self, args: list[LispValue]) -> Environment:
        """Bind argument values to the formals in a new frame under self.env."""
        return Environment(self.env, self.formals, args)

    def as_macro(self) -> Lambda:
        return Lambda(self.formals, self.body, self.env, True, self.meta)

    def with_meta(self, meta: LispValue) -> Lambda:
        return Lambda(self.formals, self.body, self.env, self.is_macro, meta)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(fn* (")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write(")")
            for form in self.body:
                buffer.write(" ")
                buffer.write(repr(form))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)


class Builtin:
    """A function implemented in Python with the signature fn(env, args)."""

    __slots__ = ("name", "fn", "is_macro", "meta")

    def __init__(
        self,
        name: str,
        fn: Callable[[Environment, list[LispValue]], LispValue],
        is_macro: bool = False,
        meta: LispValue = Nil,
    ):
        self.name = name
        self.fn = fn
        self.is_macro = is_macro
        self.meta = meta

    def __call__(self, env: Environment, args: list[LispValue]) -> LispValue:
        return self.fn(env, args)

    def as_macro(self) -> Builtin:
        clone = copy.copy(self)
        clone.is_macro = True
        return clone

    def with_meta(self, meta: LispValue) -> Builtin:
        clone = copy.copy(self)
        clone.meta = meta
        return clone

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
