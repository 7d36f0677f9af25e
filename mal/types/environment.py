"""Runtime environment for mal.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. Frames are shared by reference: a closure
keeps its defining frame alive, and many call frames may point at the same
parent. Nothing ever copies a frame.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional, Sequence

from mal import LispValue
from mal.errors import MalTypeError, MalUnresolvedSymbol
from mal.types.bind import bind_arguments
from mal.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        binds: Sequence[Symbol] = (),
        exprs: Sequence[LispValue] = (),
    ):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer
        if binds or exprs:
            bind_arguments(self, binds, exprs)

    def define(self, name: Symbol, value: LispValue) -> LispValue:
        """Bind `name` to `value` in this frame and return the value.

        Raises MalTypeError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise MalTypeError(f"Cannot define {name!r} as a symbol")
        self.vars[name] = value
        return value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: Symbol, default: LispValue = None) -> LispValue:
        """Return the value bound to `name`, or `default` if unbound."""
        env = self.find(name)
        if env is None:
            return default
        return env.vars[name]

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`.

        Raises MalUnresolvedSymbol if no frame in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise MalUnresolvedSymbol(f"'{name}' not found")
        return env.vars[name]

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env: Optional[Environment] = self
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
