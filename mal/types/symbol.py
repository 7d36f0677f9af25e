"""Named atoms: symbols (resolved through the environment) and keywords
(self-evaluating constants written `:name`)."""

from __future__ import annotations
import sys


class _Named:
    __slots__ = ("id",)

    def __init__(self, name: str):
        # Interned so equality and hashing stay cheap in environment lookups
        self.id = sys.intern(name)

    def __eq__(self, other) -> bool:
        return type(other) is type(self) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self):
        return f"{type(self).__name__}({self.id!r})"


class Symbol(_Named):
    __slots__ = ()

    def __str__(self):
        return self.id


class Keyword(_Named):
    """`id` holds the name without the leading colon."""

    __slots__ = ()

    def __str__(self):
        return f":{self.id}"
