"""Compound values: List, Vector and HashMap.

Lists and vectors are immutable tuples, so sub-sequences can be shared between
parent structures freely. Hash maps are dicts that are never mutated once built;
builtins such as `assoc` construct a new map instead.

Every compound value may carry metadata. The class attribute `meta` provides the
default (Nil); `with_meta` returns a shallow clone with its own `meta`.
"""

from __future__ import annotations

from typing import Iterable

from mal import LispValue
from mal.types.nil import Nil


class _Sequence(tuple):
    meta: LispValue = Nil

    def __new__(cls, items: Iterable[LispValue] = ()):
        return super().__new__(cls, items)

    def __eq__(self, other) -> bool:
        from mal.types.equality import equal
        return equal(self, other)

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        # Lists and vectors that are equal must hash alike
        return hash(tuple(self))

    def __getitem__(self, index):
        result = super().__getitem__(index)
        if isinstance(index, slice):
            return type(self)(result)
        return result

    def with_meta(self, meta: LispValue) -> _Sequence:
        clone = type(self)(self)
        clone.meta = meta
        return clone

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class List(_Sequence):
    """Printed as ( ... ); evaluated as a call or special form."""


class Vector(_Sequence):
    """Printed as [ ... ]; evaluated element-wise."""


class HashMap(dict):
    meta: LispValue = Nil

    def __eq__(self, other) -> bool:
        from mal.types.equality import equal
        return equal(self, other)

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(frozenset(self.items()))

    def with_meta(self, meta: LispValue) -> HashMap:
        clone = HashMap(self)
        clone.meta = meta
        return clone

    def __repr__(self) -> str:
        return f"HashMap({dict(self)!r})"
