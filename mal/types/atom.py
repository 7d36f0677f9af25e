from __future__ import annotations

from mal import LispValue


class Atom:
    """A mutable cell. Every reference to the same Atom sees `reset!`/`swap!`."""

    __slots__ = ("value",)

    def __init__(self, value: LispValue):
        self.value: LispValue = value

    def __eq__(self, other) -> bool:
        from mal.types.equality import equal
        return equal(self, other)

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    # Mutable: never usable as a hash-map key
    __hash__ = None

    def reset(self, value: LispValue) -> LispValue:
        self.value = value
        return value

    def __repr__(self) -> str:
        return f"Atom({self.value!r})"
