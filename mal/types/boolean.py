from __future__ import annotations


class Boolean:
    """The `true` and `false` constants.

    Kept apart from Python's bool so that `true` never compares equal to the
    number 1 and the two can coexist as hash-map keys.
    """

    __slots__ = ("value",)

    def __init__(self, value: bool):
        self.value = value

    def __bool__(self):
        return self.value

    def __repr__(self):
        return "true" if self.value else "false"


true = Boolean(True)
false = Boolean(False)


def boolean(value) -> Boolean:
    """Map a Python truth value onto the mal constants."""
    return true if value else false
