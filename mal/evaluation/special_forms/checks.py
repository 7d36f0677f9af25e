"""Argument checks shared by the special forms."""

from __future__ import annotations

import math
from typing import Sequence

from mal import SExpression
from mal.errors import MalArityError, MalTypeError


def ordinal(n: int) -> str:
    if n == 1:
        return "1st"
    if n == 2:
        return "2nd"
    if n == 3:
        return "3rd"
    return f"{n}th"


def check_arity(
    name: str, args: Sequence[SExpression], lower: int, upper: float = math.inf
) -> None:
    if len(args) < lower:
        raise MalArityError(f"Too few arguments to {name}")
    if len(args) > upper:
        raise MalArityError(f"Too many arguments to {name}")


def check_type(
    name: str, args: Sequence[SExpression], index: int, expected: type | tuple[type, ...]
) -> None:
    if not isinstance(args[index], expected):
        kinds = expected if isinstance(expected, tuple) else (expected,)
        names = " or a ".join(kind.__name__ for kind in kinds)
        raise MalTypeError(f"{ordinal(index + 1)} argument to {name} must be a {names}")
