"""Value equality for mal.

`equal` is the single definition of the `=` relation. Compound values route
their `==` through it, so hash-map lookups and structural comparison agree.
"""

from __future__ import annotations

from mal import LispValue
from mal.types.atom import Atom
from mal.types.boolean import Boolean
from mal.types.collections import HashMap
from mal.types.lambda_fn import Builtin, Lambda
from mal.types.nil import NilType
from mal.types.symbol import Keyword, Symbol


def is_number(value: LispValue) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def equal(a: LispValue, b: LispValue) -> bool:
    """Deep equality; lists and vectors compare element-wise with each other."""
    match a:
        case NilType() | Boolean():
            return a is b
        case Lambda() | Builtin():
            return False
        case Atom():
            return isinstance(b, Atom) and equal(a.value, b.value)
        case tuple() | list():
            if not isinstance(b, (tuple, list)) or len(a) != len(b):
                return False
            return all(equal(x, y) for x, y in zip(a, b))
        case HashMap():
            if not isinstance(b, dict) or len(a) != len(b):
                return False
            for key, value in a.items():
                if key not in b or not equal(value, b[key]):
                    return False
            return True
        case Symbol() | Keyword():
            return a == b
        case str():
            return isinstance(b, str) and a == b
        case _ if is_number(a):
            return is_number(b) and a == b
    return a == b
