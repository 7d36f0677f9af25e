"""Textual form of mal values.

With `print_readably` the output of `pr_str` can be fed back to the reader and
produces an equal value (functions and atoms excepted).
"""

from __future__ import annotations

import re

from mal import LispValue
from mal.types.atom import Atom
from mal.types.boolean import Boolean
from mal.types.collections import HashMap, List, Vector
from mal.types.lambda_fn import Builtin, Lambda
from mal.types.nil import NilType
from mal.types.symbol import Keyword, Symbol

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n"}
_ESCAPE_RE = re.compile(r'[\\"\n]')


def escape(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], text)


def _join(items, print_readably: bool) -> str:
    return " ".join(pr_str(item, print_readably) for item in items)


def pr_str(value: LispValue, print_readably: bool = True) -> str:
    match value:
        case NilType():
            return "nil"
        case Boolean():
            return repr(value)
        case List():
            return f"({_join(value, print_readably)})"
        case Vector():
            return f"[{_join(value, print_readably)}]"
        case HashMap():
            flat = [part for pair in value.items() for part in pair]
            return f"{{{_join(flat, print_readably)}}}"
        case Symbol() | Keyword():
            return str(value)
        case str():
            return f'"{escape(value)}"' if print_readably else value
        case Lambda() | Builtin():
            return "#<macro>" if value.is_macro else "#<function>"
        case Atom():
            return f"(atom {pr_str(value.value, print_readably)})"
        case int() | float():
            return repr(value)
    return str(value)
