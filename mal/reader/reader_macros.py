"""Reader macros: single-token prefixes that desugar into ordinary list forms."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mal import SExpression
from mal.types.collections import List
from mal.types.symbol import Symbol

if TYPE_CHECKING:
    from mal.reader.parser import TokenStream


# Prefix token -> the symbol heading the form it wraps
QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    "~": Symbol("unquote"),
    "~@": Symbol("splice-unquote"),
    "@": Symbol("deref"),
}

WITH_META = "^"
WITH_META_SYMBOL = Symbol("with-meta")


def is_reader_macro(token: str) -> bool:
    return token in QUOTE_FORMS or token == WITH_META


def dispatch(token: str, stream: TokenStream) -> SExpression:
    """Read the operand(s) of a reader macro whose token was already consumed."""
    if token == WITH_META:
        # ^meta target => (with-meta target meta)
        meta = stream.parse_required("metadata after '^'")
        target = stream.parse_required("form after '^' metadata")
        return List([WITH_META_SYMBOL, target, meta])
    operand = stream.parse_required(f"form after {token!r}")
    return List([QUOTE_FORMS[token], operand])
