"""
  mal Reader: Lexer and Parser

- Line-based tokenizer driven by a single regular expression
- Recursive-descent parser over a peek/advance token cursor
- Emits mal values directly (code is data):

    - nil / true / false -> Nil / true / false
    - integers -> int, decimals -> float
    - "strings" -> str (escapes decoded)
    - :keywords -> Keyword
    - other atoms -> Symbol
    - ( ... ) -> List, [ ... ] -> Vector, { ... } -> HashMap
    - 'x `x ~x ~@x @x ^m x -> (quote x) (quasiquote x) (unquote x)
                              (splice-unquote x) (deref x) (with-meta x m)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from mal import SExpression
from mal.errors import MalSyntaxError
from mal.reader.reader_macros import dispatch, is_reader_macro
from mal.types.boolean import false, true
from mal.types.collections import HashMap, List, Vector
from mal.types.nil import Nil
from mal.types.symbol import Keyword, Symbol


TOKEN_RE = re.compile(
    r"[\s,]*("
    r"(?P<splice>~@)"  # splice-unquote
    r"|(?P<special>[\[\]{}()'`~^@])"  # punctuation and reader macros
    r'|(?P<string>"(?:\\.|[^\\"])*"?)'  # strings, possibly unterminated
    r"|(?P<comment>;.*)"  # comment to end of line
    r"|(?P<atom>[^\s\[\]{}('\"`,;)]*)"  # everything else
    r")"
)

STRING_RE = re.compile(r'"(?:\\.|[^\\"])*"')
ESCAPE_RE = re.compile(r'\\(["n\\])')
INT_RE = re.compile(r"-?\d+")
FLOAT_RE = re.compile(r"-?(?:\d+\.\d*|\.\d+|\d+(?:\.\d*)?[eE][-+]?\d+|\.\d+[eE][-+]?\d+)")

CONSTANTS = {"nil": Nil, "true": true, "false": false}

CLOSERS: dict[str, tuple[str, type]] = {
    "(": (")", List),
    "[": ("]", Vector),
    "{": ("}", HashMap),
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples.

    Comments and separators (whitespace, commas) are dropped.
    """
    for line in source.split("\n"):
        pos = 0
        while True:
            match = TOKEN_RE.match(line, pos)
            token = match.group(1)
            if not token:
                break
            pos = match.end()
            if match.group("comment"):
                break
            for nm in TOKEN_RE.groupindex:
                if match.group(nm):
                    yield nm, token
                    break


def _decode_string(token: str) -> str:
    if not STRING_RE.fullmatch(token):
        raise MalSyntaxError("unterminated string")
    return ESCAPE_RE.sub(
        lambda m: "\n" if m.group(1) == "n" else m.group(1), token[1:-1]
    )


def read_atom(token: str) -> SExpression:
    """Classify a single non-punctuation token."""
    if token in CONSTANTS:
        return CONSTANTS[token]
    if INT_RE.fullmatch(token):
        return int(token)
    if FLOAT_RE.fullmatch(token):
        return float(token)
    if token.startswith('"'):
        return _decode_string(token)
    if token.startswith(":"):
        return Keyword(token[1:])
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[SExpression]:
        """Parse the next form; None when the stream is exhausted."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type in ("special", "splice") and is_reader_macro(tok_val):
            self.advance()  # consume the macro token
            return dispatch(tok_val, self)

        if tok_type == "special" and tok_val in CLOSERS:
            return self._parse_collection(tok_val)

        if tok_type == "special":
            # a closing delimiter with no matching opener
            raise MalSyntaxError(f"Unexpected '{tok_val}'")

        self.advance()
        return read_atom(tok_val)

    def parse_required(self, what: str) -> SExpression:
        """Parse the next form, treating end of input as a syntax error."""
        if self.peek()[0] is None:
            raise MalSyntaxError(f"EOF while reading {what}")
        return self.parse_expr()

    def _parse_collection(self, opener: str) -> SExpression:
        closer, kind = CLOSERS[opener]
        self.advance()  # consume opener
        items = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise MalSyntaxError(f"EOF while reading, expected '{closer}'")
            if tok_type == "special" and tok_val == closer:
                self.advance()
                break
            items.append(self.parse_expr())

        if kind is HashMap:
            if len(items) % 2 != 0:
                raise MalSyntaxError("Map literal must contain an even number of forms")
            return HashMap(zip(items[::2], items[1::2]))
        return kind(items)

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read_str(source: str) -> Optional[SExpression]:
    """Read the first form of `source`; None if it holds no form."""
    return TokenStream(lex(source)).parse_expr()


def read_all(source: str) -> Iterator[SExpression]:
    """Read every top-level form of `source`."""
    return TokenStream(lex(source)).parse_all()
