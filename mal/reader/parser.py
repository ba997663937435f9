"""
  Lisp Reader, Lexer and Parser

- The lexer recognises tokens only; it never validates them.
- The parser is a single-pass recursive descent over one token stream and
  emits mal values:

    - true / false -> bool
    - nil -> Nil
    - integers -> int (64-bit signed range)
    - strings -> str (escapes decoded)
    - symbols -> Symbol
    - ( ... ) -> List
    - [ ... ] -> Vector
    - { ... } -> HashMap (alternating key, value)

  Reader-macro characters (' ` ~ ~@ ^ @) are tokenised but not expanded.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional, Iterable

from mal import SExpression
from mal.errors import (
    NumberParseError,
    UnbalancedCollection,
    UnexpectedEof,
    UnterminatedString,
)
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.values import HashMap, List, Vector, in_range

log = logging.getLogger(__name__)

TOKEN_RE = re.compile(
    r"[\s,]*(?:"
    r"(?P<splice>~@)"  # quote-splice
    r"|(?P<open>[\[({])"  # ( [ {
    r"|(?P<close>[\])}])"  # ) ] }
    r"|(?P<macro>['`~^@])"  # reader-macro characters
    r'|(?P<string>"(?:\\.|[^\\"])*"?)'  # double-quoted strings, maybe unterminated
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<atom>[^\s\[\]{}('\"`,;)]+)"  # fallback: numbers, symbols, literals
    r")"
)

STRING_RE = re.compile(r'"(?:\\.|[^\\"])*"', re.DOTALL)
INTEGER_RE = re.compile(r"-?[0-9]+")
ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

COLLECTIONS: dict[str, tuple[str, type]] = {
    "(": (")", List),
    "[": ("]", Vector),
    "{": ("}", HashMap),
}

LITERALS: dict[str, SExpression] = {
    "true": True,
    "false": False,
    "nil": Nil,
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples, comments dropped."""
    for match in TOKEN_RE.finditer(source):
        tok_type = match.lastgroup
        if tok_type is None or tok_type == "comment":
            continue
        yield tok_type, match.group(tok_type)


def _unescape(body: str) -> str:
    return ESCAPE_RE.sub(lambda m: "\n" if m.group(1) == "n" else m.group(1), body)


class TokenStream:
    """Forward-only cursor over an immutable token sequence."""

    def __init__(self, token_iter: Iterable[tuple[str, str]]):
        self.tokens: tuple[tuple[str, str], ...] = tuple(token_iter)
        self.position = 0

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None, None

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        token = self.peek()
        if token[0] is not None:
            self.position += 1
        return token

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            raise UnexpectedEof("Unexpected end of input")

        if tok_type == "open":
            return self._parse_collection()

        if tok_type == "close":
            raise UnbalancedCollection(f"Unexpected '{tok_val}'")

        self.advance()
        return self._parse_atom(tok_type, tok_val)

    def _parse_collection(self) -> SExpression:
        _, opener = self.advance()
        closer, kind = COLLECTIONS[opener]
        items = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise UnexpectedEof(f"Expected '{closer}', got end of input")
            if tok_val == closer and tok_type == "close":
                self.advance()
                break
            # a mismatched closer lands in parse_expr and is rejected there
            items.append(self.parse_expr())
        if kind is HashMap and len(items) % 2:
            raise UnbalancedCollection("Map literal needs an even number of forms")
        return kind(items)

    def _parse_atom(self, tok_type: str, tok_val: str) -> SExpression:
        if tok_val in LITERALS:
            return LITERALS[tok_val]

        if INTEGER_RE.fullmatch(tok_val):
            n = int(tok_val)
            if not in_range(n):
                raise NumberParseError(f"Integer out of range: {tok_val}")
            return n

        if tok_type == "string":
            if len(tok_val) < 2 or not STRING_RE.fullmatch(tok_val):
                raise UnterminatedString(f"Unterminated string: {tok_val}")
            return _unescape(tok_val[1:-1])

        return Symbol(tok_val)

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read_str(source: str) -> list[SExpression]:
    """Read every top-level form in `source`."""
    forms = list(TokenStream(lex(source)).parse_all())
    log.debug("read %d form(s)", len(forms))
    return forms
