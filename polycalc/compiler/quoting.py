"""Turning source tokens into literal data instead of code.

`'x` quotes a single token. In infix and prefix, `'( ... )` and `quote( ... )`
quote a whole bracketed group as a pair list terminated by null; nested
brackets become nested lists and separators are ignored.
"""

from __future__ import annotations

from typing import Optional, Sequence

from polycalc.compiler.stream import TokenStream
from polycalc.errors import ParseError
from polycalc.reader.tokenizer import Token, TokenType
from polycalc.reader.value_parser import TypedValueParser
from polycalc.types.cons import Cons
from polycalc.types.domain import TypeDomain
from polycalc.types.symbol import Symbol
from polycalc.types.unit import Unit, UnitType
from polycalc.types.value import TypedValue

QUOTE_SYMBOL = "quote"

_SYMBOLIC = frozenset({
    TokenType.SYMBOL,
    TokenType.SYMBOL_WITH_ARGS,
    TokenType.OPERATOR,
    TokenType.MODIFIER,
})


class Quoter:
    def __init__(self, domain: TypeDomain, value_parser: TypedValueParser):
        self.domain = domain
        self.value_parser = value_parser

    def quote_token(self, token: Token) -> TypedValue:
        if token.type.is_value:
            return self.value_parser.parse_token(token)
        if token.type in _SYMBOLIC:
            return self.domain.create(Symbol, Symbol(token.value))
        raise ParseError("Cannot quote token", token)

    def make_list(self, items: Sequence[TypedValue]) -> TypedValue:
        result = self.domain.create(UnitType, Unit)
        for item in reversed(items):
            result = self.domain.create(Cons, Cons(item, result))
        return result

    def quote_next(self, stream: TokenStream) -> TypedValue:
        """Quote what follows a quote modifier: one token or one bracketed group."""
        token = stream.advance()
        if token is None:
            raise ParseError("Nothing to quote at end of input")
        if token.type is TokenType.LEFT_BRACKET:
            return self.make_list(self._read_items(stream, token))
        return self.quote_token(token)

    def quote_group(self, tokens: Sequence[Token]) -> TypedValue:
        """`quote(x)` is `'x`; `quote(a, b)` and `quote()` are lists."""
        items = self._read_items(TokenStream(tokens), None)
        if len(items) == 1:
            return items[0]
        return self.make_list(items)

    def _read_items(self, stream: TokenStream, opening: Optional[Token]) -> list[TypedValue]:
        items = []
        while True:
            token = stream.advance()
            if token is None:
                if opening is not None:
                    raise ParseError("Unclosed bracket in quoted list", opening)
                return items
            if token.type is TokenType.RIGHT_BRACKET:
                if opening is None:
                    raise ParseError("Unmatched closing bracket in quoted list", token)
                return items
            if token.type is TokenType.SEPARATOR:
                continue
            if token.type is TokenType.LEFT_BRACKET:
                items.append(self.make_list(self._read_items(stream, token)))
            else:
                items.append(self.quote_token(token))
