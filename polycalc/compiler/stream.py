from __future__ import annotations

from typing import Iterable, Optional

from polycalc.errors import ParseError
from polycalc.reader.tokenizer import Token, TokenType


class TokenStream:
    """Single-token lookahead over a (possibly lazy) token iterator."""

    def __init__(self, tokens: Iterable[Token]):
        self.tokens = iter(tokens)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def at_end(self) -> bool:
        return self.peek() is None

    def peek_is(self, token_type: TokenType) -> bool:
        token = self.peek()
        return token is not None and token.type is token_type

    def expect(self, token_type: TokenType, what: str) -> Token:
        token = self.advance()
        if token is None:
            raise ParseError(f"Expected {what}, got end of input")
        if token.type is not token_type:
            raise ParseError(f"Expected {what}", token)
        return token

    def read_group(self) -> list[Token]:
        """Consume a balanced `( ... )` group and return the tokens inside it."""
        opening = self.expect(TokenType.LEFT_BRACKET, "'('")
        depth = 1
        inner: list[Token] = []
        while True:
            token = self.advance()
            if token is None:
                raise ParseError("Unclosed bracket", opening)
            if token.type is TokenType.LEFT_BRACKET:
                depth += 1
            elif token.type is TokenType.RIGHT_BRACKET:
                depth -= 1
                if depth == 0:
                    return inner
            inner.append(token)
