from __future__ import annotations

from typing import Optional

from polycalc.errors import ParseError
from polycalc.reader.tokenizer import Token, TokenType
from polycalc.types.domain import TypeDomain
from polycalc.types.value import TypedValue

# Digit-group separators allowed in quoted-radix bodies, e.g. 10#1'000'000
DIGIT_SEPARATORS = "'\""

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

RADIX_BY_TYPE = {
    TokenType.DEC_NUMBER: 10,
    TokenType.HEX_NUMBER: 16,
    TokenType.OCT_NUMBER: 8,
    TokenType.BIN_NUMBER: 2,
}


class NumberParser:
    """Converts a digit body in a given radix into (integer part, real value).

    The real value is None unless the text has a fractional part; it is
    rounded once from the exact rational, so `3.14` parses to the same float
    Python would produce.
    """

    @staticmethod
    def _digits(text: str, radix: int) -> int:
        value = 0
        for char in text:
            digit = int(char, 36)
            if digit >= radix:
                raise ValueError(f"Digit {char!r} out of range for radix {radix}")
            value = value * radix + digit
        return value

    def parse_string(self, text: str, radix: int) -> tuple[int, Optional[float]]:
        if not 2 <= radix <= 36:
            raise ValueError(f"Invalid radix {radix}")
        body = "".join(c for c in text.strip() if c not in DIGIT_SEPARATORS)
        negative = body.startswith("-")
        if negative or body.startswith("+"):
            body = body[1:]
        integer_part, dot, fraction_part = body.partition(".")
        if not integer_part or (dot and not fraction_part):
            raise ValueError(f"Invalid number {text!r}")

        sign = -1 if negative else 1
        integer = sign * self._digits(integer_part, radix)
        if not dot:
            return integer, None

        scale = radix ** len(fraction_part)
        numerator = self._digits(integer_part + fraction_part, radix)
        return integer, sign * (numerator / scale)


NUMBER_PARSER = NumberParser()


def merge_number_parts(domain: TypeDomain, parts: tuple[int, Optional[float]]) -> TypedValue:
    integer, real = parts
    if real is None:
        return domain.create(int, integer)
    return domain.create(float, real)


def unescape(body: str) -> str:
    out = []
    chars = iter(body)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        escaped = next(chars, None)
        if escaped is None:
            raise ValueError("Dangling escape at end of string")
        out.append(ESCAPES.get(escaped, escaped))
    return "".join(out)


class TypedValueParser:
    def __init__(self, domain: TypeDomain):
        self.domain = domain

    def parse_token(self, token: Token) -> TypedValue:
        try:
            if token.type is TokenType.STRING:
                return self.domain.create(str, unescape(token.value))
            if token.type is TokenType.QUOTED_NUMBER:
                radix_text, _, body = token.value.partition("#")
                parts = NUMBER_PARSER.parse_string(body, int(radix_text))
                return merge_number_parts(self.domain, parts)
            radix = RADIX_BY_TYPE.get(token.type)
            if radix is not None:
                return merge_number_parts(self.domain, NUMBER_PARSER.parse_string(token.value, radix))
        except (ValueError, OverflowError) as e:
            raise ParseError(f"Invalid literal {token.value!r}", token) from e
        raise ParseError(f"Token {token.type} is not a value", token)
