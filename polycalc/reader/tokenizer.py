"""
  Tokenizer

- Greedy, left-to-right, lazy: `tokenize` is a generator over a cursor
- Structural characters `(`, `)`, `,` are always single-character tokens
- Operators are matched longest-first, then lexicographically, so `<=` or `**`
  are never split into their single-character prefixes
- An identifier loses to an operator that matches at least as many characters,
  which lets word operators (`neg`) shadow identifiers
- Identifiers may carry an `@args[,rets]` suffix
- Numeric literals: quoted-radix, hex, octal, binary, decimal (in that order)
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from polycalc.errors import TokenizerError


class TokenType(enum.Enum):
    LEFT_BRACKET = "left_bracket"
    RIGHT_BRACKET = "right_bracket"
    SEPARATOR = "separator"
    OPERATOR = "operator"
    SYMBOL = "symbol"
    SYMBOL_WITH_ARGS = "symbol_with_args"
    MODIFIER = "modifier"
    DEC_NUMBER = "dec_number"
    HEX_NUMBER = "hex_number"
    OCT_NUMBER = "oct_number"
    BIN_NUMBER = "bin_number"
    QUOTED_NUMBER = "quoted_number"
    STRING = "string"

    @property
    def is_value(self) -> bool:
        return self in _VALUE_TYPES

    @property
    def is_number(self) -> bool:
        return self in _NUMBER_TYPES

    @property
    def is_symbol(self) -> bool:
        return self in (TokenType.SYMBOL, TokenType.SYMBOL_WITH_ARGS)

    def __str__(self):
        return self.name


_NUMBER_TYPES = frozenset({
    TokenType.DEC_NUMBER,
    TokenType.HEX_NUMBER,
    TokenType.OCT_NUMBER,
    TokenType.BIN_NUMBER,
    TokenType.QUOTED_NUMBER,
})

_VALUE_TYPES = _NUMBER_TYPES | {TokenType.STRING}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: int = field(default=-1, compare=False)

    def __str__(self) -> str:
        return f"<{self.type}>{self.value}"


MODIFIER_QUOTE = "'"

DEC_NUMBER = re.compile(r"([0-9]+(?:\.[0-9]+)?)")
HEX_NUMBER = re.compile(r"0x([0-9A-Fa-f]+(?:\.[0-9A-Fa-f]+)?)")
OCT_NUMBER = re.compile(r"0([0-7]+(?:\.[0-7]+)?)")
BIN_NUMBER = re.compile(r"0b([01]+(?:\.[01]+)?)")
QUOTED_NUMBER = re.compile(r"""([0-9]+#[0-9A-Za-z'"]+(?:\.[0-9A-Za-z'"]+)?)""")
STRING = re.compile(r'"((?:\\.|[^\\"])*)"', re.DOTALL)
SYMBOL = re.compile(r"([_A-Za-z$][_0-9A-Za-z$]*)")
SYMBOL_ARGS = re.compile(r"(@[0-9]*(?:,[0-9]+)?)")
WHITESPACE = re.compile(r"\s+")
IDENTIFIER_CHAR = re.compile(r"[_0-9A-Za-z$]")

# Order matters: `0x10` must not be read as octal `0` followed by `x10`
NUMBER_PATTERNS = (
    (QUOTED_NUMBER, TokenType.QUOTED_NUMBER),
    (HEX_NUMBER, TokenType.HEX_NUMBER),
    (OCT_NUMBER, TokenType.OCT_NUMBER),
    (BIN_NUMBER, TokenType.BIN_NUMBER),
    (DEC_NUMBER, TokenType.DEC_NUMBER),
)

STRUCTURAL = {
    "(": TokenType.LEFT_BRACKET,
    ")": TokenType.RIGHT_BRACKET,
    ",": TokenType.SEPARATOR,
}


def split_symbol_args(value: str) -> tuple[str, Optional[int], Optional[int]]:
    """Split `name@args,rets` into its parts; missing counts are None."""
    name, _, suffix = value.partition("@")
    args_part, _, rets_part = suffix.partition(",")
    args = int(args_part) if args_part else None
    rets = int(rets_part) if rets_part else None
    return name, args, rets


class Tokenizer:
    def __init__(self, operators: Iterable[str] = (), modifiers: Iterable[str] = (MODIFIER_QUOTE,)):
        self.operators: list[str] = []
        self.modifiers: set[str] = set()
        for op in operators:
            self.add_operator(op)
        for modifier in modifiers:
            self.add_modifier(modifier)

    def add_operator(self, operator: str) -> None:
        if not operator or operator[0] in STRUCTURAL or operator[0].isspace():
            raise ValueError(f"Invalid operator {operator!r}")
        if operator not in self.operators:
            self.operators.append(operator)
            self.operators.sort(key=lambda o: (-len(o), o))

    def add_modifier(self, modifier: str) -> None:
        if len(modifier) != 1:
            raise ValueError(f"Modifier must be a single character: {modifier!r}")
        self.modifiers.add(modifier)

    def _find_operator(self, source: str, pos: int) -> Optional[str]:
        for operator in self.operators:
            if source.startswith(operator, pos):
                return operator
        return None

    def tokenize(self, source: str) -> Iterator[Token]:
        """Token generator: yields Token(type, value, position)."""
        pos = 0
        n = len(source)

        while pos < n:
            ws = WHITESPACE.match(source, pos)
            if ws:
                pos = ws.end()
                if pos >= n:
                    break

            current_char = source[pos]

            if current_char in STRUCTURAL:
                yield Token(STRUCTURAL[current_char], current_char, pos)
                pos += 1
                continue

            if current_char == '"':
                m = STRING.match(source, pos)
                if not m:
                    raise TokenizerError("Unterminated string literal", source[pos:], pos)
                yield Token(TokenType.STRING, m.group(1), pos)
                pos = m.end()
                continue

            if current_char in self.modifiers:
                yield Token(TokenType.MODIFIER, current_char, pos)
                pos += 1
                continue

            symbol_match = SYMBOL.match(source, pos)
            if symbol_match:
                operator = self._find_operator(source, pos)
                symbol = symbol_match.group(1)
                if operator is not None and len(operator) >= len(symbol):
                    yield Token(TokenType.OPERATOR, operator, pos)
                    pos += len(operator)
                    continue

                start = pos
                pos = symbol_match.end()
                args_match = SYMBOL_ARGS.match(source, pos)
                if args_match:
                    pos = args_match.end()
                    yield Token(TokenType.SYMBOL_WITH_ARGS, symbol + args_match.group(1), start)
                else:
                    yield Token(TokenType.SYMBOL, symbol, start)
                continue

            operator = self._find_operator(source, pos)
            if operator is not None:
                yield Token(TokenType.OPERATOR, operator, pos)
                pos += len(operator)
                continue

            for pattern, token_type in NUMBER_PATTERNS:
                m = pattern.match(source, pos)
                if m:
                    if m.end() < n and IDENTIFIER_CHAR.match(source, m.end()):
                        raise TokenizerError("Malformed number literal", source[pos:], pos)
                    yield Token(token_type, m.group(1), pos)
                    pos = m.end()
                    break
            else:
                raise TokenizerError("Unknown token", source[pos:], pos)


def tokenize(source: str, operators: Iterable[str] = (), modifiers: Iterable[str] = (MODIFIER_QUOTE,)) -> list[Token]:
    return list(Tokenizer(operators, modifiers).tokenize(source))
