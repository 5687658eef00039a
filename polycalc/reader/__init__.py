from polycalc.reader.tokenizer import MODIFIER_QUOTE, Token, Tokenizer, TokenType, tokenize
from polycalc.reader.value_parser import NUMBER_PARSER, NumberParser, TypedValueParser

__all__ = [
    "MODIFIER_QUOTE",
    "NUMBER_PARSER",
    "NumberParser",
    "Token",
    "TokenType",
    "Tokenizer",
    "TypedValueParser",
    "tokenize",
]
