"""Postfix (RPN) front-end.

Emits steps directly, no tree. Brackets group visually but carry no meaning
beyond having to balance; separators may only appear inside them.
"""

from __future__ import annotations

from polycalc.compiler.executable import ApplyOperator, PushValue, Step, SymbolCall
from polycalc.compiler.front_end import FrontEnd
from polycalc.compiler.stream import TokenStream
from polycalc.errors import ParseError
from polycalc.reader.tokenizer import MODIFIER_QUOTE, Token, TokenType, split_symbol_args


class PostfixCompiler(FrontEnd):
    notation = "postfix"

    def compile_steps(self, stream: TokenStream) -> list[Step]:
        output: list[Step] = []
        open_brackets: list[Token] = []
        while True:
            token = stream.advance()
            if token is None:
                break
            if token.type.is_value:
                output.append(PushValue(self.value_parser.parse_token(token)))
            elif token.type is TokenType.OPERATOR:
                output.append(ApplyOperator(self._operator_for(token)))
            elif token.type is TokenType.SYMBOL:
                if self.compilers.is_notation(token.value) and stream.peek_is(TokenType.LEFT_BRACKET):
                    output.extend(self.compilers.compile_group(token.value, stream.read_group()))
                else:
                    output.append(SymbolCall(token.value))
            elif token.type is TokenType.SYMBOL_WITH_ARGS:
                name, args, returns = split_symbol_args(token.value)
                output.append(SymbolCall(name, args, returns))
            elif token.type is TokenType.MODIFIER and token.value == MODIFIER_QUOTE:
                output.append(PushValue(self._quote_one(stream, token)))
            elif token.type is TokenType.LEFT_BRACKET:
                open_brackets.append(token)
            elif token.type is TokenType.RIGHT_BRACKET:
                if not open_brackets:
                    raise ParseError("Unmatched ')'", token)
                open_brackets.pop()
            elif token.type is TokenType.SEPARATOR:
                if not open_brackets:
                    raise ParseError("Separator outside brackets", token)
            else:
                raise ParseError("Unexpected token", token)
        if open_brackets:
            raise ParseError("Unclosed bracket", open_brackets[-1])
        return output

    def _operator_for(self, token: Token):
        operator = self.operators.get_binary_operator(token.value)
        if operator is None:
            operator = self.operators.get_unary_operator(token.value)
        if operator is None:
            raise ParseError("Unknown operator", token)
        return operator

    def _quote_one(self, stream: TokenStream, modifier: Token):
        token = stream.advance()
        if token is None:
            raise ParseError("Nothing to quote at end of input", modifier)
        if token.type in (TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET, TokenType.SEPARATOR):
            raise ParseError("Postfix quoting takes a single token", token)
        return self.quoter.quote_token(token)
