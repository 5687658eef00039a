"""Infix front-end: precedence climbing over the operator dictionary.

    expression := unary (binop expression)*
    unary      := unop unary | primary
    primary    := value | '(' expression ')' | quote | call | symbol
    call       := symbol '(' [expression (',' expression)*] ')'

Left-associative operators parse their right operand one level tighter than
themselves; right-associative operators parse it at their own level.
"""

from __future__ import annotations

from polycalc.compiler.front_end import TreeFrontEnd
from polycalc.compiler.nodes import ExprNode, SymbolCallNode, SymbolGetNode, ValueNode
from polycalc.compiler.quoting import QUOTE_SYMBOL
from polycalc.compiler.stream import TokenStream
from polycalc.errors import ParseError
from polycalc.operators.operator import Associativity
from polycalc.reader.tokenizer import MODIFIER_QUOTE, Token, TokenType, split_symbol_args


LOWEST_PRECEDENCE = float("-inf")


class InfixParser(TreeFrontEnd):
    notation = "infix"

    def parse_expression(self, stream: TokenStream) -> ExprNode:
        return self._parse_binary(stream, LOWEST_PRECEDENCE)

    def _parse_binary(self, stream: TokenStream, min_precedence: float) -> ExprNode:
        left = self._parse_unary(stream)
        while True:
            token = stream.peek()
            if token is None or token.type is not TokenType.OPERATOR:
                return left
            operator = self.operators.get_binary_operator(token.value)
            if operator is None:
                raise ParseError(f"{token.value!r} is not a binary operator", token)
            if operator.precedence < min_precedence:
                return left
            stream.advance()
            if operator.associativity is Associativity.LEFT:
                right = self._parse_binary(stream, operator.precedence + 1)
            else:
                right = self._parse_binary(stream, operator.precedence)
            left = self.node_factory.create_binary_op_node(operator, left, right)

    def _parse_unary(self, stream: TokenStream) -> ExprNode:
        token = stream.peek()
        if token is not None and token.type is TokenType.OPERATOR:
            stream.advance()
            operator = self.operators.get_unary_operator(token.value)
            if operator is None:
                raise ParseError(f"{token.value!r} is not a unary operator", token)
            operand = self._parse_binary(stream, operator.precedence + 1)
            return self.node_factory.create_unary_op_node(operator, operand)
        return self._parse_primary(stream)

    def _parse_primary(self, stream: TokenStream) -> ExprNode:
        token = stream.advance()
        if token is None:
            raise ParseError("Unexpected end of input")

        if token.type.is_value:
            return ValueNode(self.value_parser.parse_token(token))

        if token.type is TokenType.LEFT_BRACKET:
            node = self.parse_expression(stream)
            closing = stream.advance()
            if closing is None:
                raise ParseError("Unclosed bracket", token)
            if closing.type is not TokenType.RIGHT_BRACKET:
                raise ParseError("Expected ')'", closing)
            return node

        if token.type is TokenType.MODIFIER and token.value == MODIFIER_QUOTE:
            return ValueNode(self.quoter.quote_next(stream))

        if token.type is TokenType.SYMBOL:
            return self._parse_symbol(stream, token)

        if token.type is TokenType.SYMBOL_WITH_ARGS:
            return self._parse_symbol_with_args(stream, token)

        raise ParseError("Unexpected token", token)

    def _parse_symbol(self, stream: TokenStream, token: Token) -> ExprNode:
        name = token.value
        if not stream.peek_is(TokenType.LEFT_BRACKET):
            return SymbolGetNode(name)
        if self.compilers.is_notation(name):
            return self.compilers.parse_group(name, stream.read_group())
        if name == QUOTE_SYMBOL:
            return ValueNode(self.quoter.quote_group(stream.read_group()))
        args = self._parse_arguments(stream)
        return SymbolCallNode(name, args, len(args), 1)

    def _parse_symbol_with_args(self, stream: TokenStream, token: Token) -> ExprNode:
        name, arg_count, return_count = split_symbol_args(token.value)
        if return_count is None:
            return_count = 1
        if stream.peek_is(TokenType.LEFT_BRACKET):
            args = self._parse_arguments(stream)
            if arg_count is not None and arg_count != len(args):
                raise ParseError(
                    f"{name!r} declares {arg_count} arguments but {len(args)} were given", token
                )
            return SymbolCallNode(name, args, len(args), return_count)
        if arg_count:
            raise ParseError(f"{name!r} declares {arg_count} arguments but has no argument list", token)
        return SymbolCallNode(name, (), 0, return_count)

    def _parse_arguments(self, stream: TokenStream) -> list[ExprNode]:
        opening = stream.expect(TokenType.LEFT_BRACKET, "'('")
        args: list[ExprNode] = []
        if stream.peek_is(TokenType.RIGHT_BRACKET):
            stream.advance()
            return args
        while True:
            args.append(self.parse_expression(stream))
            token = stream.advance()
            if token is None:
                raise ParseError("Unclosed argument list", opening)
            if token.type is TokenType.RIGHT_BRACKET:
                return args
            if token.type is not TokenType.SEPARATOR:
                raise ParseError("Expected ',' or ')'", token)
