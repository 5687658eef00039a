"""Prefix (Polish) front-end.

A bare operator takes its binary form when one exists, otherwise its unary
form. Inside brackets an operator may take any number of operands:
`(- 5)` is unary minus, `(+ 1 2 3)` folds the binary form by associativity.
"""

from __future__ import annotations

from functools import reduce

from polycalc.compiler.front_end import TreeFrontEnd
from polycalc.compiler.nodes import ExprNode, SymbolCallNode, SymbolGetNode, ValueNode
from polycalc.compiler.quoting import QUOTE_SYMBOL
from polycalc.compiler.stream import TokenStream
from polycalc.errors import ParseError
from polycalc.operators.operator import Associativity
from polycalc.reader.tokenizer import MODIFIER_QUOTE, Token, TokenType, split_symbol_args


class PrefixParser(TreeFrontEnd):
    notation = "prefix"

    def parse_expression(self, stream: TokenStream) -> ExprNode:
        token = stream.advance()
        if token is None:
            raise ParseError("Unexpected end of input")

        if token.type.is_value:
            return ValueNode(self.value_parser.parse_token(token))

        if token.type is TokenType.OPERATOR:
            binary = self.operators.get_binary_operator(token.value)
            if binary is not None:
                left = self.parse_expression(stream)
                right = self.parse_expression(stream)
                return self.node_factory.create_binary_op_node(binary, left, right)
            unary = self.operators.get_unary_operator(token.value)
            if unary is None:
                raise ParseError("Unknown operator", token)
            return self.node_factory.create_unary_op_node(unary, self.parse_expression(stream))

        if token.type is TokenType.LEFT_BRACKET:
            return self._parse_bracket(stream, token)

        if token.type is TokenType.MODIFIER and token.value == MODIFIER_QUOTE:
            return ValueNode(self.quoter.quote_next(stream))

        if token.type is TokenType.SYMBOL:
            return self._parse_symbol(stream, token)

        if token.type is TokenType.SYMBOL_WITH_ARGS:
            return self._parse_symbol_with_args(stream, token)

        raise ParseError("Unexpected token", token)

    def _parse_bracket(self, stream: TokenStream, opening: Token) -> ExprNode:
        head = stream.peek()
        if head is None:
            raise ParseError("Unclosed bracket", opening)
        if head.type is not TokenType.OPERATOR:
            node = self.parse_expression(stream)
            self._expect_close(stream, opening)
            return node

        stream.advance()
        operands = self._parse_operands(stream, opening)
        if not operands:
            raise ParseError("Operator application needs at least one operand", head)
        if len(operands) == 1:
            unary = self.operators.get_unary_operator(head.value)
            if unary is None:
                raise ParseError(f"{head.value!r} is not a unary operator", head)
            return self.node_factory.create_unary_op_node(unary, operands[0])

        binary = self.operators.get_binary_operator(head.value)
        if binary is None:
            raise ParseError(f"{head.value!r} is not a binary operator", head)
        create = self.node_factory.create_binary_op_node
        if binary.associativity is Associativity.RIGHT:
            return reduce(lambda right, left: create(binary, left, right), reversed(operands))
        return reduce(lambda left, right: create(binary, left, right), operands)

    def _parse_operands(self, stream: TokenStream, opening: Token) -> list[ExprNode]:
        operands: list[ExprNode] = []
        while True:
            token = stream.peek()
            if token is None:
                raise ParseError("Unclosed bracket", opening)
            if token.type is TokenType.RIGHT_BRACKET:
                stream.advance()
                return operands
            if token.type is TokenType.SEPARATOR:
                stream.advance()
                continue
            operands.append(self.parse_expression(stream))

    @staticmethod
    def _expect_close(stream: TokenStream, opening: Token) -> None:
        token = stream.advance()
        if token is None:
            raise ParseError("Unclosed bracket", opening)
        if token.type is not TokenType.RIGHT_BRACKET:
            raise ParseError("Expected ')'", token)

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
        else:
            # Without brackets the count says how many operands follow
            args = [self.parse_expression(stream) for _ in range(arg_count or 0)]
        return SymbolCallNode(name, args, len(args), return_count)

    def _parse_arguments(self, stream: TokenStream) -> list[ExprNode]:
        opening = stream.expect(TokenType.LEFT_BRACKET, "'('")
        args: list[ExprNode] = []
        expect_argument = True
        while True:
            token = stream.peek()
            if token is None:
                raise ParseError("Unclosed argument list", opening)
            if token.type is TokenType.RIGHT_BRACKET:
                if args and expect_argument:
                    raise ParseError("Missing argument after ','", token)
                stream.advance()
                return args
            if token.type is TokenType.SEPARATOR:
                if expect_argument:
                    raise ParseError("Missing argument before ','", token)
                stream.advance()
                expect_argument = True
                continue
            if not expect_argument:
                raise ParseError("Expected ',' or ')' between arguments", token)
            args.append(self.parse_expression(stream))
            expect_argument = False
