from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from polycalc.compiler.executable import Step
from polycalc.compiler.nodes import ExprNode, StepsNode, flatten_node
from polycalc.compiler.stream import TokenStream
from polycalc.errors import ParseError

if TYPE_CHECKING:
    from polycalc.compiler.compilers import Compilers


class FrontEnd(abc.ABC):
    """One surface notation. Every front-end can produce both steps and a node,
    so groups written in one notation can be spliced into another."""

    notation: str = ""

    def __init__(self, compilers: Compilers):
        self.compilers = compilers
        self.operators = compilers.operators
        self.value_parser = compilers.value_parser
        self.node_factory = compilers.node_factory
        self.quoter = compilers.quoter

    @abc.abstractmethod
    def compile_steps(self, stream: TokenStream) -> list[Step]:
        ...

    def parse_node(self, stream: TokenStream) -> ExprNode:
        return StepsNode(self.compile_steps(stream))


class TreeFrontEnd(FrontEnd):
    """Front-ends that build an expression tree and flatten it."""

    @abc.abstractmethod
    def parse_expression(self, stream: TokenStream) -> ExprNode:
        ...

    def parse_node(self, stream: TokenStream) -> ExprNode:
        node = self.parse_expression(stream)
        leftover = stream.peek()
        if leftover is not None:
            raise ParseError("Unexpected token after expression", leftover)
        return node

    def compile_steps(self, stream: TokenStream) -> list[Step]:
        return flatten_node(self.parse_node(stream))
