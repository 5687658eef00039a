"""Expression tree built by the infix and prefix front-ends.

Every node knows how to flatten itself into executable steps (post-order:
operands first, then the operator) and how to list its immediate children.
"""

from __future__ import annotations

import abc
from typing import Optional, Sequence

from polycalc.compiler.executable import (
    ApplyOperator,
    Executable,
    PushValue,
    Step,
    SymbolCall,
    SymbolGet,
)
from polycalc.errors import ParseError
from polycalc.operators.operator import BinaryOperator, UnaryOperator
from polycalc.types.domain import TypeDomain
from polycalc.types.value import TypedValue


class ExprNode(abc.ABC):
    @abc.abstractmethod
    def flatten(self, output: list[Step]) -> None:
        ...

    def children(self) -> tuple[ExprNode, ...]:
        return ()


class ValueNode(ExprNode):
    def __init__(self, value: TypedValue):
        self.value = value

    def flatten(self, output: list[Step]) -> None:
        output.append(PushValue(self.value))

    def __repr__(self):
        return f"ValueNode({self.value!r})"


class SymbolGetNode(ExprNode):
    def __init__(self, name: str):
        self.name = name

    def flatten(self, output: list[Step]) -> None:
        output.append(SymbolGet(self.name))

    def __repr__(self):
        return f"SymbolGetNode({self.name!r})"


class SymbolCallNode(ExprNode):
    def __init__(self, name: str, args: Sequence[ExprNode],
                 arg_count: Optional[int] = None, return_count: Optional[int] = None):
        self.name = name
        self.args = tuple(args)
        self.arg_count = arg_count
        self.return_count = return_count

    def flatten(self, output: list[Step]) -> None:
        for arg in self.args:
            arg.flatten(output)
        output.append(SymbolCall(self.name, self.arg_count, self.return_count))

    def children(self) -> tuple[ExprNode, ...]:
        return self.args

    def __repr__(self):
        return f"SymbolCallNode({self.name!r}, {list(self.args)!r})"


class UnaryOpNode(ExprNode):
    def __init__(self, operator: UnaryOperator, child: ExprNode):
        self.operator = operator
        self.child = child

    def flatten(self, output: list[Step]) -> None:
        self.child.flatten(output)
        output.append(ApplyOperator(self.operator))

    def children(self) -> tuple[ExprNode, ...]:
        return (self.child,)

    def __repr__(self):
        return f"UnaryOpNode({self.operator.id!r}, {self.child!r})"


class BinaryOpNode(ExprNode):
    def __init__(self, operator: BinaryOperator, left: ExprNode, right: ExprNode):
        self.operator = operator
        self.left = left
        self.right = right

    def flatten(self, output: list[Step]) -> None:
        self.left.flatten(output)
        self.right.flatten(output)
        output.append(ApplyOperator(self.operator))

    def children(self) -> tuple[ExprNode, ...]:
        return self.left, self.right

    def __repr__(self):
        return f"BinaryOpNode({self.operator.id!r}, {self.left!r}, {self.right!r})"


class MemberAccessNode(BinaryOpNode):
    """`obj.name`: a bare symbol on the right is pushed as its name, not looked up."""

    def __init__(self, operator: BinaryOperator, left: ExprNode, right: ExprNode, domain: TypeDomain):
        super().__init__(operator, left, right)
        self.domain = domain

    def flatten(self, output: list[Step]) -> None:
        self.left.flatten(output)
        if isinstance(self.right, SymbolGetNode):
            output.append(PushValue(self.domain.create(str, self.right.name)))
        else:
            self.right.flatten(output)
        output.append(ApplyOperator(self.operator))


class StepsNode(ExprNode):
    """Already compiled steps spliced into a tree (postfix group inside infix/prefix)."""

    def __init__(self, steps: Sequence[Step]):
        self.steps = tuple(steps)

    def flatten(self, output: list[Step]) -> None:
        output.extend(self.steps)

    def __repr__(self):
        return f"StepsNode({len(self.steps)} steps)"


class ExprNodeFactory:
    def __init__(self, domain: TypeDomain, member_access_operator: Optional[str] = None):
        self.domain = domain
        self.member_access_operator = member_access_operator

    def create_binary_op_node(self, operator: BinaryOperator, left: ExprNode, right: ExprNode) -> ExprNode:
        if operator.id == self.member_access_operator:
            if isinstance(right, SymbolCallNode):
                raise ParseError(f"Member access {operator.id!r} expects a name, got call to {right.name!r}")
            return MemberAccessNode(operator, left, right, self.domain)
        return BinaryOpNode(operator, left, right)

    def create_unary_op_node(self, operator: UnaryOperator, child: ExprNode) -> ExprNode:
        return UnaryOpNode(operator, child)


def flatten_node(node: ExprNode) -> list[Step]:
    output: list[Step] = []
    node.flatten(output)
    return output


def compile_node(node: ExprNode) -> Executable:
    return Executable(tuple(flatten_node(node)))
