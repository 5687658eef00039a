from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Optional

from polycalc.operators.operator import BinaryOperator, UnaryOperator


class OperatorDictionaryBuilder:
    def __init__(self):
        self._binary: dict[str, BinaryOperator] = {}
        self._unary: dict[str, UnaryOperator] = {}

    def register_binary_operator(self, operator: BinaryOperator) -> BinaryOperator:
        if operator.id in self._binary:
            raise ValueError(f"Duplicate binary operator {operator.id!r}")
        self._binary[operator.id] = operator
        return operator

    def register_unary_operator(self, operator: UnaryOperator) -> UnaryOperator:
        if operator.id in self._unary:
            raise ValueError(f"Duplicate unary operator {operator.id!r}")
        self._unary[operator.id] = operator
        return operator

    def build(self) -> OperatorDictionary:
        return OperatorDictionary(dict(self._binary), dict(self._unary))


class OperatorDictionary:
    """Binary and unary operator slots, keyed by textual id.

    One id may name both a binary and a unary operator; front-ends pick the
    slot by arity at parse time.
    """

    __slots__ = ("_binary", "_unary")

    def __init__(self, binary: dict[str, BinaryOperator], unary: dict[str, UnaryOperator]):
        self._binary = MappingProxyType(binary)
        self._unary = MappingProxyType(unary)

    def get_binary_operator(self, id: str) -> Optional[BinaryOperator]:
        return self._binary.get(id)

    def get_unary_operator(self, id: str) -> Optional[UnaryOperator]:
        return self._unary.get(id)

    def all_operators(self) -> Iterable[str]:
        return set(self._binary) | set(self._unary)

    def __contains__(self, id: str) -> bool:
        return id in self._binary or id in self._unary
