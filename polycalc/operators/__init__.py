from polycalc.operators.dictionary import OperatorDictionary, OperatorDictionaryBuilder
from polycalc.operators.operator import (
    Associativity,
    BinaryOperator,
    BinaryOperatorBuilder,
    UnaryOperator,
    UnaryOperatorBuilder,
)

__all__ = [
    "Associativity",
    "BinaryOperator",
    "BinaryOperatorBuilder",
    "OperatorDictionary",
    "OperatorDictionaryBuilder",
    "UnaryOperator",
    "UnaryOperatorBuilder",
]
