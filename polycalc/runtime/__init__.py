from polycalc.runtime.calculator import Calculator, CalculatorState
from polycalc.runtime.environment import Environment
from polycalc.runtime.frame import Frame
from polycalc.runtime.symbols import (
    AccumulatorFunction,
    BinaryFunction,
    Constant,
    Function,
    SymbolDefinition,
    TypedFunction,
    UnaryFunction,
    VariadicFunction,
)

__all__ = [
    "AccumulatorFunction",
    "BinaryFunction",
    "Calculator",
    "CalculatorState",
    "Constant",
    "Environment",
    "Frame",
    "Function",
    "SymbolDefinition",
    "TypedFunction",
    "UnaryFunction",
    "VariadicFunction",
]
