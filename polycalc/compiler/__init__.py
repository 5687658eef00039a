from polycalc.compiler.compilers import Compilers, Notation
from polycalc.compiler.disasm import disassemble, dump_tree
from polycalc.compiler.executable import (
    ApplyOperator,
    Executable,
    PushValue,
    Step,
    SymbolCall,
    SymbolGet,
)
from polycalc.compiler.nodes import (
    BinaryOpNode,
    ExprNode,
    ExprNodeFactory,
    MemberAccessNode,
    StepsNode,
    SymbolCallNode,
    SymbolGetNode,
    UnaryOpNode,
    ValueNode,
)

__all__ = [
    "ApplyOperator",
    "BinaryOpNode",
    "Compilers",
    "Executable",
    "ExprNode",
    "ExprNodeFactory",
    "MemberAccessNode",
    "Notation",
    "PushValue",
    "Step",
    "StepsNode",
    "SymbolCall",
    "SymbolCallNode",
    "SymbolGet",
    "SymbolGetNode",
    "UnaryOpNode",
    "ValueNode",
    "disassemble",
    "dump_tree",
]
