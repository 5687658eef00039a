from __future__ import annotations

from polycalc.compiler.executable import Executable
from polycalc.compiler.nodes import ExprNode


def disassemble(executable: Executable) -> str:
    out = []
    for i, step in enumerate(executable):
        out.append(f"{i:04d}: {step}")
    return "\n".join(out)


def dump_tree(node: ExprNode, indent: int = 0) -> str:
    line = "  " * indent + type(node).__name__
    operator = getattr(node, "operator", None)
    if operator is not None:
        line += f" {operator.id}"
    elif hasattr(node, "name"):
        line += f" {node.name}"
    elif hasattr(node, "value"):
        line += f" {node.value!r}"
    out = [line]
    for child in node.children():
        out.append(dump_tree(child, indent + 1))
    return "\n".join(out)
