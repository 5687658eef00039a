from polycalc.builtins.functions import BuiltinLibrary, register_builtins
from polycalc.builtins.operators import MEMBER_ACCESS, create_domain, create_operators
from polycalc.builtins.printer import ValuePrinter

__all__ = [
    "BuiltinLibrary",
    "MEMBER_ACCESS",
    "ValuePrinter",
    "create_domain",
    "create_operators",
    "register_builtins",
]
