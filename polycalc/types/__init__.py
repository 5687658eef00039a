from polycalc.types.composite import Composite
from polycalc.types.cons import Cons
from polycalc.types.domain import Coercion, TypeDomain, TypeDomainBuilder
from polycalc.types.symbol import Symbol
from polycalc.types.unit import Unit, UnitType
from polycalc.types.value import TypedValue

__all__ = [
    "Coercion",
    "Composite",
    "Cons",
    "Symbol",
    "TypeDomain",
    "TypeDomainBuilder",
    "TypedValue",
    "Unit",
    "UnitType",
]
