from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from polycalc.types.unit import UnitType

if TYPE_CHECKING:
    from polycalc.types.value import TypedValue


@dataclass(frozen=True)
class Cons:
    car: TypedValue
    cdr: TypedValue

    def length(self) -> int:
        """Number of pairs in the cdr chain."""
        count = 1
        current = self.cdr
        while current.type is Cons:
            count += 1
            current = current.value.cdr
        return count

    def __iter__(self) -> Iterator[TypedValue]:
        current: Cons = self
        while True:
            yield current.car
            if current.cdr.type is not Cons:
                return
            current = current.cdr.value

    def last_cdr(self) -> TypedValue:
        current: Cons = self
        while current.cdr.type is Cons:
            current = current.cdr.value
        return current.cdr

    def is_list(self) -> bool:
        return self.last_cdr().type is UnitType
