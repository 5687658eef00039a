from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from polycalc.types.domain import TypeDomain
    from polycalc.types.value import TypedValue


class Composite(abc.ABC):
    """Opaque host object exposing named members to the `.` operator."""

    @abc.abstractmethod
    def get(self, domain: TypeDomain, name: str) -> TypedValue:
        ...

    def type_name(self) -> str:
        return "object"
