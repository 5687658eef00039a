from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Type, TypeVar

from polycalc.errors import DomainMismatchError, UnknownTypeError

if TYPE_CHECKING:
    from polycalc.types.domain import TypeDomain

T = TypeVar("T")


class TypedValue:
    """A payload tagged with its concrete type inside one TypeDomain.

    Values are immutable and compared by (type, value). Comparing values that
    belong to different domains is a programming error.
    """

    __slots__ = ("domain", "type", "value")

    def __init__(self, domain: TypeDomain, type_: type, value: Any):
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)

    def __setattr__(self, key, value):
        raise AttributeError("TypedValue is immutable")

    def is_(self, tag: type) -> bool:
        return self.type is tag

    def unwrap(self, tag: Type[T]) -> T:
        if self.type is not tag:
            raise UnknownTypeError(
                f"Expected {self.domain.name_of(tag)}, got {self.domain.name_of(self.type)}"
            )
        return self.value

    def is_truthy(self) -> Optional[bool]:
        return self.domain.is_truthy(self)

    def check_same_domain(self, other: TypedValue) -> None:
        if self.domain is not other.domain:
            raise DomainMismatchError(f"Values from different domains: {self!r}, {other!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedValue):
            return NotImplemented
        return self.domain is other.domain and self.type is other.type and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def __repr__(self) -> str:
        try:
            payload = repr(self.value)
        except ValueError:
            # int too long for the interpreter's str conversion limit
            payload = f"<{self.value.bit_length()}-bit int>"
        return f"{self.domain.name_of(self.type)}:{payload}"
