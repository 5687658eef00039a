from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from polycalc.errors import StackValidationError
from polycalc.types.value import TypedValue

if TYPE_CHECKING:
    from polycalc.runtime.environment import Environment


@dataclass
class Frame:
    environment: Environment
    stack: list[TypedValue] = field(default_factory=list)

    def check_available(self, count: int, who: str) -> None:
        if len(self.stack) < count:
            raise StackValidationError(
                f"{who} needs {count} values on the stack, found {len(self.stack)}"
            )

    def top(self, count: int) -> list[TypedValue]:
        """Copy of the top `count` values, deepest first. Nothing is removed."""
        return self.stack[len(self.stack) - count:]

    def drop(self, count: int) -> None:
        del self.stack[len(self.stack) - count:]
