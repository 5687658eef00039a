from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

from polycalc.operators.operator import BinaryOperator, UnaryOperator
from polycalc.types.value import TypedValue

if TYPE_CHECKING:
    from polycalc.runtime.frame import Frame


class Step(abc.ABC):
    """One instruction of a compiled program."""

    @abc.abstractmethod
    def execute(self, frame: Frame) -> None:
        ...


@dataclass(frozen=True)
class PushValue(Step):
    value: TypedValue

    def execute(self, frame: Frame) -> None:
        frame.stack.append(self.value)

    def __str__(self):
        return f"PUSH {self.value!r}"


@dataclass(frozen=True)
class SymbolGet(Step):
    name: str

    def execute(self, frame: Frame) -> None:
        frame.environment.lookup(self.name).execute(frame, 0, 1)

    def __str__(self):
        return f"GET {self.name}"


@dataclass(frozen=True)
class SymbolCall(Step):
    name: str
    args: Optional[int] = None
    returns: Optional[int] = None

    def execute(self, frame: Frame) -> None:
        frame.environment.lookup(self.name).execute(frame, self.args, self.returns)

    def __str__(self):
        args = "?" if self.args is None else self.args
        returns = "?" if self.returns is None else self.returns
        return f"CALL {self.name} args={args} rets={returns}"


@dataclass(frozen=True)
class ApplyOperator(Step):
    operator: BinaryOperator | UnaryOperator

    def execute(self, frame: Frame) -> None:
        arity = self.operator.arity
        frame.check_available(arity, f"Operator {self.operator.id!r}")
        # Operands stay on the stack until the operator succeeds
        result = self.operator.execute(*frame.top(arity))
        frame.drop(arity)
        frame.stack.append(result)

    def __str__(self):
        kind = "BINARY" if self.operator.arity == 2 else "UNARY"
        return f"{kind} {self.operator.id}"


@dataclass(frozen=True)
class Executable:
    """Linear, immutable, re-runnable compiled form of an expression."""

    steps: tuple[Step, ...] = ()

    def execute(self, frame: Frame) -> None:
        for step in self.steps:
            step.execute(frame)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)
