from __future__ import annotations

import enum
import logging
from typing import Optional, Union

from polycalc import config
from polycalc.compiler.compilers import Compilers, Notation
from polycalc.compiler.executable import Executable
from polycalc.errors import (
    CalculatorFaultedError,
    ExecutionError,
    PolycalcError,
    StackValidationError,
)
from polycalc.runtime.environment import Environment
from polycalc.runtime.frame import Frame
from polycalc.types.value import TypedValue

logger = logging.getLogger(__name__)


class CalculatorState(enum.Enum):
    IDLE = "idle"
    EXECUTING = "executing"
    FAULTED = "faulted"


class Calculator:
    """Compiles source text and runs it against one value stack.

    A failing step leaves the calculator FAULTED with the stack as it was just
    before that step. `reset()` is required before executing again.
    """

    def __init__(self, environment: Environment, compilers: Compilers, printer=None,
                 default_notation: Union[str, Notation, None] = None):
        self.environment = environment
        self.compilers = compilers
        self.printer = printer
        if default_notation is None:
            default_notation = config.get_default_notation()
        self.default_notation = Notation.parse(default_notation)
        self.frame = Frame(environment)
        self.state = CalculatorState.IDLE

    @property
    def stack(self) -> tuple[TypedValue, ...]:
        return tuple(self.frame.stack)

    def stack_size(self) -> int:
        return len(self.frame.stack)

    def peek_stack(self, depth: int = 0) -> TypedValue:
        """Value `depth` positions below the top (0 is the top)."""
        stack = self.frame.stack
        if not 0 <= depth < len(stack):
            raise StackValidationError(f"Cannot peek at depth {depth}, stack has {len(stack)} values")
        return stack[-1 - depth]

    def reset(self) -> None:
        self.frame.stack.clear()
        self.state = CalculatorState.IDLE

    def compile(self, source: str, notation: Union[str, Notation, None] = None) -> Executable:
        return self.compilers.compile(source, self.default_notation if notation is None else notation)

    def execute(self, executable: Executable) -> None:
        if self.state is CalculatorState.FAULTED:
            raise CalculatorFaultedError("Calculator is faulted, reset it before executing")
        self.state = CalculatorState.EXECUTING
        try:
            for step in executable:
                self._run_step(step)
        except PolycalcError:
            self.state = CalculatorState.FAULTED
            raise
        self.state = CalculatorState.IDLE

    def _run_step(self, step) -> None:
        try:
            step.execute(self.frame)
        except PolycalcError as e:
            logger.debug("step %s failed: %s", step, e)
            raise
        except Exception as e:
            logger.debug("step %s failed: %r", step, e)
            raise ExecutionError(f"{step} failed: {e}") from e

    def execute_and_pop(self, executable: Executable) -> TypedValue:
        before = list(self.frame.stack)
        self.execute(executable)
        produced = self.stack_size() - len(before)
        if produced != 1:
            # Leave the stack as it was before the call
            self.frame.stack[:] = before
            raise StackValidationError(f"Expected exactly one result, got {produced}")
        return self.frame.stack.pop()

    def compile_and_execute(self, source: str, notation: Union[str, Notation, None] = None) -> None:
        self.execute(self.compile(source, notation))

    def compile_and_evaluate(self, source: str, notation: Union[str, Notation, None] = None) -> TypedValue:
        return self.execute_and_pop(self.compile(source, notation))

    def compile_execute_and_print(self, source: str,
                                  notation: Union[str, Notation, None] = None) -> Optional[str]:
        """Infix input prints its single result; other notations print the stack size."""
        executable = self.compile(source, notation)
        effective = self.default_notation if notation is None else Notation.parse(notation)
        if effective is Notation.INFIX:
            value = self.execute_and_pop(executable)
            return self._print(value)
        self.execute(executable)
        return f"stack size: {self.stack_size()}"

    def _print(self, value: TypedValue) -> str:
        try:
            return self.printer.repr(value) if self.printer is not None else repr(value)
        except PolycalcError:
            raise
        except Exception as e:
            raise ExecutionError(f"Cannot print {self.compilers.domain.name_of(value.type)} result: {e}") from e
