from __future__ import annotations

from typing import Optional


class PolycalcError(Exception):
    """ Base class for all polycalc errors"""
    pass


class CompileError(PolycalcError):
    """ Raised when source text cannot be compiled"""
    pass


class TokenizerError(CompileError):
    """ Raised when the input matches no token pattern"""

    def __init__(self, message: str, remainder: str, position: int):
        super().__init__(f"{message} at {position}: {remainder!r}")
        self.remainder = remainder
        self.position = position


class ParseError(CompileError):
    """ Raised on structural violations for the active grammar"""

    def __init__(self, message: str, token=None):
        if token is not None:
            message = f"{message} (token {token.value!r} at {token.position})"
        super().__init__(message)
        self.token = token

    @property
    def position(self) -> Optional[int]:
        return None if self.token is None else self.token.position


class DispatchError(PolycalcError):
    """ Raised when no operator signature matches the operand types"""

    def __init__(self, operator_id: str, left_type: str, right_type: Optional[str] = None):
        if right_type is None:
            message = f"Operator {operator_id!r} is not defined for {left_type}"
        else:
            message = f"Operator {operator_id!r} is not defined for {left_type} and {right_type}"
        super().__init__(message)
        self.operator_id = operator_id
        self.left_type = left_type
        self.right_type = right_type


class CoercionPreconditionError(PolycalcError):
    """ Raised when an operand has no truth value or cannot be compared"""


class StackValidationError(PolycalcError):
    """ Raised when argument or return counts disagree with the stack or the callee"""


class ConversionError(PolycalcError):
    """ Raised when a registered converter fails"""


class UnknownTypeError(PolycalcError):
    """ Raised when a type tag is not registered in the domain"""


class DomainMismatchError(PolycalcError):
    """ Raised when values from different type domains are combined"""


class UnknownSymbolError(PolycalcError):
    """ Raised when a symbol is used before it is defined"""


class EnvironmentFrozenError(PolycalcError):
    """ Raised when a frozen environment is modified"""


class ExecutionError(PolycalcError):
    """ Raised when a step fails for a reason outside the engine taxonomy"""


class CalculatorFaultedError(ExecutionError):
    """ Raised when a faulted calculator is asked to execute before reset"""


def cause_chain(error: BaseException) -> list[str]:
    """Collect messages from `error` and its chained causes, outermost first."""
    causes = []
    current: Optional[BaseException] = error
    while current is not None:
        causes.append(str(current))
        current = current.__cause__
    return causes
