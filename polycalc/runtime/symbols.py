"""Definitions that can be bound to names in an Environment.

Every definition is invoked with the call site's requested argument and return
counts; either may be None when the call site did not state it. Definitions
validate the counts and the stack before removing anything from it.
"""

from __future__ import annotations

import abc
from typing import Any, Callable, Optional, Sequence

from polycalc.errors import DispatchError, StackValidationError
from polycalc.runtime.frame import Frame
from polycalc.types.domain import TypeDomain
from polycalc.types.value import TypedValue


def _check_returns(name: str, expected: int, returns: Optional[int]) -> None:
    if returns is not None and returns != expected:
        raise StackValidationError(f"{name} returns {expected} values, but {returns} were requested")


def _check_args(name: str, expected: int, args: Optional[int]) -> None:
    if args is not None and args != expected:
        raise StackValidationError(f"{name} takes {expected} arguments, but {args} were given")


class SymbolDefinition(abc.ABC):
    @abc.abstractmethod
    def execute(self, frame: Frame, args: Optional[int], returns: Optional[int]) -> None:
        ...


class Constant(SymbolDefinition):
    def __init__(self, value: TypedValue):
        self.value = value

    def execute(self, frame: Frame, args: Optional[int], returns: Optional[int]) -> None:
        _check_args("constant", 0, args)
        _check_returns("constant", 1, returns)
        frame.stack.append(self.value)

    def __repr__(self):
        return f"Constant({self.value!r})"


class Function(SymbolDefinition):
    """Fixed arity, fixed number of results.

    `fn` receives the arguments deepest-first. With one declared result it
    returns a TypedValue; with zero it returns None; otherwise a sequence.
    """

    def __init__(self, arity: int, returns: int, fn: Callable[..., Any]):
        self.arity = arity
        self.returns = returns
        self.fn = fn

    def execute(self, frame: Frame, args: Optional[int], returns: Optional[int]) -> None:
        _check_args("function", self.arity, args)
        _check_returns("function", self.returns, returns)
        frame.check_available(self.arity, "function")
        results = self._as_results(self.fn(*frame.top(self.arity)))
        frame.drop(self.arity)
        frame.stack.extend(results)

    def _as_results(self, result: Any) -> Sequence[TypedValue]:
        if self.returns == 0:
            return ()
        if self.returns == 1:
            return (result,)
        results = tuple(result)
        if len(results) != self.returns:
            raise StackValidationError(
                f"Function declared {self.returns} results but produced {len(results)}"
            )
        return results


class UnaryFunction(Function):
    def __init__(self, fn: Callable[[TypedValue], TypedValue]):
        super().__init__(1, 1, fn)


class BinaryFunction(Function):
    def __init__(self, fn: Callable[[TypedValue, TypedValue], TypedValue]):
        super().__init__(2, 1, fn)


class VariadicFunction(SymbolDefinition):
    """Takes as many arguments as the call site asks for, returns one value."""

    def __init__(self, fn: Callable[[list[TypedValue]], TypedValue], default_args: int = 0):
        self.fn = fn
        self.default_args = default_args

    def execute(self, frame: Frame, args: Optional[int], returns: Optional[int]) -> None:
        count = self.default_args if args is None else args
        _check_returns("variadic function", 1, returns)
        frame.check_available(count, "variadic function")
        result = self.fn(frame.top(count))
        frame.drop(count)
        frame.stack.append(result)


class AccumulatorFunction(VariadicFunction):
    """Folds its arguments left to right; zero arguments give `empty`."""

    def __init__(self, empty: TypedValue,
                 accumulate: Callable[[TypedValue, TypedValue], TypedValue],
                 finish: Optional[Callable[[TypedValue, int], TypedValue]] = None,
                 default_args: int = 2):
        super().__init__(self._fold, default_args)
        self.empty = empty
        self.accumulate = accumulate
        self.finish = finish

    def _fold(self, values: list[TypedValue]) -> TypedValue:
        if not values:
            return self.empty
        result = values[0]
        for value in values[1:]:
            result = self.accumulate(result, value)
        if self.finish is not None:
            result = self.finish(result, len(values))
        return result


class TypedFunction(SymbolDefinition):
    """Overloaded function selected by the types of its arguments.

    Variants are tried in registration order: first one whose signature
    matches the argument types exactly, then the first one every argument can
    be converted to with the domain's converters. Call sites that do not state
    an argument count get the smallest registered arity.
    """

    def __init__(self, name: str, domain: TypeDomain):
        self.name = name
        self.domain = domain
        self.variants: list[tuple[tuple[type, ...], Callable[..., TypedValue]]] = []

    def register(self, signature: Sequence[type], fn: Callable[..., TypedValue]) -> TypedFunction:
        signature = tuple(signature)
        for tag in signature:
            self.domain.check_is_known_type(tag)
        if any(existing == signature for existing, _ in self.variants):
            raise ValueError(f"Duplicate variant for {self.name!r}")
        self.variants.append((signature, fn))
        return self

    @property
    def default_arity(self) -> int:
        if not self.variants:
            raise ValueError(f"{self.name!r} has no variants")
        return min(len(signature) for signature, _ in self.variants)

    def execute(self, frame: Frame, args: Optional[int], returns: Optional[int]) -> None:
        count = self.default_arity if args is None else args
        if not any(len(signature) == count for signature, _ in self.variants):
            raise StackValidationError(f"{self.name} has no variant taking {count} arguments")
        _check_returns(self.name, 1, returns)
        frame.check_available(count, self.name)
        values = frame.top(count)
        fn, converted = self._select(values)
        result = fn(*converted)
        frame.drop(count)
        frame.stack.append(result)

    def _select(self, values: list[TypedValue]) -> tuple[Callable[..., TypedValue], list[Any]]:
        types = tuple(v.type for v in values)
        for signature, fn in self.variants:
            if signature == types:
                return fn, [v.value for v in values]
        for signature, fn in self.variants:
            if len(signature) != len(values):
                continue
            if all(self.domain.has_converter(v.type, tag) or v.type is tag for v, tag in zip(values, signature)):
                return fn, [self.domain.convert(v, tag).value for v, tag in zip(values, signature)]
        names = ", ".join(self.domain.name_of(t) for t in types) or "no arguments"
        raise DispatchError(self.name, names)
