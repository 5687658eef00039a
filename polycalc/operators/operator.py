"""Unary and binary operators and their per-signature dispatch tables.

An operator is a named, precedence-ranked callable over TypedValues. Typed
operators are assembled with a builder that accumulates one implementation per
concrete type signature (plus an optional default) and then freezes the table
into a dispatch object owned by the operator.

Binary dispatch order:
    1. exact (left type, right type) signature
    2. both operands coerced to one type by the domain, then exact signature
    3. the default operation, applied to the raw operands
    4. DispatchError
"""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from polycalc.errors import DispatchError, DomainMismatchError
from polycalc.types.domain import TypeDomain
from polycalc.types.value import TypedValue

BinaryFn = Callable[[TypedValue, TypedValue], TypedValue]
UnaryFn = Callable[[TypedValue], TypedValue]

# Table entries receive the domain and the unwrapped payloads
BinaryImpl = Callable[[TypeDomain, Any, Any], TypedValue]
UnaryImpl = Callable[[TypeDomain, Any], TypedValue]
BinaryDefault = Callable[[TypeDomain, TypedValue, TypedValue], Optional[TypedValue]]
UnaryDefault = Callable[[TypeDomain, TypedValue], Optional[TypedValue]]


class Associativity(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


class Operator:
    __slots__ = ("id", "precedence")
    arity: int = 0

    def __init__(self, id: str, precedence: int):
        self.id = id
        self.precedence = precedence

    def __str__(self):
        return self.id


class BinaryOperator(Operator):
    __slots__ = ("fn", "associativity")
    arity = 2

    def __init__(self, id: str, precedence: int, fn: BinaryFn,
                 associativity: Associativity = Associativity.LEFT):
        super().__init__(id, precedence)
        self.fn = fn
        self.associativity = associativity

    def execute(self, left: TypedValue, right: TypedValue) -> TypedValue:
        left.check_same_domain(right)
        return self.fn(left, right)

    def __repr__(self):
        return f"BinaryOperator({self.id!r}, {self.precedence}, {self.associativity.value})"


class UnaryOperator(Operator):
    __slots__ = ("fn",)
    arity = 1

    def __init__(self, id: str, precedence: int, fn: UnaryFn):
        super().__init__(id, precedence)
        self.fn = fn

    def execute(self, value: TypedValue) -> TypedValue:
        return self.fn(value)

    def __repr__(self):
        return f"UnaryOperator({self.id!r}, {self.precedence})"


def _check_domain(domain: TypeDomain, value: TypedValue) -> None:
    if value.domain is not domain:
        raise DomainMismatchError(f"Value {value!r} does not belong to the operator's domain")


class BinaryDispatch:
    __slots__ = ("operator_id", "domain", "operations", "default")

    def __init__(self, operator_id: str, domain: TypeDomain,
                 operations: Mapping[tuple[type, type], BinaryImpl],
                 default: Optional[BinaryDefault]):
        self.operator_id = operator_id
        self.domain = domain
        self.operations = MappingProxyType(dict(operations))
        self.default = default

    def __call__(self, left: TypedValue, right: TypedValue) -> TypedValue:
        _check_domain(self.domain, left)
        _check_domain(self.domain, right)

        impl = self.operations.get((left.type, right.type))
        if impl is not None:
            return impl(self.domain, left.value, right.value)

        if left.type is not right.type:
            coerced = self.domain.coerce(left, right)
            if coerced is not None:
                coerced_left, coerced_right = coerced
                impl = self.operations.get((coerced_left.type, coerced_right.type))
                if impl is not None:
                    return impl(self.domain, coerced_left.value, coerced_right.value)

        if self.default is not None:
            result = self.default(self.domain, left, right)
            if result is not None:
                return result

        raise DispatchError(
            self.operator_id,
            self.domain.name_of(left.type),
            self.domain.name_of(right.type),
        )


class UnaryDispatch:
    __slots__ = ("operator_id", "domain", "operations", "default")

    def __init__(self, operator_id: str, domain: TypeDomain,
                 operations: Mapping[type, UnaryImpl],
                 default: Optional[UnaryDefault]):
        self.operator_id = operator_id
        self.domain = domain
        self.operations = MappingProxyType(dict(operations))
        self.default = default

    def __call__(self, value: TypedValue) -> TypedValue:
        _check_domain(self.domain, value)
        impl = self.operations.get(value.type)
        if impl is not None:
            return impl(self.domain, value.value)

        if self.default is not None:
            result = self.default(self.domain, value)
            if result is not None:
                return result

        raise DispatchError(self.operator_id, self.domain.name_of(value.type))


class BinaryOperatorBuilder:
    def __init__(self, id: str, precedence: int, associativity: Associativity = Associativity.LEFT):
        self.id = id
        self.precedence = precedence
        self.associativity = associativity
        self._operations: dict[tuple[type, type], BinaryImpl] = {}
        self._default: Optional[BinaryDefault] = None

    def _add(self, left: type, right: type, impl: BinaryImpl) -> BinaryOperatorBuilder:
        key = (left, right)
        if key in self._operations:
            raise ValueError(f"Duplicate signature {left.__name__}, {right.__name__} for operator {self.id!r}")
        self._operations[key] = impl
        return self

    def register_operation(self, left: type, right: type, result: type,
                           fn: Callable[[Any, Any], Any]) -> BinaryOperatorBuilder:
        """Register payload-level `fn(left, right) -> payload` returning `result`."""
        return self._add(left, right, lambda domain, l, r: domain.create(result, fn(l, r)))

    def register_coerced_operation(self, tag: type, result: type,
                                   fn: Callable[[Any, Any], Any]) -> BinaryOperatorBuilder:
        return self.register_operation(tag, tag, result, fn)

    def register_raw_operation(self, left: type, right: type, fn: BinaryImpl) -> BinaryOperatorBuilder:
        """Register `fn(domain, left, right) -> TypedValue` for results of varying type."""
        return self._add(left, right, fn)

    def set_default_operation(self, fn: BinaryDefault) -> BinaryOperatorBuilder:
        self._default = fn
        return self

    def build(self, domain: TypeDomain) -> BinaryOperator:
        for left, right in self._operations:
            domain.check_is_known_type(left)
            domain.check_is_known_type(right)
        dispatch = BinaryDispatch(self.id, domain, self._operations, self._default)
        return BinaryOperator(self.id, self.precedence, dispatch, self.associativity)


class UnaryOperatorBuilder:
    def __init__(self, id: str, precedence: int):
        self.id = id
        self.precedence = precedence
        self._operations: dict[type, UnaryImpl] = {}
        self._default: Optional[UnaryDefault] = None

    def register_operation(self, tag: type, result: type,
                           fn: Callable[[Any], Any]) -> UnaryOperatorBuilder:
        return self.register_raw_operation(tag, lambda domain, v: domain.create(result, fn(v)))

    def register_raw_operation(self, tag: type, fn: UnaryImpl) -> UnaryOperatorBuilder:
        if tag in self._operations:
            raise ValueError(f"Duplicate signature {tag.__name__} for operator {self.id!r}")
        self._operations[tag] = fn
        return self

    def set_default_operation(self, fn: UnaryDefault) -> UnaryOperatorBuilder:
        self._default = fn
        return self

    def build(self, domain: TypeDomain) -> UnaryOperator:
        for tag in self._operations:
            domain.check_is_known_type(tag)
        dispatch = UnaryDispatch(self.id, domain, self._operations, self._default)
        return UnaryOperator(self.id, self.precedence, dispatch)
