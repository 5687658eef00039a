"""Type domain: the registry of value types, converters, coercion and truth rules.

A domain is assembled with a TypeDomainBuilder and frozen with `build()`.
The frozen TypeDomain has no registration methods and is safe to share between
calculators.
"""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from polycalc.errors import ConversionError, UnknownTypeError
from polycalc.types.value import TypedValue

Converter = Callable[[Any], Any]
TruthEvaluator = Callable[[Any], bool]


class Coercion(enum.Enum):
    TO_LEFT = "left"
    TO_RIGHT = "right"


def _always(result: bool) -> TruthEvaluator:
    return lambda _: result


class TypeDomainBuilder:
    def __init__(self):
        self._names: dict[type, str] = {}
        self._converters: dict[tuple[type, type], Converter] = {}
        self._coercions: dict[tuple[type, type], type] = {}
        self._truth_evaluators: dict[type, TruthEvaluator] = {}

    def _check_known(self, tag: type) -> None:
        if tag not in self._names:
            raise UnknownTypeError(f"Type {tag!r} is not registered")

    def register_type(self, tag: type, name: str) -> TypeDomainBuilder:
        if tag in self._names:
            raise ValueError(f"Duplicate type registration for {tag!r}")
        self._names[tag] = name
        return self

    def register_converter(self, source: type, target: type, fn: Converter) -> TypeDomainBuilder:
        self._check_known(source)
        self._check_known(target)
        key = (source, target)
        if key in self._converters:
            raise ValueError(f"Duplicate converter {self._names[source]} -> {self._names[target]}")
        self._converters[key] = fn
        return self

    def register_symmetric_coercion_rule(self, left: type, right: type, coercion: Coercion) -> TypeDomainBuilder:
        self._check_known(left)
        self._check_known(right)
        if left is right:
            raise ValueError("Coercion rule needs two distinct types")
        if coercion is Coercion.TO_LEFT:
            wide, narrow = left, right
        else:
            wide, narrow = right, left
        if (narrow, wide) not in self._converters:
            raise ValueError(
                f"No converter {self._names[narrow]} -> {self._names[wide]} for coercion rule"
            )
        self._coercions[(left, right)] = wide
        self._coercions[(right, left)] = wide
        return self

    def register_truth_evaluator(self, tag: type, fn: TruthEvaluator) -> TypeDomainBuilder:
        self._check_known(tag)
        self._truth_evaluators[tag] = fn
        return self

    def register_always_true(self, tag: type) -> TypeDomainBuilder:
        return self.register_truth_evaluator(tag, _always(True))

    def register_always_false(self, tag: type) -> TypeDomainBuilder:
        return self.register_truth_evaluator(tag, _always(False))

    def build(self) -> TypeDomain:
        return TypeDomain(
            names=dict(self._names),
            converters=dict(self._converters),
            coercions=dict(self._coercions),
            truth_evaluators=dict(self._truth_evaluators),
        )


class TypeDomain:
    __slots__ = ("_names", "_converters", "_coercions", "_truth_evaluators")

    def __init__(
        self,
        names: Mapping[type, str],
        converters: Mapping[tuple[type, type], Converter],
        coercions: Mapping[tuple[type, type], type],
        truth_evaluators: Mapping[type, TruthEvaluator],
    ):
        self._names = MappingProxyType(names)
        self._converters = MappingProxyType(converters)
        self._coercions = MappingProxyType(coercions)
        self._truth_evaluators = MappingProxyType(truth_evaluators)

    @property
    def types(self) -> Iterable[type]:
        return self._names.keys()

    def is_known_type(self, tag: type) -> bool:
        return tag in self._names

    def check_is_known_type(self, tag: type) -> None:
        if tag not in self._names:
            raise UnknownTypeError(f"Type {tag!r} is not registered")

    def name_of(self, tag: type) -> str:
        name = self._names.get(tag)
        if name is None:
            raise UnknownTypeError(f"Type {tag!r} is not registered")
        return name

    def create(self, tag: type, payload: Any) -> TypedValue:
        self.check_is_known_type(tag)
        return TypedValue(self, tag, payload)

    def has_converter(self, source: type, target: type) -> bool:
        return (source, target) in self._converters

    def convert(self, value: TypedValue, target: type) -> TypedValue:
        if value.type is target:
            return value
        converter = self._converters.get((value.type, target))
        if converter is None:
            raise ConversionError(
                f"No converter from {self.name_of(value.type)} to {self.name_of(target)}"
            )
        try:
            converted = converter(value.value)
        except Exception as e:
            raise ConversionError(
                f"Failed to convert {value!r} to {self.name_of(target)}"
            ) from e
        return TypedValue(self, target, converted)

    def coercion_target(self, left: type, right: type) -> Optional[type]:
        if left is right:
            return left
        return self._coercions.get((left, right))

    def coerce(self, left: TypedValue, right: TypedValue) -> Optional[tuple[TypedValue, TypedValue]]:
        """Align both operands on one type, or return None if no rule applies."""
        target = self.coercion_target(left.type, right.type)
        if target is None:
            return None
        return self.convert(left, target), self.convert(right, target)

    def is_truthy(self, value: TypedValue) -> Optional[bool]:
        """True/False, or None when the type has no truth rule."""
        evaluator = self._truth_evaluators.get(value.type)
        if evaluator is None:
            return None
        return evaluator(value.value)
