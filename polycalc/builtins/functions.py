"""Builtin symbol library: constants, predicates, conversions, math, lists.

Typed builtins are TypedFunction tables: each variant lists the argument types
it accepts and the payload function that implements it. Arguments of other
types are converted along the domain's registered converters when a variant
can take them (an int passed to `sqrt` becomes a float).
"""

from __future__ import annotations

import cmath
import logging
import math
from typing import Any, Callable

from polycalc.builtins.operators import NUMBER_TYPES, truth_of
from polycalc.builtins.printer import ValuePrinter
from polycalc.errors import CompileError, ConversionError
from polycalc.operators.dictionary import OperatorDictionary
from polycalc.reader.tokenizer import Tokenizer
from polycalc.reader.value_parser import NUMBER_PARSER, TypedValueParser, merge_number_parts
from polycalc.runtime.environment import Environment
from polycalc.runtime.symbols import (
    AccumulatorFunction,
    Constant,
    Function,
    TypedFunction,
    UnaryFunction,
    VariadicFunction,
)
from polycalc.types.composite import Composite
from polycalc.types.cons import Cons
from polycalc.types.domain import TypeDomain
from polycalc.types.symbol import Symbol
from polycalc.types.unit import Unit, UnitType
from polycalc.types.value import TypedValue

logger = logging.getLogger(__name__)

TYPE_PREDICATES = {
    "isint": int,
    "isbool": bool,
    "isfloat": float,
    "isnull": UnitType,
    "isstr": str,
    "iscomplex": complex,
    "isobject": Composite,
    "iscons": Cons,
    "issymbol": Symbol,
}

FLOAT_FUNCTIONS = {
    "cos": math.cos,
    "cosh": math.cosh,
    "acos": math.acos,
    "acosh": math.acosh,
    "sin": math.sin,
    "sinh": math.sinh,
    "asin": math.asin,
    "asinh": math.asinh,
    "tan": math.tan,
    "tanh": math.tanh,
    "atan": math.atan,
    "atanh": math.atanh,
    "sqrt": math.sqrt,
    "rad": math.radians,
    "deg": math.degrees,
}


def _returning(domain: TypeDomain, tag: type, fn: Callable[..., Any]) -> Callable[..., TypedValue]:
    return lambda *args: domain.create(tag, fn(*args))


def _identity(domain: TypeDomain, tag: type) -> Callable[[Any], TypedValue]:
    return lambda v: domain.create(tag, v)


def _float_sign(v: float) -> float:
    if v == 0 or math.isnan(v):
        return v
    return math.copysign(1.0, v)


class BuiltinLibrary:
    """Registers the default symbols of a calculator into an environment."""

    def __init__(self, domain: TypeDomain, operators: OperatorDictionary, printer: ValuePrinter):
        self.domain = domain
        self.operators = operators
        self.printer = printer
        self.value_parser = TypedValueParser(domain)
        self.null = domain.create(UnitType, Unit)

    def typed(self, name: str) -> TypedFunction:
        return TypedFunction(name, self.domain)

    def register(self, env: Environment) -> Environment:
        self.register_constants(env)
        self.register_stack_functions(env)
        self.register_predicates(env)
        self.register_conversions(env)
        self.register_math(env)
        self.register_complex(env)
        self.register_accumulators(env)
        self.register_lists(env)
        logger.debug("registered %d builtin symbols", len(env.symbols))
        return env

    def register_constants(self, env: Environment) -> None:
        d = self.domain
        env.set_global_symbol("null", Constant(self.null))
        env.set_global_symbol("true", Constant(d.create(bool, True)))
        env.set_global_symbol("false", Constant(d.create(bool, False)))
        env.set_global_symbol("E", Constant(d.create(float, math.e)))
        env.set_global_symbol("PI", Constant(d.create(float, math.pi)))
        env.set_global_symbol("NAN", Constant(d.create(float, math.nan)))
        env.set_global_symbol("INF", Constant(d.create(float, math.inf)))
        env.set_global_symbol("I", Constant(d.create(complex, 1j)))

    def register_stack_functions(self, env: Environment) -> None:
        env.set_global_symbol("dup", Function(1, 2, lambda v: (v, v)))
        env.set_global_symbol("pop", Function(1, 0, lambda v: None))
        env.set_global_symbol("swap", Function(2, 2, lambda a, b: (b, a)))

    def register_predicates(self, env: Environment) -> None:
        d = self.domain
        for name, tag in TYPE_PREDICATES.items():
            env.set_global_symbol(name, UnaryFunction(lambda v, tag=tag: d.create(bool, v.type is tag)))
        env.set_global_symbol("isnumber", UnaryFunction(lambda v: d.create(bool, v.type in NUMBER_TYPES)))

        def is_float_check(check):
            return (self.typed(check.__name__)
                    .register([float], _returning(d, bool, check))
                    .register([complex], _returning(d, bool, lambda v: check(v.real) or check(v.imag))))

        env.set_global_symbol("isnan", is_float_check(math.isnan))
        env.set_global_symbol("isinf", is_float_check(math.isinf))

    def _parse_number(self, text: str, radix: int):
        try:
            return NUMBER_PARSER.parse_string(text, radix)
        except (ValueError, OverflowError) as e:
            raise ConversionError(f"Cannot read {text!r} as a number in radix {radix}") from e

    def register_conversions(self, env: Environment) -> None:
        d = self.domain
        base = self.printer.base

        env.set_global_symbol("type", UnaryFunction(lambda v: d.create(str, d.name_of(v.type))))
        env.set_global_symbol("bool", UnaryFunction(lambda v: d.create(bool, truth_of(d, v))))
        env.set_global_symbol("str", UnaryFunction(lambda v: d.create(str, self.printer.to_string(v))))

        def int_from_text(text: str, radix: int = base) -> TypedValue:
            integer, real = self._parse_number(text, radix)
            if real is not None:
                raise ConversionError(f"Fractional part in argument to 'int': {text!r}")
            return d.create(int, integer)

        def float_from_text(text: str, radix: int = base) -> TypedValue:
            integer, real = self._parse_number(text, radix)
            return d.create(float, float(integer) if real is None else real)

        def number_from_text(text: str, radix: int = base) -> TypedValue:
            return merge_number_parts(d, self._parse_number(text, radix))

        env.set_global_symbol("int", (
            self.typed("int")
            .register([bool], _returning(d, int, int))
            .register([int], _identity(d, int))
            .register([float], _returning(d, int, int))
            .register([str], int_from_text)
            .register([str, int], int_from_text)
        ))

        env.set_global_symbol("float", (
            self.typed("float")
            .register([float], _identity(d, float))
            .register([str], float_from_text)
            .register([str, int], float_from_text)
        ))

        number = self.typed("number")
        for tag in NUMBER_TYPES:
            number.register([tag], _identity(d, tag))
        number.register([str], number_from_text)
        number.register([str, int], number_from_text)
        env.set_global_symbol("number", number)

        env.set_global_symbol("complex", self.typed("complex").register([float, float], _returning(d, complex, complex)))
        env.set_global_symbol("polar", self.typed("polar").register([float, float], _returning(d, complex, cmath.rect)))
        env.set_global_symbol("symbol", self.typed("symbol").register([str], _returning(d, Symbol, Symbol)))
        env.set_global_symbol("parse", self.typed("parse").register([str], self._parse_literal))

    def _parse_literal(self, text: str) -> TypedValue:
        try:
            tokens = list(Tokenizer().tokenize(text))
            if len(tokens) != 1:
                raise ConversionError(f"Expected a single token, got {len(tokens)}")
            return self.value_parser.parse_token(tokens[0])
        except (CompileError, ConversionError) as e:
            raise ConversionError(f"Failed to parse {text!r}") from e

    def register_math(self, env: Environment) -> None:
        d = self.domain
        for name, fn in FLOAT_FUNCTIONS.items():
            env.set_global_symbol(name, self.typed(name).register([float], _returning(d, float, fn)))

        env.set_global_symbol("abs", (
            self.typed("abs")
            .register([bool], _identity(d, bool))
            .register([int], _returning(d, int, abs))
            .register([float], _returning(d, float, abs))
            .register([complex], _returning(d, float, abs))
        ))

        for name, fn in (("floor", math.floor), ("ceil", math.ceil)):
            env.set_global_symbol(name, (
                self.typed(name)
                .register([bool], _identity(d, bool))
                .register([int], _identity(d, int))
                .register([float], _returning(d, float, lambda v, fn=fn: float(fn(v)) if math.isfinite(v) else v))
            ))

        env.set_global_symbol("atan2", self.typed("atan2").register([float, float], _returning(d, float, math.atan2)))

        env.set_global_symbol("exp", (
            self.typed("exp")
            .register([float], _returning(d, float, math.exp))
            .register([complex], _returning(d, complex, cmath.exp))
        ))
        env.set_global_symbol("ln", (
            self.typed("ln")
            .register([float], _returning(d, float, math.log))
            .register([complex], _returning(d, complex, cmath.log))
        ))
        env.set_global_symbol("log", (
            self.typed("log")
            .register([float], _returning(d, float, math.log10))
            .register([float, float], _returning(d, float, math.log))
        ))

        env.set_global_symbol("sgn", (
            self.typed("sgn")
            .register([int], _returning(d, int, lambda v: (v > 0) - (v < 0)))
            .register([float], _returning(d, float, _float_sign))
        ))

        env.set_global_symbol("modpow", self.typed("modpow").register([int, int, int], _returning(d, int, pow)))
        env.set_global_symbol("gcd", self.typed("gcd").register([int, int], _returning(d, int, math.gcd)))

    def register_complex(self, env: Environment) -> None:
        d = self.domain
        env.set_global_symbol("re", (
            self.typed("re")
            .register([float], _identity(d, float))
            .register([complex], _returning(d, float, lambda v: v.real))
        ))
        env.set_global_symbol("im", (
            self.typed("im")
            .register([float], _returning(d, float, lambda v: 0.0))
            .register([complex], _returning(d, float, lambda v: v.imag))
        ))
        env.set_global_symbol("phase", (
            self.typed("phase")
            .register([float], _returning(d, float, lambda v: 0.0))
            .register([complex], _returning(d, float, cmath.phase))
        ))
        env.set_global_symbol("conj", (
            self.typed("conj")
            .register([float], _returning(d, complex, complex))
            .register([complex], _returning(d, complex, lambda v: v.conjugate()))
        ))

    def register_accumulators(self, env: Environment) -> None:
        less = self.operators.get_binary_operator("<")
        greater = self.operators.get_binary_operator(">")
        add = self.operators.get_binary_operator("+")
        divide = self.operators.get_binary_operator("/")
        d = self.domain

        env.set_global_symbol("min", AccumulatorFunction(
            self.null, lambda acc, v: acc if less.execute(acc, v).value else v))
        env.set_global_symbol("max", AccumulatorFunction(
            self.null, lambda acc, v: acc if greater.execute(acc, v).value else v))
        env.set_global_symbol("sum", AccumulatorFunction(self.null, add.execute))
        env.set_global_symbol("avg", AccumulatorFunction(
            self.null, add.execute, lambda total, count: divide.execute(total, d.create(int, count))))

    def register_lists(self, env: Environment) -> None:
        d = self.domain

        def make_list(values: list[TypedValue]) -> TypedValue:
            result = self.null
            for value in reversed(values):
                result = d.create(Cons, Cons(value, result))
            return result

        env.set_global_symbol("list", VariadicFunction(make_list, default_args=0))
        env.set_global_symbol("cons", Function(2, 1, lambda car, cdr: d.create(Cons, Cons(car, cdr))))
        env.set_global_symbol("car", self.typed("car").register([Cons], lambda cons: cons.car))
        env.set_global_symbol("cdr", self.typed("cdr").register([Cons], lambda cons: cons.cdr))
        env.set_global_symbol("len", (
            self.typed("len")
            .register([UnitType], _returning(d, int, lambda v: 0))
            .register([str], _returning(d, int, len))
            .register([Cons], _returning(d, int, Cons.length))
        ))


def register_builtins(env: Environment, domain: TypeDomain, operators: OperatorDictionary,
                      printer: ValuePrinter) -> Environment:
    return BuiltinLibrary(domain, operators, printer).register(env)
