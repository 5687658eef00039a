"""Default type domain and operator set.

Numbers follow Python's own int/float/complex arithmetic, with two
adjustments: booleans take part in arithmetic as 0/1 and produce ints, and
float division by zero yields inf or nan instead of raising.
"""

from __future__ import annotations

import math
import operator as op

from polycalc.errors import CoercionPreconditionError
from polycalc.operators.dictionary import OperatorDictionary, OperatorDictionaryBuilder
from polycalc.operators.operator import Associativity, BinaryOperatorBuilder, UnaryOperatorBuilder
from polycalc.types.composite import Composite
from polycalc.types.cons import Cons
from polycalc.types.domain import Coercion, TypeDomain, TypeDomainBuilder
from polycalc.types.symbol import Symbol
from polycalc.types.unit import UnitType
from polycalc.types.value import TypedValue

MEMBER_ACCESS = "."
CONS = ":"

PRECEDENCE_MEMBER = 10
PRECEDENCE_CONS = 9
PRECEDENCE_UNARY = 9
PRECEDENCE_EXP = 8
PRECEDENCE_MULTIPLY = 7
PRECEDENCE_ADD = 6
PRECEDENCE_SHIFT = 5
PRECEDENCE_BITWISE = 4
PRECEDENCE_COMPARE = 3
PRECEDENCE_SPACESHIP = 2
PRECEDENCE_EQUALS = 1
PRECEDENCE_LOGIC = 0

NUMBER_TYPES = (bool, int, float, complex)
COMPARABLE_TYPES = (bool, int, float, str)


def create_domain() -> TypeDomain:
    builder = TypeDomainBuilder()
    builder.register_type(UnitType, "<null>")
    builder.register_type(int, "int")
    builder.register_type(float, "float")
    builder.register_type(bool, "bool")
    builder.register_type(str, "str")
    builder.register_type(complex, "complex")
    builder.register_type(Composite, "object")
    builder.register_type(Cons, "pair")
    builder.register_type(Symbol, "symbol")

    builder.register_converter(bool, int, int)
    builder.register_converter(bool, float, float)
    builder.register_converter(bool, complex, complex)
    builder.register_converter(int, float, float)
    builder.register_converter(int, complex, complex)
    builder.register_converter(float, complex, complex)

    builder.register_symmetric_coercion_rule(bool, int, Coercion.TO_RIGHT)
    builder.register_symmetric_coercion_rule(bool, float, Coercion.TO_RIGHT)
    builder.register_symmetric_coercion_rule(bool, complex, Coercion.TO_RIGHT)
    builder.register_symmetric_coercion_rule(int, float, Coercion.TO_RIGHT)
    builder.register_symmetric_coercion_rule(int, complex, Coercion.TO_RIGHT)
    builder.register_symmetric_coercion_rule(float, complex, Coercion.TO_RIGHT)

    builder.register_truth_evaluator(bool, lambda v: v)
    builder.register_truth_evaluator(int, lambda v: v != 0)
    builder.register_truth_evaluator(float, lambda v: v != 0)
    builder.register_truth_evaluator(complex, lambda v: v != 0)
    builder.register_truth_evaluator(str, lambda v: len(v) > 0)
    builder.register_always_false(UnitType)
    builder.register_always_true(Composite)
    builder.register_always_true(Cons)
    return builder.build()


def float_divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def float_floor_divide(left: float, right: float) -> float:
    if right == 0:
        return float_divide(left, right)
    return left // right


def float_modulo(left: float, right: float) -> float:
    if right == 0:
        return math.nan
    return left % right


def _bools(fn):
    return lambda l, r: fn(int(l), int(r))


def _int_power(domain: TypeDomain, base: int, exponent: int) -> TypedValue:
    if exponent < 0:
        return domain.create(float, float(base) ** exponent)
    return domain.create(int, base ** exponent)


def _float_power(domain: TypeDomain, base: float, exponent: float) -> TypedValue:
    result = base ** exponent
    # Negative base with fractional exponent leaves the reals
    if isinstance(result, complex):
        return domain.create(complex, result)
    return domain.create(float, result)


def truth_of(domain: TypeDomain, value: TypedValue) -> bool:
    truth = domain.is_truthy(value)
    if truth is None:
        raise CoercionPreconditionError(f"Cannot determine truth value of {value!r}")
    return truth


def compare(left, right) -> int:
    return (left > right) - (left < right)


def _arithmetic(id: str, precedence: int, fn, float_fn=None, complex_fn=None) -> BinaryOperatorBuilder:
    builder = BinaryOperatorBuilder(id, precedence)
    builder.register_coerced_operation(int, int, fn)
    builder.register_coerced_operation(bool, int, _bools(fn))
    builder.register_coerced_operation(float, float, float_fn or fn)
    if complex_fn is not False:
        builder.register_coerced_operation(complex, complex, complex_fn or fn)
    return builder


def _integer_only(id: str, precedence: int, fn) -> BinaryOperatorBuilder:
    builder = BinaryOperatorBuilder(id, precedence)
    builder.register_coerced_operation(int, int, fn)
    builder.register_coerced_operation(bool, int, _bools(fn))
    return builder


def _comparison(id: str, accept) -> BinaryOperatorBuilder:
    builder = BinaryOperatorBuilder(id, PRECEDENCE_COMPARE)
    for tag in COMPARABLE_TYPES:
        builder.register_coerced_operation(tag, bool, lambda l, r: accept(compare(l, r)))
    return builder


def create_binary_operators(domain: TypeDomain) -> list:
    add = _arithmetic("+", PRECEDENCE_ADD, op.add)
    add.register_coerced_operation(str, str, op.add)

    subtract = _arithmetic("-", PRECEDENCE_ADD, op.sub)

    multiply = _arithmetic("*", PRECEDENCE_MULTIPLY, op.mul)
    multiply.register_operation(str, int, str, op.mul)

    divide = BinaryOperatorBuilder("/", PRECEDENCE_MULTIPLY)
    divide.register_coerced_operation(int, float, lambda l, r: float_divide(float(l), float(r)))
    divide.register_coerced_operation(bool, float, lambda l, r: float_divide(float(l), float(r)))
    divide.register_coerced_operation(float, float, float_divide)
    divide.register_coerced_operation(complex, complex, op.truediv)

    floor_divide = _arithmetic("//", PRECEDENCE_MULTIPLY, op.floordiv,
                               float_fn=float_floor_divide, complex_fn=False)
    modulo = _arithmetic("%", PRECEDENCE_MULTIPLY, op.mod,
                         float_fn=float_modulo, complex_fn=False)

    power = BinaryOperatorBuilder("**", PRECEDENCE_EXP)
    power.register_raw_operation(int, int, _int_power)
    power.register_raw_operation(bool, bool, lambda d, l, r: _int_power(d, int(l), int(r)))
    power.register_raw_operation(float, float, _float_power)
    power.register_coerced_operation(complex, complex, op.pow)

    shift_left = _integer_only("<<", PRECEDENCE_SHIFT, op.lshift)
    shift_right = _integer_only(">>", PRECEDENCE_SHIFT, op.rshift)
    bit_and = _integer_only("&", PRECEDENCE_BITWISE, op.and_)
    bit_xor = _integer_only("^", PRECEDENCE_BITWISE, op.xor)
    bit_or = _integer_only("|", PRECEDENCE_BITWISE, op.or_)

    less = _comparison("<", lambda c: c < 0)
    greater = _comparison(">", lambda c: c > 0)
    less_equal = _comparison("<=", lambda c: c <= 0)
    greater_equal = _comparison(">=", lambda c: c >= 0)

    spaceship = BinaryOperatorBuilder("<=>", PRECEDENCE_SPACESHIP)
    for tag in COMPARABLE_TYPES:
        spaceship.register_coerced_operation(tag, int, compare)

    # Whole-value equality: an int never equals a float
    equals = BinaryOperatorBuilder("==", PRECEDENCE_EQUALS)
    equals.set_default_operation(lambda d, l, r: d.create(bool, l == r))
    not_equals = BinaryOperatorBuilder("!=", PRECEDENCE_EQUALS)
    not_equals.set_default_operation(lambda d, l, r: d.create(bool, l != r))

    logical_and = BinaryOperatorBuilder("&&", PRECEDENCE_LOGIC)
    logical_and.set_default_operation(lambda d, l, r: r if truth_of(d, l) else l)
    logical_or = BinaryOperatorBuilder("||", PRECEDENCE_LOGIC)
    logical_or.set_default_operation(lambda d, l, r: l if truth_of(d, l) else r)
    logical_xor = BinaryOperatorBuilder("^^", PRECEDENCE_LOGIC)
    logical_xor.set_default_operation(lambda d, l, r: d.create(bool, truth_of(d, l) != truth_of(d, r)))

    member = BinaryOperatorBuilder(MEMBER_ACCESS, PRECEDENCE_MEMBER)
    member.register_raw_operation(Composite, str, lambda d, obj, name: obj.get(d, name))

    cons = BinaryOperatorBuilder(CONS, PRECEDENCE_CONS, Associativity.RIGHT)
    cons.set_default_operation(lambda d, l, r: d.create(Cons, Cons(l, r)))

    builders = [
        add, subtract, multiply, divide, floor_divide, modulo, power,
        shift_left, shift_right, bit_and, bit_xor, bit_or,
        less, greater, less_equal, greater_equal, spaceship,
        equals, not_equals, logical_and, logical_or, logical_xor,
        member, cons,
    ]
    return [b.build(domain) for b in builders]


def create_unary_operators(domain: TypeDomain) -> list:
    plus = UnaryOperatorBuilder("+", PRECEDENCE_UNARY)
    for tag in (int, float, complex):
        plus.register_raw_operation(tag, lambda d, v, tag=tag: d.create(tag, v))

    negations = []
    for id in ("-", "neg"):
        negate = UnaryOperatorBuilder(id, PRECEDENCE_UNARY)
        negate.register_operation(int, int, op.neg)
        negate.register_operation(bool, int, lambda v: -int(v))
        negate.register_operation(float, float, op.neg)
        negate.register_operation(complex, complex, op.neg)
        negations.append(negate)

    logical_not = UnaryOperatorBuilder("!", PRECEDENCE_UNARY)
    logical_not.set_default_operation(lambda d, v: d.create(bool, not truth_of(d, v)))

    bit_not = UnaryOperatorBuilder("~", PRECEDENCE_UNARY)
    bit_not.register_operation(int, int, op.invert)
    bit_not.register_operation(bool, int, lambda v: ~int(v))

    return [b.build(domain) for b in (plus, *negations, logical_not, bit_not)]


def create_operators(domain: TypeDomain) -> OperatorDictionary:
    builder = OperatorDictionaryBuilder()
    for operator in create_binary_operators(domain):
        builder.register_binary_operator(operator)
    for operator in create_unary_operators(domain):
        builder.register_unary_operator(operator)
    return builder.build()
