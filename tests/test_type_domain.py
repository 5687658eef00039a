import pytest
from hypothesis import given, strategies as st

from polycalc.builtins.operators import create_domain
from polycalc.errors import ConversionError, DomainMismatchError, UnknownTypeError
from polycalc.types import (
    Coercion,
    Composite,
    Cons,
    Symbol,
    TypeDomainBuilder,
    Unit,
    UnitType,
)

DOMAIN = create_domain()


@pytest.mark.parametrize(
    "left,right,expected",
    [
        (int, int, int),
        (int, float, float),
        (float, int, float),
        (bool, int, int),
        (bool, complex, complex),
        (float, complex, complex),
        (str, int, None),
        (bool, str, None),
        (Symbol, Cons, None),
    ]
)
def test_coercion_target(left, right, expected):
    assert DOMAIN.coercion_target(left, right) is expected


def test_coerce_widens_both_operands():
    left, right = DOMAIN.coerce(DOMAIN.create(bool, True), DOMAIN.create(float, 2.5))
    assert (left.type, left.value) == (float, 1.0)
    assert (right.type, right.value) == (float, 2.5)


def test_coerce_without_rule_returns_none():
    assert DOMAIN.coerce(DOMAIN.create(str, "a"), DOMAIN.create(int, 1)) is None


def test_convert_without_converter():
    with pytest.raises(ConversionError):
        DOMAIN.convert(DOMAIN.create(float, 1.0), int)


def test_failing_converter_keeps_cause():
    with pytest.raises(ConversionError) as info:
        DOMAIN.convert(DOMAIN.create(int, 10 ** 400), float)
    assert isinstance(info.value.__cause__, OverflowError)


@pytest.mark.parametrize(
    "tag,payload,expected",
    [
        (int, 0, False),
        (int, 5, True),
        (float, 0.0, False),
        (complex, 1j, True),
        (bool, False, False),
        (str, "", False),
        (str, "x", True),
        (UnitType, Unit, False),
        (Symbol, Symbol("a"), None),
    ]
)
def test_truthiness(tag, payload, expected):
    assert DOMAIN.create(tag, payload).is_truthy() is expected


def test_pairs_are_always_true():
    pair = DOMAIN.create(Cons, Cons(DOMAIN.create(int, 1), DOMAIN.create(UnitType, Unit)))
    assert pair.is_truthy() is True


def test_unknown_type():
    with pytest.raises(UnknownTypeError):
        DOMAIN.create(list, [])
    with pytest.raises(UnknownTypeError):
        DOMAIN.name_of(bytes)


def test_type_names():
    assert [DOMAIN.name_of(t) for t in (UnitType, int, Composite, Cons, Symbol)] == [
        "<null>", "int", "object", "pair", "symbol",
    ]


def test_builder_rejects_rule_without_converter():
    builder = TypeDomainBuilder().register_type(int, "int").register_type(str, "str")
    with pytest.raises(ValueError):
        builder.register_symmetric_coercion_rule(int, str, Coercion.TO_RIGHT)


def test_builder_rejects_duplicates_and_unknown_types():
    builder = TypeDomainBuilder().register_type(int, "int")
    with pytest.raises(ValueError):
        builder.register_type(int, "integer")
    with pytest.raises(UnknownTypeError):
        builder.register_converter(int, float, float)


def test_built_domain_has_no_registration_methods():
    assert not hasattr(DOMAIN, "register_type")


def test_typed_value_is_immutable():
    value = DOMAIN.create(int, 1)
    with pytest.raises(AttributeError):
        value.value = 2


def test_values_from_different_domains():
    other = create_domain()
    a, b = DOMAIN.create(int, 1), other.create(int, 1)
    assert a != b
    with pytest.raises(DomainMismatchError):
        a.check_same_domain(b)


def test_equality_is_exact_on_type():
    assert DOMAIN.create(int, 1) != DOMAIN.create(float, 1.0)
    assert DOMAIN.create(int, 1) != DOMAIN.create(bool, True)
    assert DOMAIN.create(int, 1) == DOMAIN.create(int, 1)


def test_unwrap():
    assert DOMAIN.create(str, "x").unwrap(str) == "x"
    with pytest.raises(UnknownTypeError):
        DOMAIN.create(str, "x").unwrap(int)


@given(st.sampled_from(list(DOMAIN.types)), st.sampled_from(list(DOMAIN.types)))
def test_coercion_is_symmetric(left, right):
    assert DOMAIN.coercion_target(left, right) is DOMAIN.coercion_target(right, left)
