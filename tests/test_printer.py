import math

import pytest

from polycalc import config
from polycalc.builtins.printer import ValuePrinter, format_complex, format_float, format_int, format_str
from polycalc.factory import create_calculator
from polycalc.types import Composite, Cons, Symbol, Unit, UnitType


class Box(Composite):
    def get(self, domain, name):
        raise KeyError(name)


@pytest.mark.parametrize(
    "value,base,expected",
    [
        (42, 10, "42"),
        (-7, 10, "-7"),
        (255, 16, "16#ff"),
        (-255, 16, "-16#ff"),
        (0, 16, "16#0"),
        (5, 2, "2#101"),
        (35, 36, "36#z"),
    ]
)
def test_format_int(value, base, expected):
    assert format_int(value, base) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (1.5, "1.5"),
        (2.0, "2.0"),
        (1e100, "1e+100"),
        (math.nan, "NaN"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
    ]
)
def test_format_float(value, expected):
    assert format_float(value) == expected


def test_format_complex():
    assert format_complex(1 + 2j) == "1.0+2.0I"
    assert format_complex(1 - 2j) == "1.0-2.0I"
    assert format_complex(complex(0, math.inf)) == "0.0+InfinityI"


def test_format_str():
    assert format_str('a"b\n') == '"a\\"b\\n"'
    assert format_str("") == '""'


class TestValuePrinter:
    @pytest.fixture
    def printer(self):
        return ValuePrinter(10)

    def test_scalars(self, printer, domain):
        assert printer.repr(domain.create(UnitType, Unit)) == "null"
        assert printer.repr(domain.create(bool, True)) == "true"
        assert printer.repr(domain.create(bool, False)) == "false"
        assert printer.repr(domain.create(str, "hi")) == '"hi"'

    def test_symbols(self, printer, domain):
        symbol = domain.create(Symbol, Symbol("x"))
        assert printer.repr(symbol) == "'x"
        assert printer.to_string(symbol) == "x"

    def test_to_string_leaves_strings_bare(self, printer, domain):
        assert printer.to_string(domain.create(str, "hi")) == "hi"
        assert printer.to_string(domain.create(int, 3)) == "3"

    def test_lists(self, printer, domain):
        null = domain.create(UnitType, Unit)
        tail = domain.create(Cons, Cons(domain.create(str, "s"), null))
        items = domain.create(Cons, Cons(domain.create(Symbol, Symbol("a")), tail))
        assert printer.repr(items) == '(a "s")'

        pair = domain.create(Cons, Cons(domain.create(int, 1), domain.create(int, 2)))
        assert printer.repr(pair) == "(1 . 2)"

    def test_composite(self, printer, domain):
        assert printer.repr(domain.create(Composite, Box())) == "<object>"

    def test_base(self, domain):
        assert ValuePrinter(16).repr(domain.create(int, 255)) == "16#ff"
        assert ValuePrinter(2).repr(domain.create(float, 0.5)) == "0.5"

    @pytest.mark.parametrize("base", [0, 1, 37])
    def test_invalid_base(self, base):
        with pytest.raises(ValueError):
            ValuePrinter(base)


def test_print_base_from_environment(monkeypatch):
    monkeypatch.setenv("POLYCALC_PRINT_BASE", "16")
    assert ValuePrinter().base == 16
    assert create_calculator(notation="infix").compile_execute_and_print("255") == "16#ff"


def test_printed_ints_read_back(notation):
    calc = create_calculator(notation=notation, print_base=16)
    calc.compile_and_execute("16#ff")
    assert calc.peek_stack().value == 255


@pytest.mark.parametrize("raw", ["x", "1", "40"])
def test_invalid_print_base_in_environment(monkeypatch, raw):
    monkeypatch.setenv("POLYCALC_PRINT_BASE", raw)
    with pytest.raises(ValueError):
        config.get_print_base()


def test_config_defaults(monkeypatch):
    assert config.get_default_notation() == "infix"
    assert config.get_print_base() == 10
    assert config.get_log_level() == "WARNING"
    monkeypatch.setenv("POLYCALC_NOTATION", "  PostFix ")
    monkeypatch.setenv("POLYCALC_LOG_LEVEL", "debug")
    assert config.get_default_notation() == "postfix"
    assert config.get_log_level() == "DEBUG"


def test_format_int_beyond_str_conversion_limit():
    big = 10 ** 5000
    assert format_int(big, 10) == "1" + "0" * 5000
    assert format_int(-big - 7, 10) == "-1" + "0" * 4999 + "7"
    assert format_int(2 ** 20000, 2) == "2#1" + "0" * 20000


@pytest.mark.parametrize("value", [0, 7, 10 ** 16, 10 ** 16 - 1, 123456789012345678901234567890])
def test_format_int_decimal_chunks(value):
    assert format_int(value, 10) == str(value)


def test_repr_of_huge_int_value(domain):
    assert repr(domain.create(int, 10 ** 5000)).startswith("int:<")
