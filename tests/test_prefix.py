import pytest

from polycalc.errors import ParseError
from polycalc.types import Cons


@pytest.mark.parametrize(
    "source,expected",
    [
        ("+ 1 * 2 3", 7),
        ("- 5 3", 2),
        ("(+ 1 2 3)", 6),
        ("(- 10 1 2)", 7),
        ("(- 5)", -5),
        ("(* 2 (+ 1 1) 3)", 12),
        ("(+ 1, 2)", 3),
        ("(1)", 1),
        ("neg 3", -3),
        ("! 0", True),
        ("max(1, 5, 3)", 5),
        ("max(+ 1 1, 1)", 2),
        ("max@3 1 5 3", 5),
        ("sin@1 0", 0.0),
        ("gcd@2 12 18", 6),
        ("len(list(1, 2, 3))", 3),
        ("== 1 1", True),
        ("PI", 3.141592653589793),
    ]
)
def test_expressions(calc, source, expected):
    assert calc.compile_and_evaluate(source, "prefix").value == expected


def test_right_associative_fold(calc):
    value = calc.compile_and_evaluate("(: 1 2 null)", "prefix")
    assert value.type is Cons
    assert value.value.length() == 2
    assert value.value.is_list()


def test_left_associative_fold_order(calc):
    assert calc.compile_and_evaluate("(/ 8 2 2)", "prefix").value == 2.0


@pytest.mark.parametrize(
    "source",
    ["+ 1", "(+)", "(~ 1 2)", "1 2", "(1 2)", "(+ 1 2", "max(1 2)", "max(,1)", "max(1,)", ")"]
)
def test_parse_errors(calc, source):
    with pytest.raises(ParseError):
        calc.compile(source, "prefix")
