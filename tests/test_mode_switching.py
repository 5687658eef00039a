import pytest

from polycalc.compiler import StepsNode
from polycalc.errors import ParseError, UnknownSymbolError


@pytest.mark.parametrize(
    "notation,source,expected",
    [
        ("infix", "1 + prefix(* 2 3)", 7),
        ("infix", "postfix(1 2 +) * 3", 9),
        ("infix", "infix(1 + 1) * 2", 4),
        ("prefix", "+ 1 postfix(2 3 *)", 7),
        ("prefix", "* infix(1 + 2) 3", 9),
        ("postfix", "1 infix(2 * 3) +", 7),
        ("postfix", "prefix(+ 1 2) 4 *", 12),
        ("infix", "prefix(+ 1 postfix(2 infix(3 - 1) *))", 5),
        ("infix", "max(prefix(+ 1 1), 1)", 2),
    ]
)
def test_nested_notations(calc, notation, source, expected):
    assert calc.compile_and_evaluate(source, notation).value == expected


def test_postfix_group_is_spliced_as_steps(calc):
    node = calc.compilers.parse_group("postfix", list(calc.compilers.tokenizer.tokenize("1 2 +")))
    assert isinstance(node, StepsNode)
    assert len(node.steps) == 3


def test_notation_name_without_group_is_a_symbol(calc):
    with pytest.raises(UnknownSymbolError):
        calc.compile_and_evaluate("infix")


@pytest.mark.parametrize("source", ["prefix(1 2)", "prefix(+ 1 2", "postfix(1 2))"])
def test_group_errors(calc, source):
    with pytest.raises(ParseError):
        calc.compile(source, "infix")
