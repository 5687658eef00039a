import pytest

from polycalc.compiler import disassemble
from polycalc.errors import DispatchError, ParseError, StackValidationError
from polycalc.runtime import CalculatorState
from polycalc.types import Symbol


def _stack(calc):
    return [v.value for v in calc.stack]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 2 3 * +", [7]),
        ("1 2 +", [3]),
        ("5 neg", [-5]),
        ("0 !", [True]),
        ("(1 2 +) 3 *", [9]),
        ("(1, 2) +", [3]),
        ("1 dup +", [2]),
        ("1 2 swap -", [1]),
        ("1 2 pop", [1]),
        ("1 2 3 max@3", [3]),
        ("1 2 3 sum", [1, 5]),
        ("1 2 3 list@3 len", [3]),
        ("1 2 gcd@2,1", [1]),
        ("'foo", [Symbol("foo")]),
        ("'+", [Symbol("+")]),
        ("PI floor", [3.0]),
        ("", []),
    ]
)
def test_programs(calc, source, expected):
    calc.compile_and_execute(source, "postfix")
    assert _stack(calc) == expected


def test_operators_prefer_binary_form(calc):
    with pytest.raises(StackValidationError):
        calc.compile_and_execute("5 -", "postfix")


def test_bare_symbol_uses_default_arity(calc):
    assert disassemble(calc.compile("1 2 max", "postfix")).splitlines()[-1] == "0002: CALL max args=? rets=?"


@pytest.mark.parametrize("source", ["1, 2", "(1 2", "1 2)", "'(1 2)", "'", "',"])
def test_parse_errors(calc, source):
    with pytest.raises(ParseError):
        calc.compile(source, "postfix")


def test_failed_operator_leaves_operands(calc):
    with pytest.raises(DispatchError):
        calc.compile_and_execute('1 "a" +', "postfix")
    assert calc.state is CalculatorState.FAULTED
    assert _stack(calc) == [1, "a"]


def test_stack_carries_over_between_runs(calc):
    calc.compile_and_execute("1 2", "postfix")
    calc.compile_and_execute("+", "postfix")
    assert _stack(calc) == [3]
