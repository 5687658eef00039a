import pytest

from polycalc.compiler import disassemble, dump_tree
from polycalc.compiler.stream import TokenStream
from polycalc.errors import ParseError, StackValidationError, TokenizerError, UnknownSymbolError
from polycalc.types import Composite


class Point(Composite):
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def get(self, domain, name):
        if name not in ("x", "y"):
            raise KeyError(name)
        return domain.create(int, getattr(self, name))

    def type_name(self):
        return "point"


@pytest.fixture
def point_calc(make_calculator):
    return make_calculator(lambda env, domain: env.set_global_constant("p", domain.create(Composite, Point(3, 4))))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("max(1, 5, 3)", 5),
        ("max(1, min(4, 2))", 2),
        ("len(list())", 0),
        ("sin@1(0) + 1", 1.0),
        ("gcd@2,1(12, 18)", 6),
        ("1 : 2 : null == cons(1, cons(2, null))", True),
        ("(((7)))", 7),
        ("2 * (3 + 4) - 1", 13),
        ("- - 3", 3),
    ]
)
def test_expressions(calc, source, expected):
    assert calc.compile_and_evaluate(source, "infix").value == expected


@pytest.mark.parametrize(
    "source",
    ["(1 + 2", "1 +", "1 2", ")", "1 ~ 2", "f@2(1)", "f@2", "max(1 2)", "max(1,", "", "(", "max(1,)"]
)
def test_parse_errors(calc, source):
    with pytest.raises(ParseError):
        calc.compile(source, "infix")


def test_unknown_operator_text_is_a_tokenizer_error(calc):
    with pytest.raises(TokenizerError):
        calc.compile("1 ? 2", "infix")


def test_symbols_are_resolved_at_execution(calc):
    executable = calc.compile("undefined_name + 1", "infix")
    with pytest.raises(UnknownSymbolError):
        calc.execute(executable)


def test_return_count_must_match(calc):
    with pytest.raises(StackValidationError):
        calc.compile_and_evaluate("dup(1)", "infix")


def test_argument_count_must_match_variant(calc):
    with pytest.raises(StackValidationError):
        calc.compile_and_evaluate("sin@2(1, 2)", "infix")


def test_compiled_steps(calc):
    assert disassemble(calc.compile("1 + max(2, 3)", "infix")).splitlines() == [
        "0000: PUSH int:1",
        "0001: PUSH int:2",
        "0002: PUSH int:3",
        "0003: CALL max args=2 rets=1",
        "0004: BINARY +",
    ]


def test_bare_symbol_is_a_get(calc):
    assert disassemble(calc.compile("PI", "infix")) == "0000: GET PI"


def test_expression_tree(calc):
    parser = calc.compilers.front_end("infix")
    tree = parser.parse_node(TokenStream(calc.compilers.tokenizer.tokenize("-1 * 2")))
    assert dump_tree(tree).splitlines() == [
        "BinaryOpNode *",
        "  UnaryOpNode -",
        "    ValueNode int:1",
        "  ValueNode int:2",
    ]


class TestMemberAccess:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("p.x", 3),
            ("p.x + p.y", 7),
            ("p.x * 2", 6),
            ('p.("y")', 4),
        ]
    )
    def test_member_access(self, point_calc, source, expected):
        assert point_calc.compile_and_evaluate(source).value == expected

    def test_bare_name_is_pushed_as_string(self, point_calc):
        assert "PUSH str:'x'" in disassemble(point_calc.compile("p.x"))

    def test_call_on_right_is_rejected(self, point_calc):
        with pytest.raises(ParseError):
            point_calc.compile("p.f(1)")

    def test_member_access_in_prefix(self, point_calc):
        assert point_calc.compile_and_evaluate(". p y", "prefix").value == 4

    def test_object_predicates(self, point_calc):
        assert point_calc.compile_and_evaluate("isobject(p)").value is True
        assert point_calc.compile_and_evaluate("type(p)").value == "object"


@pytest.mark.parametrize(
    "notation,source",
    [
        ("infix", "(" * 3000 + "1" + ")" * 3000),
        ("infix", "-" * 3000 + "1"),
        ("prefix", "neg " * 3000 + "1"),
    ]
)
def test_deep_nesting_is_a_parse_error(calc, notation, source):
    with pytest.raises(ParseError, match="nested too deeply"):
        calc.compile(source, notation)


def test_moderate_nesting_still_compiles(calc):
    assert calc.compile_and_evaluate("(" * 50 + "1" + ")" * 50).value == 1


def test_counted_symbol_inside_argument_list(calc):
    assert calc.compile_and_evaluate("max(PI@0, 1)").value == pytest.approx(3.141592653589793)
