import pytest
from hypothesis import given, strategies as st

from polycalc.errors import TokenizerError
from polycalc.reader.tokenizer import Token, TokenType as T, Tokenizer, split_symbol_args, tokenize

OPERATORS = ["+", "-", "*", "**", "<", "<=", "<=>", "neg", ".", ":"]


def _lex(source):
    return [(t.type, t.value) for t in tokenize(source, OPERATORS)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2", [(T.DEC_NUMBER, "1"), (T.OPERATOR, "+"), (T.DEC_NUMBER, "2")]),
        ("1**2", [(T.DEC_NUMBER, "1"), (T.OPERATOR, "**"), (T.DEC_NUMBER, "2")]),
        ("a<=>b", [(T.SYMBOL, "a"), (T.OPERATOR, "<=>"), (T.SYMBOL, "b")]),
        ("a <= b", [(T.SYMBOL, "a"), (T.OPERATOR, "<="), (T.SYMBOL, "b")]),
        ("3.25", [(T.DEC_NUMBER, "3.25")]),
        ("0", [(T.DEC_NUMBER, "0")]),
        ("0x1F", [(T.HEX_NUMBER, "1F")]),
        ("017", [(T.OCT_NUMBER, "17")]),
        ("0b101", [(T.BIN_NUMBER, "101")]),
        ("16#ff", [(T.QUOTED_NUMBER, "16#ff")]),
        ("2#1010'1010", [(T.QUOTED_NUMBER, "2#1010'1010")]),
        ("neg x", [(T.OPERATOR, "neg"), (T.SYMBOL, "x")]),
        ("negate", [(T.SYMBOL, "negate")]),
        ("f@2,1(x)", [(T.SYMBOL_WITH_ARGS, "f@2,1"), (T.LEFT_BRACKET, "("), (T.SYMBOL, "x"), (T.RIGHT_BRACKET, ")")]),
        ("g@3", [(T.SYMBOL_WITH_ARGS, "g@3")]),
        ("f(a@1, b)", [(T.SYMBOL, "f"), (T.LEFT_BRACKET, "("), (T.SYMBOL_WITH_ARGS, "a@1"),
                       (T.SEPARATOR, ","), (T.SYMBOL, "b"), (T.RIGHT_BRACKET, ")")]),
        ("h@,2", [(T.SYMBOL_WITH_ARGS, "h@,2")]),
        ("'foo", [(T.MODIFIER, "'"), (T.SYMBOL, "foo")]),
        ('"a\\"b"', [(T.STRING, 'a\\"b')]),
        ("a.b", [(T.SYMBOL, "a"), (T.OPERATOR, "."), (T.SYMBOL, "b")]),
        ("1:2", [(T.DEC_NUMBER, "1"), (T.OPERATOR, ":"), (T.DEC_NUMBER, "2")]),
        ("max(1, 2)", [(T.SYMBOL, "max"), (T.LEFT_BRACKET, "("), (T.DEC_NUMBER, "1"),
                       (T.SEPARATOR, ","), (T.DEC_NUMBER, "2"), (T.RIGHT_BRACKET, ")")]),
        ("  \t\n ", []),
    ]
)
def test_tokenize(source, expected):
    assert _lex(source) == expected


@pytest.mark.parametrize("source", ["0xGG", "12abc", "1 ? 2", '"unterminated', "#"])
def test_tokenize_errors(source):
    with pytest.raises(TokenizerError):
        _lex(source)


def test_tokenizer_error_reports_position_and_remainder():
    with pytest.raises(TokenizerError) as info:
        _lex("1 + ?x")
    assert info.value.position == 4
    assert info.value.remainder == "?x"


def test_tokenize_is_lazy():
    tokens = Tokenizer(OPERATORS).tokenize("1 ?")
    assert next(tokens) == Token(T.DEC_NUMBER, "1")
    with pytest.raises(TokenizerError):
        next(tokens)


def test_token_positions_are_not_part_of_equality():
    tokens = tokenize("  a + b", OPERATORS)
    assert [t.position for t in tokens] == [2, 4, 6]
    assert tokens[0] == Token(T.SYMBOL, "a", 99)


def test_operators_are_sorted_longest_first():
    tokenizer = Tokenizer(["<", "<=>", "<="])
    assert tokenizer.operators == ["<=>", "<=", "<"]


@pytest.mark.parametrize("operator", ["", "(", " +"])
def test_invalid_operator(operator):
    with pytest.raises(ValueError):
        Tokenizer([operator])


@pytest.mark.parametrize(
    "value,expected",
    [
        ("f@2,1", ("f", 2, 1)),
        ("f@2", ("f", 2, None)),
        ("f@,3", ("f", None, 3)),
        ("f@", ("f", None, None)),
    ]
)
def test_split_symbol_args(value, expected):
    assert split_symbol_args(value) == expected


@given(st.integers(min_value=1, max_value=10**30))
def test_decimal_integers_are_single_tokens(n):
    assert _lex(str(n)) == [(T.DEC_NUMBER, str(n))]


@given(st.from_regex(r"[a-z_][a-z0-9_]{0,8}", fullmatch=True).filter(lambda s: s != "neg"))
def test_identifiers_are_single_symbols(name):
    assert _lex(name) == [(T.SYMBOL, name)]
