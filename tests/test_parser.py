## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from fractions import Fraction

import pytest

from ajisai import parser
from ajisai.types import Token, VECTOR_START, VECTOR_END, NIL_TOKEN
from ajisai.errors import AjisaiParseError


def _values(source: str):
    """Helper: tokenize and keep only (type, value) for easy comparison."""
    return [(t.type, t.value) for t in parser.tokenize(source)]


def test_integers_and_signs():
    assert _values("1 -2 +3") == [(Token.NUMBER, Fraction(1)), (Token.NUMBER, Fraction(-2)), (Token.NUMBER, Fraction(3))]


def test_decimal_is_exact_fraction():
    [(kind, value)] = _values("0.25")
    assert kind == Token.NUMBER and value == Fraction(1, 4)


def test_negative_decimal_keeps_sign():
    [(_, value)] = _values("-1.5")
    assert value == Fraction(-3, 2)


def test_fraction_literal_is_reduced():
    [(_, value)] = _values("2/4")
    assert value == Fraction(1, 2)
    assert value.denominator == 2


def test_zero_denominator_is_parse_error():
    with pytest.raises(AjisaiParseError):
        parser.tokenize("1/0")


@pytest.mark.parametrize("word", ["1.2.3", "3/", "1.x", "12/4/2"])
def test_malformed_numbers_are_parse_errors(word):
    with pytest.raises(AjisaiParseError) as info:
        parser.tokenize(word)
    assert info.value.kind == "ParseError"


def test_booleans_are_lowercase_only():
    assert _values("true false") == [(Token.BOOLEAN, True), (Token.BOOLEAN, False)]
    assert _values("TRUE") == [(Token.SYMBOL, "TRUE")]


def test_nil_is_case_insensitive():
    assert parser.tokenize("nil NIL Nil") == [NIL_TOKEN] * 3


def test_symbols_are_uppercased():
    assert _values("dup Square r@ empty?") == [
        (Token.SYMBOL, "DUP"), (Token.SYMBOL, "SQUARE"), (Token.SYMBOL, "R@"), (Token.SYMBOL, "EMPTY?")]


def test_operator_symbols():
    assert [v for _, v in _values("+ - * / > >= = < <= .")] == ["+", "-", "*", "/", ">", ">=", "=", "<", "<=", "."]


def test_strings_with_escapes():
    [(kind, value)] = _values(r'"say \"hi\" \\ ok"')
    assert kind == Token.STRING
    assert value == 'say "hi" \\ ok'


def test_string_keeps_whitespace_and_case():
    assert _values('"  Mixed Case  "') == [(Token.STRING, "  Mixed Case  ")]


def test_comments_are_discarded():
    assert _values("1 # a comment [ ( \"\n2") == [(Token.NUMBER, Fraction(1)), (Token.NUMBER, Fraction(2))]


def test_description_is_kept_as_token():
    tokens = parser.tokenize('[ DUP * ] "SQUARE" ( squares a number ) DEF')
    assert Token(Token.DESCRIPTION, "squares a number") in tokens


def test_vector_delimiters_are_flat_markers():
    tokens = parser.tokenize("[ 1 [ 2 ] ]")
    assert tokens[0] == VECTOR_START and tokens[2] == VECTOR_START
    assert tokens[-1] == VECTOR_END and tokens[-2] == VECTOR_END
    assert len(tokens) == 6


def test_brackets_need_no_spaces():
    assert [t.type for t in parser.tokenize("[1 2]")] == [Token.VECTOR_START, Token.NUMBER, Token.NUMBER, Token.VECTOR_END]


@pytest.mark.parametrize("source, fragment", [
    ('"never closed', "string"),
    ("( never closed", "description"),
    ("[ 1 2", "vector"),
    ("1 ]", "`]`"),
    ("done )", "`)`"),
])
def test_unterminated_forms_are_parse_errors(source, fragment):
    with pytest.raises(AjisaiParseError) as info:
        parser.tokenize(source)
    assert fragment in info.value.reason


def test_parse_error_reports_position():
    with pytest.raises(AjisaiParseError) as info:
        parser.tokenize('1 2\n3 "oops')
    assert info.value.line == 2
    assert info.value.column == 3


def test_is_word_name():
    assert parser.is_word_name("square")
    assert parser.is_word_name("EMPTY?")
    assert not parser.is_word_name("two words")
    assert not parser.is_word_name("42")
    assert not parser.is_word_name("")
    assert not parser.is_word_name("[")


def test_parse_error_context_highlights_line():
    text = parser.format_parse_error_context("<test>", 2, 3, '"', source='1 2\n3 "oops\n4')
    assert 'File "<test>", line 2' in text
    assert "    2 |" in text
    assert "oops" in text
