"""Tests for ExpressionLexer."""
from __future__ import annotations

import pytest

from stencil.core.exceptions import ExpressionSyntaxError
from stencil.core.expressions import ExpressionLexer


@pytest.fixture
def lexer() -> ExpressionLexer:
    return ExpressionLexer()


def _pairs(lexer: ExpressionLexer, text: str):
    return [(t.type, t.value) for t in lexer.tokenize(text)]


def test_tokenizes_operators_and_names(lexer) -> None:
    assert _pairs(lexer, "user.age >= 18 && !banned") == [
        ("IDENTIFIER", "user"),
        ("PUNCT", "."),
        ("IDENTIFIER", "age"),
        ("OPERATOR", ">="),
        ("NUMBER", "18"),
        ("OPERATOR", "&&"),
        ("OPERATOR", "!"),
        ("IDENTIFIER", "banned"),
        ("EOF", ""),
    ]


def test_longest_operator_wins(lexer) -> None:
    values = [t.value for t in lexer.tokenize("a === b !== c ?? d")]
    assert values == ["a", "===", "b", "!==", "c", "??", "d", ""]


def test_dollar_identifiers(lexer) -> None:
    assert _pairs(lexer, "$root.$index")[:3] == [
        ("IDENTIFIER", "$root"),
        ("PUNCT", "."),
        ("IDENTIFIER", "$index"),
    ]


def test_keywords(lexer) -> None:
    types = [t.type for t in lexer.tokenize("true and not null or undefined")]
    assert types == ["KEYWORD"] * 6 + ["EOF"]


def test_string_escapes(lexer) -> None:
    tokens = lexer.tokenize(r"'it\'s' + " + r'"a\"b\n" + "A"')
    strings = [t.value for t in tokens if t.type == "STRING"]
    assert strings == ["it's", 'a"b\n', "A"]


def test_numbers(lexer) -> None:
    values = [t.value for t in lexer.tokenize("1 2.5 .5 1e3") if t.type == "NUMBER"]
    assert values == ["1", "2.5", ".5", "1e3"]


def test_positions(lexer) -> None:
    assert [t.position for t in lexer.tokenize("a + bc")] == [0, 2, 4, 6]


def test_unexpected_character(lexer) -> None:
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        lexer.tokenize("a # b")
    assert exc_info.value.position == 2
    assert exc_info.value.expression == "a # b"


def test_unterminated_string(lexer) -> None:
    with pytest.raises(ExpressionSyntaxError, match="Unterminated string"):
        lexer.tokenize("'abc")
