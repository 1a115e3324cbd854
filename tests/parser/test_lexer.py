# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the CML lexical scanner."""

import pytest

from cmlmodel.parser.lexer import Token, TokenType, tokenize

# ###############
# Test Helpers
# ###############


def _tokens_no_eof(source: str) -> list[Token]:
    """Return all tokens except the terminal EOF token."""
    result = tokenize(source)
    assert result[-1].type == TokenType.EOF
    return result[:-1]


def _types(source: str) -> list[TokenType]:
    return [tok.type for tok in _tokens_no_eof(source)]


def _values(source: str) -> list[str]:
    return [tok.value for tok in _tokens_no_eof(source)]


# ###############
# EOF Handling
# ###############


class TestEof:
    def test_empty_string_produces_eof(self) -> None:
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].line == 1
        assert tokens[0].column == 1

    def test_whitespace_only_produces_eof(self) -> None:
        tokens = tokenize("   \t\n  ")
        assert [tok.type for tok in tokens] == [TokenType.EOF]


# ###############
# Arrows and Symbols
# ###############


class TestArrows:
    def test_arrow_family(self) -> None:
        assert _types("<-> <- -> < > -") == [
            TokenType.BIDI_ARROW,
            TokenType.BACK_ARROW,
            TokenType.ARROW,
            TokenType.LANGLE,
            TokenType.RANGLE,
            TokenType.MINUS,
        ]

    def test_arrows_without_spaces(self) -> None:
        assert _types("A<->B") == [TokenType.IDENTIFIER, TokenType.BIDI_ARROW, TokenType.IDENTIFIER]
        assert _types("[U]->[D]") == [
            TokenType.LBRACKET,
            TokenType.IDENTIFIER,
            TokenType.RBRACKET,
            TokenType.ARROW,
            TokenType.LBRACKET,
            TokenType.IDENTIFIER,
            TokenType.RBRACKET,
        ]

    def test_generic_reference_type(self) -> None:
        assert _types("List<@Money>") == [
            TokenType.IDENTIFIER,
            TokenType.LANGLE,
            TokenType.AT,
            TokenType.IDENTIFIER,
            TokenType.RANGLE,
        ]

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("{", TokenType.LBRACE),
            ("}", TokenType.RBRACE),
            ("(", TokenType.LPAREN),
            (")", TokenType.RPAREN),
            (",", TokenType.COMMA),
            (":", TokenType.COLON),
            (";", TokenType.SEMICOLON),
            ("=", TokenType.EQUALS),
            ("*", TokenType.STAR),
        ],
    )
    def test_single_character_tokens(self, source: str, expected: TokenType) -> None:
        assert _types(source) == [expected]

    def test_unknown_character_is_symbol(self) -> None:
        tokens = _tokens_no_eof("!")
        assert tokens[0].type == TokenType.SYMBOL
        assert tokens[0].value == "!"

    def test_read_only_marker(self) -> None:
        assert _types("read-only") == [TokenType.IDENTIFIER, TokenType.MINUS, TokenType.IDENTIFIER]


# ###############
# Literals and Identifiers
# ###############


class TestLiterals:
    def test_string_value_excludes_quotes(self) -> None:
        tokens = _tokens_no_eof('"hello world"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "hello world"

    def test_string_escapes(self) -> None:
        assert _values(r'"say \"hi\""') == ['say "hi"']

    def test_unknown_escape_kept_verbatim(self) -> None:
        assert _values(r'"a\qb"') == [r"a\qb"]

    def test_unterminated_string_ends_at_newline(self) -> None:
        tokens = _tokens_no_eof('"abc\nNext')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "abc"
        assert tokens[1].value == "Next"
        assert tokens[1].line == 2

    def test_braces_inside_strings_are_not_tokens(self) -> None:
        assert _types('"{ }"') == [TokenType.STRING]

    def test_numbers(self) -> None:
        assert _values("12 3.5") == ["12", "3.5"]
        assert _types("1.") == [TokenType.NUMBER, TokenType.SYMBOL]

    def test_identifiers_with_underscores_and_digits(self) -> None:
        assert _values("x_1 _y Get_Offer") == ["x_1", "_y", "Get_Offer"]
        assert _types("x_1 _y") == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_keywords_are_identifiers(self) -> None:
        assert _types("BoundedContext Aggregate def") == [TokenType.IDENTIFIER] * 3


# ###############
# Positions
# ###############


class TestPositions:
    def test_line_column_and_offset(self) -> None:
        tokens = _tokens_no_eof("a\n  b")
        assert (tokens[0].line, tokens[0].column, tokens[0].offset) == (1, 1, 0)
        assert (tokens[1].line, tokens[1].column, tokens[1].offset) == (2, 3, 4)

    def test_eof_position_after_content(self) -> None:
        tokens = tokenize("ab\n")
        assert tokens[-1].line == 2
        assert tokens[-1].offset == 3
