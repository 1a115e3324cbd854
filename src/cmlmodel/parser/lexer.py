# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for CML documents.

Converts comment-free source text into a sequence of tokens for the block
scanner and the field extractors. The scanner is total: every input string
produces a token list, unknown characters become ``SYMBOL`` tokens.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the CML lexer.

    CML keywords (``BoundedContext``, ``Aggregate``, ``def``...) are contextual
    and therefore lexed as identifiers; consumers compare token values.
    """

    # Symbols and operators
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    LANGLE = "<"
    RANGLE = ">"
    COMMA = ","
    COLON = ":"
    SEMICOLON = ";"
    EQUALS = "="
    AT = "@"
    STAR = "*"
    MINUS = "-"
    ARROW = "->"
    BACK_ARROW = "<-"
    BIDI_ARROW = "<->"

    # Literals
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # Any other single character
    SYMBOL = "SYMBOL"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token (or decoded string content for STRING tokens).
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
        offset: 0-based index of the token's first character in the source.
    """

    type: TokenType
    value: str
    line: int
    column: int
    offset: int


def tokenize(source: str) -> list[Token]:
    """Tokenize CML source text into a sequence of tokens.

    Whitespace is consumed and not included in the output. Comments must have
    been removed beforehand (see :func:`cmlmodel.parser.preprocessor.strip_comments`).

    Args:
        source: Comment-free CML text.

    Returns:
        A list of Token objects ending with a single EOF token.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ">": TokenType.RANGLE,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "=": TokenType.EQUALS,
    "@": TokenType.AT,
    "*": TokenType.STAR,
}

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_whitespace()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column, self._pos))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, ahead: int = 1) -> str:
        """Return the character `ahead` positions further, or '' past end of input."""
        if self._pos + ahead < len(self._source):
            return self._source[self._pos + ahead]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _emit(self, token_type: TokenType, value: str, line: int, col: int, offset: int) -> None:
        self._tokens.append(Token(token_type, value, line, col, offset))

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._source) and self._current().isspace():
            self._advance()

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column
        offset = self._pos

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._emit(_SINGLE_CHAR_TOKENS[ch], ch, line, col, offset)
        elif ch == "<":
            self._scan_left_angle(line, col, offset)
        elif ch == "-":
            if self._peek() == ">":
                self._advance()  # -
                self._advance()  # >
                self._emit(TokenType.ARROW, "->", line, col, offset)
            else:
                self._advance()
                self._emit(TokenType.MINUS, "-", line, col, offset)
        elif ch == '"':
            self._scan_string(line, col, offset)
        elif ch.isdigit():
            self._scan_number(line, col, offset)
        elif ch.isalpha() or ch == "_":
            self._scan_identifier(line, col, offset)
        else:
            self._advance()
            self._emit(TokenType.SYMBOL, ch, line, col, offset)

    def _scan_left_angle(self, line: int, col: int, offset: int) -> None:
        """Scan '<', '<-' or '<->'."""
        if self._peek() == "-":
            if self._peek(2) == ">":
                for _ in range(3):
                    self._advance()
                self._emit(TokenType.BIDI_ARROW, "<->", line, col, offset)
            else:
                self._advance()  # <
                self._advance()  # -
                self._emit(TokenType.BACK_ARROW, "<-", line, col, offset)
        else:
            self._advance()
            self._emit(TokenType.LANGLE, "<", line, col, offset)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, line: int, col: int, offset: int) -> None:
        """Scan a double-quoted string literal.

        An unterminated literal ends at the end of its line; unknown escape
        sequences are kept verbatim.
        """
        self._advance()  # opening "
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()  # closing "
                break
            if ch == "\n":
                break
            if ch == "\\" and self._peek() not in ("", "\n"):
                self._advance()
                esc = self._advance()
                chars.append(_ESCAPES.get(esc, "\\" + esc))
            else:
                chars.append(self._advance())
        self._emit(TokenType.STRING, "".join(chars), line, col, offset)

    def _scan_number(self, line: int, col: int, offset: int) -> None:
        """Scan an integer or decimal literal."""
        start = self._pos
        while self._pos < len(self._source) and self._current().isdigit():
            self._advance()

        if self._current() == "." and self._peek().isdigit():
            self._advance()  # consume the '.'
            while self._pos < len(self._source) and self._current().isdigit():
                self._advance()
        self._emit(TokenType.NUMBER, self._source[start : self._pos], line, col, offset)

    def _scan_identifier(self, line: int, col: int, offset: int) -> None:
        start = self._pos
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        self._emit(TokenType.IDENTIFIER, self._source[start : self._pos], line, col, offset)
