# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural scanner: finds ``Keyword Name { ... }`` blocks by brace matching.

The scanner walks a token stream looking for a construct keyword followed by a
name and an opening brace, then counts braces until the block closes. Only
outermost occurrences are returned; scanning resumes after the closing brace,
so a block of the same keyword nested inside is never reported separately.
A block whose braces never balance is dropped and scanning resumes right after
its opening brace.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cmlmodel.parser.lexer import Token, TokenType, tokenize
from cmlmodel.parser.outcome import Matched, Skipped

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Block:
    """One ``Keyword Name { ... }`` span.

    Attributes:
        keyword: The construct keyword that opened the block.
        name: The identifier after the keyword (None for anonymous blocks).
        text: Source text from the keyword through the matching close brace.
        line: 1-based line of the keyword.
        extends: Target of an ``extends`` header clause, if any.
        is_abstract: True when the keyword is preceded by ``abstract``.
        tokens: Tokens strictly between the opening and the closing brace.
    """

    keyword: str
    name: str | None
    text: str
    line: int
    extends: str | None = None
    is_abstract: bool = False
    tokens: tuple[Token, ...] = ()
    source: str = field(default="", repr=False, compare=False)
    brace_line: int = 0

    def scan(self, keyword: str, *, name_optional: bool = False) -> list[Block]:
        """Return the outermost ``keyword`` blocks nested inside this block."""
        return _matched(self.scan_outcomes(keyword, name_optional=name_optional))

    def scan_outcomes(self, keyword: str, *, name_optional: bool = False) -> list[Matched[Block] | Skipped]:
        """Like :meth:`scan`, but also report dropped (unterminated) candidates."""
        return find_blocks(keyword, list(self.tokens), self.source, name_optional=name_optional)

    def lines(self) -> list[list[Token]]:
        """Group the block's own body tokens by source line.

        Nested ``{ ... }`` groups are left out together with the tokens that
        share a line with their opening brace (the nested block's header).
        Tokens on the line of this block's own opening brace are dropped too.
        """
        own: list[Token] = []
        depth = 0
        for tok in self.tokens:
            if tok.type == TokenType.LBRACE:
                if depth == 0:
                    own = [t for t in own if t.line != tok.line]
                depth += 1
            elif tok.type == TokenType.RBRACE:
                depth = max(depth - 1, 0)
            elif depth == 0 and tok.line != self.brace_line:
                own.append(tok)

        grouped: list[list[Token]] = []
        for tok in own:
            if grouped and grouped[-1][-1].line == tok.line:
                grouped[-1].append(tok)
            else:
                grouped.append([tok])
        return grouped


def scan_blocks(keyword: str, text: str, *, name_optional: bool = False) -> list[Block]:
    """Return every outermost ``keyword Name { ... }`` block of *text* in source order.

    Args:
        keyword: Construct keyword such as ``"BoundedContext"``.
        text: Comment-free CML text.
        name_optional: Accept ``keyword { ... }`` without a name (``ContextMap``).

    Returns:
        The balanced blocks; unterminated candidates are silently omitted.
    """
    return _matched(scan_block_outcomes(keyword, text, name_optional=name_optional))


def scan_block_outcomes(keyword: str, text: str, *, name_optional: bool = False) -> list[Matched[Block] | Skipped]:
    """Like :func:`scan_blocks`, but also report unterminated candidates as :class:`Skipped`."""
    tokens = tokenize(text)[:-1]
    return find_blocks(keyword, tokens, text, name_optional=name_optional)


def find_blocks(
    keyword: str,
    tokens: list[Token],
    source: str,
    *,
    name_optional: bool = False,
) -> list[Matched[Block] | Skipped]:
    """Scan a token list (without EOF) for ``keyword`` blocks.

    Returns one outcome per candidate header in source order: :class:`Matched`
    for balanced blocks, :class:`Skipped` for blocks that never close.
    """
    outcomes: list[Matched[Block] | Skipped] = []
    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        if tok.type != TokenType.IDENTIFIER or tok.value != keyword:
            i += 1
            continue
        header = _parse_header(tokens, i + 1, name_optional)
        if header is None:
            i += 1
            continue
        name, extends, open_index = header
        close_index = _matching_brace(tokens, open_index)
        if close_index is None:
            outcomes.append(Skipped.from_tokens("unterminated block", tokens[i : open_index + 1]))
            i = open_index + 1
            continue
        is_abstract = i > 0 and tokens[i - 1].type == TokenType.IDENTIFIER and tokens[i - 1].value == "abstract"
        block = Block(
            keyword=keyword,
            name=name,
            text=source[tok.offset : tokens[close_index].offset + 1],
            line=tok.line,
            extends=extends,
            is_abstract=is_abstract,
            tokens=tuple(tokens[open_index + 1 : close_index]),
            source=source,
            brace_line=tokens[open_index].line,
        )
        outcomes.append(Matched(block))
        i = close_index + 1
    return outcomes


# ################
# Implementation
# ################

# Header clauses accepted between the block name and its opening brace.
# Only `extends` is kept on the Block; the others are recognised and skipped.
_HEADER_CLAUSES = frozenset({"extends", "implements", "supports", "refines", "realizes"})


def _matched(outcomes: list[Matched[Block] | Skipped]) -> list[Block]:
    return [o.value for o in outcomes if isinstance(o, Matched)]


def _parse_header(tokens: list[Token], i: int, name_optional: bool) -> tuple[str | None, str | None, int] | None:
    """Parse ``Name [clause refs]* {`` starting at index *i*.

    Returns ``(name, extends, index_of_open_brace)`` or None if the tokens do
    not form a block header.
    """
    n = len(tokens)
    name: str | None = None
    if i < n and tokens[i].type == TokenType.IDENTIFIER and tokens[i].value not in _HEADER_CLAUSES:
        name = tokens[i].value
        i += 1
    elif not name_optional:
        return None

    extends: str | None = None
    while i < n and tokens[i].type == TokenType.IDENTIFIER and tokens[i].value in _HEADER_CLAUSES:
        clause = tokens[i].value
        i += 1
        refs: list[str] = []
        while i < n:
            if tokens[i].type == TokenType.AT:
                i += 1
                continue
            if tokens[i].type != TokenType.IDENTIFIER:
                break
            refs.append(tokens[i].value)
            i += 1
            if i < n and tokens[i].type == TokenType.COMMA:
                i += 1
                continue
            break
        if not refs:
            return None
        if clause == "extends":
            extends = refs[0]

    if i < n and tokens[i].type == TokenType.LBRACE:
        return name, extends, i
    return None


def _matching_brace(tokens: list[Token], open_index: int) -> int | None:
    """Return the index of the brace closing the one at *open_index*, or None."""
    depth = 0
    for index in range(open_index, len(tokens)):
        tok_type = tokens[index].type
        if tok_type == TokenType.LBRACE:
            depth += 1
        elif tok_type == TokenType.RBRACE:
            depth -= 1
            if depth == 0:
                return index
    return None
