# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-fragment results of the lenient extraction steps.

Every extractor returns either :class:`Matched` with the produced value or
:class:`Skipped` with the reason the fragment was dropped. The assembler keeps
the matched values and records the skipped ones, so leniency stays observable
through :func:`cmlmodel.parser.parse_with_report` without changing the default,
never-raising behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from cmlmodel.parser.lexer import Token, TokenType

T = TypeVar("T")

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Matched(Generic[T]):
    """A fragment that was recognised and converted."""

    value: T


@dataclass(frozen=True)
class Skipped:
    """A fragment that was dropped.

    Attributes:
        reason: Short human-readable cause, e.g. ``"unterminated block"``.
        fragment: The source text of the dropped fragment.
        line: 1-based line number of the fragment in the comment-free text.
        column: 1-based column number of the fragment's first token.
    """

    reason: str
    fragment: str
    line: int
    column: int

    @classmethod
    def from_tokens(cls, reason: str, tokens: list[Token]) -> Skipped:
        """Build a Skipped outcome describing a run of tokens."""
        if not tokens:
            return cls(reason=reason, fragment="", line=0, column=0)
        fragment = " ".join(_render(tok) for tok in tokens)
        return cls(reason=reason, fragment=fragment, line=tokens[0].line, column=tokens[0].column)


# ################
# Implementation
# ################


def _render(tok: Token) -> str:
    if tok.type == TokenType.STRING:
        return f'"{tok.value}"'
    return tok.value
