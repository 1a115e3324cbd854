# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Readers for ``key = value`` settings inside a block body.

Settings look like ``type = FEATURE``, ``responsibilities = "a", "b"`` or
``contains A, B``. The ``=`` is optional. A value list is a comma-separated
run of strings, identifiers or numbers.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from cmlmodel.parser.lexer import Token, TokenType

E = TypeVar("E", bound=Enum)

# ###############
# Public Interface
# ###############


def setting_occurrences(tokens: list[Token], key: str) -> list[list[Token]]:
    """Return the value tokens of every ``key [=] values`` occurrence, in order."""
    occurrences: list[list[Token]] = []
    n = len(tokens)
    for index, tok in enumerate(tokens):
        if tok.type != TokenType.IDENTIFIER or tok.value != key:
            continue
        i = index + 1
        if i < n and tokens[i].type == TokenType.EQUALS:
            i += 1
        values = _value_list(tokens, i)
        if values:
            occurrences.append(values)
    return occurrences


def string_setting(tokens: list[Token], key: str) -> str | None:
    """Return the first string value of *key*, e.g. ``domainVisionStatement = "..."``."""
    for values in setting_occurrences(tokens, key):
        for tok in values:
            if tok.type == TokenType.STRING:
                return tok.value
    return None


def word_setting(tokens: list[Token], key: str) -> str | None:
    """Return the first value of *key* whether quoted or bare, e.g. ``owner = TeamA``."""
    for values in setting_occurrences(tokens, key):
        return values[0].value
    return None


def list_setting(tokens: list[Token], key: str, *, strings_only: bool = False) -> list[str]:
    """Collect the values of every *key* occurrence into one list.

    Repeated settings are concatenated in source order.
    """
    return [
        tok.value
        for values in setting_occurrences(tokens, key)
        for tok in values
        if not strings_only or tok.type == TokenType.STRING
    ]


def enum_setting(tokens: list[Token], key: str, enum_type: type[E]) -> E | None:
    """Return the first value of *key* that names a member of *enum_type*.

    Values outside the enumeration are ignored.
    """
    members = {member.value: member for member in enum_type}
    for values in setting_occurrences(tokens, key):
        for tok in values:
            if tok.value in members:
                return members[tok.value]
    return None


# ################
# Implementation
# ################

_VALUE_TYPES = (TokenType.STRING, TokenType.IDENTIFIER, TokenType.NUMBER)


def _value_list(tokens: list[Token], i: int) -> list[Token]:
    values: list[Token] = []
    n = len(tokens)
    while i < n:
        if tokens[i].type == TokenType.AT:
            i += 1
            continue
        if tokens[i].type not in _VALUE_TYPES:
            break
        values.append(tokens[i])
        i += 1
        if i < n and tokens[i].type == TokenType.COMMA:
            i += 1
            continue
        break
    return values
