# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Relationship extraction from the tokens of a ``ContextMap`` block.

Symbolic forms::

    A [P]<->[P] B              Partnership (the [P] annotations are optional)
    A [SK]<->[SK] B            SharedKernel
    A [U,OHS]->[D,ACL] B       UpstreamDownstream, A is upstream
    A [D,CF]<-[U,PL] B         UpstreamDownstream, B is upstream
    A [U,S]->[D,C] B           CustomerSupplier

Keyword forms::

    A Partnership B            A Shared-Kernel B
    A Upstream-Downstream B    A Downstream-Upstream B
    A Customer-Supplier B      A Supplier-Customer B

Any form may be followed by ``: Name`` and by a ``{ ... }`` body carrying
``implementationTechnology``, ``exposedAggregates`` and ``downstreamRights``.
"""

from __future__ import annotations

import enum

from cmlmodel.model.relationships import (
    CustomerSupplier,
    DownstreamGovernanceRights,
    DownstreamRole,
    Partnership,
    Relationship,
    SharedKernel,
    UpstreamDownstream,
    UpstreamRole,
)
from cmlmodel.parser.lexer import Token, TokenType
from cmlmodel.parser.outcome import Matched, Skipped
from cmlmodel.parser.settings import enum_setting, list_setting, string_setting

# ###############
# Public Interface
# ###############


def parse_relationships(tokens: list[Token]) -> list[Matched[Relationship] | Skipped]:
    """Find every relationship in a context map body, in source order.

    Each connector (arrow or relationship keyword) yields one outcome.
    Duplicate relationships are all kept.

    Args:
        tokens: Tokens between the braces of the ``ContextMap`` block.

    Returns:
        A :class:`Matched` relationship or a :class:`Skipped` fragment per
        connector found.
    """
    outcomes: list[Matched[Relationship] | Skipped] = []
    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        if tok.type == TokenType.LBRACE:
            # A body not attached to any relationship.
            i = _skip_group(tokens, i)
            continue
        connector = _connector_at(tokens, i)
        if connector is None:
            i += 1
            continue
        shape, end = connector
        outcome, i = _relationship(tokens, i, end, shape)
        outcomes.append(outcome)
    return outcomes


def map_upstream_roles(abbreviations: list[str]) -> list[UpstreamRole]:
    """Map role abbreviations to upstream roles; others are dropped."""
    return [_UPSTREAM_ROLES[a] for a in abbreviations if a in _UPSTREAM_ROLES]


def map_downstream_roles(abbreviations: list[str]) -> list[DownstreamRole]:
    """Map role abbreviations to downstream roles; others are dropped."""
    return [_DOWNSTREAM_ROLES[a] for a in abbreviations if a in _DOWNSTREAM_ROLES]


def is_customer_supplier(left_roles: list[str], right_roles: list[str]) -> bool:
    """Decide Customer-Supplier versus plain Upstream-Downstream.

    True when the physically-left role bracket contains ``S`` or the
    physically-right one contains ``C``, regardless of arrow direction. The
    check runs before the ``<-`` swap, so ``A [C]<-[S] B`` is a plain
    Upstream-Downstream relationship with B upstream.
    """
    return "S" in left_roles or "C" in right_roles


# ################
# Implementation
# ################

_UPSTREAM_ROLES: dict[str, UpstreamRole] = {
    "PL": UpstreamRole.PUBLISHED_LANGUAGE,
    "OHS": UpstreamRole.OPEN_HOST_SERVICE,
}

_DOWNSTREAM_ROLES: dict[str, DownstreamRole] = {
    "ACL": DownstreamRole.ANTICORRUPTION_LAYER,
    "CF": DownstreamRole.CONFORMIST,
}


class _Shape(enum.Enum):
    """What a connector says about its two sides."""

    SYMMETRIC = "symmetric"  # <->
    LEFT_UPSTREAM = "left-upstream"  # ->
    RIGHT_UPSTREAM = "right-upstream"  # <-
    PARTNERSHIP = "Partnership"
    SHARED_KERNEL = "Shared-Kernel"
    UPSTREAM_DOWNSTREAM = "Upstream-Downstream"
    DOWNSTREAM_UPSTREAM = "Downstream-Upstream"
    CUSTOMER_SUPPLIER = "Customer-Supplier"
    SUPPLIER_CUSTOMER = "Supplier-Customer"


_ARROWS: dict[TokenType, _Shape] = {
    TokenType.BIDI_ARROW: _Shape.SYMMETRIC,
    TokenType.ARROW: _Shape.LEFT_UPSTREAM,
    TokenType.BACK_ARROW: _Shape.RIGHT_UPSTREAM,
}

# (first word, second word or None) -> shape
_KEYWORDS: dict[tuple[str, str | None], _Shape] = {
    ("Partnership", None): _Shape.PARTNERSHIP,
    ("Shared", "Kernel"): _Shape.SHARED_KERNEL,
    ("Upstream", "Downstream"): _Shape.UPSTREAM_DOWNSTREAM,
    ("Downstream", "Upstream"): _Shape.DOWNSTREAM_UPSTREAM,
    ("Customer", "Supplier"): _Shape.CUSTOMER_SUPPLIER,
    ("Supplier", "Customer"): _Shape.SUPPLIER_CUSTOMER,
}


def _connector_at(tokens: list[Token], i: int) -> tuple[_Shape, int] | None:
    """Return ``(shape, index_after_connector)`` if a connector starts at *i*."""
    tok = tokens[i]
    if tok.type in _ARROWS:
        return _ARROWS[tok.type], i + 1
    if tok.type != TokenType.IDENTIFIER:
        return None
    if (tok.value, None) in _KEYWORDS:
        return _KEYWORDS[(tok.value, None)], i + 1
    if i + 2 < len(tokens) and tokens[i + 1].type == TokenType.MINUS:
        key = (tok.value, tokens[i + 2].value)
        if key in _KEYWORDS and tokens[i + 2].type == TokenType.IDENTIFIER:
            return _KEYWORDS[key], i + 3
    return None


def _relationship(
    tokens: list[Token], start: int, end: int, shape: _Shape
) -> tuple[Matched[Relationship] | Skipped, int]:
    """Build the relationship around the connector ``tokens[start:end]``.

    Returns the outcome and the index to resume scanning from.
    """
    left = _left_side(tokens, start)
    right = _right_side(tokens, end)
    if left is None or right is None:
        return Skipped.from_tokens("relationship without two participants", tokens[start:end]), end
    left_name, left_roles, _ = left
    right_name, right_roles, i = right

    name: str | None = None
    if i + 1 < len(tokens) and tokens[i].type == TokenType.COLON and tokens[i + 1].type == TokenType.IDENTIFIER:
        name = tokens[i + 1].value
        i += 2

    body: list[Token] = []
    if i < len(tokens) and tokens[i].type == TokenType.LBRACE:
        close = _skip_group(tokens, i)
        body = tokens[i + 1 : close - 1]
        i = close

    relationship = _build(shape, left_name, left_roles, right_name, right_roles, name, body)
    return Matched(relationship), i


def _build(
    shape: _Shape,
    left_name: str,
    left_roles: list[str],
    right_name: str,
    right_roles: list[str],
    name: str | None,
    body: list[Token],
) -> Relationship:
    technology = string_setting(body, "implementationTechnology")

    if shape == _Shape.SYMMETRIC:
        shape = _Shape.SHARED_KERNEL if "SK" in left_roles or "SK" in right_roles else _Shape.PARTNERSHIP
    if shape == _Shape.PARTNERSHIP:
        return Partnership(
            participant1=left_name, participant2=right_name, name=name, implementation_technology=technology
        )
    if shape == _Shape.SHARED_KERNEL:
        return SharedKernel(
            participant1=left_name, participant2=right_name, name=name, implementation_technology=technology
        )

    if shape == _Shape.LEFT_UPSTREAM:
        customer_supplier = is_customer_supplier(left_roles, right_roles)
        left_is_upstream = True
    elif shape == _Shape.RIGHT_UPSTREAM:
        customer_supplier = is_customer_supplier(left_roles, right_roles)
        left_is_upstream = False
    else:
        customer_supplier = shape in (_Shape.CUSTOMER_SUPPLIER, _Shape.SUPPLIER_CUSTOMER)
        left_is_upstream = shape in (_Shape.UPSTREAM_DOWNSTREAM, _Shape.SUPPLIER_CUSTOMER)

    if left_is_upstream:
        upstream, upstream_roles, downstream, downstream_roles = left_name, left_roles, right_name, right_roles
    else:
        upstream, upstream_roles, downstream, downstream_roles = right_name, right_roles, left_name, left_roles

    variant = CustomerSupplier if customer_supplier else UpstreamDownstream
    return variant(
        upstream=upstream,
        downstream=downstream,
        upstream_roles=map_upstream_roles(upstream_roles),
        downstream_roles=map_downstream_roles(downstream_roles),
        exposed_aggregates=list_setting(body, "exposedAggregates"),
        downstream_rights=enum_setting(body, "downstreamRights", DownstreamGovernanceRights),
        name=name,
        implementation_technology=technology,
    )


def _left_side(tokens: list[Token], connector: int) -> tuple[str, list[str], int] | None:
    """Read ``Name [roles]`` ending right before *connector*."""
    j = connector - 1
    roles: list[str] = []
    if j >= 0 and tokens[j].type == TokenType.RBRACKET:
        open_index = j - 1
        while open_index >= 0 and tokens[open_index].type != TokenType.LBRACKET:
            open_index -= 1
        if open_index < 0:
            return None
        roles = _roles(tokens[open_index + 1 : j])
        j = open_index - 1
    if j < 0 or tokens[j].type != TokenType.IDENTIFIER:
        return None
    return tokens[j].value, roles, j


def _right_side(tokens: list[Token], i: int) -> tuple[str, list[str], int] | None:
    """Read ``[roles] Name`` starting at *i*; returns the index after the name."""
    n = len(tokens)
    roles: list[str] = []
    if i < n and tokens[i].type == TokenType.LBRACKET:
        close_index = i + 1
        while close_index < n and tokens[close_index].type != TokenType.RBRACKET:
            close_index += 1
        if close_index >= n:
            return None
        roles = _roles(tokens[i + 1 : close_index])
        i = close_index + 1
    if i < n and tokens[i].type == TokenType.AT:
        i += 1
    if i >= n or tokens[i].type != TokenType.IDENTIFIER:
        return None
    return tokens[i].value, roles, i + 1


def _roles(tokens: list[Token]) -> list[str]:
    return [tok.value for tok in tokens if tok.type == TokenType.IDENTIFIER]


def _skip_group(tokens: list[Token], open_index: int) -> int:
    """Return the index after the brace group opening at *open_index* (or the end)."""
    depth = 0
    for index in range(open_index, len(tokens)):
        if tokens[index].type == TokenType.LBRACE:
            depth += 1
        elif tokens[index].type == TokenType.RBRACE:
            depth -= 1
            if depth == 0:
                return index + 1
    return len(tokens)
