# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line-level extraction of attributes, references and operations.

Domain object bodies are read one source line at a time. Every line is
classified as a reference, an operation or (by default) an attribute and
handed to the matching extractor. Lines that do not fit their grammar are
reported as :class:`~cmlmodel.parser.outcome.Skipped` and left out of the model.

Grammar (``?`` optional, ``*`` repeated)::

    reference  := "-"? visibility? (Collection "<")? "@"? Type ">"? name trailer*
    operation  := ("def" | "*")? visibility? ReturnType? name "(" params ")" trailer* transition?
    attribute  := visibility? Type name constraint*
    transition := "[" states? "->" states "]"
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field

from cmlmodel.model.types import (
    Attribute,
    CollectionType,
    CollectionTypeRef,
    MapTypeRef,
    NamedTypeRef,
    Operation,
    Parameter,
    PrimitiveType,
    PrimitiveTypeRef,
    Reference,
    StateTransition,
    TypeRef,
    Visibility,
)
from cmlmodel.parser.lexer import Token, TokenType
from cmlmodel.parser.outcome import Matched, Skipped

# ###############
# Public Interface
# ###############


class LineKind(enum.Enum):
    """Classification of a domain object body line."""

    REFERENCE = "reference"
    OPERATION = "operation"
    ATTRIBUTE = "attribute"


@dataclass
class Members:
    """Everything extracted from the body lines of one domain object.

    Attributes:
        attributes: Attributes in source order.
        references: References in source order.
        operations: Operations in source order.
        flags: Bare flag keywords found on their own line (e.g. ``aggregateRoot``).
        skipped: Lines that were dropped, with the reason.
    """

    attributes: list[Attribute] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)
    flags: set[str] = field(default_factory=set)
    skipped: list[Skipped] = field(default_factory=list)


def classify_line(line: list[Token]) -> LineKind:
    """Decide which extractor a non-empty body line belongs to.

    A leading ``-`` marks a reference and a leading ``def`` or ``*`` an
    operation. Otherwise an embedded ``@`` sigil marks a reference, and
    everything else is treated as an attribute.
    """
    first = line[0]
    if first.type == TokenType.MINUS:
        return LineKind.REFERENCE
    if first.type == TokenType.STAR or (first.type == TokenType.IDENTIFIER and first.value == "def"):
        return LineKind.OPERATION
    if any(tok.type == TokenType.AT for tok in line):
        return LineKind.REFERENCE
    return LineKind.ATTRIBUTE


def extract_members(
    lines: list[list[Token]],
    *,
    flags: frozenset[str] = frozenset(),
    with_operations: bool = True,
) -> Members:
    """Extract the members of a domain object from its body lines.

    Args:
        lines: Body tokens grouped by line (see :meth:`Block.lines`).
        flags: Keywords that, alone on a line, are recorded as flags.
        with_operations: Whether operation lines are allowed for this kind of object.

    Returns:
        The extracted members. Never raises.
    """
    members = Members()
    for raw in lines:
        line = _strip_terminators(raw)
        if not line:
            continue
        if len(line) == 1 and line[0].type == TokenType.IDENTIFIER and line[0].value in flags:
            members.flags.add(line[0].value)
            continue

        kind = classify_line(line)
        if kind == LineKind.REFERENCE:
            ref_outcome = extract_reference(line)
            if isinstance(ref_outcome, Matched):
                members.references.append(ref_outcome.value)
            else:
                members.skipped.append(ref_outcome)
        elif kind == LineKind.OPERATION:
            if not with_operations:
                members.skipped.append(Skipped.from_tokens("operation not allowed here", line))
                continue
            op_outcome = extract_operation(line)
            if isinstance(op_outcome, Matched):
                members.operations.append(op_outcome.value)
            else:
                members.skipped.append(op_outcome)
        else:
            attr_outcome = extract_attribute(line)
            if isinstance(attr_outcome, Matched):
                members.attributes.append(attr_outcome.value)
            else:
                members.skipped.append(attr_outcome)
    return members


def extract_service_operations(lines: list[list[Token]]) -> tuple[list[Operation], list[Skipped]]:
    """Extract the operations of a service body.

    Service operations may omit the ``def`` keyword, so any line with a
    parameter list is read as an operation.
    """
    operations: list[Operation] = []
    skipped: list[Skipped] = []
    for raw in lines:
        line = _strip_terminators(raw)
        if not line:
            continue
        if not any(tok.type == TokenType.LPAREN for tok in line):
            skipped.append(Skipped.from_tokens("not a service operation", line))
            continue
        outcome = extract_operation(line)
        if isinstance(outcome, Matched):
            operations.append(outcome.value)
        else:
            skipped.append(outcome)
    return operations, skipped


def extract_attribute(line: list[Token]) -> Matched[Attribute] | Skipped:
    """Parse ``Type name [constraints...]``.

    Bare constraint keywords set boolean flags, ``key="value"`` pairs set valued
    constraints, ``!keyword`` negations and unknown tokens are ignored.
    """
    line = _strip_terminators(line)
    i, visibility = _visibility(line, 0)
    parsed = parse_type_ref(line, i)
    if parsed is None:
        return Skipped.from_tokens("not an attribute", line)
    type_ref, i = parsed
    if i >= len(line) or line[i].type != TokenType.IDENTIFIER:
        return Skipped.from_tokens("attribute without a name", line)
    name = line[i].value
    booleans, valued = _constraints(line[i + 1 :])
    return Matched(Attribute(name=name, type=type_ref, visibility=visibility, **booleans, **valued))


def extract_reference(line: list[Token]) -> Matched[Reference] | Skipped:
    """Parse ``- [List<]@Type[>] name [opposite x] [cascade="..."]``."""
    line = _strip_terminators(line)
    n = len(line)
    i = 1 if n and line[0].type == TokenType.MINUS else 0
    i, visibility = _visibility(line, i)

    collection: CollectionType | None = None
    if (
        i + 1 < n
        and line[i].type == TokenType.IDENTIFIER
        and line[i].value in _COLLECTIONS
        and line[i + 1].type == TokenType.LANGLE
    ):
        collection = _COLLECTIONS[line[i].value]
        i += 2
    if i < n and line[i].type == TokenType.AT:
        i += 1
    if i >= n or line[i].type != TokenType.IDENTIFIER:
        return Skipped.from_tokens("reference without a target type", line)
    target = line[i].value
    i += 1
    if i < n and line[i].type == TokenType.RANGLE:
        i += 1
    if i >= n or line[i].type != TokenType.IDENTIFIER:
        return Skipped.from_tokens("reference without a name", line)
    name = line[i].value

    trailer = line[i + 1 :]
    booleans, _ = _constraints(trailer)
    return Matched(
        Reference(
            name=name,
            domain_object_type=target,
            collection_type=collection,
            visibility=visibility,
            required=booleans.get("required", False),
            nullable=booleans.get("nullable", False),
            cascade=_assignment(trailer, "cascade"),
            opposite=_word_after(trailer, "opposite"),
        )
    )


def extract_operation(line: list[Token]) -> Matched[Operation] | Skipped:
    """Parse ``def ReturnType name(Type p, @Type q) [: read-only] [[FROM -> TO]]``."""
    line = _strip_terminators(line)
    n = len(line)
    i = 0
    if n and (line[0].type == TokenType.STAR or (line[0].type == TokenType.IDENTIFIER and line[0].value == "def")):
        i = 1
    i, visibility = _visibility(line, i)
    if i < n and line[i].type == TokenType.IDENTIFIER and line[i].value == "abstract":
        i += 1

    open_index = _find(line, TokenType.LPAREN, i)
    if open_index is None or open_index == i or line[open_index - 1].type != TokenType.IDENTIFIER:
        return Skipped.from_tokens("not an operation", line)
    close_index = _find(line, TokenType.RPAREN, open_index)
    if close_index is None:
        return Skipped.from_tokens("unclosed parameter list", line)

    return_tokens = line[i : open_index - 1]
    return_type: TypeRef = PrimitiveTypeRef(primitive=PrimitiveType.VOID)
    if return_tokens:
        parsed = parse_type_ref(return_tokens, 0)
        if parsed is None:
            return Skipped.from_tokens("unreadable return type", line)
        return_type = parsed[0]

    trailer = line[close_index + 1 :]
    return Matched(
        Operation(
            name=line[open_index - 1].value,
            return_type=return_type,
            parameters=_parameters(line[open_index + 1 : close_index]),
            visibility=visibility,
            is_read_only=_is_read_only(trailer),
            state_transition=parse_state_transition(trailer),
        )
    )


def parse_state_transition(tokens: list[Token]) -> StateTransition | None:
    """Parse the first ``[from -> to]`` bracket in *tokens*.

    ``from`` is split on commas and is None when empty. ``to`` is split on a
    standalone ``X``/``x`` marker when one is present (which also marks the
    targets exclusive), otherwise on commas. A bracket without exactly one
    arrow is not a transition.
    """
    open_index = _find(tokens, TokenType.LBRACKET, 0)
    if open_index is None:
        return None
    close_index = _find(tokens, TokenType.RBRACKET, open_index)
    if close_index is None:
        return None
    inner = tokens[open_index + 1 : close_index]
    arrows = [index for index, tok in enumerate(inner) if tok.type == TokenType.ARROW]
    if len(arrows) != 1:
        return None
    left = inner[: arrows[0]]
    right = inner[arrows[0] + 1 :]

    from_states = _split_names(left, lambda tok: tok.type == TokenType.COMMA)
    is_exclusive = any(_is_exclusive_marker(tok) for tok in right)
    if is_exclusive:
        to_states = _split_names(right, _is_exclusive_marker)
    else:
        to_states = _split_names(right, lambda tok: tok.type == TokenType.COMMA)
    return StateTransition(
        from_states=from_states or None,
        to_states=to_states,
        is_exclusive=is_exclusive,
    )


def parse_type_ref(tokens: list[Token], i: int) -> tuple[TypeRef, int] | None:
    """Parse a type reference starting at index *i*.

    Handles built-in types, ``List<T>``/``Set<T>``/``Bag<T>``/``Collection<T>``,
    ``Map<K, V>`` and any other name. A leading ``@`` sigil is ignored.
    Generic arguments nested deeper than ``MAX_TYPE_DEPTH`` levels are
    rejected like any other unreadable type.

    Returns:
        ``(type_ref, next_index)`` or None if no type starts at *i*.
    """
    return _type_ref(tokens, i, 0)


# ################
# Implementation
# ################

MAX_TYPE_DEPTH = 64

_PRIMITIVE_TYPES: dict[str, PrimitiveType] = {p.value: p for p in PrimitiveType}

_COLLECTIONS: dict[str, CollectionType] = {c.value: c for c in CollectionType}


def _type_ref(tokens: list[Token], i: int, depth: int) -> tuple[TypeRef, int] | None:
    if depth > MAX_TYPE_DEPTH:
        return None
    n = len(tokens)
    if i < n and tokens[i].type == TokenType.AT:
        i += 1
    if i >= n or tokens[i].type != TokenType.IDENTIFIER:
        return None
    name = tokens[i].value
    i += 1
    if i >= n or tokens[i].type != TokenType.LANGLE:
        return _simple_type_ref(name), i

    if name == "Map":
        key = _type_ref(tokens, i + 1, depth + 1)
        if key is None or key[1] >= n or tokens[key[1]].type != TokenType.COMMA:
            return None
        value = _type_ref(tokens, key[1] + 1, depth + 1)
        if value is None or value[1] >= n or tokens[value[1]].type != TokenType.RANGLE:
            return None
        return MapTypeRef(key_type=key[0], value_type=value[0]), value[1] + 1

    inner = _type_ref(tokens, i + 1, depth + 1)
    if inner is None or inner[1] >= n or tokens[inner[1]].type != TokenType.RANGLE:
        return None
    if name in _COLLECTIONS:
        return CollectionTypeRef(collection=_COLLECTIONS[name], element_type=inner[0]), inner[1] + 1
    # Unknown generic wrapper: keep its spelling as a named type.
    spelled = "".join(tok.value for tok in tokens[i - 1 : inner[1] + 1] if tok.type != TokenType.AT)
    return NamedTypeRef(name=spelled), inner[1] + 1


_VISIBILITIES: dict[str, Visibility] = {v.value: v for v in Visibility}

# Bare constraint keyword -> Attribute field name.
_BOOLEAN_CONSTRAINTS: dict[str, str] = {
    "required": "required",
    "nullable": "nullable",
    "unique": "unique",
    "key": "key",
    "email": "email",
    "past": "past",
    "future": "future",
    "notEmpty": "not_empty",
    "notBlank": "not_blank",
}

_VALUED_CONSTRAINTS = frozenset({"min", "max", "range", "length", "pattern"})


def _simple_type_ref(name: str) -> TypeRef:
    if name in _PRIMITIVE_TYPES:
        return PrimitiveTypeRef(primitive=_PRIMITIVE_TYPES[name])
    return NamedTypeRef(name=name)


def _strip_terminators(line: list[Token]) -> list[Token]:
    """Drop trailing semicolons."""
    end = len(line)
    while end > 0 and line[end - 1].type == TokenType.SEMICOLON:
        end -= 1
    return line[:end]


def _visibility(line: list[Token], i: int) -> tuple[int, Visibility | None]:
    """Consume an optional visibility modifier at *i*, if more tokens follow it."""
    if i + 1 < len(line) and line[i].type == TokenType.IDENTIFIER and line[i].value in _VISIBILITIES:
        return i + 1, _VISIBILITIES[line[i].value]
    return i, None


def _find(tokens: list[Token], token_type: TokenType, start: int) -> int | None:
    for index in range(start, len(tokens)):
        if tokens[index].type == token_type:
            return index
    return None


def _constraints(tokens: list[Token]) -> tuple[dict[str, bool], dict[str, str]]:
    """Read constraint tokens into boolean and valued constraint dicts."""
    booleans: dict[str, bool] = {}
    valued: dict[str, str] = {}
    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        if tok.type == TokenType.SYMBOL and tok.value == "!":
            i += 2  # negated keyword, e.g. !nullable
            continue
        if tok.type == TokenType.IDENTIFIER and i + 1 < n and tokens[i + 1].type == TokenType.EQUALS:
            if i + 2 < n and tokens[i + 2].type in (TokenType.STRING, TokenType.NUMBER, TokenType.IDENTIFIER):
                if tok.value in _VALUED_CONSTRAINTS and tokens[i + 2].value:
                    valued[tok.value] = tokens[i + 2].value
                i += 3
            else:
                i += 2
            continue
        if tok.type == TokenType.IDENTIFIER and tok.value in _BOOLEAN_CONSTRAINTS:
            booleans[_BOOLEAN_CONSTRAINTS[tok.value]] = True
        i += 1
    return booleans, valued


def _assignment(tokens: list[Token], key: str) -> str | None:
    """Return the value of ``key="value"`` in *tokens*, if present."""
    for index in range(len(tokens) - 2):
        if (
            tokens[index].type == TokenType.IDENTIFIER
            and tokens[index].value == key
            and tokens[index + 1].type == TokenType.EQUALS
            and tokens[index + 2].type in (TokenType.STRING, TokenType.IDENTIFIER)
        ):
            return tokens[index + 2].value
    return None


def _word_after(tokens: list[Token], key: str) -> str | None:
    """Return the identifier following the keyword *key*, e.g. ``opposite order``."""
    for index in range(len(tokens) - 1):
        if tokens[index].type == TokenType.IDENTIFIER and tokens[index].value == key:
            nxt = tokens[index + 1]
            if nxt.type == TokenType.AT and index + 2 < len(tokens):
                nxt = tokens[index + 2]
            if nxt.type == TokenType.IDENTIFIER:
                return nxt.value
    return None


def _parameters(tokens: list[Token]) -> list[Parameter]:
    """Parse comma-separated ``Type name`` pairs; malformed pairs are dropped."""
    params: list[Parameter] = []
    group: list[Token] = []
    depth = 0
    for tok in [*tokens, None]:
        if tok is None or (tok.type == TokenType.COMMA and depth == 0):
            param = _parameter([t for t in group if t.type != TokenType.AT])
            if param is not None:
                params.append(param)
            group = []
            continue
        if tok.type == TokenType.LANGLE:
            depth += 1
        elif tok.type == TokenType.RANGLE:
            depth = max(depth - 1, 0)
        group.append(tok)
    return params


def _parameter(tokens: list[Token]) -> Parameter | None:
    if len(tokens) < 2 or tokens[-1].type != TokenType.IDENTIFIER:
        return None
    parsed = parse_type_ref(tokens[:-1], 0)
    if parsed is None:
        return None
    return Parameter(name=tokens[-1].value, type=parsed[0])


def _is_read_only(tokens: list[Token]) -> bool:
    """True for a ``read-only`` marker or a ``: read`` access suffix."""
    for index, tok in enumerate(tokens):
        if tok.type != TokenType.IDENTIFIER or tok.value != "read":
            continue
        nxt = tokens[index + 1 : index + 3]
        if len(nxt) == 2 and nxt[0].type == TokenType.MINUS and nxt[1].value == "only":
            return True
        if index > 0 and tokens[index - 1].type == TokenType.COLON:
            return True
    return False


def _is_exclusive_marker(tok: Token) -> bool:
    return tok.type == TokenType.IDENTIFIER and tok.value in ("X", "x")


def _split_names(tokens: list[Token], is_separator: Callable[[Token], bool]) -> list[str]:
    names: list[str] = []
    current: list[str] = []
    for tok in tokens:
        if is_separator(tok):
            if current:
                names.append("".join(current))
            current = []
        else:
            current.append(tok.value)
    if current:
        names.append("".join(current))
    return names
