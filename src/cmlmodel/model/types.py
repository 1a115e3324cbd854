# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type system representations for the CML domain model.

Attribute, parameter and return types are written in the dialect as plain
names (``String``, ``BigDecimal``, ``List<Money>``). Known built-in type
keywords map onto :class:`PrimitiveType`; any other name is kept as a
:class:`NamedTypeRef` so that unknown or user-defined types never fail to parse.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveType(Enum):
    """Built-in type keywords of the CML tactical dialect."""

    STRING = "String"
    INT = "int"
    INTEGER = "Integer"
    LONG_PRIMITIVE = "long"
    LONG = "Long"
    SHORT = "short"
    DOUBLE_PRIMITIVE = "double"
    DOUBLE = "Double"
    FLOAT_PRIMITIVE = "float"
    FLOAT = "Float"
    BOOLEAN_PRIMITIVE = "boolean"
    BOOLEAN = "Boolean"
    BIG_DECIMAL = "BigDecimal"
    BIG_INTEGER = "BigInteger"
    DATE = "Date"
    DATE_TIME = "DateTime"
    TIMESTAMP = "Timestamp"
    BLOB = "Blob"
    CLOB = "Clob"
    OBJECT = "Object"
    VOID = "void"


class CollectionType(Enum):
    """Collection wrappers usable around attribute and reference types."""

    LIST = "List"
    SET = "Set"
    BAG = "Bag"
    COLLECTION = "Collection"


class Visibility(Enum):
    """Visibility modifiers for attributes, references and operations."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE = "package"


class PrimitiveTypeRef(BaseModel):
    """Reference to a built-in type."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveType


class CollectionTypeRef(BaseModel):
    """Reference to a collection type such as ``List<T>`` or ``Set<T>``."""

    kind: Literal["collection"] = "collection"
    collection: CollectionType
    element_type: TypeRef


class MapTypeRef(BaseModel):
    """Reference to a parameterized ``Map<K, V>`` type."""

    kind: Literal["map"] = "map"
    key_type: TypeRef
    value_type: TypeRef


class NamedTypeRef(BaseModel):
    """Reference to any other type by name (domain objects, enums, unknown types)."""

    kind: Literal["named"] = "named"
    name: str


# A type reference: a built-in, collection, map or named type.
# The `kind` discriminator keeps JSON round-trips unambiguous.
TypeRef = Annotated[
    PrimitiveTypeRef | CollectionTypeRef | MapTypeRef | NamedTypeRef,
    _Field(discriminator="kind"),
]


class Attribute(BaseModel):
    """A typed data field of a domain object, with its validation constraints."""

    name: str
    type: TypeRef
    visibility: Visibility | None = None
    key: bool = False
    required: bool = False
    nullable: bool = False
    unique: bool = False
    email: bool = False
    past: bool = False
    future: bool = False
    not_empty: bool = False
    not_blank: bool = False
    min: str | None = None
    max: str | None = None
    range: str | None = None
    length: str | None = None
    pattern: str | None = None


class Reference(BaseModel):
    """A reference from one domain object to another, e.g. ``- List<@OrderLine> lines``."""

    name: str
    domain_object_type: str
    collection_type: CollectionType | None = None
    visibility: Visibility | None = None
    required: bool = False
    nullable: bool = False
    cascade: str | None = None
    opposite: str | None = None


class Parameter(BaseModel):
    """A single operation parameter."""

    name: str
    type: TypeRef


class StateTransition(BaseModel):
    """A ``[FROM, ... -> TO X TO2]`` annotation on an operation.

    Attributes:
        from_states: Source states, or None when the left side is empty.
        to_states: Target states.
        is_exclusive: True when the targets are exclusive alternatives (``X``).
    """

    from_states: list[str] | None = None
    to_states: list[str] = _Field(default_factory=list)
    is_exclusive: bool = False


class Operation(BaseModel):
    """An operation of a domain object or service."""

    name: str
    return_type: TypeRef = _Field(default_factory=lambda: PrimitiveTypeRef(primitive=PrimitiveType.VOID))
    parameters: list[Parameter] = _Field(default_factory=list)
    visibility: Visibility | None = None
    is_read_only: bool = False
    state_transition: StateTransition | None = None


def type_name(ref: TypeRef) -> str:
    """Render a type reference back to its dialect spelling, e.g. ``List<Money>``."""
    if isinstance(ref, PrimitiveTypeRef):
        return ref.primitive.value
    if isinstance(ref, CollectionTypeRef):
        return f"{ref.collection.value}<{type_name(ref.element_type)}>"
    if isinstance(ref, MapTypeRef):
        return f"Map<{type_name(ref.key_type)},{type_name(ref.value_type)}>"
    return ref.name


# Resolve forward references for models that use TypeRef.
CollectionTypeRef.model_rebuild()
MapTypeRef.model_rebuild()
Attribute.model_rebuild()
Parameter.model_rebuild()
Operation.model_rebuild()
