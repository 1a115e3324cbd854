# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""High-level tests demonstrating how to construct the CML domain model."""

import pytest
from pydantic import TypeAdapter, ValidationError

from cmlmodel.model import (
    Aggregate,
    Attribute,
    BoundedContext,
    CollectionType,
    CollectionTypeRef,
    ContextMap,
    ContextMappingModel,
    CustomerSupplier,
    Entity,
    MapTypeRef,
    NamedTypeRef,
    Operation,
    Partnership,
    PrimitiveType,
    PrimitiveTypeRef,
    Reference,
    Relationship,
    SharedKernel,
    StateTransition,
    UpstreamDownstream,
    UpstreamRole,
    UseCase,
    UserRequirement,
    UserStory,
    participants,
    type_name,
)


def test_primitive_attribute() -> None:
    """An attribute can reference a built-in type."""
    attr = Attribute(name="email", type=PrimitiveTypeRef(primitive=PrimitiveType.STRING), required=True)
    assert attr.type == PrimitiveTypeRef(primitive=PrimitiveType.STRING)
    assert attr.required is True
    assert attr.nullable is False
    assert attr.pattern is None


def test_type_name_rendering() -> None:
    """Type references render back to their dialect spelling."""
    money = NamedTypeRef(name="Money")
    assert type_name(PrimitiveTypeRef(primitive=PrimitiveType.BIG_DECIMAL)) == "BigDecimal"
    assert type_name(CollectionTypeRef(collection=CollectionType.SET, element_type=money)) == "Set<Money>"
    nested = MapTypeRef(
        key_type=PrimitiveTypeRef(primitive=PrimitiveType.STRING),
        value_type=CollectionTypeRef(collection=CollectionType.LIST, element_type=money),
    )
    assert type_name(nested) == "Map<String,List<Money>>"


def test_operation_defaults_to_void() -> None:
    op = Operation(name="reset")
    assert op.return_type == PrimitiveTypeRef(primitive=PrimitiveType.VOID)
    assert op.parameters == []
    assert op.state_transition is None


def test_state_transition_defaults() -> None:
    transition = StateTransition(to_states=["CREATED"])
    assert transition.from_states is None
    assert transition.is_exclusive is False


def test_containers_default_to_empty_lists() -> None:
    """Absent constructs are empty lists, never None."""
    model = ContextMappingModel()
    assert model.context_map is None
    assert model.bounded_contexts == []
    aggregate = Aggregate(name="Orders")
    assert aggregate.entities == []
    assert aggregate.value_objects == []
    assert aggregate.services == []
    assert aggregate.commands == []
    assert aggregate.events == []
    assert BoundedContext(name="Sales").aggregates == []
    assert ContextMap().relationships == []


def test_default_lists_are_not_shared() -> None:
    first = Entity(name="A")
    second = Entity(name="B")
    assert first.attributes is not second.attributes


def test_building_a_tree_bottom_up() -> None:
    customer = Entity(
        name="Customer",
        is_aggregate_root=True,
        attributes=[Attribute(name="name", type=PrimitiveTypeRef(primitive=PrimitiveType.STRING))],
        references=[Reference(name="addresses", domain_object_type="Address", collection_type=CollectionType.LIST)],
    )
    context = BoundedContext(name="Customers", aggregates=[Aggregate(name="Customers", entities=[customer])])
    model = ContextMappingModel(bounded_contexts=[context])
    assert model.bounded_contexts[0].aggregates[0].entities[0].references[0].domain_object_type == "Address"


# ###############
# Relationships
# ###############


def test_relationship_union_is_discriminated_by_type() -> None:
    adapter: TypeAdapter[Relationship] = TypeAdapter(Relationship)
    rel = adapter.validate_python({"type": "SharedKernel", "participant1": "A", "participant2": "B"})
    assert isinstance(rel, SharedKernel)
    rel = adapter.validate_python(
        {"type": "CustomerSupplier", "upstream": "A", "downstream": "B", "upstream_roles": ["OPEN_HOST_SERVICE"]}
    )
    assert isinstance(rel, CustomerSupplier)
    assert rel.upstream_roles == [UpstreamRole.OPEN_HOST_SERVICE]


def test_unknown_relationship_type_is_rejected() -> None:
    adapter: TypeAdapter[Relationship] = TypeAdapter(Relationship)
    with pytest.raises(ValidationError):
        adapter.validate_python({"type": "Conformist", "participant1": "A", "participant2": "B"})


def test_participants() -> None:
    assert participants(Partnership(participant1="A", participant2="B")) == ("A", "B")
    assert participants(UpstreamDownstream(upstream="U", downstream="D")) == ("U", "D")


def test_user_requirement_union() -> None:
    adapter: TypeAdapter[UserRequirement] = TypeAdapter(UserRequirement)
    assert isinstance(adapter.validate_python({"type": "UseCase", "name": "Buy"}), UseCase)
    assert isinstance(adapter.validate_python({"type": "UserStory", "name": "Sell"}), UserStory)
