# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read-only lookups over a parsed ContextMappingModel.

Every query tolerates missing data: unknown names yield an empty list or
None, never an exception. Name lookups return the first match in source
order, since bounded context and aggregate names are not required to be
unique.
"""

from __future__ import annotations

from cmlmodel.model.entities import (
    RULE_PREFIX,
    Aggregate,
    BoundedContext,
    CommandEvent,
    ContextMappingModel,
    DomainEvent,
    Entity,
    Service,
    ValueObject,
)
from cmlmodel.model.relationships import (
    CustomerSupplier,
    Relationship,
    UpstreamDownstream,
    participants,
)

# ###############
# Public Interface
# ###############


def list_bounded_contexts(model: ContextMappingModel) -> list[BoundedContext]:
    """Return all bounded contexts in source order."""
    return list(model.bounded_contexts)


def find_bounded_context(model: ContextMappingModel, name: str) -> BoundedContext | None:
    """Return the first bounded context called *name*, or None."""
    for context in model.bounded_contexts:
        if context.name == name:
            return context
    return None


def list_aggregates(model: ContextMappingModel, context_name: str) -> list[Aggregate]:
    """Return the aggregates of the named bounded context."""
    context = find_bounded_context(model, context_name)
    return list(context.aggregates) if context else []


def find_aggregate(model: ContextMappingModel, context_name: str, aggregate_name: str) -> Aggregate | None:
    """Return the first aggregate called *aggregate_name* inside the named context."""
    for aggregate in list_aggregates(model, context_name):
        if aggregate.name == aggregate_name:
            return aggregate
    return None


def relationships_for(model: ContextMappingModel, name: str) -> list[Relationship]:
    """Return every relationship in which *name* takes part, on either side."""
    if model.context_map is None:
        return []
    return [rel for rel in model.context_map.relationships if name in participants(rel)]


def upstream_relationships(model: ContextMappingModel, name: str) -> list[UpstreamDownstream | CustomerSupplier]:
    """Return the directed relationships in which *name* is the upstream context."""
    return [rel for rel in _directed(model) if rel.upstream == name]


def downstream_relationships(model: ContextMappingModel, name: str) -> list[UpstreamDownstream | CustomerSupplier]:
    """Return the directed relationships in which *name* is the downstream context."""
    return [rel for rel in _directed(model) if rel.downstream == name]


def list_entities(model: ContextMappingModel, context_name: str, aggregate_name: str) -> list[Entity]:
    """Return the entities of an aggregate, or an empty list if it is unknown."""
    aggregate = find_aggregate(model, context_name, aggregate_name)
    return list(aggregate.entities) if aggregate else []


def list_value_objects(model: ContextMappingModel, context_name: str, aggregate_name: str) -> list[ValueObject]:
    """Return the value objects of an aggregate, or an empty list if it is unknown."""
    aggregate = find_aggregate(model, context_name, aggregate_name)
    return list(aggregate.value_objects) if aggregate else []


def list_commands(model: ContextMappingModel, context_name: str, aggregate_name: str) -> list[CommandEvent]:
    """Return the command events of an aggregate, or an empty list if it is unknown."""
    aggregate = find_aggregate(model, context_name, aggregate_name)
    return list(aggregate.commands) if aggregate else []


def list_events(model: ContextMappingModel, context_name: str, aggregate_name: str) -> list[DomainEvent]:
    """Return the domain events of an aggregate, or an empty list if it is unknown."""
    aggregate = find_aggregate(model, context_name, aggregate_name)
    return list(aggregate.events) if aggregate else []


def list_services(model: ContextMappingModel, context_name: str, aggregate_name: str) -> list[Service]:
    """Return the services of an aggregate, or an empty list if it is unknown."""
    aggregate = find_aggregate(model, context_name, aggregate_name)
    return list(aggregate.services) if aggregate else []


def aggregate_root(aggregate: Aggregate) -> Entity | None:
    """Return the first entity flagged as aggregate root, if any.

    Several entities may carry the flag; they are not deduplicated.
    """
    for entity in aggregate.entities:
        if entity.is_aggregate_root:
            return entity
    return None


def business_rules(owner: BoundedContext | Aggregate) -> list[str]:
    """Return the business rules among the responsibilities of a context or aggregate.

    Rules are the entries that start with ``RULE:`` (case-sensitive); the
    prefix and surrounding whitespace are removed.
    """
    return [
        entry[len(RULE_PREFIX) :].strip() for entry in owner.responsibilities if entry.startswith(RULE_PREFIX)
    ]


# ################
# Implementation
# ################


def _directed(model: ContextMappingModel) -> list[UpstreamDownstream | CustomerSupplier]:
    if model.context_map is None:
        return []
    return [rel for rel in model.context_map.relationships if isinstance(rel, (UpstreamDownstream, CustomerSupplier))]
