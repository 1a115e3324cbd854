# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Domain model for CML documents (contexts, aggregates, relationships, etc.)."""

from cmlmodel.model.entities import (
    RULE_PREFIX,
    Aggregate,
    BoundedContext,
    BoundedContextType,
    CommandEvent,
    ContextMap,
    ContextMappingModel,
    ContextMapState,
    ContextMapType,
    Domain,
    DomainEvent,
    Entity,
    Evolution,
    KnowledgeLevel,
    Service,
    Subdomain,
    SubdomainType,
    UseCase,
    UserRequirement,
    UserStory,
    ValueObject,
    Volatility,
)
from cmlmodel.model.relationships import (
    CustomerSupplier,
    DownstreamGovernanceRights,
    DownstreamRole,
    Partnership,
    Relationship,
    SharedKernel,
    UpstreamDownstream,
    UpstreamRole,
    participants,
)
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
    type_name,
)

__all__ = [
    # Type system
    "PrimitiveType",
    "PrimitiveTypeRef",
    "CollectionType",
    "CollectionTypeRef",
    "MapTypeRef",
    "NamedTypeRef",
    "TypeRef",
    "Visibility",
    "Attribute",
    "Reference",
    "Parameter",
    "StateTransition",
    "Operation",
    "type_name",
    # Relationships
    "UpstreamRole",
    "DownstreamRole",
    "DownstreamGovernanceRights",
    "Partnership",
    "SharedKernel",
    "UpstreamDownstream",
    "CustomerSupplier",
    "Relationship",
    "participants",
    # Entities
    "RULE_PREFIX",
    "BoundedContextType",
    "KnowledgeLevel",
    "Evolution",
    "Volatility",
    "SubdomainType",
    "ContextMapType",
    "ContextMapState",
    "Entity",
    "ValueObject",
    "CommandEvent",
    "DomainEvent",
    "Service",
    "Aggregate",
    "BoundedContext",
    "Subdomain",
    "Domain",
    "UseCase",
    "UserStory",
    "UserRequirement",
    "ContextMap",
    "ContextMappingModel",
]
