# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Strategic and tactical entities of the CML domain model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

from cmlmodel.model.relationships import Relationship
from cmlmodel.model.types import Attribute, Operation, Reference

# ###############
# Public Interface
# ###############

RULE_PREFIX = "RULE:"


class BoundedContextType(Enum):
    FEATURE = "FEATURE"
    APPLICATION = "APPLICATION"
    SYSTEM = "SYSTEM"
    TEAM = "TEAM"


class KnowledgeLevel(Enum):
    META = "META"
    CONCRETE = "CONCRETE"


class Evolution(Enum):
    GENESIS = "GENESIS"
    CUSTOM_BUILT = "CUSTOM_BUILT"
    PRODUCT = "PRODUCT"
    COMMODITY = "COMMODITY"


class Volatility(Enum):
    NORMAL = "NORMAL"
    RARELY = "RARELY"
    OFTEN = "OFTEN"


class SubdomainType(Enum):
    CORE_DOMAIN = "CORE_DOMAIN"
    SUPPORTING_DOMAIN = "SUPPORTING_DOMAIN"
    GENERIC_SUBDOMAIN = "GENERIC_SUBDOMAIN"


class ContextMapType(Enum):
    SYSTEM_LANDSCAPE = "SYSTEM_LANDSCAPE"
    ORGANIZATIONAL = "ORGANIZATIONAL"


class ContextMapState(Enum):
    AS_IS = "AS_IS"
    TO_BE = "TO_BE"


class Entity(BaseModel):
    """A domain object with identity."""

    name: str
    is_abstract: bool = False
    extends: str | None = None
    is_aggregate_root: bool = False
    attributes: list[Attribute] = _Field(default_factory=list)
    references: list[Reference] = _Field(default_factory=list)
    operations: list[Operation] = _Field(default_factory=list)


class ValueObject(BaseModel):
    """A domain object defined only by its attribute values."""

    name: str
    is_abstract: bool = False
    extends: str | None = None
    is_immutable: bool = False
    is_persistent: bool = False
    attributes: list[Attribute] = _Field(default_factory=list)
    references: list[Reference] = _Field(default_factory=list)
    operations: list[Operation] = _Field(default_factory=list)


class CommandEvent(BaseModel):
    """A command that expresses an intent to change an aggregate."""

    name: str
    is_abstract: bool = False
    extends: str | None = None
    is_persistent: bool = False
    attributes: list[Attribute] = _Field(default_factory=list)
    references: list[Reference] = _Field(default_factory=list)


class DomainEvent(BaseModel):
    """Something that happened in the domain."""

    name: str
    is_abstract: bool = False
    extends: str | None = None
    is_persistent: bool = False
    attributes: list[Attribute] = _Field(default_factory=list)
    references: list[Reference] = _Field(default_factory=list)


class Service(BaseModel):
    """A stateless domain service."""

    name: str
    operations: list[Operation] = _Field(default_factory=list)


class Aggregate(BaseModel):
    """A consistency boundary clustering entities, value objects, commands and events.

    ``responsibilities`` holds free text; entries starting with ``RULE:`` are
    business rules.
    """

    name: str
    responsibilities: list[str] = _Field(default_factory=list)
    user_requirements: list[str] = _Field(default_factory=list)
    owner: str | None = None
    knowledge_level: KnowledgeLevel | None = None
    likelihood_for_change: Volatility | None = None
    content_volatility: Volatility | None = None
    entities: list[Entity] = _Field(default_factory=list)
    value_objects: list[ValueObject] = _Field(default_factory=list)
    services: list[Service] = _Field(default_factory=list)
    commands: list[CommandEvent] = _Field(default_factory=list)
    events: list[DomainEvent] = _Field(default_factory=list)


class BoundedContext(BaseModel):
    """A named strategic boundary containing a set of aggregates."""

    name: str
    type: BoundedContextType | None = None
    domain_vision_statement: str | None = None
    responsibilities: list[str] = _Field(default_factory=list)
    implementation_technology: str | None = None
    knowledge_level: KnowledgeLevel | None = None
    business_model: str | None = None
    evolution: Evolution | None = None
    aggregates: list[Aggregate] = _Field(default_factory=list)


class Subdomain(BaseModel):
    """A part of the problem space inside a domain."""

    name: str
    type: SubdomainType | None = None
    domain_vision_statement: str | None = None


class Domain(BaseModel):
    """A problem-space domain split into subdomains."""

    name: str
    domain_vision_statement: str | None = None
    subdomains: list[Subdomain] = _Field(default_factory=list)


class UseCase(BaseModel):
    """A use case requirement."""

    type: Literal["UseCase"] = "UseCase"
    name: str
    actor: str | None = None
    secondary_actors: list[str] = _Field(default_factory=list)
    benefit: str | None = None
    scope: str | None = None
    level: str | None = None


class UserStory(BaseModel):
    """A user story requirement (``As a "role" ... so that "benefit"``)."""

    type: Literal["UserStory"] = "UserStory"
    name: str
    role: str | None = None
    benefit: str | None = None


UserRequirement = Annotated[UseCase | UserStory, _Field(discriminator="type")]


class ContextMap(BaseModel):
    """The strategic map: which contexts exist and how they relate."""

    name: str | None = None
    type: ContextMapType | None = None
    state: ContextMapState | None = None
    bounded_contexts: list[str] = _Field(default_factory=list)
    relationships: list[Relationship] = _Field(default_factory=list)


class ContextMappingModel(BaseModel):
    """Root of the model produced from a single CML document."""

    context_map: ContextMap | None = None
    bounded_contexts: list[BoundedContext] = _Field(default_factory=list)
    domains: list[Domain] = _Field(default_factory=list)
    user_requirements: list[UserRequirement] = _Field(default_factory=list)
