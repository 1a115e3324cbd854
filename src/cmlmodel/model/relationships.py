# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Strategic relationships between bounded contexts on a context map."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class UpstreamRole(Enum):
    """Roles an upstream (providing) context can play."""

    PUBLISHED_LANGUAGE = "PUBLISHED_LANGUAGE"
    OPEN_HOST_SERVICE = "OPEN_HOST_SERVICE"


class DownstreamRole(Enum):
    """Roles a downstream (consuming) context can play."""

    ANTICORRUPTION_LAYER = "ANTICORRUPTION_LAYER"
    CONFORMIST = "CONFORMIST"


class DownstreamGovernanceRights(Enum):
    """Influence the downstream context has over its upstream."""

    INFLUENCER = "INFLUENCER"
    OPINION_LEADER = "OPINION_LEADER"
    VETO_RIGHT = "VETO_RIGHT"
    DECISION_MAKER = "DECISION_MAKER"
    MONOPOLIST = "MONOPOLIST"


class Partnership(BaseModel):
    """A symmetric partnership between two contexts (``A [P]<->[P] B``)."""

    type: Literal["Partnership"] = "Partnership"
    participant1: str
    participant2: str
    name: str | None = None
    implementation_technology: str | None = None


class SharedKernel(BaseModel):
    """Two contexts sharing a common kernel (``A [SK]<->[SK] B``)."""

    type: Literal["SharedKernel"] = "SharedKernel"
    participant1: str
    participant2: str
    name: str | None = None
    implementation_technology: str | None = None


class UpstreamDownstream(BaseModel):
    """A directed dependency: ``downstream`` consumes what ``upstream`` provides."""

    type: Literal["UpstreamDownstream"] = "UpstreamDownstream"
    upstream: str
    downstream: str
    upstream_roles: list[UpstreamRole] = _Field(default_factory=list)
    downstream_roles: list[DownstreamRole] = _Field(default_factory=list)
    exposed_aggregates: list[str] = _Field(default_factory=list)
    downstream_rights: DownstreamGovernanceRights | None = None
    name: str | None = None
    implementation_technology: str | None = None


class CustomerSupplier(BaseModel):
    """An upstream-downstream dependency where the supplier serves the customer's needs.

    Shares the field layout of :class:`UpstreamDownstream`; only the tag differs.
    The upstream context is the supplier, the downstream context the customer.
    """

    type: Literal["CustomerSupplier"] = "CustomerSupplier"
    upstream: str
    downstream: str
    upstream_roles: list[UpstreamRole] = _Field(default_factory=list)
    downstream_roles: list[DownstreamRole] = _Field(default_factory=list)
    exposed_aggregates: list[str] = _Field(default_factory=list)
    downstream_rights: DownstreamGovernanceRights | None = None
    name: str | None = None
    implementation_technology: str | None = None


Relationship = Annotated[
    Partnership | SharedKernel | UpstreamDownstream | CustomerSupplier,
    _Field(discriminator="type"),
]


def participants(relationship: Relationship) -> tuple[str, str]:
    """Return the two context names a relationship connects.

    Symmetric relationships return ``(participant1, participant2)``; directed
    ones return ``(upstream, downstream)``.
    """
    if isinstance(relationship, (Partnership, SharedKernel)):
        return relationship.participant1, relationship.participant2
    return relationship.upstream, relationship.downstream
