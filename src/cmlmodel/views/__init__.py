# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read-only queries for presentation layers."""

from cmlmodel.views.queries import (
    aggregate_root,
    business_rules,
    downstream_relationships,
    find_aggregate,
    find_bounded_context,
    list_aggregates,
    list_bounded_contexts,
    list_commands,
    list_entities,
    list_events,
    list_services,
    list_value_objects,
    relationships_for,
    upstream_relationships,
)

__all__ = [
    "aggregate_root",
    "business_rules",
    "downstream_relationships",
    "find_aggregate",
    "find_bounded_context",
    "list_aggregates",
    "list_bounded_contexts",
    "list_commands",
    "list_entities",
    "list_events",
    "list_services",
    "list_value_objects",
    "relationships_for",
    "upstream_relationships",
]
