# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the read-only model queries."""

import pytest

from cmlmodel.model.entities import Aggregate, BoundedContext, ContextMappingModel
from cmlmodel.model.relationships import CustomerSupplier, SharedKernel, UpstreamDownstream
from cmlmodel.parser import parse
from cmlmodel.views import (
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

SOURCE = """\
ContextMap {
  Customers [U,OHS] -> [D,ACL] Policies
  Printing [U,S] -> [D,C] Customers
  Policies [SK] <-> [SK] Claims
}

BoundedContext Customers {
  responsibilities = "Customer data", "RULE: Every customer has an address", "rule: lowercase is not a rule"
  Aggregate Profiles {
    Entity Address {
      String street
    }
    Entity Customer {
      aggregateRoot
      String name
    }
    ValueObject Name {
      String value
    }
    Service ProfileService {
      void rename(String name);
    }
    CommandEvent Rename {
      String name
    }
    DomainEvent Renamed {
      String name
    }
  }
}

BoundedContext Customers {
  Aggregate Shadowed {
  }
}
"""


@pytest.fixture
def model() -> ContextMappingModel:
    return parse(SOURCE)


# ###############
# Lookups
# ###############


def test_list_bounded_contexts_returns_all(model: ContextMappingModel) -> None:
    assert [bc.name for bc in list_bounded_contexts(model)] == ["Customers", "Customers"]


def test_find_bounded_context_returns_first_match(model: ContextMappingModel) -> None:
    context = find_bounded_context(model, "Customers")
    assert context is not None
    assert [a.name for a in context.aggregates] == ["Profiles"]


def test_unknown_names_yield_empty_results(model: ContextMappingModel) -> None:
    assert find_bounded_context(model, "Nowhere") is None
    assert list_aggregates(model, "Nowhere") == []
    assert find_aggregate(model, "Customers", "Nowhere") is None
    assert list_entities(model, "Customers", "Nowhere") == []
    assert list_value_objects(model, "Nowhere", "Profiles") == []
    assert list_commands(model, "Nowhere", "Nowhere") == []
    assert list_events(model, "Nowhere", "Nowhere") == []
    assert list_services(model, "Nowhere", "Nowhere") == []
    assert relationships_for(model, "Nowhere") == []


def test_aggregate_children(model: ContextMappingModel) -> None:
    assert [e.name for e in list_entities(model, "Customers", "Profiles")] == ["Address", "Customer"]
    assert [v.name for v in list_value_objects(model, "Customers", "Profiles")] == ["Name"]
    assert [c.name for c in list_commands(model, "Customers", "Profiles")] == ["Rename"]
    assert [e.name for e in list_events(model, "Customers", "Profiles")] == ["Renamed"]
    assert [s.name for s in list_services(model, "Customers", "Profiles")] == ["ProfileService"]


def test_queries_on_empty_model() -> None:
    empty = parse("")
    assert list_bounded_contexts(empty) == []
    assert relationships_for(empty, "Customers") == []
    assert upstream_relationships(empty, "Customers") == []
    assert downstream_relationships(empty, "Customers") == []


# ###############
# Relationships
# ###############


def test_relationships_for_matches_either_side(model: ContextMappingModel) -> None:
    assert [type(rel) for rel in relationships_for(model, "Customers")] == [UpstreamDownstream, CustomerSupplier]
    assert [type(rel) for rel in relationships_for(model, "Claims")] == [SharedKernel]


def test_upstream_and_downstream_relationships(model: ContextMappingModel) -> None:
    assert [rel.downstream for rel in upstream_relationships(model, "Customers")] == ["Policies"]
    assert [rel.upstream for rel in downstream_relationships(model, "Customers")] == ["Printing"]
    assert upstream_relationships(model, "Claims") == []


# ###############
# Aggregate Roots and Business Rules
# ###############


def test_aggregate_root(model: ContextMappingModel) -> None:
    aggregate = find_aggregate(model, "Customers", "Profiles")
    assert aggregate is not None
    root = aggregate_root(aggregate)
    assert root is not None
    assert root.name == "Customer"
    assert aggregate_root(Aggregate(name="Empty")) is None


def test_business_rules_are_prefix_filtered(model: ContextMappingModel) -> None:
    context = find_bounded_context(model, "Customers")
    assert context is not None
    assert business_rules(context) == ["Every customer has an address"]


def test_business_rules_of_aggregate() -> None:
    aggregate = Aggregate(name="A", responsibilities=["RULE:no space", "plain"])
    assert business_rules(aggregate) == ["no space"]
    assert business_rules(BoundedContext(name="Empty")) == []
