# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the brace-matching block scanner."""

from cmlmodel.parser.outcome import Matched, Skipped
from cmlmodel.parser.scanner import scan_block_outcomes, scan_blocks

# ###############
# Test Helpers
# ###############


def _names(keyword: str, text: str) -> list[str | None]:
    return [block.name for block in scan_blocks(keyword, text)]


def _line_values(keyword: str, text: str) -> list[list[str]]:
    block = scan_blocks(keyword, text)[0]
    return [[tok.value for tok in line] for line in block.lines()]


# ###############
# Matching
# ###############


class TestMatching:
    def test_single_block(self) -> None:
        blocks = scan_blocks("BoundedContext", "BoundedContext A { }")
        assert len(blocks) == 1
        assert blocks[0].keyword == "BoundedContext"
        assert blocks[0].name == "A"
        assert blocks[0].text == "BoundedContext A { }"
        assert blocks[0].line == 1

    def test_span_runs_from_keyword_to_matching_brace(self) -> None:
        text = "noise Aggregate A { x { y } } trailing"
        assert scan_blocks("Aggregate", text)[0].text == "Aggregate A { x { y } }"

    def test_blocks_in_source_order(self) -> None:
        text = "Entity B { }\nEntity A { }\nEntity C { }"
        assert _names("Entity", text) == ["B", "A", "C"]

    def test_nested_same_keyword_is_not_reported_separately(self) -> None:
        text = "Aggregate Outer { Aggregate Inner { } }"
        assert _names("Aggregate", text) == ["Outer"]

    def test_nested_blocks_reachable_through_parent(self) -> None:
        text = "BoundedContext C {\n  Aggregate A { }\n  Aggregate B { }\n}"
        context = scan_blocks("BoundedContext", text)[0]
        assert [block.name for block in context.scan("Aggregate")] == ["A", "B"]

    def test_keyword_without_brace_is_ignored(self) -> None:
        assert scan_blocks("BoundedContext", "BoundedContext A\nBoundedContext") == []

    def test_keyword_must_be_whole_identifier(self) -> None:
        assert scan_blocks("Entity", "Entityish A { }") == []

    def test_braces_inside_strings_do_not_count(self) -> None:
        text = 'BoundedContext A { domainVisionStatement = "}" }'
        assert scan_blocks("BoundedContext", text)[0].text == text

    def test_empty_text(self) -> None:
        assert scan_blocks("BoundedContext", "") == []


# ###############
# Headers
# ###############


class TestHeaders:
    def test_extends_clause(self) -> None:
        block = scan_blocks("Entity", "Entity Customer extends @Person { }")[0]
        assert block.name == "Customer"
        assert block.extends == "Person"

    def test_other_clauses_are_skipped(self) -> None:
        block = scan_blocks("BoundedContext", "BoundedContext A implements D1, D2 { }")[0]
        assert block.name == "A"
        assert block.extends is None

    def test_abstract_modifier(self) -> None:
        blocks = scan_blocks("Entity", "abstract Entity Base { }\nEntity Concrete { }")
        assert [block.is_abstract for block in blocks] == [True, False]

    def test_anonymous_block_requires_opt_in(self) -> None:
        assert scan_blocks("ContextMap", "ContextMap { }") == []
        blocks = scan_blocks("ContextMap", "ContextMap { }", name_optional=True)
        assert len(blocks) == 1
        assert blocks[0].name is None


# ###############
# Unterminated Blocks
# ###############


class TestUnterminated:
    def test_unterminated_block_is_dropped(self) -> None:
        assert scan_blocks("BoundedContext", "BoundedContext Foo { Aggregate Bar {") == []

    def test_scanning_resumes_after_unterminated_opening_brace(self) -> None:
        """The outer block never closes, but the inner one is balanced and found."""
        assert _names("Entity", "Entity A { Entity B { }") == ["B"]

    def test_outcomes_report_unterminated_candidate(self) -> None:
        outcomes = scan_block_outcomes("BoundedContext", "BoundedContext Ok { }\nBoundedContext Foo {")
        assert isinstance(outcomes[0], Matched)
        assert isinstance(outcomes[1], Skipped)
        assert outcomes[1].reason == "unterminated block"
        assert outcomes[1].line == 2
        assert outcomes[1].fragment == "BoundedContext Foo {"


# ###############
# Body Lines
# ###############


class TestLines:
    def test_lines_group_tokens_by_line(self) -> None:
        text = "Entity Customer {\n  String name\n  - @Address address\n}"
        assert _line_values("Entity", text) == [["String", "name"], ["-", "@", "Address", "address"]]

    def test_nested_blocks_and_their_headers_are_excluded(self) -> None:
        text = """\
Aggregate Customers {
  owner = TeamA
  Entity Customer {
    String ignored
  }
  responsibilities = "Customers"
}"""
        assert _line_values("Aggregate", text) == [["owner", "=", "TeamA"], ["responsibilities", "=", "Customers"]]

    def test_tokens_on_opening_brace_line_are_excluded(self) -> None:
        assert _line_values("Entity", "Entity A { String name\n  int age\n}") == [["int", "age"]]

    def test_empty_block_has_no_lines(self) -> None:
        assert scan_blocks("Entity", "Entity A {\n\n}")[0].lines() == []
