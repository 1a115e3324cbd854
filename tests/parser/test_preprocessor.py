# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for comment removal."""

from cmlmodel.parser.preprocessor import strip_comments


def test_empty_string_is_unchanged() -> None:
    assert strip_comments("") == ""


def test_text_without_comments_is_unchanged() -> None:
    source = "BoundedContext A {\n  type = FEATURE\n}\n"
    assert strip_comments(source) == source


def test_line_comment_keeps_newline() -> None:
    """A line comment is removed up to, but not including, the newline."""
    assert strip_comments("a // note\nb") == "a \nb"


def test_line_comment_at_end_of_input() -> None:
    assert strip_comments("a // trailing") == "a "


def test_block_comment_spanning_lines() -> None:
    assert strip_comments("a /* one\ntwo */ b") == "a  b"


def test_block_comment_is_non_greedy() -> None:
    assert strip_comments("/* x */ keep /* y */") == " keep "


def test_unterminated_block_comment_runs_to_end_of_input() -> None:
    """An unclosed block comment swallows everything after it."""
    assert strip_comments("BoundedContext A { } /* never closed\nBoundedContext B { }") == "BoundedContext A { } "


def test_empty_block_comment() -> None:
    assert strip_comments("a/**/b") == "ab"


def test_comment_markers_inside_strings_still_strip() -> None:
    """String literals get no special treatment."""
    assert strip_comments('url = "http://example.com"') == 'url = "http:'


def test_lone_slash_and_star_are_kept() -> None:
    assert strip_comments("a / b * c") == "a / b * c"


def test_line_comment_inside_block_comment_cuts_the_line() -> None:
    """Line comments go first, so a ``//`` inside a block comment eats its closing marker."""
    assert strip_comments("/* a // b */ X\nBoundedContext A { }") == ""


def test_line_comment_inside_block_comment_on_earlier_line() -> None:
    assert strip_comments("/* a // b\n c */ X") == " X"
