# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lenient parser for the Context Mapper (CML) dialect."""

from cmlmodel.parser.outcome import Matched, Skipped
from cmlmodel.parser.parser import ParseError, ParseReport, parse, parse_with_report
from cmlmodel.parser.preprocessor import strip_comments
from cmlmodel.parser.scanner import Block, scan_block_outcomes, scan_blocks

__all__ = [
    "parse",
    "parse_with_report",
    "ParseError",
    "ParseReport",
    "Matched",
    "Skipped",
    "strip_comments",
    "Block",
    "scan_blocks",
    "scan_block_outcomes",
]
