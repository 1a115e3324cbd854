# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Comment removal for CML source text."""

# ###############
# Public Interface
# ###############


def strip_comments(source: str) -> str:
    """Remove ``//`` line comments and ``/* ... */`` block comments.

    Line comments are removed first, over the whole text, and block comments
    afterwards. A ``//`` inside a block comment therefore still cuts its line,
    so ``/* a // b */ X`` loses ``// b */ X`` and leaves ``/* a`` open.

    A line comment runs up to, but not including, the next newline. A block
    comment ends at the first ``*/``; an unterminated block comment swallows
    the rest of the input. String literals are not special: a ``//`` inside
    quotes starts a comment too.

    Args:
        source: Raw CML document text.

    Returns:
        The text with every comment removed. Never raises.
    """
    return _strip_block_comments(_strip_line_comments(source))


# ################
# Implementation
# ################


def _strip_line_comments(text: str) -> str:
    out: list[str] = []
    pos = 0
    length = len(text)
    while pos < length:
        start = text.find("//", pos)
        if start == -1:
            out.append(text[pos:])
            break
        out.append(text[pos:start])
        end = text.find("\n", start)
        pos = length if end == -1 else end
    return "".join(out)


def _strip_block_comments(text: str) -> str:
    out: list[str] = []
    pos = 0
    length = len(text)
    while pos < length:
        start = text.find("/*", pos)
        if start == -1:
            out.append(text[pos:])
            break
        out.append(text[pos:start])
        end = text.find("*/", start + 2)
        pos = length if end == -1 else end + 2
    return "".join(out)
