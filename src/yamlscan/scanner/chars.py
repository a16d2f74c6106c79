# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Character-class predicates evaluated at the cursor.

Every pattern is a pure function ``(cursor) -> int | None``: the length of the
match at the cursor position, or ``None`` when it does not match.
"""

from collections.abc import Callable

from yamlscan.scanner.stream import EOF, InputCursor

# ###############
# Public Interface
# ###############

Pattern = Callable[[InputCursor], int | None]

BLANKS = " \t"
FLOW_INDICATORS = ",[]{}"
ANCHOR_END_CHARS = "?:,]}%@`"
PLAIN_EXCLUDED_START = ",[]{}#&*!|>'\"%@`"
PLAIN_EXCLUDED_START_IN_FLOW = "?,[]{}#&*!|>'\"%@`"
HEX_DIGITS = "0123456789abcdefABCDEF"


def is_blank(ch: str) -> bool:
    return ch != EOF and ch in BLANKS


def is_blank_or_break(ch: str) -> bool:
    return ch != EOF and ch in " \t\r\n"


def is_blank_break_or_eof(ch: str) -> bool:
    return ch == EOF or ch in " \t\r\n"


def is_digit(ch: str) -> bool:
    return ch != EOF and "0" <= ch <= "9"


def is_alphanumeric(ch: str) -> bool:
    return ch != EOF and ch.isascii() and ch.isalnum()


def is_anchor_char(ch: str) -> bool:
    """Characters allowed in anchor and alias names."""
    return is_alphanumeric(ch) or ch in ("-", "_")


def line_break(cursor: InputCursor, offset: int = 0) -> int | None:
    """Match a single line break: ``\\r\\n``, ``\\n`` or ``\\r``."""
    ch = cursor.peek(offset)
    if ch == "\r":
        return 2 if cursor.peek(offset + 1) == "\n" else 1
    if ch == "\n":
        return 1
    return None


def comment(cursor: InputCursor) -> int | None:
    return 1 if cursor.peek() == "#" else None


def doc_start(cursor: InputCursor) -> int | None:
    """``---`` followed by a blank, a break or end of input."""
    if cursor.startswith("---") and is_blank_break_or_eof(cursor.peek(3)):
        return 3
    return None


def doc_end(cursor: InputCursor) -> int | None:
    """``...`` followed by a blank, a break or end of input."""
    if cursor.startswith("...") and is_blank_break_or_eof(cursor.peek(3)):
        return 3
    return None


def doc_indicator(cursor: InputCursor) -> int | None:
    return doc_start(cursor) or doc_end(cursor)


def block_entry(cursor: InputCursor) -> int | None:
    """``-`` followed by a blank, a break or end of input."""
    return _indicator_before_space(cursor, "-")


def key(cursor: InputCursor) -> int | None:
    """Explicit key indicator in block context."""
    return _indicator_before_space(cursor, "?")


def key_in_flow(cursor: InputCursor) -> int | None:
    """Explicit key indicator in flow context (end of input does not terminate it)."""
    if cursor.peek() == "?" and is_blank_or_break(cursor.peek(1)):
        return 1
    return None


def value(cursor: InputCursor) -> int | None:
    """Value indicator in block context."""
    return _indicator_before_space(cursor, ":")


def value_in_flow(cursor: InputCursor) -> int | None:
    """Value indicator in flow context: ``:`` before a blank, break, EOF or ``,]}``."""
    if cursor.peek() != ":":
        return None
    nxt = cursor.peek(1)
    if is_blank_break_or_eof(nxt) or nxt in ",]}":
        return 1
    return None


def value_in_json_flow(cursor: InputCursor) -> int | None:
    """Value indicator directly after a JSON-like key (``{"a":1}``)."""
    return 1 if cursor.peek() == ":" else None


def plain_scalar_start(cursor: InputCursor) -> int | None:
    """Characters that may begin a plain scalar in block context."""
    ch = cursor.peek()
    if is_blank_break_or_eof(ch) or ch in PLAIN_EXCLUDED_START:
        return None
    if ch in "-?:" and is_blank_break_or_eof(cursor.peek(1)):
        return None
    return 1


def plain_scalar_start_in_flow(cursor: InputCursor) -> int | None:
    """Characters that may begin a plain scalar in flow context."""
    ch = cursor.peek()
    if is_blank_break_or_eof(ch) or ch in PLAIN_EXCLUDED_START_IN_FLOW:
        return None
    if ch in "-:" and (is_blank(cursor.peek(1)) or cursor.peek(1) == EOF):
        return None
    return 1


def end_scalar(cursor: InputCursor) -> int | None:
    """Termination of a plain scalar in block context: ``: `` or `` #``."""
    return value(cursor) or _comment_after_space(cursor)


def end_scalar_in_flow(cursor: InputCursor) -> int | None:
    """Termination of a plain scalar in flow context."""
    ch = cursor.peek()
    if ch == ":":
        nxt = cursor.peek(1)
        if is_blank_break_or_eof(nxt) or nxt in ",]}":
            return 1
        return None
    if ch != EOF and ch in ",?[]{}":
        return 1
    return _comment_after_space(cursor)


def anchor_end(cursor: InputCursor) -> int | None:
    """Valid terminators for an anchor or alias name."""
    ch = cursor.peek()
    if is_blank_or_break(ch) or (ch != EOF and ch in ANCHOR_END_CHARS):
        return 1
    return None


def chomp_indicator(cursor: InputCursor) -> int | None:
    """Block scalar header: chomping and indentation indicators, in either order."""
    first, second = cursor.peek(), cursor.peek(1)
    if first in ("+", "-"):
        return 2 if is_digit(second) else 1
    if is_digit(first):
        return 2 if second in ("+", "-") else 1
    return None


def escaped_break(cursor: InputCursor) -> int | None:
    """A backslash directly before a line break."""
    if cursor.peek() != "\\":
        return None
    n = line_break(cursor, 1)
    return None if n is None else 1 + n


def single_quote_end(cursor: InputCursor) -> int | None:
    """Closing single quote (an escaped ``''`` does not close the scalar)."""
    if cursor.peek() == "'" and cursor.peek(1) != "'":
        return 1
    return None


def double_quote_end(cursor: InputCursor) -> int | None:
    return 1 if cursor.peek() == '"' else None


# ################
# Implementation
# ################


def _indicator_before_space(cursor: InputCursor, indicator: str) -> int | None:
    if cursor.peek() == indicator and is_blank_break_or_eof(cursor.peek(1)):
        return 1
    return None


def _comment_after_space(cursor: InputCursor) -> int | None:
    if is_blank_or_break(cursor.peek()) and cursor.peek(1) == "#":
        return 2
    if cursor.peek() == "\r" and cursor.peek(1) == "\n" and cursor.peek(2) == "#":
        return 3
    return None
