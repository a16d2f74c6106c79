# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Classification of the lookahead into the scan routine that handles it."""

import enum

from yamlscan.scanner import chars
from yamlscan.scanner.stream import InputCursor

# ###############
# Public Interface
# ###############


class Indicator(enum.Enum):
    """The token family starting at the cursor."""

    DIRECTIVE = "directive"
    DOC_START = "doc-start"
    DOC_END = "doc-end"
    FLOW_START = "flow-start"
    FLOW_END = "flow-end"
    FLOW_ENTRY = "flow-entry"
    BLOCK_ENTRY = "block-entry"
    KEY = "key"
    VALUE = "value"
    ANCHOR_OR_ALIAS = "anchor-or-alias"
    TAG = "tag"
    BLOCK_SCALAR = "block-scalar"
    QUOTED_SCALAR = "quoted-scalar"
    PLAIN_SCALAR = "plain-scalar"
    UNKNOWN = "unknown"


def classify(cursor: InputCursor, flow_level: int, can_be_json_flow: bool = False) -> Indicator:
    """Decide which scan routine handles the input at *cursor*.

    The result depends only on the lookahead and the given context; the
    cursor is not advanced.

    Args:
        cursor: Input positioned at the first character of the next token.
        flow_level: Current flow nesting depth (0 for block context).
        can_be_json_flow: Whether the previous token allows a bare ``:``
            value indicator (after a quoted key or a closed collection in flow).
    """
    ch = cursor.peek()
    in_block = flow_level == 0

    if cursor.column == 0:
        if ch == "%":
            return Indicator.DIRECTIVE
        if chars.doc_start(cursor) is not None:
            return Indicator.DOC_START
        if chars.doc_end(cursor) is not None:
            return Indicator.DOC_END

    if ch in _SINGLE_CHAR_INDICATORS:
        return _SINGLE_CHAR_INDICATORS[ch]

    if chars.block_entry(cursor) is not None:
        return Indicator.BLOCK_ENTRY
    if (chars.key(cursor) if in_block else chars.key_in_flow(cursor)) is not None:
        return Indicator.KEY
    if _value(cursor, in_block, can_be_json_flow) is not None:
        return Indicator.VALUE
    if in_block and ch in ("|", ">"):
        return Indicator.BLOCK_SCALAR
    if (chars.plain_scalar_start(cursor) if in_block else chars.plain_scalar_start_in_flow(cursor)) is not None:
        return Indicator.PLAIN_SCALAR
    return Indicator.UNKNOWN


# ################
# Implementation
# ################

_SINGLE_CHAR_INDICATORS: dict[str, Indicator] = {
    "[": Indicator.FLOW_START,
    "{": Indicator.FLOW_START,
    "]": Indicator.FLOW_END,
    "}": Indicator.FLOW_END,
    ",": Indicator.FLOW_ENTRY,
    "&": Indicator.ANCHOR_OR_ALIAS,
    "*": Indicator.ANCHOR_OR_ALIAS,
    "!": Indicator.TAG,
    "'": Indicator.QUOTED_SCALAR,
    '"': Indicator.QUOTED_SCALAR,
}


def _value(cursor: InputCursor, in_block: bool, can_be_json_flow: bool) -> int | None:
    if in_block:
        return chars.value(cursor)
    if can_be_json_flow:
        return chars.value_in_json_flow(cursor)
    return chars.value_in_flow(cursor)
