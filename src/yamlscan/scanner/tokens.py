# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token types produced by the scanner."""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the scanner."""

    # Document structure
    DIRECTIVE = "DIRECTIVE"
    DOC_START = "DOC_START"
    DOC_END = "DOC_END"

    # Flow collections
    FLOW_SEQ_START = "["
    FLOW_SEQ_END = "]"
    FLOW_MAP_START = "{"
    FLOW_MAP_END = "}"
    FLOW_ENTRY = ","

    # Block structure
    BLOCK_ENTRY = "-"
    KEY = "?"
    VALUE = ":"

    # Node properties
    ALIAS = "ALIAS"
    ANCHOR = "ANCHOR"
    TAG = "TAG"

    # Content
    SCALAR = "SCALAR"


class ScalarStyle(enum.Enum):
    """Presentation style of a scanned scalar, carried as the first token param."""

    PLAIN = "plain"
    SINGLE_QUOTED = "single"
    DOUBLE_QUOTED = "double"
    LITERAL = "literal"
    FOLDED = "folded"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
        value: The decoded payload (scalar text, anchor name, tag handle,
            directive name); empty for pure indicators.
        params: Extra payload: directive parameters, the tag suffix, or the
            scalar style.
    """

    type: TokenType
    line: int
    column: int
    value: str = ""
    params: tuple[str, ...] = ()
