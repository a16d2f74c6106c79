# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for the scanner."""

import enum

# ###############
# Public Interface
# ###############


class ErrorKind(enum.Enum):
    """Every failure the scanner can report, mapped to its default message."""

    UNEXPECTED_FLOW_END = "illegal flow end"
    ILLEGAL_BLOCK_ENTRY = "illegal block entry"
    ILLEGAL_MAP_KEY = "illegal map key"
    ILLEGAL_MAP_VALUE = "illegal map value"
    ANCHOR_OR_ALIAS_NOT_FOUND = "anchor or alias not found"
    INVALID_CHAR_IN_ANCHOR_OR_ALIAS = "illegal character found while scanning anchor or alias"
    INVALID_CHAR_IN_TAG = "illegal character found while scanning tag"
    INVALID_CHAR_IN_BLOCK_SCALAR = "unexpected character in block scalar"
    ZERO_INDENT_IN_BLOCK_SCALAR = "cannot set zero indentation for a block scalar"
    TAB_IN_INDENTATION = "illegal tab when looking for indentation"
    EOF_IN_SCALAR = "illegal EOF in scalar"
    INVALID_ESCAPE = "unknown escape character"
    DOCUMENT_INDICATOR_IN_SCALAR = "illegal document indicator in scalar"
    MALFORMED_SIMPLE_KEY = "could not find expected ':' after simple key"
    UNTERMINATED_FLOW_COLLECTION = "unterminated flow collection at end of input"
    UNKNOWN_TOKEN = "unknown token"


class ScanError(Exception):
    """Raised when the scanner meets malformed input.

    Attributes:
        kind: The error category.
        line: 1-based line number of the error.
        column: 1-based column number of the error.
        message: Human-readable description (defaults to the kind's message).
    """

    def __init__(self, kind: ErrorKind, line: int, column: int, message: str | None = None) -> None:
        self.kind = kind
        self.line = line
        self.column = column
        self.message = message if message is not None else kind.value
        super().__init__(f"Line {line}, column {column}: {self.message}")
