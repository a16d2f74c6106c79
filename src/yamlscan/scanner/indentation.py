# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Stack of open block-structure indentation levels."""

import enum
from collections.abc import Iterator
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class IndentKind(enum.Enum):
    """Which indicator opened an indentation level."""

    MAP = "map"
    SEQ = "seq"


@dataclass(frozen=True)
class IndentLevel:
    """One open block collection.

    Attributes:
        column: 0-based column of the collection's indicators.
        kind: Whether a block entry (``SEQ``) or a key/value (``MAP``) opened it.
    """

    column: int
    kind: IndentKind


BASE_LEVEL = IndentLevel(-1, IndentKind.MAP)
"""Sentinel below every real level: no indentation enforced yet."""


class IndentStack:
    """Open indentation levels, innermost on top.

    Columns never decrease from bottom to top. They strictly increase except
    for a sequence opened at the same column as the mapping directly below it
    (an indentless sequence such as ``key:\\n- a``).
    """

    def __init__(self) -> None:
        self._levels: list[IndentLevel] = []

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[IndentLevel]:
        return iter(self._levels)

    @property
    def top(self) -> IndentLevel:
        """The innermost level, or the sentinel when no level is open."""
        return self._levels[-1] if self._levels else BASE_LEVEL

    @property
    def top_column(self) -> int:
        return self.top.column

    def push_indent_to(self, column: int, kind: IndentKind) -> bool:
        """Open a new level at *column* if it is deeper than the current top.

        A sequence may also open at the same column as an enclosing mapping.

        Returns:
            True if a level was pushed.
        """
        top = self.top
        if column < 0 or column < top.column:
            return False
        if column == top.column and not (kind is IndentKind.SEQ and top.kind is IndentKind.MAP):
            return False
        self._levels.append(IndentLevel(column, kind))
        return True

    def pop_indent_to(self, column: int, keep_sequence: bool = False) -> int:
        """Close every level deeper than *column*.

        A sequence level sitting exactly at *column* is closed too, unless
        *keep_sequence* is set because the next token continues that sequence.
        ``pop_indent_to(-1)`` closes everything.

        Returns:
            The number of closed levels.
        """
        popped = 0
        while self._levels:
            top = self._levels[-1]
            if top.column < column:
                break
            if top.column == column and (top.kind is IndentKind.MAP or keep_sequence):
                break
            self._levels.pop()
            popped += 1
        return popped
