# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Forward-only character cursor over the scanner input."""

# ###############
# Public Interface
# ###############

EOF = ""
"""Sentinel returned by :meth:`InputCursor.peek` past the end of input."""


class InputCursor:
    """Character access with line and column tracking.

    ``line`` is 1-based. ``column`` is the 0-based indentation column, which is
    what the indentation rules compare against; :meth:`mark` converts both to
    the 1-based position reported in tokens and errors.

    ``\\n``, ``\\r\\n`` and a lone ``\\r`` each count as a single line break.
    """

    def __init__(self, source: str) -> None:
        if source.startswith("\ufeff"):
            source = source[1:]
        self._source = source
        self._pos = 0
        self.line = 1
        self.column = 0

    def __bool__(self) -> bool:
        return self._pos < len(self._source)

    @property
    def index(self) -> int:
        """Absolute character offset of the cursor."""
        return self._pos

    def peek(self, offset: int = 0) -> str:
        """Return the character *offset* positions ahead, or EOF past the end."""
        pos = self._pos + offset
        if pos < len(self._source):
            return self._source[pos]
        return EOF

    def startswith(self, text: str, offset: int = 0) -> bool:
        """Return True if the input at the cursor (plus *offset*) starts with *text*."""
        return self._source.startswith(text, self._pos + offset)

    def get(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        if self._pos >= len(self._source):
            return EOF
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n" or (ch == "\r" and self.peek() != "\n"):
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return ch

    def get_n(self, n: int) -> str:
        """Consume *n* characters and return them."""
        return "".join(self.get() for _ in range(n))

    def eat(self, n: int) -> None:
        """Consume *n* characters without returning them."""
        for _ in range(n):
            self.get()

    def mark(self) -> tuple[int, int]:
        """Return the 1-based (line, column) of the cursor."""
        return self.line, self.column + 1
