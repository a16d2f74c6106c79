# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tracking of pending simple-key candidates.

A simple key is only recognized once the ``:`` that follows it is scanned.
Until then the scanner records where the candidate started so that a ``KEY``
token can be inserted in front of it retroactively.
"""

from dataclasses import dataclass, replace

from yamlscan.scanner.errors import ErrorKind, ScanError

# ###############
# Public Interface
# ###############

DEFAULT_MAX_SIMPLE_KEY_LENGTH = 1024


@dataclass(frozen=True)
class SimpleKey:
    """A token run that may turn out to be a mapping key.

    Attributes:
        position: Absolute token-queue position of the candidate's first token.
        line: 1-based line where the candidate starts.
        column: 0-based column where the candidate starts.
        index: Absolute character offset where the candidate starts.
        flow_level: Flow nesting depth the candidate belongs to.
        required: Whether the candidate sits at the current block indentation,
            in which case it must turn out to be a key.
    """

    position: int
    line: int
    column: int
    index: int
    flow_level: int
    required: bool

    def is_valid_at(self, line: int, index: int, max_length: int) -> bool:
        """Whether a ``:`` at (*line*, *index*) may still confirm this candidate."""
        return line == self.line and index - self.index <= max_length


class SimpleKeyTracker:
    """At most one pending candidate per flow level."""

    def __init__(self, max_length: int = DEFAULT_MAX_SIMPLE_KEY_LENGTH) -> None:
        self.max_length = max_length
        self._keys: dict[int, SimpleKey] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, flow_level: int) -> bool:
        return flow_level in self._keys

    def get(self, flow_level: int) -> SimpleKey | None:
        return self._keys.get(flow_level)

    def insert(self, key: SimpleKey) -> None:
        """Record *key* as the candidate for its flow level, replacing the old one."""
        self.remove(key.flow_level)
        self._keys[key.flow_level] = key

    def remove(self, flow_level: int) -> None:
        """Drop the candidate at *flow_level*.

        Raises:
            ScanError: If the dropped candidate was required.
        """
        key = self._keys.pop(flow_level, None)
        if key is not None and key.required:
            raise _malformed(key)

    def pop(self, flow_level: int) -> SimpleKey | None:
        """Take the candidate at *flow_level* for confirmation."""
        return self._keys.pop(flow_level, None)

    def verify_all(self, line: int, index: int) -> None:
        """Drop every candidate that can no longer be confirmed at (*line*, *index*).

        Raises:
            ScanError: If a required candidate went stale.
        """
        for flow_level, key in list(self._keys.items()):
            if key.is_valid_at(line, index, self.max_length):
                continue
            del self._keys[flow_level]
            if key.required:
                raise _malformed(key)

    def shift_from(self, position: int) -> None:
        """Move candidates at or after *position* back by one queue slot."""
        for flow_level, key in self._keys.items():
            if key.position >= position:
                self._keys[flow_level] = replace(key, position=key.position + 1)

    @property
    def oldest_position(self) -> int | None:
        """Queue position of the oldest pending candidate, if any."""
        if not self._keys:
            return None
        return min(key.position for key in self._keys.values())

    def clear(self) -> None:
        self._keys.clear()


# ################
# Implementation
# ################


def _malformed(key: SimpleKey) -> ScanError:
    return ScanError(ErrorKind.MALFORMED_SIMPLE_KEY, key.line, key.column + 1)
