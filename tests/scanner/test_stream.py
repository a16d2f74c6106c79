# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the input cursor and the character patterns."""

import pytest

from yamlscan.scanner import chars
from yamlscan.scanner.stream import EOF, InputCursor

# ###############
# Input Cursor
# ###############


class TestInputCursor:
    def test_empty_input_is_falsy(self) -> None:
        cursor = InputCursor("")
        assert not cursor
        assert cursor.peek() == EOF
        assert cursor.get() == EOF

    def test_get_advances_column(self) -> None:
        cursor = InputCursor("ab")
        assert cursor.get() == "a"
        assert (cursor.line, cursor.column, cursor.index) == (1, 1, 1)

    @pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
    def test_line_break_starts_new_line(self, newline: str) -> None:
        cursor = InputCursor(f"a{newline}b")
        cursor.eat(1 + len(newline))
        assert cursor.peek() == "b"
        assert (cursor.line, cursor.column) == (2, 0)

    def test_peek_with_offset(self) -> None:
        cursor = InputCursor("abc")
        assert cursor.peek(2) == "c"
        assert cursor.peek(3) == EOF

    def test_startswith(self) -> None:
        cursor = InputCursor("--- x")
        assert cursor.startswith("---")
        assert cursor.startswith("x", 4)
        assert not cursor.startswith("...")

    def test_get_n(self) -> None:
        cursor = InputCursor("abcdef")
        assert cursor.get_n(4) == "abcd"
        assert cursor.get_n(4) == "ef"

    def test_mark_is_one_based(self) -> None:
        cursor = InputCursor("ab\ncd")
        cursor.eat(4)
        assert cursor.mark() == (2, 2)

    def test_byte_order_mark_is_dropped(self) -> None:
        cursor = InputCursor("\ufeffa")
        assert cursor.peek() == "a"
        assert cursor.mark() == (1, 1)


# ###############
# Character Patterns
# ###############


def _match(pattern: chars.Pattern, text: str) -> int | None:
    return pattern(InputCursor(text))


class TestPatterns:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("\n", 1), ("\r\n", 2), ("\r", 1), ("a", None), ("", None)],
    )
    def test_line_break(self, text: str, expected: int | None) -> None:
        assert _match(chars.line_break, text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("---", 3), ("--- a", 3), ("---\n", 3), ("---a", None), ("--", None)],
    )
    def test_doc_start(self, text: str, expected: int | None) -> None:
        assert _match(chars.doc_start, text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("- a", 1), ("-", 1), ("-\n", 1), ("-a", None), ("--", None)],
    )
    def test_block_entry(self, text: str, expected: int | None) -> None:
        assert _match(chars.block_entry, text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [(": ", 1), (":", 1), (":,", 1), (":]", 1), (":a", None)],
    )
    def test_value_in_flow(self, text: str, expected: int | None) -> None:
        assert _match(chars.value_in_flow, text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("a", 1), ("-a", 1), (":a", 1), ("- ", None), ("? ", None), ("#", None), ("&a", None), ("", None)],
    )
    def test_plain_scalar_start(self, text: str, expected: int | None) -> None:
        assert _match(chars.plain_scalar_start, text) == expected

    def test_question_mark_cannot_start_plain_scalar_in_flow(self) -> None:
        assert _match(chars.plain_scalar_start_in_flow, "?a") is None
        assert _match(chars.plain_scalar_start, "?a") == 1

    @pytest.mark.parametrize(
        ("text", "expected"),
        [(": ", 1), (" #", 2), ("\n#", 2), ("#", None), (":x", None)],
    )
    def test_end_scalar(self, text: str, expected: int | None) -> None:
        assert _match(chars.end_scalar, text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [(",", 1), ("]", 1), ("}", 1), (":,", 1), (":x", None), ("a", None)],
    )
    def test_end_scalar_in_flow(self, text: str, expected: int | None) -> None:
        assert _match(chars.end_scalar_in_flow, text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("+", 1), ("-", 1), ("2", 1), ("+2", 2), ("2-", 2), ("++", 1), (" ", None)],
    )
    def test_chomp_indicator(self, text: str, expected: int | None) -> None:
        assert _match(chars.chomp_indicator, text) == expected

    def test_single_quote_end_skips_escaped_quote(self) -> None:
        assert _match(chars.single_quote_end, "''") is None
        assert _match(chars.single_quote_end, "' ") == 1

    def test_escaped_break(self) -> None:
        assert _match(chars.escaped_break, "\\\n") == 2
        assert _match(chars.escaped_break, "\\\r\n") == 3
        assert _match(chars.escaped_break, "\\n") is None

    @pytest.mark.parametrize("ch", ["a", "Z", "9", "-", "_"])
    def test_anchor_characters(self, ch: str) -> None:
        assert chars.is_anchor_char(ch)

    @pytest.mark.parametrize("ch", [":", "=", " ", "é", EOF])
    def test_non_anchor_characters(self, ch: str) -> None:
        assert not chars.is_anchor_char(ch)
