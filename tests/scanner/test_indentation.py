# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the indentation stack."""

import pytest

from yamlscan.scanner.indentation import BASE_LEVEL, IndentKind, IndentLevel, IndentStack

MAP = IndentKind.MAP
SEQ = IndentKind.SEQ

# ###############
# Indentation Stack
# ###############


def _stack(*levels: tuple[int, IndentKind]) -> IndentStack:
    stack = IndentStack()
    for column, kind in levels:
        assert stack.push_indent_to(column, kind)
    return stack


class TestIndentStack:
    def test_empty_stack_reports_base_level(self) -> None:
        stack = IndentStack()
        assert stack.top == BASE_LEVEL
        assert stack.top_column == -1
        assert len(stack) == 0

    def test_push_deeper_level(self) -> None:
        stack = _stack((0, MAP), (2, SEQ))
        assert list(stack) == [IndentLevel(0, MAP), IndentLevel(2, SEQ)]

    def test_push_shallower_level_is_ignored(self) -> None:
        stack = _stack((2, MAP))
        assert not stack.push_indent_to(0, MAP)
        assert len(stack) == 1

    def test_push_negative_column_is_ignored(self) -> None:
        assert not IndentStack().push_indent_to(-1, MAP)

    def test_sequence_may_share_column_with_mapping(self) -> None:
        stack = _stack((0, MAP))
        assert stack.push_indent_to(0, SEQ)
        assert stack.top == IndentLevel(0, SEQ)

    @pytest.mark.parametrize(
        ("below", "kind"),
        [(MAP, MAP), (SEQ, SEQ), (SEQ, MAP)],
    )
    def test_other_levels_at_same_column_are_ignored(self, below: IndentKind, kind: IndentKind) -> None:
        stack = _stack((0, below))
        assert not stack.push_indent_to(0, kind)

    def test_pop_returns_number_of_closed_levels(self) -> None:
        stack = _stack((0, MAP), (2, MAP), (4, SEQ))
        assert stack.pop_indent_to(0) == 2
        assert stack.top == IndentLevel(0, MAP)

    def test_pop_to_minus_one_closes_everything(self) -> None:
        stack = _stack((0, MAP), (0, SEQ))
        assert stack.pop_indent_to(-1) == 2
        assert len(stack) == 0

    def test_pop_closes_sequence_at_same_column(self) -> None:
        stack = _stack((0, MAP), (0, SEQ))
        assert stack.pop_indent_to(0) == 1
        assert stack.top == IndentLevel(0, MAP)

    def test_pop_keeps_sequence_at_same_column_when_asked(self) -> None:
        stack = _stack((0, MAP), (0, SEQ))
        assert stack.pop_indent_to(0, keep_sequence=True) == 0

    def test_push_then_pop_restores_stack(self) -> None:
        stack = _stack((0, MAP))
        before = list(stack)
        stack.push_indent_to(2, SEQ)
        stack.push_indent_to(4, MAP)
        assert stack.pop_indent_to(0) == 2
        assert list(stack) == before

    def test_columns_never_decrease(self) -> None:
        stack = IndentStack()
        for column, kind in [(0, MAP), (0, SEQ), (2, MAP), (1, MAP), (2, SEQ), (6, MAP)]:
            stack.push_indent_to(column, kind)
        columns = [level.column for level in stack]
        assert columns == sorted(columns)
