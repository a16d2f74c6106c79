# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scalar scan engine shared by plain, quoted and block scalars.

A single algorithm consumes every scalar style; the differences between
styles are expressed entirely through :class:`ScalarParams`. Each line is
processed in three phases:

1. accumulate characters up to the end pattern or a line break, decoding
   escapes on the way;
2. consume the line break;
3. consume the indentation of the next line (auto-detecting it for block
   scalars) and fold the line break according to the folding mode.

The scalar ends at the end of input, when the end pattern matches, or when a
non-empty line is indented less than the required indentation.
"""

import enum
from dataclasses import dataclass, field

from yamlscan.scanner import chars
from yamlscan.scanner.chars import Pattern
from yamlscan.scanner.errors import ErrorKind, ScanError
from yamlscan.scanner.stream import EOF, InputCursor

# ###############
# Public Interface
# ###############


class Folding(enum.Enum):
    """How line breaks between content lines are rendered."""

    NONE = "none"  # literal: every break is kept
    FLOW = "flow"  # plain and quoted: a single break becomes a space
    BLOCK = "block"  # folded block: like FLOW, except around more-indented lines


class Chomp(enum.Enum):
    """Policy for trailing line breaks."""

    CLIP = "clip"
    STRIP = "strip"
    KEEP = "keep"


class DocIndicatorAction(enum.Enum):
    """What a ``---``/``...`` at column 0 does inside a scalar."""

    NONE = "none"
    BREAK = "break"
    THROW = "throw"


class TabAction(enum.Enum):
    """What a tab inside the required indentation does."""

    NONE = "none"
    THROW = "throw"


@dataclass
class ScalarParams:
    """Configuration of one scalar scan.

    ``leading_spaces`` is an output: after :func:`scan_scalar` returns it is
    True when the scalar ended by dedenting onto a new line.
    """

    end: Pattern | None = None
    eat_end: bool = False
    escape: str | None = None
    indent: int = 0
    detect_indent: bool = False
    fold: Folding = Folding.NONE
    eat_leading_whitespace: bool = False
    trim_trailing_spaces: bool = False
    chomp: Chomp = Chomp.CLIP
    on_doc_indicator: DocIndicatorAction = DocIndicatorAction.NONE
    on_tab_in_indentation: TabAction = TabAction.NONE
    leading_spaces: bool = field(default=False, init=False)


def scan_scalar(cursor: InputCursor, params: ScalarParams) -> str:
    """Consume a scalar body and return its value.

    Args:
        cursor: Input positioned at the first character of the scalar body.
        params: Scan configuration; ``indent`` is updated when auto-detected.

    Returns:
        The folded and chomped scalar value.

    Raises:
        ScanError: On an unterminated scalar, an invalid escape, a document
            indicator or tab where *params* forbid them.
    """
    end = params.end or _never
    found_non_empty_line = False
    past_opening_break = params.fold is Folding.FLOW
    empty_line = False
    more_indented = False
    folded_newline_count = 0
    folded_newline_started_more_indented = False
    # Length of the output after the last escape; escaped text is never trimmed.
    last_escaped = 0
    # Flow folding only commits a line break once more content follows it.
    pending_fold = ""
    out: list[str] = []
    params.leading_spaces = False

    while cursor:
        # Phase 1: scan until the end of the line.
        last_non_blank = len(out)
        escaped_newline = False
        while end(cursor) is None and chars.line_break(cursor) is None:
            if not cursor:
                break
            if cursor.column == 0 and chars.doc_indicator(cursor) is not None:
                if params.on_doc_indicator is DocIndicatorAction.BREAK:
                    break
                if params.on_doc_indicator is DocIndicatorAction.THROW:
                    raise ScanError(ErrorKind.DOCUMENT_INDICATOR_IN_SCALAR, *cursor.mark())

            found_non_empty_line = True
            past_opening_break = True
            if pending_fold:
                out.extend(pending_fold)
                pending_fold = ""
                last_non_blank = len(out)

            if params.escape == "\\" and chars.escaped_break(cursor) is not None:
                cursor.get()
                last_non_blank = last_escaped = len(out)
                escaped_newline = True
                break

            if params.escape is not None and cursor.peek() == params.escape:
                out.extend(decode_escape(cursor))
                last_non_blank = last_escaped = len(out)
                continue

            ch = cursor.get()
            out.append(ch)
            if not chars.is_blank(ch):
                last_non_blank = len(out)

        if not cursor:
            if params.eat_end:
                raise ScanError(ErrorKind.EOF_IN_SCALAR, *cursor.mark())
            break

        if (
            params.on_doc_indicator is DocIndicatorAction.BREAK
            and cursor.column == 0
            and chars.doc_indicator(cursor) is not None
        ):
            break

        n = end(cursor)
        if n is not None:
            if params.eat_end:
                out.extend(pending_fold)
                cursor.eat(n)
            break

        if params.fold is Folding.FLOW:
            del out[last_non_blank:]

        # Phase 2: eat the line break.
        cursor.eat(chars.line_break(cursor) or 0)

        # Phase 3: the required indentation, then the remaining leading blanks.
        while (
            cursor.peek() == " "
            and (cursor.column < params.indent or (params.detect_indent and not found_non_empty_line))
            and end(cursor) is None
        ):
            cursor.eat(1)

        if params.detect_indent and not found_non_empty_line:
            params.indent = max(params.indent, cursor.column)

        while chars.is_blank(cursor.peek()):
            if (
                cursor.peek() == "\t"
                and cursor.column < params.indent
                and params.on_tab_in_indentation is TabAction.THROW
            ):
                raise ScanError(ErrorKind.TAB_IN_INDENTATION, *cursor.mark())
            if not params.eat_leading_whitespace or end(cursor) is not None:
                break
            cursor.eat(1)

        next_empty_line = chars.line_break(cursor) is not None
        next_more_indented = chars.is_blank(cursor.peek())
        ending = cursor.peek() == EOF or (not next_empty_line and cursor.column < params.indent)
        if params.fold is Folding.BLOCK and folded_newline_count == 0 and next_empty_line:
            folded_newline_started_more_indented = more_indented

        # The break that ends a block scalar's header line is not content.
        if past_opening_break:
            if params.fold is Folding.NONE:
                out.append("\n")
            elif params.fold is Folding.BLOCK:
                if ending:
                    # Trailing breaks are kept verbatim and left to chomping.
                    out.extend("\n" * (folded_newline_count + 1))
                    folded_newline_count = 0
                else:
                    if (
                        not empty_line
                        and not next_empty_line
                        and not more_indented
                        and not next_more_indented
                        and cursor.column >= params.indent
                    ):
                        out.append(" ")
                    elif next_empty_line:
                        folded_newline_count += 1
                    else:
                        out.append("\n")

                    if not next_empty_line and folded_newline_count > 0:
                        out.extend("\n" * (folded_newline_count - 1))
                        if folded_newline_started_more_indented or next_more_indented or not found_non_empty_line:
                            out.append("\n")
                        folded_newline_count = 0
            else:
                if next_empty_line:
                    pending_fold = pending_fold.strip(" ") + "\n"
                elif not empty_line and not escaped_newline:
                    pending_fold = " "

        empty_line = next_empty_line
        more_indented = next_more_indented
        past_opening_break = True

        if not empty_line and cursor.column < params.indent:
            params.leading_spaces = True
            break

    if params.trim_trailing_spaces:
        keep = len(out)
        while keep > last_escaped and chars.is_blank(out[keep - 1]):
            keep -= 1
        del out[keep:]

    if params.chomp is not Chomp.KEEP:
        content = len(out)
        while content > last_escaped and out[content - 1] == "\n":
            content -= 1
        if params.chomp is Chomp.STRIP or content == 0:
            del out[content:]
        else:
            del out[content + 1 :]

    return "".join(out)


def decode_escape(cursor: InputCursor) -> str:
    """Consume an escape sequence at the cursor and return the decoded text.

    The cursor must be positioned on the escape character (a backslash, or a
    single quote for the ``''`` sequence of single-quoted scalars).

    Raises:
        ScanError: On an unknown escape letter, malformed hex digits or an
            invalid code point.
    """
    line, column = cursor.mark()
    escape = cursor.get()
    ch = cursor.get()

    if escape == "'" and ch == "'":
        return "'"
    if ch == EOF:
        raise ScanError(ErrorKind.EOF_IN_SCALAR, *cursor.mark())
    if ch in _HEX_ESCAPE_WIDTHS:
        return _decode_hex(cursor, _HEX_ESCAPE_WIDTHS[ch], line, column)
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    raise ScanError(ErrorKind.INVALID_ESCAPE, line, column, f"unknown escape character: {ch!r}")


# ################
# Implementation
# ################

_ESCAPES: dict[str, str] = {
    "0": "\x00",
    "a": "\x07",
    "b": "\x08",
    "t": "\t",
    "\t": "\t",
    "n": "\n",
    "v": "\x0b",
    "f": "\x0c",
    "r": "\r",
    "e": "\x1b",
    " ": " ",
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
    "N": "\x85",
    "_": "\xa0",
    "L": "\u2028",
    "P": "\u2029",
}

_HEX_ESCAPE_WIDTHS: dict[str, int] = {"x": 2, "u": 4, "U": 8}


def _never(cursor: InputCursor) -> int | None:
    return None


def _decode_hex(cursor: InputCursor, width: int, line: int, column: int) -> str:
    digits = cursor.get_n(width)
    if len(digits) < width or any(d not in chars.HEX_DIGITS for d in digits):
        raise ScanError(
            ErrorKind.INVALID_ESCAPE,
            line,
            column,
            f"bad character found while scanning hex number: {digits!r}",
        )
    code = int(digits, 16)
    if 0xD800 <= code <= 0xDFFF or code > 0x10FFFF:
        raise ScanError(ErrorKind.INVALID_ESCAPE, line, column, f"invalid unicode: {code:#x}")
    return chr(code)
