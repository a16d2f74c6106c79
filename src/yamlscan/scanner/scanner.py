# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token dispatcher: turns the input into a queue of tokens.

The scanner pulls one token at a time on demand. A token is only released to
the consumer once no pending simple-key candidate can still insert a ``KEY``
token in front of it.
"""

import logging
from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from yamlscan.config import ScannerConfig
from yamlscan.scanner import chars
from yamlscan.scanner.dispatch import Indicator, classify
from yamlscan.scanner.errors import ErrorKind, ScanError
from yamlscan.scanner.indentation import IndentKind, IndentStack
from yamlscan.scanner.scalar import (
    Chomp,
    DocIndicatorAction,
    Folding,
    ScalarParams,
    TabAction,
    scan_scalar,
)
from yamlscan.scanner.simple_keys import SimpleKey, SimpleKeyTracker
from yamlscan.scanner.stream import InputCursor
from yamlscan.scanner.tokens import ScalarStyle, Token, TokenType

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class Scanner:
    """Pull-based scanner over a complete input text.

    Example:
        >>> [t.type.name for t in Scanner("key: value")]
        ['KEY', 'SCALAR', 'VALUE', 'SCALAR']
    """

    def __init__(self, source: str, config: ScannerConfig | None = None) -> None:
        config = config or ScannerConfig()
        self._input = InputCursor(source)
        self._state = _ScannerState()
        self._indents = IndentStack()
        self._simple_keys = SimpleKeyTracker(config.max_simple_key_length)
        self._strict_tabs = config.strict_tabs
        self._tokens: deque[Token] = deque()
        # Absolute queue position of self._tokens[0].
        self._released = 0
        self._ended = False
        self._routines: dict[Indicator, Callable[[], None]] = {
            Indicator.DIRECTIVE: self._scan_directive,
            Indicator.DOC_START: self._scan_doc_start,
            Indicator.DOC_END: self._scan_doc_end,
            Indicator.FLOW_START: self._scan_flow_start,
            Indicator.FLOW_END: self._scan_flow_end,
            Indicator.FLOW_ENTRY: self._scan_flow_entry,
            Indicator.BLOCK_ENTRY: self._scan_block_entry,
            Indicator.KEY: self._scan_key,
            Indicator.VALUE: self._scan_value,
            Indicator.ANCHOR_OR_ALIAS: self._scan_anchor_or_alias,
            Indicator.TAG: self._scan_tag,
            Indicator.BLOCK_SCALAR: self._scan_block_scalar,
            Indicator.QUOTED_SCALAR: self._scan_quoted_scalar,
            Indicator.PLAIN_SCALAR: self._scan_plain_scalar,
            Indicator.UNKNOWN: self._scan_unknown,
        }

    def __iter__(self) -> Iterator[Token]:
        while not self.empty():
            yield self.pop()

    def empty(self) -> bool:
        """Return True once every token has been consumed."""
        self._ensure_tokens_in_queue()
        return not self._tokens

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at the end."""
        self._ensure_tokens_in_queue()
        return self._tokens[0] if self._tokens else None

    def pop(self) -> Token:
        """Consume and return the next token.

        Raises:
            IndexError: If the stream is exhausted.
            ScanError: If the input is malformed.
        """
        self._ensure_tokens_in_queue()
        if not self._tokens:
            raise IndexError("pop from an exhausted token stream")
        self._released += 1
        return self._tokens.popleft()

    @property
    def blocks_closed(self) -> int:
        """Number of block collections implicitly closed by dedents so far."""
        return self._state.blocks_closed

    @property
    def last_key_was_valid(self) -> bool:
        """Whether the most recent value indicator confirmed a simple key."""
        return self._state.last_key_was_valid

    # ------------------------------------------------------------------
    # Queue management
    # ------------------------------------------------------------------

    def _ensure_tokens_in_queue(self) -> None:
        while True:
            if self._tokens and self._front_is_final():
                return
            if self._ended:
                return
            self._scan_next_token()

    def _front_is_final(self) -> bool:
        oldest = self._simple_keys.oldest_position
        return oldest is None or self._released < oldest

    @property
    def _next_position(self) -> int:
        return self._released + len(self._tokens)

    def _push_token(self, token: Token) -> None:
        self._tokens.append(token)
        self._state.last_token_type = token.type

    def _insert_token(self, position: int, token: Token) -> None:
        self._tokens.insert(position - self._released, token)
        self._simple_keys.shift_from(position)
        logger.debug("Inserted %s at queue position %d", token.type.name, position)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _scan_next_token(self) -> None:
        self._scan_to_next_token()
        self._simple_keys.verify_all(self._input.line, self._input.index)
        self._pop_indent_to_here()

        if not self._input:
            self._end_stream()
            return

        indicator = classify(self._input, self._state.flow_level, self._state.can_be_json_flow)
        self._routines[indicator]()

    def _scan_to_next_token(self) -> None:
        """Skip blanks, comments and line breaks up to the next token."""
        in_block = self._state.flow_level == 0
        leading = self._input.column == 0
        tab_mark: tuple[int, int] | None = None
        while True:
            while chars.is_blank(self._input.peek()):
                if leading and tab_mark is None and self._input.peek() == "\t":
                    tab_mark = self._input.mark()
                self._input.eat(1)

            if chars.comment(self._input) is not None:
                while self._input and chars.line_break(self._input) is None:
                    self._input.eat(1)

            n = chars.line_break(self._input)
            if n is None:
                break
            self._input.eat(n)
            leading = True
            tab_mark = None
            if in_block:
                self._state.simple_key_allowed = True

        if tab_mark is not None and self._strict_tabs and in_block and self._starts_block_structure():
            raise ScanError(ErrorKind.TAB_IN_INDENTATION, *tab_mark)

    def _starts_block_structure(self) -> bool:
        """Whether the next token could open or continue a block collection."""
        if not self._input:
            return False
        if self._state.simple_key_allowed:
            return True
        return any(
            pattern(self._input) is not None for pattern in (chars.block_entry, chars.key, chars.value)
        )

    def _pop_indent_to_here(self) -> None:
        if self._state.flow_level > 0:
            return
        keep_sequence = chars.block_entry(self._input) is not None
        self._pop_indent_to(self._input.column, keep_sequence)

    def _pop_indent_to(self, column: int, keep_sequence: bool = False) -> None:
        closed = self._indents.pop_indent_to(column, keep_sequence)
        if closed:
            self._state.blocks_closed += closed
            logger.debug("Closed %d block level(s) at line %d", closed, self._input.line)

    def _push_indent_to(self, column: int, kind: IndentKind) -> None:
        if self._state.flow_level == 0:
            self._indents.push_indent_to(column, kind)

    def _end_stream(self) -> None:
        if self._state.flow_level > 0:
            raise self._error(ErrorKind.UNTERMINATED_FLOW_COLLECTION)
        self._pop_indent_to(-1)
        self._simple_keys.remove(0)
        self._simple_keys.clear()
        self._state.simple_key_allowed = False
        self._ended = True
        logger.debug("Stream ended at line %d, %d block level(s) closed", self._input.line, self.blocks_closed)

    # ------------------------------------------------------------------
    # Simple keys
    # ------------------------------------------------------------------

    def _insert_simple_key(self) -> None:
        if not self._state.simple_key_allowed:
            return
        level = self._state.flow_level
        self._simple_keys.insert(
            SimpleKey(
                position=self._next_position,
                line=self._input.line,
                column=self._input.column,
                index=self._input.index,
                flow_level=level,
                required=level == 0 and self._indents.top_column == self._input.column,
            )
        )

    # ------------------------------------------------------------------
    # Token scanners
    # ------------------------------------------------------------------

    def _scan_directive(self) -> None:
        """``%NAME param param``. No semantic checking; that is the parser's job."""
        self._pop_indent_to(-1)
        self._simple_keys.verify_all(self._input.line, self._input.index)
        self._state.simple_key_allowed = False

        line, column = self._input.mark()
        self._input.eat(1)

        name = self._read_until_blank_or_break()
        params: list[str] = []
        while True:
            while chars.is_blank(self._input.peek()):
                self._input.eat(1)
            if not self._input or chars.line_break(self._input) is not None or chars.comment(self._input):
                break
            params.append(self._read_until_blank_or_break())

        self._push_token(Token(TokenType.DIRECTIVE, line, column, name, tuple(params)))

    def _scan_doc_start(self) -> None:
        self._scan_doc_indicator(TokenType.DOC_START)

    def _scan_doc_end(self) -> None:
        self._scan_doc_indicator(TokenType.DOC_END)

    def _scan_doc_indicator(self, token_type: TokenType) -> None:
        self._pop_indent_to(-1)
        self._simple_keys.verify_all(self._input.line, self._input.index)
        self._state.simple_key_allowed = False
        self._state.can_be_json_flow = False

        line, column = self._input.mark()
        self._input.eat(3)
        self._push_token(Token(token_type, line, column))

    def _scan_flow_start(self) -> None:
        # Flow collections can be simple keys.
        self._insert_simple_key()
        self._state.flow_level += 1
        self._state.simple_key_allowed = True
        self._state.can_be_json_flow = False

        line, column = self._input.mark()
        ch = self._input.get()
        token_type = TokenType.FLOW_SEQ_START if ch == "[" else TokenType.FLOW_MAP_START
        self._push_token(Token(token_type, line, column))

    def _scan_flow_end(self) -> None:
        if self._state.flow_level == 0:
            raise self._error(ErrorKind.UNEXPECTED_FLOW_END)

        self._simple_keys.remove(self._state.flow_level)
        self._state.flow_level -= 1
        self._state.simple_key_allowed = False
        self._state.can_be_json_flow = True

        line, column = self._input.mark()
        ch = self._input.get()
        token_type = TokenType.FLOW_SEQ_END if ch == "]" else TokenType.FLOW_MAP_END
        self._push_token(Token(token_type, line, column))

    def _scan_flow_entry(self) -> None:
        self._simple_keys.remove(self._state.flow_level)
        self._state.simple_key_allowed = True
        self._state.can_be_json_flow = False

        line, column = self._input.mark()
        self._input.eat(1)
        self._push_token(Token(TokenType.FLOW_ENTRY, line, column))

    def _scan_block_entry(self) -> None:
        if self._state.flow_level > 0 or not self._state.simple_key_allowed:
            raise self._error(ErrorKind.ILLEGAL_BLOCK_ENTRY)

        # A sequence at the column of an open mapping is only legal as that
        # mapping's value (``key:\n- a``).
        column = self._input.column
        top = self._indents.top
        if (
            len(self._indents) > 0
            and top.column == column
            and top.kind is IndentKind.MAP
            and self._state.last_token_type is not TokenType.VALUE
        ):
            raise self._error(ErrorKind.ILLEGAL_BLOCK_ENTRY, "block sequence entry at the indentation of a mapping")

        self._push_indent_to(column, IndentKind.SEQ)
        self._simple_keys.remove(self._state.flow_level)
        self._state.simple_key_allowed = True
        self._state.can_be_json_flow = False

        line, column = self._input.mark()
        self._input.eat(1)
        self._push_token(Token(TokenType.BLOCK_ENTRY, line, column))

    def _scan_key(self) -> None:
        in_block = self._state.flow_level == 0
        if in_block:
            if not self._state.simple_key_allowed:
                raise self._error(ErrorKind.ILLEGAL_MAP_KEY)
            self._push_indent_to(self._input.column, IndentKind.MAP)

        self._simple_keys.remove(self._state.flow_level)
        # Only a block-context explicit key may be followed by a simple key.
        self._state.simple_key_allowed = in_block
        self._state.can_be_json_flow = False

        line, column = self._input.mark()
        self._input.eat(1)
        self._push_token(Token(TokenType.KEY, line, column))

    def _scan_value(self) -> None:
        in_block = self._state.flow_level == 0
        key = self._simple_keys.pop(self._state.flow_level)
        is_valid = key is not None and key.is_valid_at(
            self._input.line, self._input.index, self._simple_keys.max_length
        )
        self._state.last_key_was_valid = is_valid

        if key is not None and is_valid:
            self._insert_token(key.position, Token(TokenType.KEY, key.line, key.column + 1))
            self._push_indent_to(key.column, IndentKind.MAP)
            # A simple key cannot directly follow another simple key.
            self._state.simple_key_allowed = False
        else:
            if key is not None and key.required:
                raise ScanError(ErrorKind.MALFORMED_SIMPLE_KEY, key.line, key.column + 1)
            if in_block:
                if not self._state.simple_key_allowed:
                    raise self._error(ErrorKind.ILLEGAL_MAP_VALUE)
                self._push_indent_to(self._input.column, IndentKind.MAP)
            self._state.simple_key_allowed = in_block
        self._state.can_be_json_flow = False

        line, column = self._input.mark()
        self._input.eat(1)
        self._push_token(Token(TokenType.VALUE, line, column))

    def _scan_anchor_or_alias(self) -> None:
        self._insert_simple_key()
        self._state.simple_key_allowed = False
        self._state.can_be_json_flow = False

        line, column = self._input.mark()
        indicator = self._input.get()
        is_alias = indicator == "*"

        name: list[str] = []
        while chars.is_anchor_char(self._input.peek()):
            name.append(self._input.get())

        what = "alias" if is_alias else "anchor"
        if not name:
            raise ScanError(
                ErrorKind.ANCHOR_OR_ALIAS_NOT_FOUND, line, column, f"{what} name not found after {indicator!r}"
            )
        if self._input and chars.anchor_end(self._input) is None:
            raise self._error(
                ErrorKind.INVALID_CHAR_IN_ANCHOR_OR_ALIAS,
                f"illegal character {self._input.peek()!r} found while scanning {what}",
            )

        token_type = TokenType.ALIAS if is_alias else TokenType.ANCHOR
        self._push_token(Token(token_type, line, column, "".join(name)))

    def _scan_tag(self) -> None:
        """``!suffix``, ``!handle!suffix`` or the verbatim ``!<uri>``."""
        self._insert_simple_key()
        self._state.simple_key_allowed = False
        self._state.can_be_json_flow = False

        line, column = self._input.mark()
        if self._input.peek(1) == "<":
            handle = ""
            suffix = self._scan_verbatim_tag()
        else:
            handle = self._input.get()
            handle += self._read_tag_chars(stop_at_bang=True)
            if self._input.peek() == "!":
                handle += self._input.get()
                suffix = self._read_tag_chars(stop_at_bang=False)
            else:
                # A lone "!" handle: everything read so far is the suffix.
                suffix = handle[1:]
                handle = "!"

        if self._input and not self._at_tag_end():
            raise self._error(
                ErrorKind.INVALID_CHAR_IN_TAG, f"illegal character {self._input.peek()!r} found while scanning tag"
            )
        self._push_token(Token(TokenType.TAG, line, column, handle, (suffix,)))

    def _scan_plain_scalar(self) -> None:
        in_flow = self._state.flow_level > 0
        params = ScalarParams(
            end=chars.end_scalar_in_flow if in_flow else chars.end_scalar,
            eat_end=False,
            indent=0 if in_flow else self._indents.top_column + 1,
            fold=Folding.FLOW,
            eat_leading_whitespace=True,
            trim_trailing_spaces=True,
            chomp=Chomp.CLIP,
            on_doc_indicator=DocIndicatorAction.BREAK,
            on_tab_in_indentation=TabAction.THROW,
        )
        self._insert_simple_key()

        line, column = self._input.mark()
        value = scan_scalar(self._input, params)

        # A simple key may only follow if the scalar ended by starting a new line.
        self._state.simple_key_allowed = params.leading_spaces
        self._state.can_be_json_flow = False
        self._push_token(Token(TokenType.SCALAR, line, column, value, (ScalarStyle.PLAIN.value,)))

    def _scan_quoted_scalar(self) -> None:
        self._insert_simple_key()

        line, column = self._input.mark()
        quote = self._input.get()
        single = quote == "'"
        params = ScalarParams(
            end=chars.single_quote_end if single else chars.double_quote_end,
            eat_end=True,
            escape="'" if single else "\\",
            indent=0,
            fold=Folding.FLOW,
            eat_leading_whitespace=True,
            trim_trailing_spaces=False,
            chomp=Chomp.CLIP,
            on_doc_indicator=DocIndicatorAction.THROW,
        )
        value = scan_scalar(self._input, params)

        self._state.simple_key_allowed = False
        self._state.can_be_json_flow = True
        style = ScalarStyle.SINGLE_QUOTED if single else ScalarStyle.DOUBLE_QUOTED
        self._push_token(Token(TokenType.SCALAR, line, column, value, (style.value,)))

    def _scan_block_scalar(self) -> None:
        """``|`` or ``>`` with optional chomping and indentation indicators.

        The header line is not part of the scalar; only blanks and a comment
        may follow the indicators.
        """
        self._simple_keys.remove(self._state.flow_level)

        line, column = self._input.mark()
        indicator = self._input.get()
        params = ScalarParams(
            indent=1,
            detect_indent=True,
            fold=Folding.BLOCK if indicator == ">" else Folding.NONE,
            eat_leading_whitespace=False,
            trim_trailing_spaces=False,
            on_doc_indicator=DocIndicatorAction.BREAK,
            on_tab_in_indentation=TabAction.THROW,
        )

        for _ in range(chars.chomp_indicator(self._input) or 0):
            mark = self._input.mark()
            ch = self._input.get()
            if ch == "+":
                params.chomp = Chomp.KEEP
            elif ch == "-":
                params.chomp = Chomp.STRIP
            elif ch == "0":
                raise ScanError(ErrorKind.ZERO_INDENT_IN_BLOCK_SCALAR, *mark)
            else:
                params.indent = int(ch)
                params.detect_indent = False

        while chars.is_blank(self._input.peek()):
            self._input.eat(1)
        if chars.comment(self._input) is not None:
            while self._input and chars.line_break(self._input) is None:
                self._input.eat(1)
        if self._input and chars.line_break(self._input) is None:
            raise self._error(ErrorKind.INVALID_CHAR_IN_BLOCK_SCALAR)

        if self._indents.top_column >= 0:
            params.indent += self._indents.top_column

        value = scan_scalar(self._input, params)

        # The scalar always ends at the start of a line.
        self._state.simple_key_allowed = True
        self._state.can_be_json_flow = False
        style = ScalarStyle.FOLDED if indicator == ">" else ScalarStyle.LITERAL
        self._push_token(Token(TokenType.SCALAR, line, column, value, (style.value,)))

    def _scan_unknown(self) -> None:
        raise self._error(ErrorKind.UNKNOWN_TOKEN, f"unknown token starting with {self._input.peek()!r}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _error(self, kind: ErrorKind, message: str | None = None) -> ScanError:
        return ScanError(kind, *self._input.mark(), message)

    def _read_until_blank_or_break(self) -> str:
        text: list[str] = []
        while self._input and not chars.is_blank_or_break(self._input.peek()):
            text.append(self._input.get())
        return "".join(text)

    def _read_tag_chars(self, stop_at_bang: bool) -> str:
        text: list[str] = []
        while self._input:
            ch = self._input.peek()
            if chars.is_blank_or_break(ch) or (stop_at_bang and ch == "!"):
                break
            if self._state.flow_level > 0 and ch in chars.FLOW_INDICATORS:
                break
            text.append(self._input.get())
        return "".join(text)

    def _scan_verbatim_tag(self) -> str:
        self._input.eat(2)
        uri: list[str] = []
        while self._input.peek() != ">":
            if not self._input or chars.is_blank_or_break(self._input.peek()):
                raise self._error(ErrorKind.INVALID_CHAR_IN_TAG, "end of verbatim tag not found")
            uri.append(self._input.get())
        self._input.eat(1)
        return "".join(uri)

    def _at_tag_end(self) -> bool:
        ch = self._input.peek()
        if chars.is_blank_or_break(ch):
            return True
        return self._state.flow_level > 0 and ch in ",]}"


def tokenize(source: str, config: ScannerConfig | None = None) -> list[Token]:
    """Scan *source* completely and return its tokens in order.

    Args:
        source: The full input text.
        config: Optional scanner settings; defaults apply when omitted.

    Returns:
        Every token of the stream.

    Raises:
        ScanError: If the input is malformed.
    """
    return list(Scanner(source, config))


# ################
# Implementation
# ################


@dataclass
class _ScannerState:
    """Context flags owned by one scanner."""

    flow_level: int = 0
    simple_key_allowed: bool = True
    last_key_was_valid: bool = False
    can_be_json_flow: bool = False
    last_token_type: TokenType | None = None
    blocks_closed: int = 0
