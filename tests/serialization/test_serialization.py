# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for token stream serialization."""

import json

from yamlscan.scanner import Token, TokenType, tokenize
from yamlscan.serialization import (
    TOKENS_FORMAT_VERSION,
    format_token,
    format_tokens,
    serialize,
)

# ###############
# JSON
# ###############


class TestJson:
    def test_tokens_keep_stream_order(self) -> None:
        tokens = tokenize("%YAML 1.2\n---\n!!str &a key: [1, *a]\n")
        obj = json.loads(serialize(tokens))
        assert [t["type"] for t in obj["tokens"]] == [t.type.name for t in tokens]
        assert [(t["line"], t["column"]) for t in obj["tokens"]] == [(t.line, t.column) for t in tokens]

    def test_format_is_versioned(self) -> None:
        obj = json.loads(serialize([]))
        assert obj == {"v": TOKENS_FORMAT_VERSION, "tokens": []}

    def test_empty_value_and_params_are_omitted(self) -> None:
        obj = json.loads(serialize([Token(TokenType.KEY, 1, 1)]))
        assert obj["tokens"] == [{"type": "KEY", "line": 1, "column": 1}]

    def test_scalar_fields(self) -> None:
        obj = json.loads(serialize(tokenize("a")))
        assert obj["tokens"] == [{"type": "SCALAR", "line": 1, "column": 1, "value": "a", "params": ["plain"]}]


# ###############
# Text Listing
# ###############


class TestTextListing:
    def test_token_without_value(self) -> None:
        assert format_token(Token(TokenType.BLOCK_ENTRY, 2, 3)) == "2:3 BLOCK_ENTRY"

    def test_token_with_value_and_params(self) -> None:
        token = Token(TokenType.TAG, 1, 1, "!!", ("str",))
        assert format_token(token) == '1:1 TAG "!!" ["str"]'

    def test_value_is_escaped(self) -> None:
        token = Token(TokenType.SCALAR, 1, 1, "a\nb", ("literal",))
        assert format_token(token) == '1:1 SCALAR "a\\nb" ["literal"]'

    def test_listing_has_one_line_per_token(self) -> None:
        listing = format_tokens(tokenize("key: value"))
        assert listing.splitlines() == [
            "1:1 KEY",
            '1:1 SCALAR "key" ["plain"]',
            "1:4 VALUE",
            '1:6 SCALAR "value" ["plain"]',
        ]
