# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of token streams as JSON or as a plain-text listing.

The JSON format is versioned so consumers can detect schema changes.
"""

import json
from typing import Any

from yamlscan.scanner.tokens import Token

# ###############
# Public Interface
# ###############

TOKENS_FORMAT_VERSION = "1"


def serialize(tokens: list[Token]) -> str:
    """Serialize tokens to a compact JSON string."""
    return json.dumps(
        {"v": TOKENS_FORMAT_VERSION, "tokens": [_token_to_dict(t) for t in tokens]},
        separators=(",", ":"),
    )


def format_token(token: Token) -> str:
    """Render one token as ``line:column TYPE value params``."""
    parts = [f"{token.line}:{token.column}", token.type.name]
    if token.value:
        parts.append(json.dumps(token.value, ensure_ascii=False))
    if token.params:
        parts.append("[" + ", ".join(json.dumps(p, ensure_ascii=False) for p in token.params) + "]")
    return " ".join(parts)


def format_tokens(tokens: list[Token]) -> str:
    """Render tokens one per line."""
    return "\n".join(format_token(t) for t in tokens)


# ################
# Implementation
# ################


def _token_to_dict(token: Token) -> dict[str, Any]:
    d: dict[str, Any] = {"type": token.type.name, "line": token.line, "column": token.column}
    if token.value:
        d["value"] = token.value
    if token.params:
        d["params"] = list(token.params)
    return d

