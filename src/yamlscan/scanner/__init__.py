# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner turning YAML text into a token stream."""

from yamlscan.scanner.errors import ErrorKind, ScanError
from yamlscan.scanner.scanner import Scanner, tokenize
from yamlscan.scanner.tokens import ScalarStyle, Token, TokenType

__all__ = [
    "ErrorKind",
    "ScalarStyle",
    "ScanError",
    "Scanner",
    "Token",
    "TokenType",
    "tokenize",
]
