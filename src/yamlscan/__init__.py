# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""yamlscan: lexical scanner for YAML documents."""

from yamlscan.scanner import ErrorKind, Scanner, ScanError, Token, TokenType, tokenize

__all__ = [
    "ErrorKind",
    "ScanError",
    "Scanner",
    "Token",
    "TokenType",
    "tokenize",
]
