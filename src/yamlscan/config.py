# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner settings loaded from a ``.yamlscan.yaml`` file."""

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".yamlscan.yaml"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""


class OutputFormat(str, Enum):
    """Token listing formats supported by the CLI."""

    TEXT = "text"
    JSON = "json"


class ScannerConfig(BaseModel):
    """Settings that tune the scanner and the CLI output.

    Attributes:
        max_simple_key_length: Farthest distance, in characters, between the
            start of a simple key and its ``:``.
        strict_tabs: Reject tabs used as indentation in block context.
        output_format: Default token listing format of ``yamlscan tokens``.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    max_simple_key_length: int = Field(alias="max-simple-key-length", default=1024, gt=0)
    strict_tabs: bool = Field(alias="strict-tabs", default=True)
    output_format: OutputFormat = Field(alias="output-format", default=OutputFormat.TEXT)


def load_config(path: Path) -> ScannerConfig:
    """Load and validate a scanner configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A validated ScannerConfig instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: config must be a YAML mapping")

    try:
        return ScannerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file '{path}': {exc}") from exc


def find_config(directory: Path) -> Path | None:
    """Return the ``.yamlscan.yaml`` file in *directory*, if there is one."""
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None
