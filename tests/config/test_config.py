# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the scanner configuration module."""

from pathlib import Path

import pytest

from yamlscan.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    OutputFormat,
    ScannerConfig,
    find_config,
    load_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a scanner config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_defaults() -> None:
    """A default-constructed config has the documented defaults."""
    config = ScannerConfig()
    assert config.max_simple_key_length == 1024
    assert config.strict_tabs is True
    assert config.output_format is OutputFormat.TEXT


def test_full_config(tmp_path: Path) -> None:
    """All keys are read using their dashed names."""
    content = """\
max-simple-key-length: 64
strict-tabs: false
output-format: json
"""
    config = load_config(_write_config(tmp_path, content))

    assert config.max_simple_key_length == 64
    assert config.strict_tabs is False
    assert config.output_format is OutputFormat.JSON


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    """An empty config file is the same as no settings at all."""
    config = load_config(_write_config(tmp_path, ""))
    assert config == ScannerConfig()


def test_field_names_are_accepted() -> None:
    """Python field names work in addition to the dashed aliases."""
    config = ScannerConfig(max_simple_key_length=8, strict_tabs=False)
    assert config.max_simple_key_length == 8
    assert config.strict_tabs is False


def test_config_is_immutable() -> None:
    """Configs are frozen after validation."""
    config = ScannerConfig()
    with pytest.raises(ValueError):
        config.strict_tabs = False  # type: ignore[misc]


def test_find_config(tmp_path: Path) -> None:
    """find_config returns the config file in the given directory."""
    config_file = _write_config(tmp_path, "strict-tabs: true\n")
    assert find_config(tmp_path) == config_file


def test_find_config_without_file(tmp_path: Path) -> None:
    """find_config returns None when the directory has no config file."""
    assert find_config(tmp_path) is None


# ###############
# Error Cases
# ###############


def test_missing_file_raises(tmp_path: Path) -> None:
    """Loading a file that does not exist raises ConfigError."""
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    """Malformed YAML raises ConfigError."""
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(_write_config(tmp_path, "strict-tabs: [unclosed\n"))


def test_non_mapping_raises(tmp_path: Path) -> None:
    """A top-level list is not a valid config."""
    with pytest.raises(ConfigError, match="mapping"):
        load_config(_write_config(tmp_path, "- a\n- b\n"))


def test_unknown_key_raises(tmp_path: Path) -> None:
    """Unknown keys are rejected."""
    with pytest.raises(ConfigError):
        load_config(_write_config(tmp_path, "max-key-length: 10\n"))


@pytest.mark.parametrize("value", ["0", "-5", "lots"])
def test_invalid_max_simple_key_length_raises(tmp_path: Path, value: str) -> None:
    """The simple-key length limit must be a positive integer."""
    with pytest.raises(ConfigError):
        load_config(_write_config(tmp_path, f"max-simple-key-length: {value}\n"))


def test_unknown_output_format_raises(tmp_path: Path) -> None:
    """Only the supported output formats are accepted."""
    with pytest.raises(ConfigError):
        load_config(_write_config(tmp_path, "output-format: xml\n"))
