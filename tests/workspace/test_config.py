# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the workspace configuration module."""

from pathlib import Path

import pytest

from cmlmodel.workspace import (
    CONFIG_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_config_text,
    load_workspace_config,
    parse_workspace_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a workspace config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_full_config(tmp_path: Path) -> None:
    """All supported keys are read into the WorkspaceConfig."""
    content = """\
source-directory: model
strict: true
log-level: debug
"""
    config = load_workspace_config(_write_config(tmp_path, content))

    assert isinstance(config, WorkspaceConfig)
    assert config.source_directory == "model"
    assert config.strict is True
    assert config.log_level == "DEBUG"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    config = load_workspace_config(_write_config(tmp_path, ""))
    assert config == WorkspaceConfig()
    assert config.source_directory == "."
    assert config.strict is False
    assert config.log_level == "WARNING"


def test_unknown_keys_are_ignored() -> None:
    config = parse_workspace_config("future-option: 42\nstrict: false\n")
    assert config.strict is False


def test_default_config_text_round_trips() -> None:
    """The file written by `cmlmodel init` loads back to the defaults."""
    assert parse_workspace_config(default_config_text()) == WorkspaceConfig()


# ###############
# Error Cases
# ###############


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="not found"):
        load_workspace_config(tmp_path / CONFIG_FILE_NAME)


def test_invalid_yaml_raises() -> None:
    with pytest.raises(WorkspaceConfigError, match="Invalid YAML"):
        parse_workspace_config("strict: [unclosed\n")


def test_non_mapping_raises() -> None:
    with pytest.raises(WorkspaceConfigError, match="must be a YAML mapping"):
        parse_workspace_config("- a\n- b\n")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("source-directory: 3\n", "'source-directory' must be a string"),
        ("strict: yes please\n", "'strict' must be a boolean"),
        ("log-level: 10\n", "'log-level' must be a string"),
        ("log-level: LOUD\n", "'log-level' must be one of"),
    ],
)
def test_wrong_types_raise(content: str, message: str) -> None:
    with pytest.raises(WorkspaceConfigError, match=message):
        parse_workspace_config(content)
