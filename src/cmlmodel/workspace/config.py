# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the CMLModel workspace configuration file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".cmlmodel.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WorkspaceConfigError(Exception):
    """Raised when a workspace configuration file is invalid or cannot be loaded."""


@dataclass
class WorkspaceConfig:
    """The parsed configuration for a CMLModel workspace.

    Attributes:
        source_directory: Relative path (from the workspace root) searched for ``*.cml`` files.
        strict: Whether dropped fragments are reported as errors.
        log_level: Name of the logging level used by the command line.
    """

    source_directory: str = "."
    strict: bool = False
    log_level: str = "WARNING"


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Load and parse a CMLModel workspace configuration file.

    Args:
        path: Path to the `.cmlmodel.yaml` file.

    Returns:
        A WorkspaceConfig instance populated from the file.

    Raises:
        WorkspaceConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceConfigError(f"Workspace config file not found: {path}") from None
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read workspace config file: {exc}") from exc

    return parse_workspace_config(text, source_label=str(path))


def parse_workspace_config(text: str, source_label: str = "<string>") -> WorkspaceConfig:
    """Parse workspace config YAML text into a WorkspaceConfig.

    An empty document yields the defaults. Unknown keys are ignored.

    Raises:
        WorkspaceConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return WorkspaceConfig()
    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{source_label}: workspace config must be a YAML mapping")

    config = WorkspaceConfig()
    if "source-directory" in data:
        config.source_directory = _require_string(data, "source-directory", source_label)
    if "strict" in data:
        strict = data["strict"]
        if not isinstance(strict, bool):
            raise WorkspaceConfigError(f"{source_label}: 'strict' must be a boolean")
        config.strict = strict
    if "log-level" in data:
        level = _require_string(data, "log-level", source_label).upper()
        if level not in LOG_LEVELS:
            raise WorkspaceConfigError(
                f"{source_label}: 'log-level' must be one of {', '.join(LOG_LEVELS)}"
            )
        config.log_level = level
    return config


def default_config_text() -> str:
    """Return the content written by ``cmlmodel init``."""
    return (
        "# CMLModel Workspace Configuration\n"
        "source-directory: .\n"
        "strict: false\n"
        f"log-level: {logging.getLevelName(logging.WARNING)}\n"
    )


# ################
# Implementation
# ################


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising WorkspaceConfigError if it has another type."""
    value = mapping[key]
    if not isinstance(value, str):
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a string")
    return value
