# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace configuration for CMLModel."""

from cmlmodel.workspace.config import (
    CONFIG_FILE_NAME,
    LOG_LEVELS,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_config_text,
    load_workspace_config,
    parse_workspace_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "LOG_LEVELS",
    "WorkspaceConfig",
    "WorkspaceConfigError",
    "default_config_text",
    "load_workspace_config",
    "parse_workspace_config",
]
