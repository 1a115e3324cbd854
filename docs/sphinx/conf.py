# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the CMLModel API documentation."""

import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[2] / "src"))

project = "CMLModel"
author = "CMLModel Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_member_order = "bysource"

html_theme = "alabaster"
