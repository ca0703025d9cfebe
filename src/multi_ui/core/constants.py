"""Shared path and naming constants for multi-ui projects."""

from __future__ import annotations

CONFIG_FILENAME = "multi-ui.config.json"
DEFAULT_COMPONENT_DIR = "src/app/"
COMPONENTS_SUBDIR = "multi-ui/components"
DEFAULT_COMPONENT_PATH = f"{DEFAULT_COMPONENT_DIR}{COMPONENTS_SUBDIR}"

BUILD_DEPENDENCIES = ("@babel/preset-react", "@babel/preset-typescript")

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_COMPONENT_DIR",
    "COMPONENTS_SUBDIR",
    "DEFAULT_COMPONENT_PATH",
    "BUILD_DEPENDENCIES",
]
