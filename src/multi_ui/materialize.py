"""Write component sources into the consumer project."""

from __future__ import annotations

import logging
from pathlib import Path

from multi_ui.core.preferences import Preference

logger = logging.getLogger(__name__)


def component_file_path(root: Path, preference: Preference, component_name: str) -> Path:
    """Return where ``component_name`` is written for this preference."""
    return Path(root) / preference.component_path / f"{component_name}.{preference.language.extension}"


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and its parents if missing."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_file(path: Path, content: str) -> Path:
    """Write ``content`` to ``path``, replacing any existing file."""
    path = Path(path)
    if path.exists():
        logger.debug("Overwriting existing file %s", path)
    path.write_text(content, encoding="utf-8")
    return path


__all__ = ["component_file_path", "ensure_directory", "write_file"]
