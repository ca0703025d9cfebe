"""Core configuration and preference helpers."""

from .constants import CONFIG_FILENAME, DEFAULT_COMPONENT_DIR, DEFAULT_COMPONENT_PATH
from .config import RemoteSource
from .preferences import Language, Preference, PreferenceError, PreferenceStore

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_COMPONENT_DIR",
    "DEFAULT_COMPONENT_PATH",
    "Language",
    "Preference",
    "PreferenceError",
    "PreferenceStore",
    "RemoteSource",
]
