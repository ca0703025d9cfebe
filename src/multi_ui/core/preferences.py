"""Project preference storage.

Preferences live in ``multi-ui.config.json`` at the project root and hold
the language the components are materialized in and the directory they
are written to. A missing file is not an error: defaults are returned and
nothing is persisted.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from multi_ui.core.constants import CONFIG_FILENAME, DEFAULT_COMPONENT_PATH

logger = logging.getLogger(__name__)


class PreferenceError(RuntimeError):
    """Raised when multi-ui.config.json cannot be parsed or validated."""


class Language(str, Enum):
    """Dialect components are written in."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"

    @classmethod
    def from_choice(cls, choice: str) -> "Language":
        """Map a prompt choice such as ``TypeScript`` to a language."""
        return cls(choice.strip().lower())

    @property
    def extension(self) -> str:
        return "jsx" if self is Language.JAVASCRIPT else "tsx"

    @property
    def display_name(self) -> str:
        return "JavaScript" if self is Language.JAVASCRIPT else "TypeScript"


class Preference(BaseModel):
    """Language choice and output directory for one project."""

    model_config = ConfigDict(populate_by_name=True)

    language: Language = Language.TYPESCRIPT
    component_path: str = Field(default=DEFAULT_COMPONENT_PATH, alias="componentPath")

    def to_json(self) -> str:
        payload = {"language": self.language.value, "componentPath": self.component_path}
        return json.dumps(payload, indent=2) + "\n"


DEFAULT_PREFERENCE = Preference()


class PreferenceStore:
    """Reads and writes the preference file of a project root."""

    def __init__(self, root: Path | None = None):
        self.root = Path.cwd() if root is None else Path(root)
        self.config_file = self.root / CONFIG_FILENAME

    def exists(self) -> bool:
        return self.config_file.is_file()

    def read(self) -> Preference:
        """Load the stored preference, or the defaults when none is stored.

        Raises:
            PreferenceError: If the file is not valid JSON or does not match
                the preference schema.
        """
        if not self.exists():
            logger.warning(
                "No preference found at %s. Defaulting to %s and %s.",
                self.config_file,
                DEFAULT_PREFERENCE.language.value,
                DEFAULT_PREFERENCE.component_path,
            )
            return DEFAULT_PREFERENCE.model_copy()

        try:
            raw = self.config_file.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError) as exc:
            raise PreferenceError(f"Invalid JSON in {self.config_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise PreferenceError(
                f"Invalid configuration in {self.config_file}: expected a JSON object"
            )

        try:
            return Preference.model_validate(data)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
            raise PreferenceError(
                f"Invalid configuration in {self.config_file}: bad value for {fields}"
            ) from exc

    def write(self, preference: Preference) -> Path:
        """Persist the preference, replacing any previous file."""
        self.config_file.write_text(preference.to_json(), encoding="utf-8")
        logger.info("Saved preferences to %s", self.config_file)
        return self.config_file


__all__ = [
    "DEFAULT_PREFERENCE",
    "Language",
    "Preference",
    "PreferenceError",
    "PreferenceStore",
]
