from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from multi_ui.core.constants import CONFIG_FILENAME, DEFAULT_COMPONENT_PATH
from multi_ui.core.preferences import Language, Preference, PreferenceError, PreferenceStore


def test_round_trip(tmp_path: Path) -> None:
    store = PreferenceStore(tmp_path)
    preference = Preference(language=Language.JAVASCRIPT, component_path="app/multi-ui/components")

    store.write(preference)

    assert store.read() == preference


def test_written_file_uses_camel_case_keys(tmp_path: Path) -> None:
    store = PreferenceStore(tmp_path)
    store.write(Preference(language=Language.TYPESCRIPT, component_path="app/multi-ui/components"))

    data = json.loads((tmp_path / CONFIG_FILENAME).read_text(encoding="utf-8"))

    assert data == {"language": "typescript", "componentPath": "app/multi-ui/components"}


def test_write_overwrites_previous_file(tmp_path: Path) -> None:
    store = PreferenceStore(tmp_path)
    store.write(Preference(language=Language.TYPESCRIPT, component_path="a"))
    store.write(Preference(language=Language.JAVASCRIPT, component_path="b"))

    assert store.read() == Preference(language=Language.JAVASCRIPT, component_path="b")


def test_missing_file_returns_defaults_without_writing(tmp_path: Path, caplog) -> None:
    store = PreferenceStore(tmp_path)

    with caplog.at_level(logging.WARNING, logger="multi_ui.core.preferences"):
        preference = store.read()

    assert preference.language is Language.TYPESCRIPT
    assert preference.component_path == DEFAULT_COMPONENT_PATH
    assert "No preference found" in caplog.text
    assert not (tmp_path / CONFIG_FILENAME).exists()


def test_default_store_targets_working_directory(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert PreferenceStore().config_file == tmp_path / CONFIG_FILENAME


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"language": "python", "componentPath": "x"}',
        '{"language": "typescript", "componentPath": 12}',
    ],
)
def test_malformed_file_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(content, encoding="utf-8")

    with pytest.raises(PreferenceError) as excinfo:
        PreferenceStore(tmp_path).read()

    assert CONFIG_FILENAME in str(excinfo.value)


def test_language_from_prompt_choice() -> None:
    assert Language.from_choice("TypeScript") is Language.TYPESCRIPT
    assert Language.from_choice("JavaScript") is Language.JAVASCRIPT
    assert Language.JAVASCRIPT.extension == "jsx"
    assert Language.TYPESCRIPT.extension == "tsx"
