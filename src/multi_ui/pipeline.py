"""Setup and add workflows.

Both workflows take their collaborators as arguments: the preference store,
the prompt provider, the dependency installer and the component fetcher. The
CLI wires the real implementations; tests pass fakes.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import Iterable, Optional, Protocol

from multi_ui.core.constants import BUILD_DEPENDENCIES, COMPONENTS_SUBDIR, DEFAULT_COMPONENT_DIR
from multi_ui.core.preferences import Language, Preference, PreferenceStore
from multi_ui.fetcher import ComponentFetcher
from multi_ui.installer import DependencyInstaller
from multi_ui.materialize import component_file_path, ensure_directory, write_file
from multi_ui.prompts import PromptProvider
from multi_ui.transform import to_untyped_dialect

logger = logging.getLogger(__name__)


class ProgressTracker(Protocol):
    """Receives step progress; the CLI passes its ``StepTracker``."""

    def start(self, key: str, detail: str = "") -> None: ...

    def complete(self, key: str, detail: str = "") -> None: ...

    def error(self, key: str, detail: str = "") -> None: ...

    def skip(self, key: str, detail: str = "") -> None: ...


def resolve_component_path(directory: str) -> str:
    """Return ``<directory>/multi-ui/components`` with POSIX separators."""
    directory = (directory or "").strip().replace("\\", "/") or DEFAULT_COMPONENT_DIR
    return posixpath.normpath(posixpath.join(directory, COMPONENTS_SUBDIR))


def run_setup(
    store: PreferenceStore,
    prompts: PromptProvider,
    installer: Optional[DependencyInstaller] = None,
    packages: Iterable[str] = BUILD_DEPENDENCIES,
) -> Preference:
    """Ask for preferences, persist them, then install build dependencies.

    The preference file is written before installation starts and is kept
    when installation fails; the ``InstallError`` is re-raised to the caller.
    """
    language = prompts.ask_language()
    directory = prompts.ask_directory(DEFAULT_COMPONENT_DIR)
    preference = Preference(language=language, component_path=resolve_component_path(directory))

    store.write(preference)

    if installer is not None:
        installer.install(list(packages), store.root)
    return preference


def add_component(
    component_name: str,
    preference: Preference,
    fetcher: ComponentFetcher,
    root: Path,
    tracker: Optional[ProgressTracker] = None,
) -> Path:
    """Fetch a component, convert it when needed, and write it under ``root``.

    Nothing is created on disk unless fetching and converting succeed.
    Existing files at the target path are overwritten.
    """
    target = component_file_path(root, preference, component_name)

    _start(tracker, "fetch", fetcher.url_for(component_name))
    try:
        source = fetcher.fetch(component_name)
    except Exception:
        _fail(tracker, "fetch")
        raise
    _complete(tracker, "fetch", f"{len(source)} chars")

    if preference.language is Language.JAVASCRIPT:
        _start(tracker, "convert")
        try:
            source = to_untyped_dialect(source, f"{component_name}.tsx")
        except Exception:
            _fail(tracker, "convert")
            raise
        _complete(tracker, "convert", "tsx → jsx")
    elif tracker is not None:
        tracker.skip("convert", "typescript project")

    _start(tracker, "write", str(target))
    try:
        ensure_directory(target.parent)
        write_file(target, source)
    except OSError:
        _fail(tracker, "write")
        raise
    _complete(tracker, "write")

    logger.info("Wrote %s", target)
    return target


def _start(tracker: Optional[ProgressTracker], key: str, detail: str = "") -> None:
    if tracker is not None:
        tracker.start(key, detail)


def _complete(tracker: Optional[ProgressTracker], key: str, detail: str = "") -> None:
    if tracker is not None:
        tracker.complete(key, detail)


def _fail(tracker: Optional[ProgressTracker], key: str) -> None:
    if tracker is not None:
        tracker.error(key, "failed")


__all__ = ["ProgressTracker", "add_component", "resolve_component_path", "run_setup"]
