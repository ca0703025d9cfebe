"""Install the build-time packages copied components rely on."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)


class InstallError(RuntimeError):
    """Raised when the package manager fails to install dependencies."""


class DependencyInstaller(Protocol):
    def install(self, packages: Iterable[str], cwd: Path) -> None: ...


class NpmDependencyInstaller:
    """Installs packages as dev dependencies with ``npm``."""

    def __init__(self, executable: str = "npm"):
        self.executable = executable

    def command(self, packages: Iterable[str]) -> list[str]:
        return [self.executable, "install", "--save-dev", *packages]

    def install(self, packages: Iterable[str], cwd: Path) -> None:
        executable = shutil.which(self.executable)
        if executable is None:
            raise InstallError(f"Error installing dependencies: '{self.executable}' was not found on PATH")

        cmd = self.command(packages)
        cmd[0] = executable
        logger.info("Running %s in %s", " ".join(cmd), cwd)
        try:
            subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip() or f"exit code {e.returncode}"
            raise InstallError(f"Error installing dependencies: {detail}") from e
        except OSError as e:
            raise InstallError(f"Error installing dependencies: {e}") from e


__all__ = ["DependencyInstaller", "InstallError", "NpmDependencyInstaller"]
