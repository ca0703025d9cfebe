"""Remote component source configuration.

Component sources live in a GitHub repository and are served through the
raw-content host. Every coordinate can be overridden from the environment,
which is how forks and mirrors are targeted.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_RAW_HOST = "https://raw.githubusercontent.com"
DEFAULT_REPO = "om0852/multi-ui"
DEFAULT_BRANCH = "main"
DEFAULT_COMPONENTS_PATH = "app"


@dataclass(frozen=True)
class RemoteSource:
    """Location of component sources on the raw-content host."""

    host: str = DEFAULT_RAW_HOST
    repo: str = DEFAULT_REPO
    branch: str = DEFAULT_BRANCH
    components_path: str = DEFAULT_COMPONENTS_PATH

    @classmethod
    def from_env(cls) -> "RemoteSource":
        """Build a source using MULTI_UI_* overrides when present."""
        return cls(
            host=_env("MULTI_UI_RAW_HOST", DEFAULT_RAW_HOST).rstrip("/"),
            repo=_env("MULTI_UI_REPO", DEFAULT_REPO).strip("/"),
            branch=_env("MULTI_UI_BRANCH", DEFAULT_BRANCH),
            components_path=_env("MULTI_UI_COMPONENTS_PATH", DEFAULT_COMPONENTS_PATH).strip("/"),
        )


def _env(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def github_token() -> str | None:
    """Return sanitized GitHub token from the environment or None."""
    return ((os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN") or "").strip()) or None


def github_auth_headers() -> dict[str, str]:
    """Return Authorization header dict only when a non-empty token exists."""
    token = github_token()
    return {"Authorization": f"Bearer {token}"} if token else {}


__all__ = [
    "RemoteSource",
    "github_token",
    "github_auth_headers",
]
