from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from multi_ui.core.config import RemoteSource
from multi_ui.fetcher import ComponentFetcher


@pytest.fixture()
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty consumer project used as the working directory."""
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    for name in ("GH_TOKEN", "GITHUB_TOKEN", "MULTI_UI_REPO", "MULTI_UI_BRANCH"):
        monkeypatch.delenv(name, raising=False)
    return root


@pytest.fixture()
def make_fetcher() -> Callable[..., ComponentFetcher]:
    """Build a fetcher whose HTTP traffic is answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> ComponentFetcher:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return ComponentFetcher(source=RemoteSource(), client=client)

    return factory
