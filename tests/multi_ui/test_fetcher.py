"""Tests for downloading component sources."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from multi_ui.core.config import RemoteSource
from multi_ui.fetcher import (
    ComponentFetcher,
    ComponentFetchError,
    ComponentNotFoundError,
    build_component_url,
    component_base_name,
)

BUTTON_URL = "https://raw.githubusercontent.com/om0852/multi-ui/main/app/button/_components/Button_1.tsx"


def test_base_name_is_lowercased_prefix() -> None:
    assert component_base_name("Dropdown_5") == "dropdown"
    assert component_base_name("Accordian_2_beta") == "accordian"
    assert component_base_name("Card") == "card"


def test_url_layout() -> None:
    assert build_component_url("Button_1") == BUTTON_URL


def test_url_respects_remote_source() -> None:
    source = RemoteSource(host="https://mirror.test", repo="me/fork", branch="dev", components_path="src/app")

    assert build_component_url("Card_3", source) == "https://mirror.test/me/fork/dev/src/app/card/_components/Card_3.tsx"


def test_remote_source_from_env(monkeypatch) -> None:
    monkeypatch.setenv("MULTI_UI_REPO", "me/fork/")
    monkeypatch.setenv("MULTI_UI_BRANCH", "next")
    monkeypatch.delenv("MULTI_UI_RAW_HOST", raising=False)
    monkeypatch.delenv("MULTI_UI_COMPONENTS_PATH", raising=False)

    source = RemoteSource.from_env()

    assert source.repo == "me/fork"
    assert source.branch == "next"
    assert source.host == "https://raw.githubusercontent.com"
    assert source.components_path == "app"


def test_fetch_returns_body_verbatim(project_dir, make_fetcher) -> None:
    body = "export default function Button(){}\n  // trailing  \n"
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text=body)

    with make_fetcher(handler) as fetcher:
        assert fetcher.fetch("Button_1") == body

    assert seen == [BUTTON_URL]


def test_fetch_404_names_component_and_url(project_dir, make_fetcher) -> None:
    fetcher = make_fetcher(lambda request: httpx.Response(404, text="404: Not Found"))

    with pytest.raises(ComponentNotFoundError) as excinfo:
        fetcher.fetch("Missing_1")

    url = "https://raw.githubusercontent.com/om0852/multi-ui/main/app/missing/_components/Missing_1.tsx"
    assert excinfo.value.url == url
    assert excinfo.value.component_name == "Missing_1"
    assert "Missing_1" in str(excinfo.value)
    assert url in str(excinfo.value)


def test_fetch_other_status_is_generic_error(project_dir, make_fetcher) -> None:
    fetcher = make_fetcher(lambda request: httpx.Response(500))

    with pytest.raises(ComponentFetchError) as excinfo:
        fetcher.fetch("Button_1")

    assert not isinstance(excinfo.value, ComponentNotFoundError)
    assert "500" in str(excinfo.value)


def test_transport_failure_is_wrapped(project_dir, make_fetcher) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(ComponentFetchError) as excinfo:
        make_fetcher(handler).fetch("Button_1")

    assert "Connection refused" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_empty_name_is_rejected(make_fetcher) -> None:
    fetcher = make_fetcher(lambda request: httpx.Response(200, text=""))

    with pytest.raises(ValueError):
        fetcher.fetch("")


def test_token_is_sent_when_configured(project_dir, make_fetcher, monkeypatch) -> None:
    monkeypatch.setenv("GH_TOKEN", "  secret-token  ")
    headers = {}

    def handler(request: httpx.Request) -> httpx.Response:
        headers["authorization"] = request.headers.get("Authorization")
        return httpx.Response(200, text="ok")

    make_fetcher(handler).fetch("Button_1")

    assert headers["authorization"] == "Bearer secret-token"


def test_no_authorization_header_without_token(project_dir, make_fetcher) -> None:
    headers = {}

    def handler(request: httpx.Request) -> httpx.Response:
        headers["authorization"] = request.headers.get("Authorization")
        return httpx.Response(200, text="ok")

    make_fetcher(handler).fetch("Button_1")

    assert headers["authorization"] is None


def test_injected_client_is_not_closed(make_fetcher) -> None:
    fetcher = make_fetcher(lambda request: httpx.Response(200, text="ok"))
    client = fetcher._get_http_client()

    with fetcher:
        pass

    assert not client.is_closed


@patch("multi_ui.fetcher.httpx.Client")
def test_owned_client_is_created_lazily_and_closed(MockClient) -> None:
    mock_client = MagicMock()
    mock_client.get.return_value = MagicMock(status_code=200, text="source")
    MockClient.return_value = mock_client

    with ComponentFetcher(source=RemoteSource()) as fetcher:
        MockClient.assert_not_called()
        assert fetcher.fetch("Button_1") == "source"

    MockClient.assert_called_once()
    mock_client.close.assert_called_once()
