"""Fetch component sources from the remote component repository."""

from __future__ import annotations

import logging
import ssl
from typing import Optional

import httpx
import truststore

from multi_ui.core.config import RemoteSource, github_auth_headers

logger = logging.getLogger(__name__)


class ComponentFetchError(RuntimeError):
    """Raised when a component source cannot be retrieved."""


class ComponentNotFoundError(ComponentFetchError):
    """Raised when the remote host has no source for the component."""

    def __init__(self, component_name: str, url: str):
        self.component_name = component_name
        self.url = url
        super().__init__(
            f"Component '{component_name}' not found at path: {url}\n"
            "Please check the component name and path."
        )


def component_base_name(component_name: str) -> str:
    """Return the component family, e.g. ``dropdown`` for ``Dropdown_5``."""
    return component_name.lower().split("_")[0]


def build_component_url(component_name: str, source: RemoteSource | None = None) -> str:
    """Build the raw-content URL of a component's TSX source."""
    source = source or RemoteSource()
    base = component_base_name(component_name)
    return (
        f"{source.host}/{source.repo}/{source.branch}/{source.components_path}"
        f"/{base}/_components/{component_name}.tsx"
    )


class ComponentFetcher:
    """Retrieves raw component sources over HTTP.

    A client passed in by the caller is used as-is and left open; otherwise
    one is created on first use and closed by :meth:`close`.
    """

    def __init__(
        self,
        source: RemoteSource | None = None,
        client: Optional[httpx.Client] = None,
    ):
        self.source = source or RemoteSource.from_env()
        self._http_client = client
        self._owns_client = client is None

    def _get_http_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._http_client is None:
            ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
            self._http_client = httpx.Client(verify=ssl_context)
        return self._http_client

    def close(self):
        """Close HTTP client if this fetcher created it."""
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def url_for(self, component_name: str) -> str:
        return build_component_url(component_name, self.source)

    def fetch(self, component_name: str) -> str:
        """
        Download the TSX source of a component.

        Args:
            component_name: Component identifier such as ``Dropdown_5``

        Returns:
            The response body, unmodified

        Raises:
            ComponentNotFoundError: If the host answers 404
            ComponentFetchError: On any other status or a transport failure
        """
        if not component_name:
            raise ValueError("Component name must not be empty")

        url = self.url_for(component_name)
        logger.debug("GET %s", url)

        try:
            response = self._get_http_client().get(url, headers=github_auth_headers())
        except httpx.HTTPError as exc:
            raise ComponentFetchError(f"Error fetching component: {exc}") from exc

        if response.status_code == 404:
            raise ComponentNotFoundError(component_name, url)
        if response.status_code != 200:
            raise ComponentFetchError(
                f"Error fetching component: {response.status_code} {response.reason_phrase}".rstrip()
            )

        logger.debug("Fetched %d characters for %s", len(response.text), component_name)
        return response.text


__all__ = [
    "ComponentFetchError",
    "ComponentFetcher",
    "ComponentNotFoundError",
    "build_component_url",
    "component_base_name",
]
