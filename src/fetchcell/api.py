"""Notebook-facing API object.

An instance is bound into the namespace (under ``fetchcell`` by default) so
that scripts loaded by ``js`` directives can reach the environment and make
blocking data requests.
"""

from __future__ import annotations

import httpx

from fetchcell.contracts import RetrievalError
from fetchcell.core.config import SourceSettings
from fetchcell.environment import Environment, Namespace, StylesheetRegistry


class NotebookAPI:
    """Public API exposed to notebook code.

    Example (inside a fetched script):
        rows = fetchcell.get_data_sync("https://example.com/data.csv")
        fetchcell.environment["rows"] = rows.splitlines()
    """

    def __init__(self, environment: Environment, settings: SourceSettings | None = None) -> None:
        self._environment = environment
        self._settings = settings or SourceSettings()

    @property
    def environment(self) -> Namespace:
        return self._environment.namespace

    @property
    def stylesheets(self) -> StylesheetRegistry:
        return self._environment.stylesheets

    def get_data_sync(self, url: str) -> str:
        """Fetch a URL synchronously and return the body text.

        Blocks the calling thread, and with it the event loop when called
        from a script.

        Raises:
            RetrievalError: On transport failure or a non-2xx response
        """
        try:
            with httpx.Client(
                timeout=self._settings.timeout_seconds,
                follow_redirects=self._settings.follow_redirects,
            ) as client:
                response = client.get(url)
        except httpx.HTTPError as e:
            raise RetrievalError(url, f"{type(e).__name__}: {e}") from e
        if not response.is_success:
            raise RetrievalError(url, f"{response.status_code} {response.reason_phrase}".strip(), status_code=response.status_code)
        return response.text
