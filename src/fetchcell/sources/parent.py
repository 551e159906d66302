"""Parent-context retrieval: relative paths resolved by the enclosing context."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from fetchcell.contracts import FetchType, RetrievalError
from fetchcell.core.config import SourceSettings
from fetchcell.sources.base import BaseSource


class ParentContextSource(BaseSource):
    """Resolves relative paths through the notebook's enclosing context.

    The parent context is either a files directory or a base URL, taken from
    SourceSettings.files_root / files_base_url. Paths that would escape the
    files directory are rejected.
    """

    name = "parent"

    def __init__(self, settings: SourceSettings | None = None, *, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(settings, client=client)
        root = self._settings.files_root
        self._root = root.resolve() if root is not None else None

    def resolve_path(self, file_path: str) -> Path:
        """Resolve a relative path inside the files directory.

        Raises:
            RetrievalError: If no files directory is configured or the path escapes it
        """
        if self._root is None:
            raise RetrievalError(file_path, "no parent context files directory configured")
        candidate = (self._root / file_path).resolve()
        if not candidate.is_relative_to(self._root):
            raise RetrievalError(file_path, "path escapes the parent context files directory")
        return candidate

    def resolve_url(self, file_path: str) -> str:
        base_url = self._settings.files_base_url
        if base_url is None:
            raise RetrievalError(file_path, "no parent context base URL configured")
        if not base_url.endswith("/"):
            base_url += "/"
        return str(httpx.URL(base_url).join(file_path.lstrip("/")))

    async def retrieve(self, file_path: str, fetch_type: FetchType) -> Any:
        if self._settings.files_base_url is not None:
            return await self._fetch_url(file_path, self.resolve_url(file_path), fetch_type)
        if self._root is None:
            raise RetrievalError(file_path, "no parent context configured")
        return await self._read_file(file_path, self.resolve_path(file_path), fetch_type)
