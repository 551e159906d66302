"""Local retrieval: URLs and absolute paths in the active context."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

from fetchcell.contracts import FetchType, RetrievalError
from fetchcell.sources.base import BaseSource


class LocalSource(BaseSource):
    """Resolves a directive's path against the active execution context.

    - http:// and https:// URLs are fetched with httpx
    - file:// URLs and plain paths are read from disk (relative plain paths
      resolve against the process working directory)
    """

    name = "local"

    async def retrieve(self, file_path: str, fetch_type: FetchType) -> Any:
        parsed = urlparse(file_path)
        if parsed.scheme in ("http", "https"):
            return await self._fetch_url(file_path, file_path, fetch_type)
        if parsed.scheme == "file":
            return await self._read_file(file_path, Path(unquote(parsed.path)), fetch_type)
        if parsed.scheme and len(parsed.scheme) > 1:
            raise RetrievalError(file_path, f"unsupported URL scheme '{parsed.scheme}'")
        return await self._read_file(file_path, Path(file_path), fetch_type)
