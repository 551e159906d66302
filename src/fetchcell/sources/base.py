# src/fetchcell/sources/base.py
"""Shared retrieval machinery for resource sources.

BaseSource owns the httpx client and the filesystem read path, and decodes
raw payloads for the requested kind. Subclasses only decide how a
directive's file path resolves to a URL or a file.

Every failure leaves this module as a RetrievalError; httpx and OSError
exceptions never reach the executor.
"""

from __future__ import annotations

import asyncio
import json
import time
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx
import structlog

from fetchcell.contracts import FetchType, RetrievalError
from fetchcell.core.config import SourceSettings

logger = structlog.get_logger(__name__)


def decode_payload(file_path: str, fetch_type: FetchType, content: bytes, encoding: str | None = None) -> Any:
    """Decode raw bytes for a fetch kind.

    Returns:
        str for TEXT and CSS, the parsed value for JSON, bytes for BLOB and JS

    Raises:
        RetrievalError: If the payload cannot be decoded as the kind requires
    """
    if fetch_type in (FetchType.BLOB, FetchType.JS):
        return content
    try:
        text = content.decode(encoding or "utf-8")
    except (UnicodeDecodeError, LookupError) as e:
        raise RetrievalError(file_path, f"could not decode {fetch_type} payload: {e}") from e
    if fetch_type == FetchType.JSON:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise RetrievalError(file_path, f"invalid JSON: {e}") from e
    return text


class BaseSource:
    """Retrieval over HTTP(S) and the local filesystem.

    The httpx.AsyncClient is created lazily on first network use unless one
    is injected. Injected clients are not closed by aclose().
    """

    name = "base"

    def __init__(self, settings: SourceSettings | None = None, *, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings or SourceSettings()
        self._client = client
        self._owns_client = client is None

    @property
    def settings(self) -> SourceSettings:
        return self._settings

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.timeout_seconds),
                follow_redirects=self._settings.follow_redirects,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> BaseSource:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _check_size(self, file_path: str, size: int) -> None:
        limit = self._settings.max_response_bytes
        if size > limit:
            raise RetrievalError(file_path, f"payload too large: {size} bytes > {limit} bytes")

    async def _fetch_url(self, file_path: str, url: str, fetch_type: FetchType) -> Any:
        start = time.perf_counter()
        try:
            response = await self._get_client().get(url)
        except httpx.TimeoutException as e:
            raise RetrievalError(file_path, f"timed out after {self._settings.timeout_seconds}s") from e
        except httpx.HTTPError as e:
            raise RetrievalError(file_path, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise RetrievalError(
                file_path,
                f"{response.status_code} {response.reason_phrase}".strip(),
                status_code=response.status_code,
            )

        content = response.content
        self._check_size(file_path, len(content))
        logger.debug(
            "resource_retrieved",
            source=self.name,
            url=url,
            size=len(content),
            elapsed_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return decode_payload(file_path, fetch_type, content, response.charset_encoding)

    async def _read_file(self, file_path: str, path: Path, fetch_type: FetchType) -> Any:
        try:
            content = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise RetrievalError(file_path, f"file not found: {path}") from e
        except IsADirectoryError as e:
            raise RetrievalError(file_path, f"is a directory: {path}") from e
        except OSError as e:
            raise RetrievalError(file_path, f"{type(e).__name__}: {e.strerror or e}") from e

        self._check_size(file_path, len(content))
        logger.debug("resource_retrieved", source=self.name, path=str(path), size=len(content))
        return decode_payload(file_path, fetch_type, content)
