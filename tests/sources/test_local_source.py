"""Tests for LocalSource retrieval from disk and over HTTP."""

import asyncio
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from fetchcell.contracts import FetchType, RetrievalError
from fetchcell.core.config import SourceSettings
from fetchcell.sources import LocalSource


def _retrieve(file_path: str, fetch_type: FetchType, settings: SourceSettings | None = None) -> Any:
    async def _run() -> Any:
        async with LocalSource(settings) as source:
            return await source.retrieve(file_path, fetch_type)

    return asyncio.run(_run())


class TestLocalFiles:
    """Tests for filesystem reads."""

    def test_absolute_path(self, tmp_path: Path) -> None:
        target = tmp_path / "notes.txt"
        target.write_text("hello", encoding="utf-8")

        assert _retrieve(str(target), FetchType.TEXT) == "hello"

    def test_file_url(self, tmp_path: Path) -> None:
        target = tmp_path / "data.json"
        target.write_text('{"a": 1}', encoding="utf-8")

        assert _retrieve(target.as_uri(), FetchType.JSON) == {"a": 1}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RetrievalError, match="file not found"):
            _retrieve(str(tmp_path / "missing.txt"), FetchType.TEXT)

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(RetrievalError, match="is a directory"):
            _retrieve(str(tmp_path), FetchType.TEXT)

    def test_payload_too_large(self, tmp_path: Path) -> None:
        target = tmp_path / "big.bin"
        target.write_bytes(b"x" * 10)

        with pytest.raises(RetrievalError, match="payload too large"):
            _retrieve(str(target), FetchType.BLOB, SourceSettings(max_response_bytes=4))

    def test_unsupported_scheme(self) -> None:
        with pytest.raises(RetrievalError, match="unsupported URL scheme 'ftp'"):
            _retrieve("ftp://files.example.com/a.txt", FetchType.TEXT)


class TestLocalHttp:
    """Tests for URL retrieval."""

    @respx.mock
    def test_json_url(self) -> None:
        respx.get("https://example.com/config.json").mock(return_value=httpx.Response(200, json={"debug": True}))

        assert _retrieve("https://example.com/config.json", FetchType.JSON) == {"debug": True}

    @respx.mock
    def test_blob_url_returns_bytes(self) -> None:
        respx.get("https://example.com/logo.png").mock(return_value=httpx.Response(200, content=b"\x89PNG"))

        assert _retrieve("https://example.com/logo.png", FetchType.BLOB) == b"\x89PNG"

    @respx.mock
    def test_error_status(self) -> None:
        respx.get("https://example.com/missing.txt").mock(return_value=httpx.Response(404))

        with pytest.raises(RetrievalError) as exc_info:
            _retrieve("https://example.com/missing.txt", FetchType.TEXT)

        assert exc_info.value.detail == "404 Not Found"
        assert exc_info.value.status_code == 404

    @respx.mock
    def test_timeout(self) -> None:
        respx.get("https://example.com/slow.txt").mock(side_effect=httpx.ConnectTimeout("timed out"))

        with pytest.raises(RetrievalError, match=r"timed out after 2\.5s"):
            _retrieve("https://example.com/slow.txt", FetchType.TEXT, SourceSettings(timeout_seconds=2.5))

    @respx.mock
    def test_transport_error(self) -> None:
        respx.get("https://example.com/down.txt").mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(RetrievalError, match="ConnectError: connection refused"):
            _retrieve("https://example.com/down.txt", FetchType.TEXT)

    @respx.mock
    def test_response_too_large(self) -> None:
        respx.get("https://example.com/big.txt").mock(return_value=httpx.Response(200, text="0123456789"))

        with pytest.raises(RetrievalError, match="payload too large"):
            _retrieve("https://example.com/big.txt", FetchType.TEXT, SourceSettings(max_response_bytes=4))


class TestClientOwnership:
    """Injected clients are left open."""

    def test_injected_client_not_closed(self) -> None:
        async def _run() -> bool:
            client = httpx.AsyncClient()
            async with LocalSource(client=client):
                pass
            closed = client.is_closed
            await client.aclose()
            return closed

        assert asyncio.run(_run()) is False
