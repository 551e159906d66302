# src/fetchcell/environment/scripts.py
"""Script execution for ``js`` directives.

A script payload arrives as bytes. ScriptRunner materialises it as a
temporary script handle (a file on disk, so tracebacks and linecache can
show the source), executes it once in the shared namespace, and releases the
handle whether execution succeeded or failed.

Execution is scheduled on the event loop with call_soon and awaited through
a future, so a script load is a suspension point for the calling directive
while the script body itself always runs on the loop thread.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import structlog

from fetchcell.contracts.errors import BindingError, ScriptReuseError
from fetchcell.environment.namespace import Namespace

logger = structlog.get_logger(__name__)


class ScriptHandle:
    """Temporary, single-use script resource.

    Attributes:
        origin: Where the payload came from (the directive's file path)
        path: Temporary file holding the payload
    """

    def __init__(self, origin: str, path: Path) -> None:
        self.origin = origin
        self.path = path
        self.executed = False
        self.released = False

    @property
    def url(self) -> str:
        return self.path.as_uri()

    def claim(self) -> None:
        """Mark the handle as executed.

        Raises:
            ScriptReuseError: If the handle already ran or was released
        """
        if self.released:
            raise ScriptReuseError(f"script handle for {self.origin} was already released")
        if self.executed:
            raise ScriptReuseError(f"script from {self.origin} was already executed")
        self.executed = True

    def release(self) -> None:
        with contextlib.suppress(FileNotFoundError):
            self.path.unlink()
        self.released = True


@dataclass(frozen=True, slots=True)
class LoadedScript:
    """Record of a successfully executed script."""

    origin: str
    size: int
    loaded_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class ScriptRunner:
    """Executes script payloads in a namespace.

    Example:
        runner = ScriptRunner(namespace)
        marker = await runner.execute(b"answer = 42", origin="lib.js")
        assert namespace["answer"] == 42
    """

    def __init__(self, namespace: Namespace) -> None:
        self._namespace = namespace
        self._loaded: dict[str, LoadedScript] = {}

    @property
    def loaded(self) -> dict[str, LoadedScript]:
        """Scripts executed successfully, keyed by origin (latest load wins)."""
        return dict(self._loaded)

    @contextlib.contextmanager
    def acquire(self, content: bytes, origin: str) -> Iterator[ScriptHandle]:
        """Create a temporary handle for a payload, released on exit.

        Args:
            content: Script source bytes
            origin: Identity of the payload, used in messages
        """
        fd, name = tempfile.mkstemp(prefix="fetchcell-", suffix=".py")
        try:
            with os.fdopen(fd, "wb") as stream:
                stream.write(content)
        except BaseException:
            os.unlink(name)
            raise
        handle = ScriptHandle(origin, Path(name))
        try:
            yield handle
        finally:
            handle.release()

    async def execute(self, content: bytes, origin: str) -> str:
        """Execute a payload once and return the loaded marker.

        Args:
            content: Script source bytes
            origin: Identity of the payload

        Returns:
            Human-readable marker describing the load

        Raises:
            BindingError: If the payload cannot be decoded, compiled or run
        """
        loop = asyncio.get_running_loop()
        with self.acquire(content, origin) as handle:
            future: asyncio.Future[str] = loop.create_future()
            loop.call_soon(self._run, handle, future)
            marker = await future
        self._loaded[origin] = LoadedScript(origin=origin, size=len(content))
        return marker

    def _run(self, handle: ScriptHandle, future: asyncio.Future[str]) -> None:
        try:
            handle.claim()
        except ScriptReuseError as e:
            future.set_exception(e)
            return

        try:
            source = handle.path.read_bytes().decode("utf-8")
            code = compile(source, str(handle.path), "exec")
        except UnicodeDecodeError as e:
            future.set_exception(BindingError(f"script is not valid UTF-8: {e.reason}"))
            return
        except SyntaxError as e:
            future.set_exception(BindingError(f"SyntaxError: {e.msg} (line {e.lineno})"))
            return
        except ValueError as e:
            future.set_exception(BindingError(f"script could not be compiled: {e}"))
            return

        try:
            exec(code, self._namespace.globals)
        # sys.exit() in a script must not escape the loop callback.
        except (Exception, SystemExit) as e:
            logger.debug("script_raised", origin=handle.origin, exc_info=True)
            future.set_exception(BindingError(f"{type(e).__name__}: {e}"))
            return

        future.set_result(f"script loaded ({len(source.encode())} bytes)")
