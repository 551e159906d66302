# src/fetchcell/contracts/protocols.py
"""Protocols for the collaborators the evaluation pipeline depends on.

The engine depends only on these protocols. Default implementations live in
fetchcell.core.parser, fetchcell.sources and fetchcell.reporting; hosts may
inject their own.

Collaborators:
- DirectiveParser: cell text -> ordered directives
- ResourceSource: file path + kind -> decoded payload
- HistoryReporter: console history (create and update entries)
- StatusNotifier: host editor status channel
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from fetchcell.contracts.directives import Directive
from fetchcell.contracts.enums import EvalStatus, FetchType
from fetchcell.contracts.history import FetchCellInfoUpdated, HistoryRecord


@runtime_checkable
class DirectiveParser(Protocol):
    """Turns raw cell text into an ordered list of directives.

    Parsing is synchronous. Malformed lines become directives carrying a
    DirectiveSyntaxError rather than raising.
    """

    def __call__(self, cell_text: str) -> list[Directive]: ...


@runtime_checkable
class ResourceSource(Protocol):
    """Retrieval strategy for one family of paths.

    Implementations return the payload decoded for the requested kind:
    - TEXT, CSS: str
    - JSON: parsed JSON value
    - BLOB, JS: bytes

    Raises:
        RetrievalError: If the resource cannot be fetched or decoded
    """

    name: str

    async def retrieve(self, file_path: str, fetch_type: FetchType) -> Any: ...


@runtime_checkable
class HistoryReporter(Protocol):
    """Console history collaborator."""

    def add_to_console_history(self, record: HistoryRecord) -> None:
        """Open a new history entry."""
        ...

    def update_console_entry(self, update: FetchCellInfoUpdated) -> None:
        """Replace the value (and optionally level) of an existing entry."""
        ...


@runtime_checkable
class StatusNotifier(Protocol):
    """Host editor status channel, called exactly once per evaluation."""

    def notify_status(self, status: EvalStatus, eval_id: str) -> None: ...


IdGenerator = Callable[[], str]
"""Produces history entry ids."""
