"""Console history records emitted during a cell evaluation.

Per evaluation the reporting channel receives, in order:
1. ConsoleInput echoing the raw cell text
2. FetchCellInfoCreated with the initial progress (or the syntax errors)
3. FetchCellInfoUpdated zero or more times, each with the full progress;
   the last one carries the aggregate level

Values are tuples of immutable entries, so a record handed to a subscriber
can never be changed by a later update.
"""

from dataclasses import dataclass
from typing import Any

from fetchcell.contracts.enums import HistoryType, OutcomeLevel
from fetchcell.contracts.outcomes import ProgressEntry


@dataclass(frozen=True, slots=True)
class ConsoleInput:
    """Echo of the raw cell text, recorded before any fetch begins."""

    history_id: str
    content: str
    language: str = "fetch"

    @property
    def history_type(self) -> HistoryType:
        return HistoryType.CONSOLE_INPUT

    def to_wire(self) -> dict[str, Any]:
        return {
            "historyType": str(self.history_type),
            "historyId": self.history_id,
            "language": self.language,
            "content": self.content,
        }


@dataclass(frozen=True, slots=True)
class FetchCellInfoCreated:
    """New progress entry for a fetch cell."""

    history_id: str
    value: tuple[ProgressEntry, ...]
    level: OutcomeLevel | None = None

    @property
    def history_type(self) -> HistoryType:
        return HistoryType.FETCH_CELL_INFO

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {
            "historyType": str(self.history_type),
            "historyId": self.history_id,
            "value": [entry.to_wire() for entry in self.value],
        }
        if self.level is not None:
            wire["level"] = str(self.level)
        return wire


@dataclass(frozen=True, slots=True)
class FetchCellInfoUpdated:
    """Replacement value for an existing progress entry."""

    history_id: str
    value: tuple[ProgressEntry, ...]
    level: OutcomeLevel | None = None

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {
            "historyId": self.history_id,
            "value": [entry.to_wire() for entry in self.value],
        }
        if self.level is not None:
            wire["level"] = str(self.level)
        return wire


HistoryRecord = ConsoleInput | FetchCellInfoCreated
"""Records that open a new history entry."""

ConsoleEvent = HistoryRecord | FetchCellInfoUpdated
"""Everything ConsoleHistory publishes on its event bus."""
