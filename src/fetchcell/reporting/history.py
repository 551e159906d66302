# src/fetchcell/reporting/history.py
"""In-memory console history.

ConsoleHistory implements the HistoryReporter protocol. It keeps the latest
state of every history entry and re-emits each record on an event bus so
that renderers can follow an evaluation as it happens.
"""

from __future__ import annotations

from dataclasses import replace

from fetchcell.contracts import (
    ConsoleInput,
    FetchCellInfoCreated,
    FetchCellInfoUpdated,
    HistoryRecord,
)
from fetchcell.core.events import EventBusProtocol, NullEventBus


class ConsoleHistory:
    """Ordered history of console records keyed by history id.

    Example:
        bus = EventBus()
        history = ConsoleHistory(bus)
        bus.subscribe(FetchCellInfoUpdated, lambda u: print(len(u.value)))
    """

    def __init__(self, event_bus: EventBusProtocol | None = None) -> None:
        self._bus: EventBusProtocol = event_bus if event_bus is not None else NullEventBus()
        self._entries: dict[str, HistoryRecord] = {}

    def add_to_console_history(self, record: HistoryRecord) -> None:
        """Open a new entry.

        Raises:
            ValueError: If an entry with the same history id already exists
        """
        if record.history_id in self._entries:
            raise ValueError(f"history entry {record.history_id} already exists")
        self._entries[record.history_id] = record
        self._bus.emit(record)

    def update_console_entry(self, update: FetchCellInfoUpdated) -> None:
        """Replace the value and level of an existing fetch-cell entry.

        Raises:
            KeyError: If no entry has the update's history id
            TypeError: If the entry is not a fetch-cell entry
        """
        entry = self._entries[update.history_id]
        if not isinstance(entry, FetchCellInfoCreated):
            raise TypeError(f"history entry {update.history_id} is {type(entry).__name__}, not a fetch-cell entry")
        self._entries[update.history_id] = replace(entry, value=update.value, level=update.level)
        self._bus.emit(update)

    def get(self, history_id: str) -> HistoryRecord:
        return self._entries[history_id]

    def entries(self) -> list[HistoryRecord]:
        """All entries in the order they were opened."""
        return list(self._entries.values())

    def inputs(self) -> list[ConsoleInput]:
        return [entry for entry in self._entries.values() if isinstance(entry, ConsoleInput)]

    def __len__(self) -> int:
        return len(self._entries)
