"""Event bus carrying console history records to their subscribers.

The orchestrator never talks to a display directly. ConsoleHistory emits
each record it stores on an EventBus, and renderers (the CLI, a host
bridge, tests) subscribe to the record types they care about, or to the
whole stream with subscribe_all().

Only ConsoleEvent records travel on the bus. Subscribing to or emitting
anything else is a wiring mistake and raises TypeError immediately.
"""

from collections.abc import Callable
from typing import Protocol, TypeVar, get_args

from fetchcell.contracts import ConsoleEvent

E = TypeVar("E", bound=ConsoleEvent)

CONSOLE_EVENT_TYPES: tuple[type, ...] = get_args(ConsoleEvent)


def _check_event_type(event_type: type) -> None:
    if event_type not in CONSOLE_EVENT_TYPES:
        names = ", ".join(t.__name__ for t in CONSOLE_EVENT_TYPES)
        raise TypeError(f"{event_type.__name__} is not a console event (expected one of {names})")


class EventBusProtocol(Protocol):
    """Interface shared by EventBus and NullEventBus.

    The two classes do not inherit from each other, so a NullEventBus can
    never be passed where subscriptions are expected to fire.
    """

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None: ...

    def subscribe_all(self, handler: Callable[[ConsoleEvent], None]) -> None: ...

    def emit(self, event: ConsoleEvent) -> None: ...


class EventBus:
    """Synchronous bus for console history records.

    Handlers run on the emitting thread: type-specific subscribers first,
    in subscription order, then stream subscribers. Handler exceptions
    propagate to the emitter.

    Example:
        bus = EventBus()
        bus.subscribe(FetchCellInfoUpdated, lambda e: print(e.value))
        bus.emit(FetchCellInfoUpdated(history_id="h1", value=()))
    """

    def __init__(self) -> None:
        self._subscribers: dict[type, list[Callable[..., None]]] = {t: [] for t in CONSOLE_EVENT_TYPES}
        self._stream: list[Callable[[ConsoleEvent], None]] = []

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        """Subscribe a handler to one record type.

        Raises:
            TypeError: If event_type is not a console event type
        """
        _check_event_type(event_type)
        self._subscribers[event_type].append(handler)

    def subscribe_all(self, handler: Callable[[ConsoleEvent], None]) -> None:
        """Subscribe a handler to every record, in emission order."""
        self._stream.append(handler)

    def emit(self, event: ConsoleEvent) -> None:
        _check_event_type(type(event))
        for handler in self._subscribers[type(event)]:
            handler(event)
        for handler in self._stream:
            handler(event)


class NullEventBus:
    """No-op bus for library use where nothing renders history."""

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        pass

    def subscribe_all(self, handler: Callable[[ConsoleEvent], None]) -> None:
        pass

    def emit(self, event: ConsoleEvent) -> None:
        pass
