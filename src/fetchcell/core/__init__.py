"""Core infrastructure: configuration, logging, parsing, identifiers, events."""

from fetchcell.core.config import FetchCellSettings, LoggingSettings, SourceSettings, load_settings
from fetchcell.core.events import EventBus, EventBusProtocol, NullEventBus
from fetchcell.core.logging import configure_logging, get_logger
from fetchcell.core.parser import parse_fetch_cell

__all__ = [
    "EventBus",
    "EventBusProtocol",
    "FetchCellSettings",
    "LoggingSettings",
    "NullEventBus",
    "SourceSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
    "parse_fetch_cell",
]
