"""Reporting collaborators: console history and host status."""

from fetchcell.reporting.history import ConsoleHistory
from fetchcell.reporting.status import EditorStatusChannel, StatusNotification

__all__ = [
    "ConsoleHistory",
    "EditorStatusChannel",
    "StatusNotification",
]
