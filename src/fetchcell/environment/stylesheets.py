# src/fetchcell/environment/stylesheets.py
"""Stylesheet registry for ``css`` directives.

Stylesheets are keyed by identity (the directive's file path). install()
removes any stylesheet already registered under the key before adding the
new one, so at every observable instant there is at most one stylesheet per
key and re-fetching a file replaces its rules rather than stacking them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class InstalledStylesheet:
    """A stylesheet installed under an identity key."""

    key: str
    text: str
    installed_at: datetime = field(default_factory=lambda: datetime.now(UTC))


StylesheetListener = Callable[[str, "InstalledStylesheet | None"], None]
"""Called with (key, stylesheet) on install and (key, None) on removal."""


class StylesheetRegistry:
    """Ordered map from identity key to installed stylesheet.

    Iteration yields stylesheets in install order, which is the order a
    renderer should apply them in.
    """

    def __init__(self) -> None:
        self._sheets: dict[str, InstalledStylesheet] = {}
        self._listeners: list[StylesheetListener] = []

    def subscribe(self, listener: StylesheetListener) -> None:
        self._listeners.append(listener)

    def remove(self, key: str) -> bool:
        """Remove the stylesheet registered under key.

        Returns:
            True if a stylesheet was removed
        """
        if key not in self._sheets:
            return False
        del self._sheets[key]
        for listener in self._listeners:
            listener(key, None)
        return True

    def install(self, text: str, key: str) -> InstalledStylesheet:
        """Install text under key, replacing any previous stylesheet.

        Removal happens before the new stylesheet is added, and the new one
        moves to the end of the install order.
        """
        replaced = self.remove(key)
        sheet = InstalledStylesheet(key=key, text=text)
        self._sheets[key] = sheet
        for listener in self._listeners:
            listener(key, sheet)
        logger.debug("stylesheet_installed", key=key, replaced=replaced, size=len(text))
        return sheet

    def get(self, key: str) -> InstalledStylesheet | None:
        return self._sheets.get(key)

    def keys(self) -> list[str]:
        return list(self._sheets)

    def __contains__(self, key: object) -> bool:
        return key in self._sheets

    def __iter__(self) -> Iterator[InstalledStylesheet]:
        return iter(list(self._sheets.values()))

    def __len__(self) -> int:
        return len(self._sheets)
