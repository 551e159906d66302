# src/fetchcell/environment/namespace.py
"""Shared variable namespace that fetch directives bind into.

The namespace is long-lived and shared across cell evaluations. Writes are
last-write-wins: binding a name that already exists replaces the value
silently, whether the earlier binding came from this evaluation or an
earlier one. Within one evaluation, directives targeting the same name are
ordered by completion.

Scripts executed by ``js`` directives run with the namespace's mapping as
their globals, so anything they define is visible to later bindings and
vice versa.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, MutableMapping
from types import ModuleType
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

NamespaceListener = Callable[["Namespace"], None]


class Namespace(MutableMapping[str, Any]):
    """Process-wide variable namespace.

    Behaves as a mutable mapping. refresh() notifies listeners that the set
    of user variables may have changed; the orchestrator calls it once per
    evaluation after every directive has settled.

    Example:
        ns = Namespace()
        ns.subscribe(lambda n: print(sorted(n.user_variables())))
        ns.bind("x", "hello")
        ns.refresh()
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._globals: dict[str, Any] = {"__name__": "__fetchcell__"}
        if initial:
            self._globals.update(initial)
        self._listeners: list[NamespaceListener] = []

    @property
    def globals(self) -> dict[str, Any]:
        """The live dict used as script globals."""
        return self._globals

    def bind(self, name: str, value: Any) -> None:
        """Bind value under name, replacing any existing binding."""
        if name in self._globals:
            logger.debug("namespace_rebind", name=name)
        self._globals[name] = value

    def user_variables(self) -> dict[str, Any]:
        """Snapshot of bindings, excluding dunder names and modules."""
        return {
            name: value
            for name, value in self._globals.items()
            if not (name.startswith("__") and name.endswith("__")) and not isinstance(value, ModuleType)
        }

    def subscribe(self, listener: NamespaceListener) -> None:
        self._listeners.append(listener)

    def refresh(self) -> None:
        """Notify listeners that user variables should be re-read."""
        for listener in self._listeners:
            listener(self)

    def __getitem__(self, name: str) -> Any:
        return self._globals[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.bind(name, value)

    def __delitem__(self, name: str) -> None:
        del self._globals[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._globals)

    def __len__(self) -> int:
        return len(self._globals)

    def __repr__(self) -> str:
        return f"Namespace({sorted(self.user_variables())!r})"
