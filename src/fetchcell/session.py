# src/fetchcell/session.py
"""FetchCellSession - default wiring of the evaluation pipeline.

A session owns one Environment and evaluates any number of cells against
it, so bindings from earlier cells stay visible to later ones. It builds
the default collaborators from FetchCellSettings:

    LocalSource, ParentContextSource -> FetchExecutor -> FetchOrchestrator
    ConsoleHistory (on the session's EventBus), EditorStatusChannel

and binds a NotebookAPI into the namespace.
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

from fetchcell.api import NotebookAPI
from fetchcell.contracts import CellEvaluationResult, EvalStatus
from fetchcell.core.config import FetchCellSettings
from fetchcell.core.events import EventBus
from fetchcell.core.identifiers import generate_history_id
from fetchcell.engine import BindingApplier, FetchExecutor, FetchOrchestrator
from fetchcell.environment import Environment
from fetchcell.reporting import ConsoleHistory, EditorStatusChannel
from fetchcell.sources import LocalSource, ParentContextSource


class FetchCellSession:
    """Evaluates fetch cells against a persistent environment.

    Example:
        async with FetchCellSession(settings) as session:
            result = await session.evaluate("text: x = notes.txt")
            print(session.environment.namespace["x"])
    """

    def __init__(
        self,
        settings: FetchCellSettings | None = None,
        *,
        environment: Environment | None = None,
        event_bus: EventBus | None = None,
        send_status: Callable[[EvalStatus, str], None] | None = None,
    ) -> None:
        self.settings = settings or FetchCellSettings()
        self.environment = environment or Environment()
        self.event_bus = event_bus or EventBus()
        self.history = ConsoleHistory(self.event_bus)
        self.status_channel = EditorStatusChannel(send_status)

        self.local_source = LocalSource(self.settings.sources)
        self.parent_source = ParentContextSource(self.settings.sources)
        self.executor = FetchExecutor(
            local=self.local_source,
            parent=self.parent_source,
            applier=BindingApplier(self.environment),
        )
        self.orchestrator = FetchOrchestrator(
            executor=self.executor,
            reporter=self.history,
            notifier=self.status_channel,
            namespace=self.environment.namespace,
        )

        self.api = NotebookAPI(self.environment, self.settings.sources)
        self.environment.namespace.bind(self.settings.namespace_api_name, self.api)

    async def evaluate(self, cell_text: str, eval_id: str | None = None) -> CellEvaluationResult:
        """Evaluate one cell. A fresh eval id is generated when none is given."""
        return await self.orchestrator.evaluate(cell_text, eval_id or generate_history_id())

    async def aclose(self) -> None:
        await self.local_source.aclose()
        await self.parent_source.aclose()

    async def __aenter__(self) -> FetchCellSession:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
