# src/fetchcell/engine/orchestrator.py
"""FetchOrchestrator - evaluates a whole fetch cell.

Lifecycle of one evaluation:
1. Parse the cell and echo it as a CONSOLE_INPUT history record
2. If any directive has a syntax error: report the failing directives at
   ERROR level, notify the host ERROR and stop. Nothing executes.
3. Report the initial "fetching ..." progress view
4. Execute every directive concurrently; as each settles, replace its slot
   (by original index) and re-emit the whole view
5. After all settle, refresh the user namespace (even when some failed)
6. Emit the final view with the aggregate level and notify the host

Concurrency model: one asyncio event loop, no threads. Settlement code runs
one callback at a time, so the progress view needs no lock. Directives are
gathered without cancellation propagation; a failure in one never cancels
another (and FetchExecutor.execute never raises).
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from fetchcell.contracts import (
    CellEvaluationResult,
    ConsoleInput,
    Directive,
    DirectiveParser,
    EvalStatus,
    FetchCellInfoCreated,
    FetchCellInfoUpdated,
    FetchOutcome,
    HistoryReporter,
    IdGenerator,
    OutcomeLevel,
    StatusNotifier,
)
from fetchcell.core.identifiers import generate_history_id
from fetchcell.core.parser import parse_fetch_cell
from fetchcell.engine.executor import FetchExecutor
from fetchcell.engine.messages import syntax_error_outcome
from fetchcell.engine.progress import ProgressView
from fetchcell.environment import Namespace

logger = structlog.get_logger(__name__)


@dataclass
class _LiveProgress:
    """Holder for the current view while directives settle.

    Mutable because each settlement swaps in a new immutable ProgressView.
    """

    history_id: str
    view: ProgressView


class FetchOrchestrator:
    """Entry point for fetch-cell evaluation.

    Example:
        orchestrator = FetchOrchestrator(
            executor=executor,
            reporter=ConsoleHistory(bus),
            notifier=EditorStatusChannel(),
            namespace=environment.namespace,
        )
        result = await orchestrator.evaluate("text: x = a.txt", eval_id="eval-1")
    """

    def __init__(
        self,
        *,
        executor: FetchExecutor,
        reporter: HistoryReporter,
        notifier: StatusNotifier,
        namespace: Namespace,
        parser: DirectiveParser = parse_fetch_cell,
        id_generator: IdGenerator = generate_history_id,
    ) -> None:
        self._executor = executor
        self._reporter = reporter
        self._notifier = notifier
        self._namespace = namespace
        self._parser = parser
        self._id_generator = id_generator

    async def evaluate(self, cell_text: str, eval_id: str) -> CellEvaluationResult:
        """Evaluate a fetch cell.

        Args:
            cell_text: Raw cell text
            eval_id: Host's evaluation request id, echoed in the status notification

        Returns:
            Aggregate result. The same verdict is sent to the StatusNotifier.
        """
        history_id = self._id_generator()
        log = logger.bind(eval_id=eval_id, history_id=history_id)

        directives = self._parser(cell_text)
        self._reporter.add_to_console_history(ConsoleInput(history_id=self._id_generator(), content=cell_text))

        failing = [directive for directive in directives if directive.syntax_error is not None]
        if failing:
            return self._report_syntax_errors(failing, eval_id, history_id, log)

        start = time.perf_counter()
        log.info("fetch_cell_started", directive_count=len(directives))

        progress = _LiveProgress(history_id=history_id, view=ProgressView.initial(directives))
        self._reporter.add_to_console_history(FetchCellInfoCreated(history_id=history_id, value=progress.view.entries))

        try:
            outcomes = await asyncio.gather(
                *(self._run_directive(index, directive, progress) for index, directive in enumerate(directives))
            )
        finally:
            self._namespace.refresh()

        final = tuple(outcomes)
        failed_count = sum(1 for outcome in final if outcome.failed)
        status = EvalStatus.ERROR if failed_count else EvalStatus.SUCCESS

        self._reporter.update_console_entry(
            FetchCellInfoUpdated(
                history_id=history_id,
                value=final,
                level=OutcomeLevel.ERROR if failed_count else None,
            )
        )
        log.info(
            "fetch_cell_completed",
            status=str(status),
            failed_count=failed_count,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        self._notifier.notify_status(status, eval_id)
        return CellEvaluationResult(eval_id=eval_id, history_id=history_id, status=status, entries=final)

    def evaluate_sync(self, cell_text: str, eval_id: str) -> CellEvaluationResult:
        """Run evaluate() on a fresh event loop.

        Must not be called from inside a running loop.
        """
        return asyncio.run(self.evaluate(cell_text, eval_id))

    async def _run_directive(self, index: int, directive: Directive, progress: _LiveProgress) -> FetchOutcome:
        outcome = await self._executor.execute(directive)
        progress.view = progress.view.settle(index, outcome)
        self._reporter.update_console_entry(
            FetchCellInfoUpdated(history_id=progress.history_id, value=progress.view.entries)
        )
        logger.debug("fetch_directive_settled", directive_id=directive.id, index=index, failed=outcome.failed)
        return outcome

    def _report_syntax_errors(
        self,
        failing: Sequence[Directive],
        eval_id: str,
        history_id: str,
        log: structlog.stdlib.BoundLogger,
    ) -> CellEvaluationResult:
        entries = tuple(
            syntax_error_outcome(directive.id, directive.syntax_error)
            for directive in failing
            if directive.syntax_error is not None
        )
        self._reporter.add_to_console_history(
            FetchCellInfoCreated(history_id=history_id, value=entries, level=OutcomeLevel.ERROR)
        )
        log.info("fetch_cell_syntax_error", failing_count=len(entries))
        self._notifier.notify_status(EvalStatus.ERROR, eval_id)
        return CellEvaluationResult(eval_id=eval_id, history_id=history_id, status=EvalStatus.ERROR, entries=entries)
