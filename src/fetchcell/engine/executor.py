# src/fetchcell/engine/executor.py
"""FetchExecutor - executes one directive end to end.

Steps:
1. Reject directives carrying a syntax error
2. Reject unknown kinds (no I/O is attempted for them)
3. Select the source: isRelPath -> parent context, otherwise local
4. Retrieve and decode the resource
5. Plan and apply the binding

execute() never raises. Every failure mode becomes a FetchFailed outcome
with the matching FailureKind, so one directive can never abort its
siblings or the orchestrator.
"""

from __future__ import annotations

import structlog

from fetchcell.contracts import (
    Directive,
    FailureKind,
    FetchCellError,
    FetchOutcome,
    ResourceSource,
    UnknownFetchTypeError,
)
from fetchcell.engine.binding import BindingApplier, plan_binding
from fetchcell.engine.messages import error_message, success_message, syntax_error_outcome

logger = structlog.get_logger(__name__)


class FetchExecutor:
    """Executes directives against two sources and a binding applier.

    Example:
        executor = FetchExecutor(
            local=LocalSource(settings.sources),
            parent=ParentContextSource(settings.sources),
            applier=BindingApplier(environment),
        )
        outcome = await executor.execute(directive)
    """

    def __init__(self, *, local: ResourceSource, parent: ResourceSource, applier: BindingApplier) -> None:
        self._local = local
        self._parent = parent
        self._applier = applier

    def select_source(self, is_rel_path: bool) -> ResourceSource:
        return self._parent if is_rel_path else self._local

    async def execute(self, directive: Directive) -> FetchOutcome:
        """Execute one directive and return its outcome."""
        error = directive.syntax_error
        if error is not None:
            return syntax_error_outcome(directive.id, error)

        spec = directive.spec
        kind = spec.kind
        if kind is None:
            unknown = UnknownFetchTypeError(spec.fetch_type)
            logger.info("fetch_unknown_type", directive_id=directive.id, fetch_type=spec.fetch_type)
            return error_message(directive, unknown.detail, unknown.failure_kind)

        source = self.select_source(spec.is_rel_path)
        log = logger.bind(directive_id=directive.id, fetch_type=spec.fetch_type, file_path=spec.file_path, source=source.name)

        try:
            resource = await source.retrieve(spec.file_path, kind)
        except FetchCellError as e:
            log.info("fetch_retrieval_failed", detail=e.detail)
            return error_message(directive, e.detail, FailureKind.RETRIEVAL)
        except Exception as e:
            # Injected sources are not bound to raise RetrievalError.
            log.warning("fetch_retrieval_raised", exc_info=True)
            return error_message(directive, f"{type(e).__name__}: {e}", FailureKind.RETRIEVAL)

        try:
            detail = await self._applier.apply(plan_binding(spec, resource))
        except FetchCellError as e:
            log.info("fetch_binding_failed", detail=e.detail)
            return error_message(directive, e.detail, e.failure_kind)
        except Exception as e:
            log.warning("fetch_binding_raised", exc_info=True)
            return error_message(directive, f"{type(e).__name__}: {e}", FailureKind.BINDING)

        log.debug("fetch_applied")
        return success_message(directive, detail)
