"""Shared contracts for cross-boundary data types.

Dataclasses, enums and protocols that cross subsystem boundaries are defined
here. This package is a LEAF MODULE with no outbound dependencies to core,
engine, sources or reporting.

Import patterns:
    from fetchcell.contracts import Directive, FetchSpec, FetchOutcome
    from fetchcell.contracts.errors import RetrievalError
"""

from fetchcell.contracts.directives import Directive, DirectiveSyntaxError, FetchSpec
from fetchcell.contracts.enums import (
    EvalStatus,
    FailureKind,
    FetchType,
    HistoryType,
    OutcomeLevel,
)
from fetchcell.contracts.errors import (
    BindingError,
    FetchCellError,
    RetrievalError,
    ScriptReuseError,
    UnknownFetchTypeError,
)
from fetchcell.contracts.history import (
    ConsoleEvent,
    ConsoleInput,
    FetchCellInfoCreated,
    FetchCellInfoUpdated,
    HistoryRecord,
)
from fetchcell.contracts.outcomes import (
    FAILURE_MARKER,
    FetchFailed,
    FetchOutcome,
    FetchSucceeded,
    PendingFetch,
    ProgressEntry,
)
from fetchcell.contracts.protocols import (
    DirectiveParser,
    HistoryReporter,
    IdGenerator,
    ResourceSource,
    StatusNotifier,
)
from fetchcell.contracts.results import CellEvaluationResult

__all__ = [
    "FAILURE_MARKER",
    "BindingError",
    "CellEvaluationResult",
    "ConsoleEvent",
    "ConsoleInput",
    "Directive",
    "DirectiveParser",
    "DirectiveSyntaxError",
    "EvalStatus",
    "FailureKind",
    "FetchCellError",
    "FetchCellInfoCreated",
    "FetchCellInfoUpdated",
    "FetchFailed",
    "FetchOutcome",
    "FetchSpec",
    "FetchSucceeded",
    "FetchType",
    "HistoryRecord",
    "HistoryReporter",
    "HistoryType",
    "IdGenerator",
    "OutcomeLevel",
    "PendingFetch",
    "ProgressEntry",
    "ResourceSource",
    "RetrievalError",
    "ScriptReuseError",
    "StatusNotifier",
    "UnknownFetchTypeError",
]
