"""Exception hierarchy for fetch-cell evaluation.

Directive-level failures (retrieval, binding, unknown kind) are raised by
sources and binding surfaces and converted to failure outcomes by the
FetchExecutor. They never escape an evaluation.

Syntax errors are not exceptions: they are data carried on a directive
(see contracts.directives.DirectiveSyntaxError).
"""

from fetchcell.contracts.enums import FailureKind


class FetchCellError(Exception):
    """Base class for directive-level failures.

    Attributes:
        failure_kind: Classification used when building the failure outcome
        detail: Human-readable detail shown in the progress view
    """

    failure_kind: FailureKind

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class RetrievalError(FetchCellError):
    """Raised when a resource cannot be fetched.

    Covers network failures, non-2xx responses, missing files and payloads
    that cannot be decoded for the requested kind.
    """

    failure_kind = FailureKind.RETRIEVAL

    def __init__(self, file_path: str, detail: str, *, status_code: int | None = None) -> None:
        """Initialize RetrievalError.

        Args:
            file_path: Path or URL that was requested
            detail: What went wrong
            status_code: HTTP status when the failure was a response status
        """
        self.file_path = file_path
        self.status_code = status_code
        super().__init__(detail)


class BindingError(FetchCellError):
    """Raised when a retrieved resource cannot be applied.

    Only script execution can fail this way: the payload did not compile or
    raised while running.
    """

    failure_kind = FailureKind.BINDING


class UnknownFetchTypeError(FetchCellError):
    """Raised when a directive names a fetchType outside the recognised set."""

    failure_kind = FailureKind.UNKNOWN_KIND

    def __init__(self, fetch_type: str) -> None:
        self.fetch_type = fetch_type
        super().__init__("unknown fetch type")


class ScriptReuseError(RuntimeError):
    """Raised when a script handle is executed a second time.

    This is a programming error in the caller, not a directive failure.
    """
