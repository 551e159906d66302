"""Status codes, kinds and record types used across subsystem boundaries."""

from enum import StrEnum


class FetchType(StrEnum):
    """Kind of resource a directive asks for.

    The kind determines both how the retrieved payload is decoded and which
    binding mode applies it:
    - TEXT, JSON, BLOB: bound as a variable in the namespace
    - JS: executed as a script
    - CSS: installed as a stylesheet keyed by file path
    """

    TEXT = "text"
    JSON = "json"
    BLOB = "blob"
    JS = "js"
    CSS = "css"

    @property
    def binds_variable(self) -> bool:
        """Whether this kind binds its payload under a variable name."""
        return self in (FetchType.TEXT, FetchType.JSON, FetchType.BLOB)

    @classmethod
    def parse(cls, value: str) -> "FetchType | None":
        """Return the member for ``value``, or None when it is not a known kind."""
        try:
            return cls(value)
        except ValueError:
            return None


class EvalStatus(StrEnum):
    """Aggregate verdict of one cell evaluation, as reported to the host."""

    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class OutcomeLevel(StrEnum):
    """Display level attached to outcomes and history entries."""

    ERROR = "ERROR"


class FailureKind(StrEnum):
    """Why a directive failed.

    Values:
        SYNTAX: Directive could not be parsed (cell-level)
        RETRIEVAL: Resource could not be fetched
        BINDING: Resource was fetched but could not be applied
        UNKNOWN_KIND: fetchType is outside the recognised set
    """

    SYNTAX = "syntax"
    RETRIEVAL = "retrieval"
    BINDING = "binding"
    UNKNOWN_KIND = "unknown_kind"


class HistoryType(StrEnum):
    """Type of console history record."""

    CONSOLE_INPUT = "CONSOLE_INPUT"
    FETCH_CELL_INFO = "FETCH_CELL_INFO"
