"""Progress and outcome message construction.

Every outcome a directive can produce is built here, so the display text
conventions (including the failure marker prefix) live in one place.
"""

from fetchcell.contracts import (
    FAILURE_MARKER,
    Directive,
    DirectiveSyntaxError,
    FailureKind,
    FetchFailed,
    FetchSpec,
    FetchSucceeded,
    PendingFetch,
)


def syntax_error_to_string(error: DirectiveSyntaxError) -> str:
    text = f"{FAILURE_MARKER}: {error.error}"
    if error.line is not None and error.source is not None:
        text += f" (line {error.line}: {error.source})"
    elif error.line is not None:
        text += f" (line {error.line})"
    return text


def fetching_message(spec: FetchSpec) -> str:
    return f"fetching {spec.fetch_type} from {spec.file_path}"


def default_success_text(spec: FetchSpec) -> str:
    kind = spec.kind
    if kind is not None and kind.binds_variable:
        return f"{spec.fetch_type} from {spec.file_path} bound to {spec.var_name}"
    return f"{spec.fetch_type} from {spec.file_path} installed"


def initial_entry(directive: Directive) -> PendingFetch | FetchFailed:
    """Entry shown before a directive runs (or its syntax error)."""
    error = directive.syntax_error
    if error is not None:
        return syntax_error_outcome(directive.id, error)
    return PendingFetch(id=directive.id, text=fetching_message(directive.spec))


def syntax_error_outcome(directive_id: str, error: DirectiveSyntaxError) -> FetchFailed:
    return FetchFailed(id=directive_id, text=syntax_error_to_string(error), kind=FailureKind.SYNTAX)


def success_message(directive: Directive, detail: str | None = None) -> FetchSucceeded:
    """Success outcome; detail replaces the default text's tail when given."""
    spec = directive.spec
    if detail is None:
        return FetchSucceeded(id=directive.id, text=default_success_text(spec))
    return FetchSucceeded(id=directive.id, text=f"{spec.fetch_type} from {spec.file_path}: {detail}")


def error_message(directive: Directive, detail: str, kind: FailureKind) -> FetchFailed:
    spec = directive.spec
    return FetchFailed(
        id=directive.id,
        text=f"{FAILURE_MARKER}: {spec.fetch_type} from {spec.file_path} ({detail})",
        kind=kind,
    )
