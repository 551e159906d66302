"""Tests for FetchExecutor."""

import asyncio

from fetchcell.contracts import (
    Directive,
    DirectiveSyntaxError,
    FailureKind,
    FetchFailed,
    FetchOutcome,
    FetchSpec,
    FetchSucceeded,
    FetchType,
    RetrievalError,
)
from fetchcell.engine import FetchExecutor
from fetchcell.environment import Environment
from tests.fixtures import FakeSource


def _directive(fetch_type: str, file_path: str, var_name: str = "", *, relative: bool = True) -> Directive:
    return Directive(
        id="d1",
        parsed=FetchSpec(fetch_type=fetch_type, file_path=file_path, var_name=var_name, is_rel_path=relative),
    )


def _execute(executor: FetchExecutor, directive: Directive) -> FetchOutcome:
    return asyncio.run(executor.execute(directive))


class TestSourceSelection:
    """isRelPath picks the source."""

    def test_relative_path_uses_parent(
        self, executor: FetchExecutor, local_source: FakeSource, parent_source: FakeSource
    ) -> None:
        parent_source.payloads["notes.txt"] = "hello"

        _execute(executor, _directive("text", "notes.txt", "notes"))

        assert parent_source.calls == [("notes.txt", FetchType.TEXT)]
        assert local_source.calls == []

    def test_absolute_path_uses_local(
        self, executor: FetchExecutor, local_source: FakeSource, parent_source: FakeSource
    ) -> None:
        local_source.payloads["https://example.com/a.json"] = {"a": 1}

        _execute(executor, _directive("json", "https://example.com/a.json", "a", relative=False))

        assert local_source.calls == [("https://example.com/a.json", FetchType.JSON)]
        assert parent_source.calls == []


class TestSuccessfulDirectives:
    """Each kind applies its side effect and reports success."""

    def test_text_binds_variable(self, executor: FetchExecutor, parent_source: FakeSource, environment: Environment) -> None:
        parent_source.payloads["notes.txt"] = "hello"

        outcome = _execute(executor, _directive("text", "notes.txt", "notes"))

        assert outcome == FetchSucceeded(id="d1", text="text from notes.txt bound to notes")
        assert environment.namespace["notes"] == "hello"

    def test_script_runs(self, executor: FetchExecutor, parent_source: FakeSource, environment: Environment) -> None:
        parent_source.payloads["lib.js"] = b"loaded = True"

        outcome = _execute(executor, _directive("js", "lib.js"))

        assert outcome == FetchSucceeded(id="d1", text="js from lib.js: script loaded (13 bytes)")
        assert environment.namespace["loaded"] is True

    def test_stylesheet_installs(self, executor: FetchExecutor, parent_source: FakeSource, environment: Environment) -> None:
        parent_source.payloads["theme.css"] = "h1 { color: red; }"

        outcome = _execute(executor, _directive("css", "theme.css"))

        assert outcome.text == "css from theme.css installed"
        assert "theme.css" in environment.stylesheets


class TestFailedDirectives:
    """Every failure mode becomes a FetchFailed outcome."""

    def test_syntax_error(self, executor: FetchExecutor) -> None:
        directive = Directive(id="d1", parsed=DirectiveSyntaxError(error="missing file path", line=1))

        outcome = _execute(executor, directive)

        assert isinstance(outcome, FetchFailed)
        assert outcome.kind is FailureKind.SYNTAX

    def test_unknown_kind_attempts_no_io(
        self, executor: FetchExecutor, local_source: FakeSource, parent_source: FakeSource
    ) -> None:
        outcome = _execute(executor, _directive("xml", "feed.xml", "feed"))

        assert outcome == FetchFailed(
            id="d1", text="ERROR: xml from feed.xml (unknown fetch type)", kind=FailureKind.UNKNOWN_KIND
        )
        assert local_source.calls == []
        assert parent_source.calls == []

    def test_retrieval_error(self, executor: FetchExecutor, environment: Environment) -> None:
        outcome = _execute(executor, _directive("text", "missing.txt", "missing"))

        assert outcome == FetchFailed(
            id="d1", text="ERROR: text from missing.txt (404 Not Found)", kind=FailureKind.RETRIEVAL
        )
        assert "missing" not in environment.namespace

    def test_unexpected_source_exception(self, executor: FetchExecutor, parent_source: FakeSource) -> None:
        parent_source.payloads["a.txt"] = ConnectionResetError("peer reset")

        outcome = _execute(executor, _directive("text", "a.txt", "a"))

        assert isinstance(outcome, FetchFailed)
        assert outcome.kind is FailureKind.RETRIEVAL
        assert outcome.text == "ERROR: text from a.txt (ConnectionResetError: peer reset)"

    def test_retrieval_error_from_source(self, executor: FetchExecutor, parent_source: FakeSource) -> None:
        parent_source.payloads["a.json"] = RetrievalError("a.json", "invalid JSON: Expecting value")

        outcome = _execute(executor, _directive("json", "a.json", "a"))

        assert outcome.text == "ERROR: json from a.json (invalid JSON: Expecting value)"

    def test_script_failure_is_binding_error(
        self, executor: FetchExecutor, parent_source: FakeSource, environment: Environment
    ) -> None:
        parent_source.payloads["bad.js"] = b"raise RuntimeError('no window')"

        outcome = _execute(executor, _directive("js", "bad.js"))

        assert isinstance(outcome, FetchFailed)
        assert outcome.kind is FailureKind.BINDING
        assert outcome.text == "ERROR: js from bad.js (RuntimeError: no window)"
        assert environment.scripts.loaded == {}
