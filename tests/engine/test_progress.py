"""Tests for ProgressView."""

import pytest

from fetchcell.contracts import Directive, FailureKind, FetchFailed, FetchSpec, FetchSucceeded, OutcomeLevel, PendingFetch
from fetchcell.engine import ProgressView


def _directives(count: int) -> list[Directive]:
    return [
        Directive(id=f"d{i}", parsed=FetchSpec(fetch_type="text", file_path=f"{i}.txt", var_name=f"v{i}"))
        for i in range(count)
    ]


class TestProgressView:
    """Tests for ProgressView."""

    def test_initial_view_is_pending_in_order(self) -> None:
        view = ProgressView.initial(_directives(3))

        assert [entry.id for entry in view] == ["d0", "d1", "d2"]
        assert all(isinstance(entry, PendingFetch) for entry in view)
        assert view.level is None

    def test_settle_returns_new_view(self) -> None:
        view = ProgressView.initial(_directives(2))
        settled = view.settle(1, FetchSucceeded(id="d1", text="text from 1.txt bound to v1"))

        assert isinstance(view.entries[1], PendingFetch)
        assert settled.texts == ["fetching text from 0.txt", "text from 1.txt bound to v1"]

    def test_failure_sets_level(self) -> None:
        view = ProgressView.initial(_directives(2)).settle(
            0, FetchFailed(id="d0", text="ERROR: text from 0.txt (404 Not Found)", kind=FailureKind.RETRIEVAL)
        )
        assert view.has_failure is True
        assert view.level is OutcomeLevel.ERROR

    def test_settle_rejects_wrong_slot(self) -> None:
        view = ProgressView.initial(_directives(2))
        with pytest.raises(ValueError, match="slot 0 holds directive d0"):
            view.settle(0, FetchSucceeded(id="d1", text="ok"))

    def test_settle_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            ProgressView.initial(_directives(1)).settle(3, FetchSucceeded(id="d0", text="ok"))

    def test_len(self) -> None:
        assert len(ProgressView.initial(_directives(4))) == 4
