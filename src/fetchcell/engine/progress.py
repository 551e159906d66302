"""Index-stable progress view for one cell evaluation.

A ProgressView is immutable. Settling a directive produces a new view with
that directive's slot replaced, so every snapshot handed to the reporting
channel stays internally consistent no matter how updates interleave.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from fetchcell.contracts import Directive, FetchOutcome, OutcomeLevel, ProgressEntry
from fetchcell.engine.messages import initial_entry


@dataclass(frozen=True, slots=True)
class ProgressView:
    """Ordered per-directive entries, aligned with the original directive order."""

    entries: tuple[ProgressEntry, ...]

    @classmethod
    def initial(cls, directives: Sequence[Directive]) -> ProgressView:
        """One in-progress entry per directive, in original order."""
        return cls(entries=tuple(initial_entry(directive) for directive in directives))

    def settle(self, index: int, outcome: FetchOutcome) -> ProgressView:
        """Return a new view with slot ``index`` replaced by ``outcome``.

        Raises:
            IndexError: If index is out of range
            ValueError: If outcome belongs to a different directive than the slot
        """
        current = self.entries[index]
        if current.id != outcome.id:
            raise ValueError(f"slot {index} holds directive {current.id}, got outcome for {outcome.id}")
        return ProgressView(entries=(*self.entries[:index], outcome, *self.entries[index + 1 :]))

    @property
    def has_failure(self) -> bool:
        return any(entry.failed for entry in self.entries)

    @property
    def level(self) -> OutcomeLevel | None:
        """Aggregate display level: ERROR when any slot failed."""
        return OutcomeLevel.ERROR if self.has_failure else None

    @property
    def texts(self) -> list[str]:
        return [entry.text for entry in self.entries]

    def __iter__(self) -> Iterator[ProgressEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
