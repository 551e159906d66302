"""Outcome types for directive execution.

FetchOutcome is a discriminated union:
- FetchSucceeded: the directive's side effect was applied
- FetchFailed: the directive failed, with a FailureKind

Failure is decided by the variant, never by inspecting text. The display
text of a FetchFailed starts with FAILURE_MARKER so that consoles which
only see strings can still highlight it, but nothing in the engine reads
the marker back.

PendingFetch is the placeholder shown in a progress view before a
directive settles.
"""

from dataclasses import dataclass
from typing import Any

from fetchcell.contracts.enums import FailureKind, OutcomeLevel

FAILURE_MARKER = "ERROR"


@dataclass(frozen=True, slots=True)
class PendingFetch:
    """In-progress placeholder for a directive that has not settled."""

    id: str
    text: str

    @property
    def failed(self) -> bool:
        return False

    @property
    def level(self) -> OutcomeLevel | None:
        return None

    def to_wire(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text}


@dataclass(frozen=True, slots=True)
class FetchSucceeded:
    """Terminal outcome of a directive whose binding was applied."""

    id: str
    text: str

    @property
    def failed(self) -> bool:
        return False

    @property
    def level(self) -> OutcomeLevel | None:
        return None

    def to_wire(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text}


@dataclass(frozen=True, slots=True)
class FetchFailed:
    """Terminal outcome of a directive that failed.

    Attributes:
        id: Directive id
        text: Display text, always starting with FAILURE_MARKER
        kind: Classification of the failure
    """

    id: str
    text: str
    kind: FailureKind

    def __post_init__(self) -> None:
        if not self.text.startswith(FAILURE_MARKER):
            raise ValueError(f"FetchFailed text must start with {FAILURE_MARKER!r}, got {self.text!r}")

    @property
    def failed(self) -> bool:
        return True

    @property
    def level(self) -> OutcomeLevel | None:
        return OutcomeLevel.ERROR

    def to_wire(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "level": str(OutcomeLevel.ERROR)}


FetchOutcome = FetchSucceeded | FetchFailed
"""Terminal result of one directive."""

ProgressEntry = PendingFetch | FetchSucceeded | FetchFailed
"""One slot of a progress view."""
