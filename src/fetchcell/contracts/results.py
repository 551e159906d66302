"""Result of a whole cell evaluation."""

from dataclasses import dataclass

from fetchcell.contracts.enums import EvalStatus
from fetchcell.contracts.outcomes import ProgressEntry


@dataclass(frozen=True, slots=True)
class CellEvaluationResult:
    """Aggregate verdict of one cell evaluation.

    Attributes:
        eval_id: Host's evaluation request id
        history_id: Console history entry holding the progress view
        status: SUCCESS only if every directive succeeded
        entries: Final progress view. On the syntax short-circuit path these
            are the syntax-error entries for the failing directives only.
    """

    eval_id: str
    history_id: str
    status: EvalStatus
    entries: tuple[ProgressEntry, ...]

    @property
    def succeeded(self) -> bool:
        return self.status == EvalStatus.SUCCESS

    @property
    def failed_count(self) -> int:
        return sum(1 for entry in self.entries if entry.failed)
