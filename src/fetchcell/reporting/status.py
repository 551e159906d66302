"""Host editor status channel."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from fetchcell.contracts import EvalStatus

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class StatusNotification:
    status: EvalStatus
    eval_id: str


class EditorStatusChannel:
    """Records status notifications and forwards them to an optional callback.

    Implements the StatusNotifier protocol.
    """

    def __init__(self, send: Callable[[EvalStatus, str], None] | None = None) -> None:
        self._send = send
        self._sent: list[StatusNotification] = []

    @property
    def sent(self) -> list[StatusNotification]:
        return list(self._sent)

    @property
    def last(self) -> StatusNotification | None:
        return self._sent[-1] if self._sent else None

    def notify_status(self, status: EvalStatus, eval_id: str) -> None:
        self._sent.append(StatusNotification(status=status, eval_id=eval_id))
        logger.debug("status_sent", status=str(status), eval_id=eval_id)
        if self._send is not None:
            self._send(status, eval_id)
