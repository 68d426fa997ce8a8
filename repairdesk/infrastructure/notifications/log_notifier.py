from __future__ import annotations

import logging
from collections import deque

from repairdesk.application.ports.notifier import NotifierPort


class LogNotifier(NotifierPort):
    """Notifier for dev and tests: logs each message and keeps the most recent ones."""

    def __init__(self, keep: int = 20) -> None:
        self.messages: deque[tuple[str, str]] = deque(maxlen=keep)
        self._logger = logging.getLogger(__name__)

    def success(self, message: str) -> None:
        self.messages.append(("success", message))
        self._logger.info("NOTIFY_SUCCESS %s", message)

    def error(self, message: str) -> None:
        self.messages.append(("error", message))
        self._logger.warning("NOTIFY_ERROR %s", message)

    def last(self) -> tuple[str, str] | None:
        return self.messages[-1] if self.messages else None
