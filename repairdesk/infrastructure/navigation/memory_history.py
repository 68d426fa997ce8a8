from __future__ import annotations

import logging
from typing import Any

from repairdesk.application.ports.navigation_host import BackListener, NavigationHostPort

GUARD_ENTRY = "#guard"


class InMemoryHistoryHost(NavigationHostPort):
    """History stack standing in for the browser's.

    ``back()`` delivers one back signal the way a popstate event would.
    Every operation is also queued as a directive so a remote client can
    mirror it (``history.pushState`` for ``push_guard`` and so on).
    """

    def __init__(self, initial_path: str = "/") -> None:
        self._entries: list[str] = [initial_path]
        self._listeners: list[BackListener] = []
        self._directives: list[dict[str, Any]] = []
        self._logger = logging.getLogger(__name__)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def current_path(self) -> str:
        for entry in reversed(self._entries):
            if entry != GUARD_ENTRY:
                return entry
        return "/"

    def guard_entry_count(self) -> int:
        return self._entries.count(GUARD_ENTRY)

    def push_guard_entry(self) -> None:
        self._entries.append(GUARD_ENTRY)
        self._directives.append({"op": "push_guard"})

    def drop_guard_entry(self) -> None:
        for index in range(len(self._entries) - 1, -1, -1):
            if self._entries[index] == GUARD_ENTRY:
                del self._entries[index]
                self._directives.append({"op": "drop_guard"})
                return

    def add_back_listener(self, listener: BackListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_back_listener(self, listener: BackListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def navigate(self, path: str) -> None:
        self._entries.append(path)
        self._directives.append({"op": "navigate", "path": path})

    def back(self) -> None:
        if len(self._entries) <= 1:
            self._logger.info("Back signal with no history", extra={"reason": "history_empty"})
            return
        popped = self._entries.pop()
        if popped == GUARD_ENTRY:
            for listener in list(self._listeners):
                listener()

    def pending_directives(self) -> list[dict[str, Any]]:
        return list(self._directives)

    def drain_directives(self) -> list[dict[str, Any]]:
        drained, self._directives = self._directives, []
        return drained
