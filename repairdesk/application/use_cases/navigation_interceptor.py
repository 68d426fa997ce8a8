from __future__ import annotations

import logging
from typing import Any, Callable

from repairdesk.application.ports.navigation_host import NavigationHostPort


class NavigationInterceptor:
    """Capture back-navigation so a guarded screen cannot be left without consent.

    While enabled, one guard history entry sits on top of the screen's own
    entry. Each captured back signal re-pushes the guard entry and raises the
    exit request, so repeated presses stay captured while a confirmation is
    pending.
    """

    def __init__(self, host: NavigationHostPort, on_exit_requested: Callable[[], Any]) -> None:
        self._host = host
        self._on_exit_requested = on_exit_requested
        self._enabled = False
        self._entry_pushed = False
        self._captured = 0
        self._listener = self._handle_back
        self._logger = logging.getLogger(__name__)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def captured_count(self) -> int:
        return self._captured

    def enable(self) -> None:
        if self._enabled:
            return
        if not self._entry_pushed:
            self._host.push_guard_entry()
            self._entry_pushed = True
        self._host.add_back_listener(self._listener)
        self._enabled = True

    def disable(self) -> None:
        if not self._enabled:
            return
        self._host.remove_back_listener(self._listener)
        if self._entry_pushed:
            self._host.drop_guard_entry()
            self._entry_pushed = False
        self._enabled = False

    def _handle_back(self) -> None:
        if not self._enabled:
            return
        # the host consumed the guard entry; put it back before anything else
        self._host.push_guard_entry()
        self._captured += 1
        self._logger.info("Back navigation captured", extra={"reason": "back_signal"})
        self._on_exit_requested()
