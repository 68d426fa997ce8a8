from __future__ import annotations

from typing import Mapping

from repairdesk.application.ports.navigation_host import NavigationHostPort
from repairdesk.application.use_cases.dirty_state_guard import DirtyStateGuard, GuardResult
from repairdesk.application.use_cases.navigation_interceptor import NavigationInterceptor
from repairdesk.domain.entities.form_snapshot import FieldValue


class GuardedScreen:
    """A screen protected by a DirtyStateGuard, with back-navigation as a second close trigger."""

    def __init__(
        self,
        host: NavigationHostPort,
        original: Mapping[str, FieldValue] | None = None,
        redirect_to: str = "/",
        intercept_back: bool = True,
        name: str = "screen",
    ) -> None:
        self._host = host
        self._redirect_to = redirect_to
        self._intercept_back = intercept_back
        self.guard = DirtyStateGuard(original, on_close=self._leave, name=name)
        self.interceptor = NavigationInterceptor(host, on_exit_requested=self.guard.request_close)

    @property
    def host(self) -> NavigationHostPort:
        return self._host

    @property
    def redirect_to(self) -> str:
        return self._redirect_to

    def open(self) -> None:
        if self._intercept_back:
            self.interceptor.enable()

    def back_pressed(self) -> GuardResult:
        """In-app back button."""
        return self.guard.request_close()

    def _leave(self) -> None:
        self.interceptor.disable()
        self._host.navigate(self._redirect_to)
