from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping

from repairdesk.application.utils.confirmation_gate import ConfirmationGate
from repairdesk.domain.entities.form_snapshot import FieldValue, FormSnapshot, GuardSnapshot, GuardState
from repairdesk.domain.entities.transition import TransitionResult

_CLOSE_REQUEST = "close"


@dataclass(frozen=True)
class GuardResult(TransitionResult):
    state: GuardState = GuardState.IDLE


class DirtyStateGuard:
    """Gate a form's close behind a confirmation while it holds unsaved input.

    idle -> closed when clean, idle -> confirming -> idle on cancel, and
    idle -> confirming -> closed on confirm. ``closed`` is terminal; reopening
    the surface means a new guard.
    """

    def __init__(
        self,
        original: Mapping[str, FieldValue] | None = None,
        on_close: Callable[[], None] | None = None,
        name: str = "form",
    ) -> None:
        self._original = FormSnapshot.of(original)
        self._current = self._original
        self._gate = ConfirmationGate()
        self._closed = False
        self._on_close = on_close
        self._name = name
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> GuardState:
        if self._closed:
            return GuardState.CLOSED
        if self._gate.is_armed(_CLOSE_REQUEST):
            return GuardState.CONFIRMING
        return GuardState.IDLE

    @property
    def original(self) -> FormSnapshot:
        return self._original

    @property
    def current(self) -> FormSnapshot:
        return self._current

    def is_dirty(self) -> bool:
        return self._current.differs_from(self._original)

    def snapshot(self) -> GuardSnapshot:
        return GuardSnapshot(
            state=self.state,
            dirty=self.is_dirty(),
            original=self._original,
            current=self._current,
        )

    def note_change(self, field: str, value: FieldValue) -> GuardResult:
        if self.state is not GuardState.IDLE:
            return self._rejected("not_editing")
        self._current = self._current.with_value(field, value)
        return self._result("changed")

    def request_close(self) -> GuardResult:
        state = self.state
        if state is GuardState.CLOSED:
            return self._rejected("closed")
        if state is GuardState.CONFIRMING:
            # a repeated request keeps the pending confirmation
            return self._result("confirming")
        if not self.is_dirty():
            self._close()
            return self._result("closed")
        self._gate.arm(_CLOSE_REQUEST)
        self._logger.info("Close needs confirmation", extra={"surface_id": self._name, "state": "confirming"})
        return self._result("confirming")

    def confirm_close(self) -> GuardResult:
        if not self._gate.confirm(_CLOSE_REQUEST):
            return self._rejected("not_confirming")
        self._current = self._original
        self._close()
        return self._result("closed")

    def cancel_close(self) -> GuardResult:
        if self.state is not GuardState.CONFIRMING:
            return self._rejected("not_confirming")
        self._gate.disarm()
        return self._result("editing")

    def dismiss_outside(self) -> GuardResult:
        """Accidental dismissal (outside click): ignored while dirty, a plain close otherwise."""
        if self.state is not GuardState.IDLE:
            return self._rejected(self.state.value)
        if self.is_dirty():
            return GuardResult(accepted=False, action="ignored", reason="dirty", state=self.state)
        self._close()
        return self._result("closed")

    def mark_committed(self) -> GuardResult:
        if self._closed:
            return self._rejected("closed")
        self._original = self._current
        return self._result("committed")

    def reseed(self, values: Mapping[str, FieldValue]) -> GuardResult:
        """Load a different record into the same open surface."""
        if self.state is not GuardState.IDLE:
            return self._rejected("not_editing")
        self._original = FormSnapshot.of(values)
        self._current = self._original
        return self._result("reseeded")

    def _close(self) -> None:
        self._gate.disarm()
        self._closed = True
        self._logger.info("Surface closed", extra={"surface_id": self._name, "state": "closed"})
        if self._on_close is not None:
            self._on_close()

    def _result(self, action: str) -> GuardResult:
        return GuardResult(accepted=True, action=action, state=self.state)

    def _rejected(self, reason: str) -> GuardResult:
        self._logger.info("Guard transition rejected", extra={"surface_id": self._name, "reason": reason})
        return GuardResult(accepted=False, action="rejected", reason=reason, state=self.state)
