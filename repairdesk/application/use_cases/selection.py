from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from repairdesk.application.utils.confirmation_gate import ConfirmationGate
from repairdesk.domain.entities.selectable_item import SelectableItem
from repairdesk.domain.entities.selection_state import ArmedSelection, Selected
from repairdesk.domain.entities.transition import TransitionResult


@dataclass(frozen=True)
class SelectionResult(TransitionResult):
    """Result of one picker interaction."""

    selected: Selected | None = None
    armed_id: str | None = None


class SelectionDisambiguator:
    """Two-phase pick: the first activation arms a candidate, a second one on the same candidate confirms it."""

    def __init__(self, candidates: Iterable[SelectableItem] = (), name: str = "picker") -> None:
        self._candidates: tuple[SelectableItem, ...] = tuple(candidates)
        self._gate = ConfirmationGate()
        self._name = name
        self._logger = logging.getLogger(__name__)

    @property
    def candidates(self) -> tuple[SelectableItem, ...]:
        return self._candidates

    @property
    def armed_id(self) -> str | None:
        return self._gate.armed_key

    def state(self) -> ArmedSelection:
        return ArmedSelection(armed_id=self._gate.armed_key)

    def activate(self, item_id: str) -> SelectionResult:
        if not any(candidate.id == item_id for candidate in self._candidates):
            self._logger.info(
                "Activation rejected",
                extra={"picker": self._name, "item_id": item_id, "reason": "unknown_candidate"},
            )
            return SelectionResult(
                accepted=False,
                action="rejected",
                reason="unknown_candidate",
                armed_id=self._gate.armed_key,
            )

        if self._gate.confirm(item_id):
            self._logger.info("Selection confirmed", extra={"picker": self._name, "item_id": item_id})
            return SelectionResult(accepted=True, action="selected", selected=Selected(value=item_id))

        self._gate.arm(item_id)
        return SelectionResult(accepted=True, action="armed", armed_id=item_id)

    def set_candidates(self, candidates: Iterable[SelectableItem]) -> None:
        """Replace the candidate list; a changed list drops any armed candidate."""
        updated = tuple(candidates)
        if [c.id for c in updated] != [c.id for c in self._candidates]:
            self._gate.disarm()
        self._candidates = updated

    def reset(self) -> None:
        self._gate.disarm()
