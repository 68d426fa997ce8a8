from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from repairdesk.application.utils.state_helpers import (
    initial_checklist_session,
    start_fill_items,
    with_item_status,
)
from repairdesk.domain.entities.checklist import (
    ChecklistItem,
    ChecklistSession,
    ChecklistSnapshot,
    ChecklistStep,
    DeviceCategory,
    ItemStatus,
)
from repairdesk.domain.entities.checklist_catalog import CHECKLIST_CATALOG
from repairdesk.domain.entities.transition import TransitionResult


@dataclass(frozen=True)
class ChecklistResult(TransitionResult):
    session: ChecklistSession = ChecklistSession()
    snapshot: ChecklistSnapshot | None = None


class InspectionChecklistFlow:
    """Device inspection: pick a category, then record a status for each of its items.

    Leaving fill-items (back or complete) drops the category and every captured
    status. ``complete`` does not require every item to be set; the order save
    guard checks that on the emitted snapshot.
    """

    def __init__(self, catalog: Mapping[DeviceCategory, tuple[ChecklistItem, ...]] | None = None) -> None:
        self._catalog = catalog or CHECKLIST_CATALOG
        self._session = initial_checklist_session()
        self._logger = logging.getLogger(__name__)

    @property
    def session(self) -> ChecklistSession:
        return self._session

    @property
    def items(self) -> tuple[ChecklistItem, ...]:
        """Ordered items of the active category, empty before a category is chosen."""
        if self._session.category is None:
            return ()
        return self._catalog[self._session.category]

    def select_category(self, category: DeviceCategory | str) -> ChecklistResult:
        if self._session.step is not ChecklistStep.select_category:
            return self._rejected("not_selecting_category")
        try:
            chosen = DeviceCategory(category)
        except ValueError:
            return self._rejected("unknown_category")
        if chosen not in self._catalog:
            return self._rejected("unknown_category")

        self._session = start_fill_items(chosen, self._catalog[chosen])
        self._logger.info("Checklist category selected", extra={"category": chosen.value})
        return self._result("category_selected")

    def set_item_status(self, item_id: str, status: ItemStatus | str) -> ChecklistResult:
        if self._session.step is not ChecklistStep.fill_items:
            return self._rejected("not_filling_items")
        if item_id not in self._session.item_status:
            return self._rejected("unknown_item")
        try:
            chosen = ItemStatus(status)
        except ValueError:
            return self._rejected("unknown_status")

        self._session = with_item_status(self._session, item_id, chosen)
        return self._result("item_updated")

    def go_back(self) -> ChecklistResult:
        if self._session.step is not ChecklistStep.fill_items:
            return self._rejected("not_filling_items")
        self._session = initial_checklist_session()
        return self._result("back")

    def complete(self) -> ChecklistResult:
        if self._session.step is not ChecklistStep.fill_items or self._session.category is None:
            return self._rejected("not_filling_items")

        snapshot = ChecklistSnapshot(
            category=self._session.category,
            item_status=self._session.item_status,
        )
        self._session = initial_checklist_session()
        self._logger.info(
            "Checklist completed",
            extra={"category": snapshot.category.value, "state": "complete" if snapshot.is_complete else "partial"},
        )
        return ChecklistResult(accepted=True, action="completed", session=self._session, snapshot=snapshot)

    def _result(self, action: str) -> ChecklistResult:
        return ChecklistResult(accepted=True, action=action, session=self._session)

    def _rejected(self, reason: str) -> ChecklistResult:
        self._logger.info("Checklist transition rejected", extra={"reason": reason})
        return ChecklistResult(accepted=False, action="rejected", reason=reason, session=self._session)
