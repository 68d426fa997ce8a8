from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Iterable

from repairdesk.domain.entities.checklist import (
    ChecklistItem,
    ChecklistSession,
    ChecklistStep,
    DeviceCategory,
    ItemStatus,
)


def initial_checklist_session() -> ChecklistSession:
    """Reset checklist to the category choice, discarding every captured status."""
    return ChecklistSession()


def start_fill_items(category: DeviceCategory, items: Iterable[ChecklistItem]) -> ChecklistSession:
    """Enter fill-items for a category with every item unset."""
    return ChecklistSession(
        step=ChecklistStep.fill_items,
        category=category,
        item_status=MappingProxyType({item.id: None for item in items}),
    )


def with_item_status(session: ChecklistSession, item_id: str, status: ItemStatus) -> ChecklistSession:
    updated = dict(session.item_status)
    updated[item_id] = status
    return replace(session, item_status=MappingProxyType(updated))
