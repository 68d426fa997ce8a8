from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class DeviceCategory(str, Enum):
    android = "android"
    ios = "ios"


class ItemStatus(str, Enum):
    working = "working"
    defective = "defective"
    not_tested = "not_tested"
    not_available = "not_available"


class ChecklistStep(str, Enum):
    select_category = "select-category"
    fill_items = "fill-items"


ITEM_STATUS_LABELS: dict[ItemStatus, str] = {
    ItemStatus.working: "Funcionando",
    ItemStatus.defective: "Com Defeito",
    ItemStatus.not_tested: "Não Testado",
    ItemStatus.not_available: "Não Possui",
}


@dataclass(frozen=True)
class ChecklistItem:
    id: str
    label: str


@dataclass(frozen=True)
class ChecklistSession:
    step: ChecklistStep = ChecklistStep.select_category
    category: DeviceCategory | None = None
    # ordered item id -> status, None meaning unset
    item_status: Mapping[str, ItemStatus | None] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_complete(self) -> bool:
        return bool(self.item_status) and all(status is not None for status in self.item_status.values())


@dataclass(frozen=True)
class ChecklistSnapshot:
    category: DeviceCategory
    item_status: Mapping[str, ItemStatus | None]

    @property
    def is_complete(self) -> bool:
        return bool(self.item_status) and all(status is not None for status in self.item_status.values())

    @property
    def unset_items(self) -> list[str]:
        return [item_id for item_id, status in self.item_status.items() if status is None]

    def to_record(self) -> dict[str, object]:
        """Persisted shape: checklist_type plus checklist_data with "" for unset items."""
        return {
            "checklist_completed": True,
            "checklist_type": self.category.value,
            "checklist_data": {
                item_id: (status.value if status is not None else "")
                for item_id, status in self.item_status.items()
            },
        }
