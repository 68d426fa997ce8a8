from __future__ import annotations

from dataclasses import dataclass

from repairdesk.domain.entities.selectable_item import SelectableItem


@dataclass(frozen=True)
class ArmedSelection:
    armed_id: str | None = None  # must reference a current candidate when set


@dataclass(frozen=True)
class Selected:
    value: str  # option id, or the literal typed text for a novel value
    is_custom: bool = False


@dataclass(frozen=True)
class PickerState:
    is_open: bool = False
    query: str = ""
    armed_id: str | None = None
    visible_options: tuple[SelectableItem, ...] = ()
