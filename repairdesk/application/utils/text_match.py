from __future__ import annotations

from typing import Iterable

from repairdesk.domain.entities.selectable_item import SelectableItem


def normalize(text: str) -> str:
    return text.lower().strip()


def matches_query(item: SelectableItem, query: str, match_detail: bool = False) -> bool:
    """Case-insensitive substring match on the label, and on detail when asked."""
    needle = query.lower()
    if needle in item.label.lower():
        return True
    return bool(match_detail and item.detail and needle in item.detail.lower())


def find_exact_label(options: Iterable[SelectableItem], text: str) -> SelectableItem | None:
    wanted = normalize(text)
    for option in options:
        if normalize(option.label) == wanted:
            return option
    return None
