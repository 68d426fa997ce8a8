from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectableItem:
    id: str
    label: str
    detail: str | None = None  # secondary searchable text, e.g. client phone
