from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

FieldValue = str | int | float | None


class GuardState(str, Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    CLOSED = "closed"


@dataclass(frozen=True)
class FormSnapshot:
    values: Mapping[str, FieldValue] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def of(cls, values: Mapping[str, FieldValue] | None = None) -> "FormSnapshot":
        return cls(values=MappingProxyType(dict(values or {})))

    def with_value(self, name: str, value: FieldValue) -> "FormSnapshot":
        updated = dict(self.values)
        updated[name] = value
        return FormSnapshot.of(updated)

    def differs_from(self, other: "FormSnapshot") -> bool:
        names = list(self.values) + [name for name in other.values if name not in self.values]
        return any(self.values.get(name) != other.values.get(name) for name in names)

    def as_dict(self) -> dict[str, FieldValue]:
        return dict(self.values)


@dataclass(frozen=True)
class GuardSnapshot:
    state: GuardState
    dirty: bool
    original: FormSnapshot
    current: FormSnapshot
