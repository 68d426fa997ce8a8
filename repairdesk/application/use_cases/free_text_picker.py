from __future__ import annotations

from typing import Iterable

from repairdesk.application.use_cases.picker import SearchablePicker
from repairdesk.application.use_cases.selection import SelectionResult
from repairdesk.application.utils.text_match import find_exact_label
from repairdesk.domain.entities.checklist import ITEM_STATUS_LABELS
from repairdesk.domain.entities.selectable_item import SelectableItem
from repairdesk.domain.entities.selection_state import Selected


class FreeTextOrOptionResolver(SearchablePicker):
    """Picker that also accepts a typed value missing from the options.

    Submitting resolves, in order: an option whose label equals the typed text
    (case-insensitive), the literal text when custom values are allowed, or
    nothing at all (picker stays open).
    """

    def __init__(
        self,
        options: Iterable[SelectableItem] = (),
        *,
        allow_custom_value: bool = True,
        name: str = "picker",
        limit: int | None = None,
    ) -> None:
        super().__init__(options, name=name, limit=limit)
        self._allow_custom_value = allow_custom_value

    @property
    def allow_custom_value(self) -> bool:
        return self._allow_custom_value

    def exact_match(self, text: str) -> SelectableItem | None:
        return find_exact_label(self.options, text)

    def submit(self) -> SelectionResult:
        if not self.is_open:
            return self._rejected("picker_closed")

        text = self.query.strip()
        if not text:
            return SelectionResult(accepted=False, action="ignored", reason="empty_text")

        match = self.exact_match(text)
        if match is not None:
            selected = Selected(value=match.id)
        elif self._allow_custom_value:
            selected = Selected(value=text, is_custom=True)
        else:
            self._logger.info("Submit ignored", extra={"picker": self.name, "reason": "no_match"})
            return SelectionResult(accepted=False, action="ignored", reason="no_match")

        self._logger.info(
            "Typed value submitted",
            extra={"picker": self.name, "item_id": selected.value, "reason": "custom" if selected.is_custom else "match"},
        )
        self.close()
        return SelectionResult(accepted=True, action="selected", selected=selected)

    def display_value(self, current_value: str | None) -> str:
        """Label of the known option ``current_value`` names, else the raw value."""
        if not current_value:
            return ""
        for option in self.options:
            if option.id == current_value:
                return option.label
        return current_value


def status_options() -> tuple[SelectableItem, ...]:
    return tuple(SelectableItem(id=status.value, label=label) for status, label in ITEM_STATUS_LABELS.items())
