from __future__ import annotations

import logging
from typing import Iterable

from repairdesk.application.use_cases.selection import SelectionDisambiguator, SelectionResult
from repairdesk.application.utils.text_match import matches_query
from repairdesk.domain.entities.selectable_item import SelectableItem
from repairdesk.domain.entities.selection_state import PickerState


class SearchablePicker:
    """Searchable dropdown driving a SelectionDisambiguator over the filtered options.

    Opening, closing and typing all de-arm. A confirmed selection closes the
    picker and clears the typed text.
    """

    def __init__(
        self,
        options: Iterable[SelectableItem] = (),
        *,
        name: str = "picker",
        match_detail: bool = False,
        limit: int | None = None,
    ) -> None:
        self._name = name
        self._options: tuple[SelectableItem, ...] = tuple(options)
        self._match_detail = match_detail
        self._limit = limit
        self._is_open = False
        self._query = ""
        self._selection = SelectionDisambiguator(self._filter(), name=name)
        self._logger = logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> tuple[SelectableItem, ...]:
        return self._options

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def query(self) -> str:
        return self._query

    @property
    def armed_id(self) -> str | None:
        return self._selection.armed_id

    @property
    def visible_options(self) -> tuple[SelectableItem, ...]:
        return self._selection.candidates

    def snapshot(self) -> PickerState:
        return PickerState(
            is_open=self._is_open,
            query=self._query,
            armed_id=self._selection.armed_id,
            visible_options=self._selection.candidates,
        )

    def open(self) -> None:
        self._is_open = True
        self._query = ""
        self._selection.reset()
        self._refresh()

    def close(self) -> None:
        self._is_open = False
        self._query = ""
        self._selection.reset()
        self._refresh()

    def set_options(self, options: Iterable[SelectableItem]) -> None:
        self._options = tuple(options)
        self._refresh()

    def type_text(self, text: str) -> SelectionResult:
        if not self._is_open:
            return self._rejected("picker_closed")
        self._query = text
        self._selection.reset()
        self._refresh()
        return SelectionResult(accepted=True, action="filtered")

    def activate(self, item_id: str) -> SelectionResult:
        if not self._is_open:
            return self._rejected("picker_closed")
        result = self._selection.activate(item_id)
        if result.selected is not None:
            self.close()
        return result

    def _refresh(self) -> None:
        self._selection.set_candidates(self._filter())

    def _filter(self) -> tuple[SelectableItem, ...]:
        if self._query:
            visible = [o for o in self._options if matches_query(o, self._query, self._match_detail)]
        else:
            visible = list(self._options)
        if self._limit is not None:
            visible = visible[: self._limit]
        return tuple(visible)

    def _rejected(self, reason: str) -> SelectionResult:
        self._logger.info("Picker interaction rejected", extra={"picker": self._name, "reason": reason})
        return SelectionResult(accepted=False, action="rejected", reason=reason, armed_id=self.armed_id)
