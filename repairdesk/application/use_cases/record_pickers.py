from __future__ import annotations

from repairdesk.application.ports.record_store import RecordStorePort
from repairdesk.application.use_cases.free_text_picker import FreeTextOrOptionResolver
from repairdesk.application.use_cases.picker import SearchablePicker
from repairdesk.domain.entities.selectable_item import SelectableItem
from repairdesk.domain.entities.session_context import SessionContext


class RecordPickerFactory:
    """Pickers whose options come from the record backend.

    Clients are searchable by name or phone. Brands and models also take a
    typed name that does not exist yet.
    """

    def __init__(self, store: RecordStorePort, client_limit: int = 10, allow_custom_value: bool = True) -> None:
        self._store = store
        self._client_limit = client_limit
        self._allow_custom_value = allow_custom_value

    def client_picker(self, context: SessionContext) -> SearchablePicker:
        store_id = None if context.is_admin else context.store_id
        options = [
            SelectableItem(id=c.id, label=c.name, detail=c.phone)
            for c in self._store.list_clients(store_id)
        ]
        return SearchablePicker(options, name="client", match_detail=True, limit=self._client_limit)

    def brand_picker(self) -> FreeTextOrOptionResolver:
        options = [SelectableItem(id=b.id, label=b.name) for b in self._store.list_brands()]
        return FreeTextOrOptionResolver(options, allow_custom_value=self._allow_custom_value, name="brand")

    def model_picker(self, brand_id: str | None) -> FreeTextOrOptionResolver:
        # a brand typed but not yet created has no models
        options = [SelectableItem(id=m.id, label=m.name) for m in self._store.list_models(brand_id)] if brand_id else []
        return FreeTextOrOptionResolver(options, allow_custom_value=self._allow_custom_value, name="model")
