from __future__ import annotations

import logging

from repairdesk.application.exceptions import RecordContractError
from repairdesk.application.ports.record_store import RecordStorePort
from repairdesk.application.utils.text_match import normalize


class CatalogEntryResolver:
    """Turn a brand/model picker value into a record id, creating novel names.

    A picker emits either a known option id or the literal text the user
    typed. Literals that match an existing name are reused; anything else is
    created upper-cased.
    """

    def __init__(self, store: RecordStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def resolve_brand(self, value: str) -> str:
        name = value.strip()
        if not name:
            raise RecordContractError("Brand is empty")
        brands = self._store.list_brands()
        for brand in brands:
            if brand.id == value:
                return brand.id
        for brand in brands:
            if normalize(brand.name) == normalize(name):
                return brand.id
        created = self._store.create_brand(name.upper())
        self._logger.info("Brand created", extra={"item_id": created.id})
        return created.id

    def resolve_model(self, value: str, brand_id: str) -> str:
        name = value.strip()
        if not name:
            raise RecordContractError("Model is empty")
        models = self._store.list_models(brand_id)
        for model in models:
            if model.id == value:
                return model.id
        for model in models:
            if normalize(model.name) == normalize(name):
                return model.id
        created = self._store.create_model(name.upper(), brand_id)
        self._logger.info("Model created", extra={"item_id": created.id})
        return created.id
