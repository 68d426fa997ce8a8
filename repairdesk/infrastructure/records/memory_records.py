from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping

from repairdesk.application.exceptions import RecordStoreError
from repairdesk.application.ports.record_store import RecordStorePort
from repairdesk.domain.entities.records import BrandRecord, ClientRecord, ModelRecord
from repairdesk.domain.entities.service_order import ServiceOrder
from repairdesk.infrastructure.records.rows import service_order_from_row


class MemoryRecordStore(RecordStorePort):
    """In-process record backend for dev and tests.

    Operation names listed in ``failing`` raise RecordStoreError, which is how
    tests simulate a rejected commit.
    """

    def __init__(
        self,
        clients: list[ClientRecord] | None = None,
        brands: list[BrandRecord] | None = None,
        models: list[ModelRecord] | None = None,
        orders: list[ServiceOrder] | None = None,
        client_stores: Mapping[str, str] | None = None,
    ) -> None:
        self._clients: dict[str, ClientRecord] = {c.id: c for c in clients or []}
        self._client_stores: dict[str, str] = dict(client_stores or {})
        self._brands: dict[str, BrandRecord] = {b.id: b for b in brands or []}
        self._models: dict[str, ModelRecord] = {m.id: m for m in models or []}
        self._orders: list[ServiceOrder] = list(orders or [])
        self._order_rows: list[dict[str, Any]] = []
        self._sequence = 0
        self.failing: set[str] = set()
        self._logger = logging.getLogger(__name__)

    @property
    def order_rows(self) -> list[dict[str, Any]]:
        return list(self._order_rows)

    def list_clients(self, store_id: str | None = None) -> list[ClientRecord]:
        self._check("list_clients")
        clients = [
            c for c in self._clients.values()
            if store_id is None or self._client_stores.get(c.id, store_id) == store_id
        ]
        return sorted(clients, key=lambda c: c.name)

    def list_brands(self) -> list[BrandRecord]:
        self._check("list_brands")
        return sorted(self._brands.values(), key=lambda b: b.name)

    def list_models(self, brand_id: str | None = None) -> list[ModelRecord]:
        self._check("list_models")
        models = [m for m in self._models.values() if brand_id is None or m.brand_id == brand_id]
        return sorted(models, key=lambda m: m.name)

    def create_brand(self, name: str) -> BrandRecord:
        self._check("create_brand")
        brand = BrandRecord(id=self._next_id("brand"), name=name)
        self._brands[brand.id] = brand
        return brand

    def create_model(self, name: str, brand_id: str) -> ModelRecord:
        self._check("create_model")
        if brand_id not in self._brands:
            raise RecordStoreError(f"brand {brand_id} not found")
        model = ModelRecord(id=self._next_id("model"), name=name, brand_id=brand_id)
        self._models[model.id] = model
        return model

    def update_client(self, client_id: str, values: Mapping[str, Any]) -> ClientRecord:
        self._check("update_client")
        client = self._clients.get(client_id)
        if client is None:
            raise RecordStoreError(f"client {client_id} not found")
        allowed = {k: v for k, v in values.items() if k in {"name", "phone", "cpf", "address"}}
        updated = replace(client, **allowed)
        self._clients[client_id] = updated
        return updated

    def next_order_number(self) -> str:
        self._check("next_order_number")
        return f"{len(self._orders) + 1:06d}"

    def create_service_order(self, payload: Mapping[str, Any]) -> ServiceOrder:
        self._check("create_service_order")
        row = dict(payload)
        row["id"] = self._next_id("order")
        client = self._clients.get(str(row.get("client_id")))
        brand = self._brands.get(str(row.get("brand_id")))
        model = self._models.get(str(row.get("model_id")))
        row["client"] = {"name": client.name} if client else None
        row["brand"] = {"name": brand.name} if brand else None
        row["model"] = {"name": model.name} if model else None
        self._order_rows.append(row)
        order = service_order_from_row(row)
        self._orders.append(order)
        return order

    def list_service_orders(self, store_id: str | None = None, limit: int = 100) -> list[ServiceOrder]:
        self._check("list_service_orders")
        orders = [o for o in reversed(self._orders) if store_id is None or o.store_id == store_id]
        return orders[:limit]

    def _next_id(self, prefix: str) -> str:
        self._sequence += 1
        return f"{prefix}_{self._sequence}"

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            self._logger.error("Simulated record failure", extra={"reason": operation})
            raise RecordStoreError(f"{operation} failed")
