from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from repairdesk.domain.entities.records import BrandRecord, ClientRecord, ModelRecord
from repairdesk.domain.entities.service_order import ServiceOrder


class RecordStorePort(ABC):
    @abstractmethod
    def list_clients(self, store_id: str | None = None) -> list[ClientRecord]:
        raise NotImplementedError

    @abstractmethod
    def list_brands(self) -> list[BrandRecord]:
        raise NotImplementedError

    @abstractmethod
    def list_models(self, brand_id: str | None = None) -> list[ModelRecord]:
        raise NotImplementedError

    @abstractmethod
    def create_brand(self, name: str) -> BrandRecord:
        raise NotImplementedError

    @abstractmethod
    def create_model(self, name: str, brand_id: str) -> ModelRecord:
        raise NotImplementedError

    @abstractmethod
    def update_client(self, client_id: str, values: Mapping[str, Any]) -> ClientRecord:
        """Persist client changes. Returns the stored record."""
        raise NotImplementedError

    @abstractmethod
    def next_order_number(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def create_service_order(self, payload: Mapping[str, Any]) -> ServiceOrder:
        raise NotImplementedError

    @abstractmethod
    def list_service_orders(self, store_id: str | None = None, limit: int = 100) -> list[ServiceOrder]:
        """List orders, newest first. store_id=None lists every store."""
        raise NotImplementedError
