from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from repairdesk.application.exceptions import RecordContractError, RecordStoreError
from repairdesk.application.ports.record_store import RecordStorePort
from repairdesk.core.config import settings
from repairdesk.domain.entities.records import BrandRecord, ClientRecord, ModelRecord
from repairdesk.domain.entities.service_order import ServiceOrder
from repairdesk.infrastructure.records.rows import (
    brand_from_row,
    client_from_row,
    model_from_row,
    service_order_from_row,
)

_ORDER_SELECT = "*,client:clients(name),brand:brands(name),model:models(name)"


class SupabaseRecordStore(RecordStorePort):
    """Record backend over the PostgREST interface of the hosted database."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        access_token: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SUPABASE_URL or "").rstrip("/")
        self._api_key = api_key or settings.SUPABASE_API_KEY
        self._access_token = access_token
        self._client = client or httpx.Client(timeout=settings.RECORDS_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url or not self._api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_API_KEY are required for the Supabase record store")

    def list_clients(self, store_id: str | None = None) -> list[ClientRecord]:
        params = {"select": "id,name,phone,cpf,address", "order": "name"}
        if store_id:
            params["store_id"] = f"eq.{store_id}"
        return [client_from_row(row) for row in self._get("clients", params)]

    def list_brands(self) -> list[BrandRecord]:
        rows = self._get("brands", {"select": "id,name", "order": "name"})
        return [brand_from_row(row) for row in rows]

    def list_models(self, brand_id: str | None = None) -> list[ModelRecord]:
        params = {"select": "id,name,brand_id", "order": "name"}
        if brand_id:
            params["brand_id"] = f"eq.{brand_id}"
        return [model_from_row(row) for row in self._get("models", params)]

    def create_brand(self, name: str) -> BrandRecord:
        return brand_from_row(self._insert("brands", {"name": name}))

    def create_model(self, name: str, brand_id: str) -> ModelRecord:
        return model_from_row(self._insert("models", {"name": name, "brand_id": brand_id}))

    def update_client(self, client_id: str, values: Mapping[str, Any]) -> ClientRecord:
        response = self._request(
            "PATCH",
            "/rest/v1/clients",
            params={"id": f"eq.{client_id}"},
            json=dict(values),
            headers={"Prefer": "return=representation"},
        )
        return client_from_row(self._single(response.json(), "clients"))

    def next_order_number(self) -> str:
        response = self._request("POST", "/rest/v1/rpc/generate_order_number", json={})
        number = response.json()
        if not number:
            raise RecordContractError("generate_order_number returned nothing")
        return str(number)

    def create_service_order(self, payload: Mapping[str, Any]) -> ServiceOrder:
        response = self._request(
            "POST",
            "/rest/v1/service_orders",
            params={"select": _ORDER_SELECT},
            json=dict(payload),
            headers={"Prefer": "return=representation"},
        )
        order = service_order_from_row(self._single(response.json(), "service_orders"))
        self._logger.info("Service order stored", extra={"order_id": order.id})
        return order

    def list_service_orders(self, store_id: str | None = None, limit: int = 100) -> list[ServiceOrder]:
        params = {"select": _ORDER_SELECT, "order": "created_at.desc", "limit": str(limit)}
        if store_id:
            params["store_id"] = f"eq.{store_id}"
        return [service_order_from_row(row) for row in self._get("service_orders", params)]

    def _get(self, table: str, params: Mapping[str, str]) -> list[dict[str, Any]]:
        response = self._request("GET", f"/rest/v1/{table}", params=params)
        data = response.json()
        if not isinstance(data, list):
            raise RecordContractError(f"{table}: expected a list of rows")
        return data

    def _insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        response = self._request(
            "POST",
            f"/rest/v1/{table}",
            json=dict(row),
            headers={"Prefer": "return=representation"},
        )
        return self._single(response.json(), table)

    def _single(self, data: Any, table: str) -> dict[str, Any]:
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            raise RecordContractError(f"{table}: no row returned")
        return data

    def _request(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        request_headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token or self._api_key}",
            "Content-Type": "application/json",
        }
        request_headers.update(headers or {})
        try:
            response = self._client.request(
                method,
                f"{self._base_url}{path}",
                params=params,
                json=json,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            self._logger.error("Record backend unreachable", extra={"error": str(e)})
            raise RecordStoreError(str(e)) from e

        if response.status_code >= 400:
            try:
                error_message = response.json().get("message") or response.text
            except ValueError:
                error_message = response.text
            self._logger.error(
                "Record backend rejected request",
                extra={"status": response.status_code, "error": error_message, "reason": path},
            )
            raise RecordStoreError(error_message or f"HTTP {response.status_code}")
        return response
