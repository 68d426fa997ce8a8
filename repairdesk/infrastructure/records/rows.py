from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from repairdesk.application.exceptions import RecordContractError
from repairdesk.application.utils.date_parser import parse_timestamp
from repairdesk.domain.entities.records import BrandRecord, ClientRecord, ModelRecord
from repairdesk.domain.entities.service_order import ServiceOrder


def _related_name(row: Mapping[str, Any], key: str) -> str | None:
    related = row.get(key)
    if isinstance(related, dict):
        return related.get("name") or None
    return None


def service_order_from_row(row: Mapping[str, Any]) -> ServiceOrder:
    if not row.get("id") or not row.get("status"):
        raise RecordContractError("Service order row is missing id or status")
    entry_date = parse_timestamp(row.get("entry_date"))
    return ServiceOrder(
        id=str(row["id"]),
        status=str(row["status"]),
        estimated_delivery=parse_timestamp(row.get("estimated_delivery")),
        order_number=row.get("order_number"),
        client_name=_related_name(row, "client") or row.get("client_name"),
        brand_name=_related_name(row, "brand") or row.get("brand_name"),
        model_name=_related_name(row, "model") or row.get("model_name"),
        store_id=row.get("store_id"),
        entry_date=entry_date if isinstance(entry_date, datetime) else None,
        checklist_completed=bool(row.get("checklist_completed", False)),
    )


def client_from_row(row: Mapping[str, Any]) -> ClientRecord:
    if not row.get("id"):
        raise RecordContractError("Client row is missing id")
    return ClientRecord(
        id=str(row["id"]),
        name=row.get("name") or "",
        phone=row.get("phone") or "",
        cpf=row.get("cpf"),
        address=row.get("address"),
    )


def brand_from_row(row: Mapping[str, Any]) -> BrandRecord:
    if not row.get("id"):
        raise RecordContractError("Brand row is missing id")
    return BrandRecord(id=str(row["id"]), name=row.get("name") or "")


def model_from_row(row: Mapping[str, Any]) -> ModelRecord:
    if not row.get("id") or not row.get("brand_id"):
        raise RecordContractError("Model row is missing id or brand_id")
    return ModelRecord(id=str(row["id"]), name=row.get("name") or "", brand_id=str(row["brand_id"]))
