from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from repairdesk.application.exceptions import RecordContractError, RecordStoreError
from repairdesk.application.ports.notifier import NotifierPort
from repairdesk.application.ports.record_store import RecordStorePort
from repairdesk.application.use_cases.catalog_resolution import CatalogEntryResolver
from repairdesk.application.use_cases.dirty_state_guard import DirtyStateGuard
from repairdesk.application.use_cases.order_save_guard import OrderSaveGuard, as_date, as_number
from repairdesk.domain.entities.checklist import ChecklistSnapshot
from repairdesk.domain.entities.service_order import OrderStatus, ServiceOrder
from repairdesk.domain.entities.session_context import SessionContext


@dataclass(frozen=True)
class CreateOrderResult:
    action: str  # "created", "checklist_required", "checklist_incomplete", "invalid_fields", "failed"
    order: ServiceOrder | None = None
    message: str | None = None
    missing_fields: list[str] = field(default_factory=list)


class CreateOrderUseCase:
    def __init__(
        self,
        store: RecordStorePort,
        notifier: NotifierPort,
        save_guard: OrderSaveGuard | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._save_guard = save_guard or OrderSaveGuard()
        self._resolver = CatalogEntryResolver(store)
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        form: DirtyStateGuard,
        checklist: ChecklistSnapshot | None,
        context: SessionContext,
        stores_offered: bool = False,
    ) -> CreateOrderResult:
        """Save the order held by ``form``. On any failure the form keeps its input."""
        draft = form.current.as_dict()
        check = self._save_guard.check(checklist, draft, context, stores_offered)
        if not check.allowed:
            self._notifier.error(check.message or "")
            return CreateOrderResult(
                action=check.reason or "invalid_fields",
                message=check.message,
                missing_fields=check.missing_fields,
            )

        try:
            brand_id = self._resolver.resolve_brand(str(draft["brand"]))
            model_id = self._resolver.resolve_model(str(draft["model"]), brand_id)
            order_number = self._store.next_order_number()
            payload = self._build_payload(draft, checklist, context, brand_id, model_id, order_number)
            order = self._store.create_service_order(payload)
        except (RecordStoreError, RecordContractError) as e:
            self._logger.error("Error creating service order", extra={"error": str(e)})
            message = f"Could not create the service order: {e}"
            self._notifier.error(message)
            return CreateOrderResult(action="failed", message=message)

        form.mark_committed()
        self._logger.info("Service order created", extra={"order_id": order.id})
        self._notifier.success("Service order created.")
        return CreateOrderResult(action="created", order=order)

    def _build_payload(
        self,
        draft: dict[str, Any],
        checklist: ChecklistSnapshot | None,
        context: SessionContext,
        brand_id: str,
        model_id: str,
        order_number: str,
    ) -> dict[str, Any]:
        service_value = as_number(draft.get("service_value"))
        entry_value = as_number(draft.get("entry_value"))
        status = str(draft.get("status") or OrderStatus.quote.value)
        estimated = as_date(draft.get("estimated_delivery"))
        password_type = draft.get("password_type") or "none"
        terms = draft.get("terms")
        linked_order_id = (draft.get("linked_order_id") or None) if status == OrderStatus.warranty.value else None

        payload: dict[str, Any] = {
            "order_number": order_number,
            "client_id": draft.get("client_id"),
            "brand_id": brand_id,
            "model_id": model_id,
            "device_color": draft.get("device_color"),
            "password_type": password_type,
            "password_value": draft.get("password_value") if password_type == "pattern" else None,
            "status": status,
            "terms": [terms] if terms else [],
            "accessories": draft.get("accessories"),
            "problem_description": draft.get("problem_description"),
            "possible_service": draft.get("possible_service"),
            "physical_condition": draft.get("physical_condition"),
            "service_value": service_value,
            "entry_value": entry_value,
            "remaining_value": service_value - entry_value,
            "payment_method": draft.get("payment_method") if entry_value > 0 else None,
            "entry_date": datetime.now(timezone.utc).isoformat(),
            "estimated_delivery": estimated.isoformat() if estimated else None,
            "observations": draft.get("observations") or None,
            "linked_order_id": linked_order_id,
            "created_by": context.user_id,
            "store_id": draft.get("store_id") if context.is_admin else context.store_id,
        }
        if checklist is not None:
            payload.update(checklist.to_record())
        return payload
