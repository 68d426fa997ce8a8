from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from repairdesk.application.ports.record_store import RecordStorePort
from repairdesk.application.use_cases.order_status import OrderStatusResolver
from repairdesk.domain.entities.service_order import DisplayStatus, ServiceOrder
from repairdesk.domain.entities.session_context import SessionContext


@dataclass(frozen=True)
class OrderView:
    order: ServiceOrder
    display: DisplayStatus


class ListOrdersUseCase:
    def __init__(self, store: RecordStorePort, resolver: OrderStatusResolver, limit: int = 100) -> None:
        self._store = store
        self._resolver = resolver
        self._limit = limit
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        context: SessionContext,
        status_filter: str = "all",
        search: str = "",
        today: date | None = None,
    ) -> list[OrderView]:
        """Orders of the caller's store (every store for admins), filtered on the stored status."""
        store_id = None if context.is_admin else context.store_id
        orders = self._store.list_service_orders(store_id=store_id, limit=self._limit)
        needle = search.lower().strip()
        day = today or self._resolver.today()

        views: list[OrderView] = []
        for order in orders:
            if status_filter != "all" and order.status != status_filter:
                continue
            if needle and not _matches(order, needle):
                continue
            views.append(OrderView(order=order, display=self._resolver.resolve(order, day)))
        return views


def _matches(order: ServiceOrder, needle: str) -> bool:
    haystack = " ".join(filter(None, [order.order_number, order.client_name])).lower()
    return needle in haystack
