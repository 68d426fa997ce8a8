"""
Tests for the order list with overdue projection and store scoping.
"""

from __future__ import annotations

from datetime import date

from repairdesk.application.use_cases.list_orders import ListOrdersUseCase
from repairdesk.application.use_cases.order_status import OrderStatusResolver
from repairdesk.domain.entities.service_order import ServiceOrder
from repairdesk.domain.entities.session_context import SessionContext, UserRole
from repairdesk.infrastructure.records.memory_records import MemoryRecordStore

TODAY = date(2024, 3, 15)

ORDERS = [
    ServiceOrder(id="o1", status="in_progress", estimated_delivery=date(2024, 3, 10),
                 order_number="000001", client_name="ANA SOUZA", store_id="s1"),
    ServiceOrder(id="o2", status="quote", estimated_delivery=date(2024, 3, 20),
                 order_number="000002", client_name="BRUNO LIMA", store_id="s1"),
    ServiceOrder(id="o3", status="delivered", estimated_delivery=date(2024, 3, 1),
                 order_number="000003", client_name="CARLA DIAS", store_id="s2"),
]


def _use_case() -> ListOrdersUseCase:
    return ListOrdersUseCase(MemoryRecordStore(orders=ORDERS), OrderStatusResolver())


def test_attendant_sees_own_store_only():
    views = _use_case().execute(SessionContext(role=UserRole.attendant, store_id="s1"), today=TODAY)

    assert {v.order.id for v in views} == {"o1", "o2"}


def test_admin_sees_every_store():
    views = _use_case().execute(SessionContext(role=UserRole.admin), today=TODAY)

    assert len(views) == 3


def test_overdue_orders_display_delayed():
    views = _use_case().execute(SessionContext(role=UserRole.admin), today=TODAY)
    by_id = {v.order.id: v.display for v in views}

    assert by_id["o1"].status == "delayed"
    assert by_id["o2"].status == "quote"
    assert by_id["o3"].status == "delivered"


def test_filter_applies_to_stored_status():
    """Test that filtering on delayed does not match orders that are only displayed as delayed."""
    use_case = _use_case()
    admin = SessionContext(role=UserRole.admin)

    assert use_case.execute(admin, status_filter="delayed", today=TODAY) == []
    assert [v.order.id for v in use_case.execute(admin, status_filter="in_progress", today=TODAY)] == ["o1"]


def test_search_matches_number_or_client():
    use_case = _use_case()
    admin = SessionContext(role=UserRole.admin)

    assert [v.order.id for v in use_case.execute(admin, search="bruno", today=TODAY)] == ["o2"]
    assert [v.order.id for v in use_case.execute(admin, search="000003", today=TODAY)] == ["o3"]
