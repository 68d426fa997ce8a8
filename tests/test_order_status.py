"""
Tests for the read-time overdue projection of order status.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from repairdesk.application.use_cases.order_status import (
    OrderStatusResolver,
    calendar_date,
    is_overdue,
    resolve_display_status,
)
from repairdesk.domain.entities.service_order import ServiceOrder

SAO_PAULO = ZoneInfo("America/Sao_Paulo")
TODAY = date(2024, 3, 15)


def test_past_delivery_shows_delayed():
    display = resolve_display_status("in_progress", date(2024, 3, 14), TODAY)

    assert display.status == "delayed"
    assert display.label == "Em Atraso"
    assert display.is_overdue is True


def test_delivery_today_is_not_overdue():
    """Test that the comparison is on calendar days, ignoring time of day."""
    estimated = datetime(2024, 3, 15, 8, 0)

    assert is_overdue("in_progress", estimated, TODAY) is False


def test_terminal_statuses_never_overdue():
    for status in ("completed", "delivered"):
        display = resolve_display_status(status, date(2023, 1, 1), TODAY)
        assert display.status == status
        assert display.is_overdue is False


def test_missing_delivery_date_keeps_stored_status():
    display = resolve_display_status("waiting_part", None, TODAY)

    assert display.status == "waiting_part"
    assert display.label == "Aguardando Peça"


def test_stored_delayed_without_delivery_date_stays_delayed():
    display = resolve_display_status("delayed", None, TODAY)

    assert display.status == "delayed"
    assert display.label == "Em Atraso"
    assert display.is_overdue is False


def test_unknown_status_falls_back_to_quote_label():
    display = resolve_display_status("mystery", None, TODAY)

    assert display.status == "mystery"
    assert display.label == "Orçamento"


def test_aware_timestamp_uses_shop_calendar_day():
    """Test that 01:00 UTC on the 15th is still the 14th in Sao Paulo."""
    estimated = datetime(2024, 3, 15, 1, 0, tzinfo=timezone.utc)

    assert calendar_date(estimated, SAO_PAULO) == date(2024, 3, 14)
    assert is_overdue("quote", estimated, TODAY, SAO_PAULO) is True
    assert is_overdue("quote", estimated, TODAY) is False


def test_resolver_never_rewrites_the_order():
    resolver = OrderStatusResolver(SAO_PAULO)
    order = ServiceOrder(id="o1", status="in_progress", estimated_delivery=date(2024, 3, 1))

    display = resolver.resolve(order, today=TODAY)

    assert display.status == "delayed"
    assert order.status == "in_progress"
    assert resolver.is_overdue(order, today=date(2024, 3, 1)) is False
