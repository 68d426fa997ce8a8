from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from repairdesk.domain.entities.service_order import (
    STATUS_LABELS,
    TERMINAL_STATUSES,
    DisplayStatus,
    OrderStatus,
    ServiceOrder,
)


def calendar_date(value: date | datetime, timezone: ZoneInfo | None = None) -> date:
    """Strip time of day; aware datetimes are first moved to the shop's timezone."""
    if isinstance(value, datetime):
        if value.tzinfo is not None and timezone is not None:
            value = value.astimezone(timezone)
        return value.date()
    return value


def is_overdue(
    status: str,
    estimated_delivery: date | datetime | None,
    today: date,
    timezone: ZoneInfo | None = None,
) -> bool:
    if status in TERMINAL_STATUSES:
        return False
    if estimated_delivery is None:
        return False
    return today > calendar_date(estimated_delivery, timezone)


def resolve_display_status(
    status: str,
    estimated_delivery: date | datetime | None,
    today: date,
    timezone: ZoneInfo | None = None,
) -> DisplayStatus:
    overdue = is_overdue(status, estimated_delivery, today, timezone)
    shown = OrderStatus.delayed.value if overdue else status
    label = STATUS_LABELS.get(shown, STATUS_LABELS[OrderStatus.quote.value])
    return DisplayStatus(status=shown, label=label, is_overdue=overdue)


class OrderStatusResolver:
    """Read-time projection of an order's status; never writes ``delayed`` back."""

    def __init__(self, timezone: ZoneInfo | None = None) -> None:
        self._timezone = timezone

    @property
    def timezone(self) -> ZoneInfo | None:
        return self._timezone

    def today(self) -> date:
        return datetime.now(self._timezone).date()

    def resolve(self, order: ServiceOrder, today: date | None = None) -> DisplayStatus:
        return resolve_display_status(
            order.status,
            order.estimated_delivery,
            today or self.today(),
            self._timezone,
        )

    def is_overdue(self, order: ServiceOrder, today: date | None = None) -> bool:
        return is_overdue(order.status, order.estimated_delivery, today or self.today(), self._timezone)
