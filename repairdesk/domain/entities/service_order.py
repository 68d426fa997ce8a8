from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class OrderStatus(str, Enum):
    waiting_part = "waiting_part"
    quote = "quote"
    in_progress = "in_progress"
    delayed = "delayed"
    warranty = "warranty"
    completed = "completed"
    delivered = "delivered"


# Never recolored as overdue
TERMINAL_STATUSES: frozenset[str] = frozenset({OrderStatus.completed.value, OrderStatus.delivered.value})

STATUS_LABELS: dict[str, str] = {
    OrderStatus.waiting_part.value: "Aguardando Peça",
    OrderStatus.quote.value: "Orçamento",
    OrderStatus.in_progress.value: "Em Execução",
    OrderStatus.delayed.value: "Em Atraso",
    OrderStatus.warranty.value: "Em Garantia",
    OrderStatus.completed.value: "Concluído",
    OrderStatus.delivered.value: "Entregue",
}


@dataclass(frozen=True)
class ServiceOrder:
    id: str
    status: str
    estimated_delivery: date | datetime | None = None
    order_number: str | None = None
    client_name: str | None = None
    brand_name: str | None = None
    model_name: str | None = None
    store_id: str | None = None
    entry_date: datetime | None = None
    checklist_completed: bool = False


@dataclass(frozen=True)
class DisplayStatus:
    status: str
    label: str
    is_overdue: bool
