from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping

from repairdesk.domain.entities.checklist import ChecklistSnapshot
from repairdesk.domain.entities.form_snapshot import FieldValue
from repairdesk.domain.entities.session_context import SessionContext

CHECKLIST_REQUIRED_MESSAGE = "The checklist must be filled in before saving the service order."
CHECKLIST_INCOMPLETE_MESSAGE = "Every checklist item needs a status before saving the service order."
INVALID_FIELDS_MESSAGE = "Fill in all required fields."

# Always required, in form order
_TEXT_FIELDS = (
    "client_id",
    "brand",
    "model",
    "device_color",
    "status",
    "terms",
)
_DETAIL_FIELDS = (
    "accessories",
    "problem_description",
    "possible_service",
    "physical_condition",
    "possible_repair",
)


@dataclass(frozen=True)
class SaveCheck:
    allowed: bool
    reason: str | None = None
    message: str | None = None
    missing_fields: list[str] = field(default_factory=list)


def as_number(value: FieldValue) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def as_date(value: FieldValue) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _blank(value: FieldValue) -> bool:
    return value is None or not str(value).strip()


class OrderSaveGuard:
    """Reject a service-order save before it reaches the record backend."""

    def check(
        self,
        checklist: ChecklistSnapshot | None,
        draft: Mapping[str, FieldValue],
        context: SessionContext,
        stores_offered: bool = False,
    ) -> SaveCheck:
        if checklist is None:
            return SaveCheck(allowed=False, reason="checklist_required", message=CHECKLIST_REQUIRED_MESSAGE)
        if not checklist.is_complete:
            return SaveCheck(allowed=False, reason="checklist_incomplete", message=CHECKLIST_INCOMPLETE_MESSAGE)

        missing = self.missing_fields(draft, context, stores_offered)
        if missing:
            return SaveCheck(
                allowed=False,
                reason="invalid_fields",
                message=INVALID_FIELDS_MESSAGE,
                missing_fields=missing,
            )
        return SaveCheck(allowed=True)

    def missing_fields(
        self,
        draft: Mapping[str, FieldValue],
        context: SessionContext,
        stores_offered: bool = False,
    ) -> list[str]:
        missing: list[str] = []
        if context.is_admin and stores_offered and _blank(draft.get("store_id")):
            missing.append("store_id")

        missing.extend(name for name in _TEXT_FIELDS if _blank(draft.get(name)))

        if draft.get("password_type") == "pattern" and _blank(draft.get("password_value")):
            missing.append("password_value")

        missing.extend(name for name in _DETAIL_FIELDS if _blank(draft.get(name)))

        if as_number(draft.get("service_value")) <= 0:
            missing.append("service_value")
        if as_date(draft.get("estimated_delivery")) is None:
            missing.append("estimated_delivery")
        if as_number(draft.get("entry_value")) > 0 and _blank(draft.get("payment_method")):
            missing.append("payment_method")
        return missing
