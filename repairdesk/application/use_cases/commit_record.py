from __future__ import annotations

import logging
from dataclasses import dataclass

from repairdesk.application.exceptions import RecordContractError, RecordStoreError
from repairdesk.application.ports.notifier import NotifierPort
from repairdesk.application.ports.record_store import RecordStorePort
from repairdesk.application.use_cases.dirty_state_guard import DirtyStateGuard
from repairdesk.domain.entities.form_snapshot import GuardState
from repairdesk.domain.entities.records import ClientRecord

_REQUIRED_CLIENT_FIELDS = ("name", "phone")


@dataclass(frozen=True)
class CommitResult:
    action: str  # "committed", "invalid", "failed", "rejected"
    record: ClientRecord | None = None
    message: str | None = None


class CommitClientChangesUseCase:
    """Save an edit-client form; the guard's baseline moves only on success."""

    def __init__(self, store: RecordStorePort, notifier: NotifierPort) -> None:
        self._store = store
        self._notifier = notifier
        self._logger = logging.getLogger(__name__)

    def execute(self, form: DirtyStateGuard, client_id: str) -> CommitResult:
        if form.state is GuardState.CLOSED:
            return CommitResult(action="rejected", message="The form is already closed.")

        values = form.current.as_dict()
        if any(not str(values.get(name) or "").strip() for name in _REQUIRED_CLIENT_FIELDS):
            message = "Name and phone are required."
            self._notifier.error(message)
            return CommitResult(action="invalid", message=message)

        payload = {
            "name": str(values["name"]).upper(),
            "phone": values["phone"],
            "cpf": values.get("cpf") or None,
            "address": str(values.get("address") or "").upper() or None,
        }
        try:
            record = self._store.update_client(client_id, payload)
        except (RecordStoreError, RecordContractError) as e:
            self._logger.error("Error updating client", extra={"error": str(e)})
            message = f"Could not update the client: {e}"
            self._notifier.error(message)
            return CommitResult(action="failed", message=message)

        form.mark_committed()
        self._notifier.success("Client updated.")
        return CommitResult(action="committed", record=record)
