from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import HTTPException

from repairdesk.application.exceptions import SurfaceNotFound
from repairdesk.application.ports.workspace_store import WorkspaceStorePort
from repairdesk.domain.entities.transition import TransitionResult

PICKER = "picker"
FORM = "form"
CHECKLIST = "checklist"
CHECKLIST_SNAPSHOT = "checklist_snapshot"


@contextmanager
def locked_surface(store: WorkspaceStorePort, kind: str, surface_id: str) -> Iterator[Any]:
    """Run one request's transitions on a surface with no other request interleaving."""
    try:
        with store.locked(kind, surface_id) as surface:
            yield surface
    except SurfaceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


def raise_if_rejected(result: TransitionResult) -> None:
    """Rejected transitions surface as 409; ignored ones are a normal answer."""
    if result.action == "rejected":
        raise HTTPException(status_code=409, detail={"action": result.action, "reason": result.reason})
