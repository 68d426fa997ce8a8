from fastapi import APIRouter, Depends

from repairdesk.api.v1.schemas import (
    ChecklistActionResponse,
    ChecklistCategorySchema,
    ChecklistItemSchema,
    ChecklistItemStatusSchema,
    ChecklistSnapshotSchema,
    ChecklistStateSchema,
    SelectableItemSchema,
)
from repairdesk.api.v1.surfaces import CHECKLIST, CHECKLIST_SNAPSHOT, locked_surface, raise_if_rejected
from repairdesk.application.ports.workspace_store import WorkspaceStorePort
from repairdesk.application.use_cases.free_text_picker import status_options
from repairdesk.application.use_cases.inspection_checklist import ChecklistResult, InspectionChecklistFlow
from repairdesk.domain.entities.checklist import ChecklistSnapshot
from repairdesk.wiring.dependencies import get_workspace_store

router = APIRouter()


def _snapshot_schema(snapshot: ChecklistSnapshot | None) -> ChecklistSnapshotSchema | None:
    if snapshot is None:
        return None
    return ChecklistSnapshotSchema(
        category=snapshot.category.value,
        item_status={k: (v.value if v is not None else None) for k, v in snapshot.item_status.items()},
        is_complete=snapshot.is_complete,
        unset_items=snapshot.unset_items,
    )


def _state(checklist_id: str, flow: InspectionChecklistFlow, store: WorkspaceStorePort) -> ChecklistStateSchema:
    session = flow.session
    items = []
    for item in flow.items:
        status = session.item_status.get(item.id)
        items.append(ChecklistItemSchema(id=item.id, label=item.label, status=status.value if status else None))
    return ChecklistStateSchema(
        id=checklist_id,
        step=session.step.value,
        category=session.category.value if session.category else None,
        items=items,
        is_complete=session.is_complete,
        status_options=[SelectableItemSchema(id=o.id, label=o.label) for o in status_options()],
        snapshot=_snapshot_schema(store.find(CHECKLIST_SNAPSHOT, checklist_id)),
    )


def _respond(
    checklist_id: str,
    flow: InspectionChecklistFlow,
    result: ChecklistResult,
    store: WorkspaceStorePort,
) -> ChecklistActionResponse:
    raise_if_rejected(result)
    return ChecklistActionResponse(
        accepted=result.accepted,
        action=result.action,
        reason=result.reason,
        checklist=_state(checklist_id, flow, store),
    )


@router.post("/checklists", response_model=ChecklistStateSchema, status_code=201)
def create_checklist(store: WorkspaceStorePort = Depends(get_workspace_store)):
    flow = InspectionChecklistFlow()
    checklist_id = store.add(CHECKLIST, flow)
    return _state(checklist_id, flow, store)


@router.get("/checklists/{checklist_id}", response_model=ChecklistStateSchema)
def get_checklist(checklist_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, CHECKLIST, checklist_id) as flow:
        return _state(checklist_id, flow, store)


@router.delete("/checklists/{checklist_id}", status_code=204)
def discard_checklist(checklist_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    """Drop the checklist flow and its completed snapshot."""
    with locked_surface(store, CHECKLIST, checklist_id):
        store.discard(CHECKLIST, checklist_id)
        store.discard(CHECKLIST_SNAPSHOT, checklist_id)


@router.post("/checklists/{checklist_id}/category", response_model=ChecklistActionResponse)
def select_category(
    checklist_id: str,
    req: ChecklistCategorySchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
):
    with locked_surface(store, CHECKLIST, checklist_id) as flow:
        return _respond(checklist_id, flow, flow.select_category(req.category), store)


@router.post("/checklists/{checklist_id}/item", response_model=ChecklistActionResponse)
def set_item_status(
    checklist_id: str,
    req: ChecklistItemStatusSchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
):
    with locked_surface(store, CHECKLIST, checklist_id) as flow:
        return _respond(checklist_id, flow, flow.set_item_status(req.item_id, req.status), store)


@router.post("/checklists/{checklist_id}/back", response_model=ChecklistActionResponse)
def go_back(checklist_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, CHECKLIST, checklist_id) as flow:
        return _respond(checklist_id, flow, flow.go_back(), store)


@router.post("/checklists/{checklist_id}/complete", response_model=ChecklistActionResponse)
def complete(checklist_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, CHECKLIST, checklist_id) as flow:
        result = flow.complete()
        if result.snapshot is not None:
            store.put(CHECKLIST_SNAPSHOT, checklist_id, result.snapshot)
        return _respond(checklist_id, flow, result, store)
