import logging

from fastapi import APIRouter, Depends, HTTPException

from repairdesk.api.v1.schemas import (
    PickerActionResponse,
    PickerActivateSchema,
    PickerCreateSchema,
    PickerMode,
    PickerStateSchema,
    PickerTypeSchema,
    RecordPickerCreateSchema,
    RecordSource,
    SelectableItemSchema,
    SelectedSchema,
)
from repairdesk.api.v1.surfaces import PICKER, locked_surface, raise_if_rejected
from repairdesk.application.exceptions import RecordContractError, RecordStoreError
from repairdesk.application.ports.workspace_store import WorkspaceStorePort
from repairdesk.application.use_cases.free_text_picker import FreeTextOrOptionResolver
from repairdesk.application.use_cases.picker import SearchablePicker
from repairdesk.application.use_cases.record_pickers import RecordPickerFactory
from repairdesk.application.use_cases.selection import SelectionResult
from repairdesk.core.config import settings
from repairdesk.domain.entities.selectable_item import SelectableItem
from repairdesk.domain.entities.session_context import SessionContext
from repairdesk.wiring.dependencies import get_record_picker_factory, get_session_context, get_workspace_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _state(picker_id: str, picker: SearchablePicker) -> PickerStateSchema:
    snapshot = picker.snapshot()
    mode = PickerMode.free_text if isinstance(picker, FreeTextOrOptionResolver) else PickerMode.select
    return PickerStateSchema(
        id=picker_id,
        name=picker.name,
        mode=mode,
        is_open=snapshot.is_open,
        query=snapshot.query,
        armed_id=snapshot.armed_id,
        visible_options=[
            SelectableItemSchema(id=o.id, label=o.label, detail=o.detail) for o in snapshot.visible_options
        ],
    )


def _respond(picker_id: str, picker: SearchablePicker, result: SelectionResult) -> PickerActionResponse:
    raise_if_rejected(result)
    return PickerActionResponse(
        accepted=result.accepted,
        action=result.action,
        reason=result.reason,
        selected=(
            SelectedSchema(value=result.selected.value, is_custom=result.selected.is_custom)
            if result.selected else None
        ),
        picker=_state(picker_id, picker),
    )


@router.post("/pickers", response_model=PickerStateSchema, status_code=201)
def create_picker(
    req: PickerCreateSchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
):
    options = [SelectableItem(id=o.id, label=o.label, detail=o.detail) for o in req.options]
    if req.mode is PickerMode.free_text:
        allow_custom = settings.PICKER_ALLOW_CUSTOM_VALUE if req.allow_custom_value is None else req.allow_custom_value
        picker: SearchablePicker = FreeTextOrOptionResolver(
            options, allow_custom_value=allow_custom, name=req.name, limit=req.limit
        )
    else:
        picker = SearchablePicker(options, name=req.name, match_detail=req.match_detail, limit=req.limit)
    picker_id = store.add(PICKER, picker)
    return _state(picker_id, picker)


@router.get("/pickers/{picker_id}", response_model=PickerStateSchema)
def get_picker(picker_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, PICKER, picker_id) as picker:
        return _state(picker_id, picker)


@router.delete("/pickers/{picker_id}", status_code=204)
def discard_picker(picker_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, PICKER, picker_id):
        store.discard(PICKER, picker_id)


@router.post("/pickers/{picker_id}/open", response_model=PickerStateSchema)
def open_picker(picker_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, PICKER, picker_id) as picker:
        picker.open()
        return _state(picker_id, picker)


@router.post("/pickers/{picker_id}/close", response_model=PickerStateSchema)
def close_picker(picker_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, PICKER, picker_id) as picker:
        picker.close()
        return _state(picker_id, picker)


@router.post("/pickers/{picker_id}/type", response_model=PickerActionResponse)
def type_text(
    picker_id: str,
    req: PickerTypeSchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
):
    with locked_surface(store, PICKER, picker_id) as picker:
        return _respond(picker_id, picker, picker.type_text(req.text))


@router.post("/pickers/{picker_id}/activate", response_model=PickerActionResponse)
def activate(
    picker_id: str,
    req: PickerActivateSchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
):
    with locked_surface(store, PICKER, picker_id) as picker:
        return _respond(picker_id, picker, picker.activate(req.item_id))


@router.post("/pickers/{picker_id}/submit", response_model=PickerActionResponse)
def submit(picker_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, PICKER, picker_id) as picker:
        if not isinstance(picker, FreeTextOrOptionResolver):
            raise HTTPException(status_code=409, detail={"action": "rejected", "reason": "free_text_not_supported"})
        return _respond(picker_id, picker, picker.submit())


@router.post("/pickers/records", response_model=PickerStateSchema, status_code=201)
def create_record_picker(
    req: RecordPickerCreateSchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
    context: SessionContext = Depends(get_session_context),
    factory: RecordPickerFactory = Depends(get_record_picker_factory),
):
    try:
        if req.source is RecordSource.client:
            picker: SearchablePicker = factory.client_picker(context)
        elif req.source is RecordSource.brand:
            picker = factory.brand_picker()
        else:
            picker = factory.model_picker(req.brand_id)
    except (RecordStoreError, RecordContractError) as e:
        logger.error("Error loading picker options", extra={"picker": req.source.value, "error": str(e)})
        raise HTTPException(status_code=502, detail=str(e))

    picker_id = store.add(PICKER, picker)
    return _state(picker_id, picker)
