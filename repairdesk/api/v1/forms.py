from fastapi import APIRouter, Depends, HTTPException

from repairdesk.api.v1.schemas import (
    CommitClientResponse,
    CommitClientSchema,
    FieldChangeSchema,
    FormActionResponse,
    FormCreateSchema,
    FormStateSchema,
)
from repairdesk.api.v1.surfaces import FORM, locked_surface, raise_if_rejected
from repairdesk.application.ports.workspace_store import WorkspaceStorePort
from repairdesk.application.use_cases.commit_record import CommitClientChangesUseCase
from repairdesk.application.use_cases.dirty_state_guard import GuardResult
from repairdesk.application.use_cases.guarded_screen import GuardedScreen
from repairdesk.domain.entities.form_snapshot import GuardState
from repairdesk.infrastructure.navigation.memory_history import InMemoryHistoryHost
from repairdesk.wiring.dependencies import get_commit_client_use_case, get_workspace_store

router = APIRouter()


def form_state(form_id: str, screen: GuardedScreen, drain: bool = True) -> FormStateSchema:
    """State of the form; ``drain=False`` leaves the history directives queued for the next action."""
    snapshot = screen.guard.snapshot()
    host = screen.host
    return FormStateSchema(
        id=form_id,
        state=snapshot.state.value,
        dirty=snapshot.dirty,
        original=snapshot.original.as_dict(),
        current=snapshot.current.as_dict(),
        current_path=host.current_path,
        directives=host.drain_directives() if drain else host.pending_directives(),
    )


def _release_if_closed(store: WorkspaceStorePort, form_id: str, screen: GuardedScreen) -> None:
    # closed is terminal: reopening the screen creates a new form
    if screen.guard.state is GuardState.CLOSED:
        store.discard(FORM, form_id)


def _respond(
    store: WorkspaceStorePort,
    form_id: str,
    screen: GuardedScreen,
    result: GuardResult,
) -> FormActionResponse:
    raise_if_rejected(result)
    _release_if_closed(store, form_id, screen)
    return FormActionResponse(
        accepted=result.accepted,
        action=result.action,
        reason=result.reason,
        form=form_state(form_id, screen),
    )


@router.post("/forms", response_model=FormStateSchema, status_code=201)
def create_form(req: FormCreateSchema, store: WorkspaceStorePort = Depends(get_workspace_store)):
    host = InMemoryHistoryHost(initial_path=f"/{req.name}")
    screen = GuardedScreen(
        host,
        original=req.original,
        redirect_to=req.redirect_to,
        intercept_back=req.intercept_back,
        name=req.name,
    )
    screen.open()
    form_id = store.add(FORM, screen)
    return form_state(form_id, screen)


@router.get("/forms/{form_id}", response_model=FormStateSchema)
def get_form(form_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, FORM, form_id) as screen:
        return form_state(form_id, screen, drain=False)


@router.post("/forms/{form_id}/change", response_model=FormActionResponse)
def change_field(
    form_id: str,
    req: FieldChangeSchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
):
    with locked_surface(store, FORM, form_id) as screen:
        return _respond(store, form_id, screen, screen.guard.note_change(req.name, req.value))


@router.post("/forms/{form_id}/request-close", response_model=FormActionResponse)
def request_close(form_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, FORM, form_id) as screen:
        return _respond(store, form_id, screen, screen.back_pressed())


@router.post("/forms/{form_id}/confirm-close", response_model=FormActionResponse)
def confirm_close(form_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, FORM, form_id) as screen:
        return _respond(store, form_id, screen, screen.guard.confirm_close())


@router.post("/forms/{form_id}/cancel-close", response_model=FormActionResponse)
def cancel_close(form_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, FORM, form_id) as screen:
        return _respond(store, form_id, screen, screen.guard.cancel_close())


@router.post("/forms/{form_id}/dismiss", response_model=FormActionResponse)
def dismiss(form_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    with locked_surface(store, FORM, form_id) as screen:
        return _respond(store, form_id, screen, screen.guard.dismiss_outside())


@router.post("/forms/{form_id}/back", response_model=FormStateSchema)
def browser_back(form_id: str, store: WorkspaceStorePort = Depends(get_workspace_store)):
    """Browser back: consumed by the guard entry while the form is open."""
    with locked_surface(store, FORM, form_id) as screen:
        screen.host.back()
        _release_if_closed(store, form_id, screen)
        return form_state(form_id, screen)


@router.post("/forms/{form_id}/commit-client", response_model=CommitClientResponse)
def commit_client(
    form_id: str,
    req: CommitClientSchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
    uc: CommitClientChangesUseCase = Depends(get_commit_client_use_case),
):
    with locked_surface(store, FORM, form_id) as screen:
        result = uc.execute(screen.guard, req.client_id)
        if result.action == "rejected":
            raise HTTPException(status_code=409, detail=result.message)
        if result.action == "invalid":
            raise HTTPException(status_code=422, detail=result.message)
        if result.action == "failed":
            raise HTTPException(status_code=502, detail=result.message)
        return CommitClientResponse(action=result.action, message=result.message, form=form_state(form_id, screen))
