import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from repairdesk.api.v1.schemas import (
    CreateOrderRequestSchema,
    CreateOrderResponseSchema,
    DisplayStatusSchema,
    OrderSchema,
    OrderViewSchema,
    ResolveStatusRequestSchema,
)
from repairdesk.api.v1.surfaces import CHECKLIST, CHECKLIST_SNAPSHOT, FORM, locked_surface
from repairdesk.application.exceptions import RecordContractError, RecordStoreError
from repairdesk.application.ports.workspace_store import WorkspaceStorePort
from repairdesk.application.use_cases.create_order import CreateOrderUseCase
from repairdesk.application.use_cases.list_orders import ListOrdersUseCase
from repairdesk.application.use_cases.order_status import OrderStatusResolver, resolve_display_status
from repairdesk.application.utils.date_parser import parse_timestamp
from repairdesk.domain.entities.service_order import ServiceOrder
from repairdesk.domain.entities.session_context import SessionContext
from repairdesk.wiring.dependencies import (
    get_create_order_use_case,
    get_list_orders_use_case,
    get_order_status_resolver,
    get_session_context,
    get_workspace_store,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _order_schema(order: ServiceOrder) -> OrderSchema:
    return OrderSchema(
        id=order.id,
        order_number=order.order_number,
        client_name=order.client_name,
        brand_name=order.brand_name,
        model_name=order.model_name,
        store_id=order.store_id,
        status=order.status,
        estimated_delivery=order.estimated_delivery.isoformat() if order.estimated_delivery else None,
        checklist_completed=order.checklist_completed,
    )


@router.get("/orders", response_model=list[OrderViewSchema])
def list_orders(
    status: str = Query("all"),
    search: str = Query(""),
    context: SessionContext = Depends(get_session_context),
    uc: ListOrdersUseCase = Depends(get_list_orders_use_case),
):
    try:
        views = uc.execute(context, status_filter=status, search=search)
    except (RecordStoreError, RecordContractError) as e:
        logger.error("Error loading service orders", extra={"error": str(e)})
        raise HTTPException(status_code=502, detail=str(e))

    return [
        OrderViewSchema(
            order=_order_schema(view.order),
            display=DisplayStatusSchema(
                status=view.display.status,
                label=view.display.label,
                is_overdue=view.display.is_overdue,
            ),
        )
        for view in views
    ]


@router.post("/orders/resolve-status", response_model=DisplayStatusSchema)
def resolve_status(
    req: ResolveStatusRequestSchema,
    resolver: OrderStatusResolver = Depends(get_order_status_resolver),
):
    estimated = parse_timestamp(req.estimated_delivery)
    if req.estimated_delivery and estimated is None:
        raise HTTPException(status_code=422, detail="estimated_delivery is not a valid date")
    display = resolve_display_status(
        req.status,
        estimated,
        req.today or resolver.today(),
        resolver.timezone,
    )
    return DisplayStatusSchema(status=display.status, label=display.label, is_overdue=display.is_overdue)


@router.post("/orders", response_model=CreateOrderResponseSchema, status_code=201)
def create_order(
    req: CreateOrderRequestSchema,
    store: WorkspaceStorePort = Depends(get_workspace_store),
    context: SessionContext = Depends(get_session_context),
    uc: CreateOrderUseCase = Depends(get_create_order_use_case),
):
    with locked_surface(store, FORM, req.form_id) as screen:
        checklist = store.find(CHECKLIST_SNAPSHOT, req.checklist_id) if req.checklist_id else None
        result = uc.execute(screen.guard, checklist, context, stores_offered=req.stores_offered)
        if result.action == "created" and req.checklist_id:
            # one inspection backs one order
            store.discard(CHECKLIST_SNAPSHOT, req.checklist_id)
            store.discard(CHECKLIST, req.checklist_id)

    if result.action == "failed":
        raise HTTPException(status_code=502, detail=result.message)
    if result.action != "created":
        raise HTTPException(
            status_code=422,
            detail={"action": result.action, "message": result.message, "missing_fields": result.missing_fields},
        )
    return CreateOrderResponseSchema(
        action=result.action,
        order=_order_schema(result.order),
        message=result.message,
    )
