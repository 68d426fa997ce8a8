from functools import lru_cache
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import Header

from repairdesk.core.config import settings
from repairdesk.application.ports.notifier import NotifierPort
from repairdesk.application.ports.record_store import RecordStorePort
from repairdesk.application.ports.workspace_store import WorkspaceStorePort
from repairdesk.application.use_cases.commit_record import CommitClientChangesUseCase
from repairdesk.application.use_cases.create_order import CreateOrderUseCase
from repairdesk.application.use_cases.list_orders import ListOrdersUseCase
from repairdesk.application.use_cases.order_status import OrderStatusResolver
from repairdesk.application.use_cases.record_pickers import RecordPickerFactory
from repairdesk.domain.entities.session_context import SessionContext, UserRole
from repairdesk.infrastructure.notifications.log_notifier import LogNotifier
from repairdesk.infrastructure.records.memory_records import MemoryRecordStore
from repairdesk.infrastructure.records.supabase_records import SupabaseRecordStore
from repairdesk.infrastructure.store.memory_store import MemoryWorkspaceStore


_record_store: RecordStorePort | None = None
_workspace_store: MemoryWorkspaceStore | None = None
_notifier: LogNotifier | None = None


def get_record_store() -> RecordStorePort:
    global _record_store
    if _record_store is None:
        logger = logging.getLogger(__name__)
        if settings.RECORDS_PROVIDER.lower() == "supabase":
            logger.info("Using SupabaseRecordStore")
            _record_store = SupabaseRecordStore()
        else:
            if settings.ENV.lower() not in {"dev", "local", "test"}:
                logger.warning("Using MemoryRecordStore outside dev", extra={"reason": settings.ENV})
            _record_store = MemoryRecordStore()
    return _record_store


def get_workspace_store() -> WorkspaceStorePort:
    global _workspace_store
    if _workspace_store is None:
        _workspace_store = MemoryWorkspaceStore()
    return _workspace_store


def get_notifier() -> NotifierPort:
    global _notifier
    if _notifier is None:
        _notifier = LogNotifier()
    return _notifier


@lru_cache
def get_shop_timezone() -> ZoneInfo:
    try:
        return ZoneInfo(settings.SHOP_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger = logging.getLogger(__name__)
        logger.warning("Invalid SHOP_TIMEZONE, falling back to UTC", extra={"error": str(e)})
        return ZoneInfo("UTC")


def get_order_status_resolver() -> OrderStatusResolver:
    return OrderStatusResolver(timezone=get_shop_timezone())


def get_list_orders_use_case() -> ListOrdersUseCase:
    return ListOrdersUseCase(
        store=get_record_store(),
        resolver=get_order_status_resolver(),
        limit=settings.ORDER_LIST_LIMIT,
    )


def get_create_order_use_case() -> CreateOrderUseCase:
    return CreateOrderUseCase(store=get_record_store(), notifier=get_notifier())


def get_commit_client_use_case() -> CommitClientChangesUseCase:
    return CommitClientChangesUseCase(store=get_record_store(), notifier=get_notifier())


def get_session_context(
    x_user_id: str | None = Header(None),
    x_user_role: str | None = Header(None),
    x_store_id: str | None = Header(None),
) -> SessionContext:
    try:
        role = UserRole(x_user_role) if x_user_role else None
    except ValueError:
        logger = logging.getLogger(__name__)
        logger.info("Unknown user role header", extra={"reason": x_user_role})
        role = None
    return SessionContext(user_id=x_user_id, role=role, store_id=x_store_id or None)


def get_record_picker_factory() -> RecordPickerFactory:
    return RecordPickerFactory(
        store=get_record_store(),
        client_limit=settings.CLIENT_PICKER_LIMIT,
        allow_custom_value=settings.PICKER_ALLOW_CUSTOM_VALUE,
    )
