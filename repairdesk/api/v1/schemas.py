from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class PickerMode(str, Enum):
    select = "select"
    free_text = "free_text"


class SelectableItemSchema(BaseModel):
    id: str
    label: str
    detail: str | None = None


class SelectedSchema(BaseModel):
    value: str
    is_custom: bool = False


class PickerCreateSchema(BaseModel):
    name: str = "picker"
    mode: PickerMode = PickerMode.select
    options: list[SelectableItemSchema] = Field(default_factory=list)
    allow_custom_value: bool | None = None
    match_detail: bool = False
    limit: int | None = Field(default=None, ge=1)


class RecordSource(str, Enum):
    client = "client"
    brand = "brand"
    model = "model"


class RecordPickerCreateSchema(BaseModel):
    source: RecordSource
    brand_id: str | None = None


class PickerTypeSchema(BaseModel):
    text: str


class PickerActivateSchema(BaseModel):
    item_id: str


class PickerStateSchema(BaseModel):
    id: str
    name: str
    mode: PickerMode
    is_open: bool
    query: str
    armed_id: str | None = None
    visible_options: list[SelectableItemSchema]


class PickerActionResponse(BaseModel):
    accepted: bool
    action: str
    reason: str | None = None
    selected: SelectedSchema | None = None
    picker: PickerStateSchema


class FormCreateSchema(BaseModel):
    name: str = "form"
    original: dict[str, str | int | float | None] = Field(default_factory=dict)
    redirect_to: str = "/"
    intercept_back: bool = True


class FieldChangeSchema(BaseModel):
    name: str
    value: str | int | float | None = None


class FormStateSchema(BaseModel):
    id: str
    state: str
    dirty: bool
    original: dict[str, Any]
    current: dict[str, Any]
    current_path: str
    directives: list[dict[str, Any]] = Field(default_factory=list)


class FormActionResponse(BaseModel):
    accepted: bool
    action: str
    reason: str | None = None
    form: FormStateSchema


class CommitClientSchema(BaseModel):
    client_id: str


class CommitClientResponse(BaseModel):
    action: str
    message: str | None = None
    form: FormStateSchema


class ChecklistCategorySchema(BaseModel):
    category: str


class ChecklistItemStatusSchema(BaseModel):
    item_id: str
    status: str


class ChecklistItemSchema(BaseModel):
    id: str
    label: str
    status: str | None = None


class ChecklistSnapshotSchema(BaseModel):
    category: str
    item_status: dict[str, str | None]
    is_complete: bool
    unset_items: list[str] = Field(default_factory=list)


class ChecklistStateSchema(BaseModel):
    id: str
    step: str
    category: str | None = None
    items: list[ChecklistItemSchema] = Field(default_factory=list)
    is_complete: bool
    status_options: list[SelectableItemSchema] = Field(default_factory=list)
    snapshot: ChecklistSnapshotSchema | None = None


class ChecklistActionResponse(BaseModel):
    accepted: bool
    action: str
    reason: str | None = None
    checklist: ChecklistStateSchema


class ResolveStatusRequestSchema(BaseModel):
    status: str
    # date or ISO timestamp; kept raw so the offset survives until the shop timezone is applied
    estimated_delivery: str | None = None
    today: date | None = None


class DisplayStatusSchema(BaseModel):
    status: str
    label: str
    is_overdue: bool


class OrderSchema(BaseModel):
    id: str
    order_number: str | None = None
    client_name: str | None = None
    brand_name: str | None = None
    model_name: str | None = None
    store_id: str | None = None
    status: str
    estimated_delivery: str | None = None
    checklist_completed: bool = False


class OrderViewSchema(BaseModel):
    order: OrderSchema
    display: DisplayStatusSchema


class CreateOrderRequestSchema(BaseModel):
    form_id: str
    checklist_id: str | None = None
    stores_offered: bool = False


class CreateOrderResponseSchema(BaseModel):
    action: str
    order: OrderSchema | None = None
    message: str | None = None
    missing_fields: list[str] = Field(default_factory=list)
