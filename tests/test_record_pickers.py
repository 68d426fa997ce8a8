"""
Tests for pickers built from stored clients, brands and models.
"""

from __future__ import annotations

from repairdesk.application.use_cases.record_pickers import RecordPickerFactory
from repairdesk.domain.entities.records import BrandRecord, ClientRecord, ModelRecord
from repairdesk.domain.entities.session_context import SessionContext, UserRole
from repairdesk.infrastructure.records.memory_records import MemoryRecordStore


def _store() -> MemoryRecordStore:
    clients = [ClientRecord(id=f"c{i}", name=f"CLIENTE {i:02d}", phone=f"1190000{i:04d}") for i in range(15)]
    return MemoryRecordStore(
        clients=clients,
        brands=[BrandRecord(id="b1", name="SAMSUNG"), BrandRecord(id="b2", name="APPLE")],
        models=[ModelRecord(id="m1", name="GALAXY A54", brand_id="b1"), ModelRecord(id="m2", name="IPHONE 13", brand_id="b2")],
        client_stores={f"c{i}": ("s1" if i < 12 else "s2") for i in range(15)},
    )


def test_client_picker_searches_phone_and_caps_results():
    picker = RecordPickerFactory(_store(), client_limit=10).client_picker(SessionContext(role=UserRole.admin))
    picker.open()

    assert len(picker.visible_options) == 10

    picker.type_text("11900000013")
    assert [o.id for o in picker.visible_options] == ["c13"]


def test_client_picker_scoped_to_attendant_store():
    picker = RecordPickerFactory(_store(), client_limit=50).client_picker(
        SessionContext(role=UserRole.attendant, store_id="s2")
    )

    assert [o.id for o in picker.options] == ["c12", "c13", "c14"]


def test_model_picker_lists_brand_models_only():
    factory = RecordPickerFactory(_store())

    assert [o.id for o in factory.model_picker("b1").options] == ["m1"]
    assert factory.model_picker(None).options == ()


def test_brand_picker_follows_custom_value_policy():
    picker = RecordPickerFactory(_store(), allow_custom_value=False).brand_picker()
    picker.open()
    picker.type_text("Xiaomi")

    assert picker.submit().reason == "no_match"
