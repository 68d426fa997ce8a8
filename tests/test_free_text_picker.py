"""
Tests for the picker that accepts typed values outside its options.
"""

from __future__ import annotations

from repairdesk.application.use_cases.free_text_picker import FreeTextOrOptionResolver, status_options
from repairdesk.domain.entities.selectable_item import SelectableItem

BRANDS = (
    SelectableItem(id="b1", label="SAMSUNG"),
    SelectableItem(id="b2", label="APPLE"),
    SelectableItem(id="b3", label="MOTOROLA"),
)


def _open_picker(allow_custom_value: bool = True) -> FreeTextOrOptionResolver:
    picker = FreeTextOrOptionResolver(BRANDS, allow_custom_value=allow_custom_value, name="brand")
    picker.open()
    return picker


def test_submit_exact_label_emits_option_id():
    """Test that typing a known label in another case resolves to that option."""
    picker = _open_picker()
    picker.type_text("samsung")

    result = picker.submit()

    assert result.action == "selected"
    assert result.selected.value == "b1"
    assert result.selected.is_custom is False
    assert picker.is_open is False


def test_submit_novel_text_emits_literal():
    """Test that an unknown brand comes back as the literal typed text."""
    picker = _open_picker()
    picker.type_text("  Xiaomi ")

    result = picker.submit()

    assert result.selected.value == "Xiaomi"
    assert result.selected.is_custom is True
    assert picker.is_open is False


def test_submit_partial_match_is_still_custom():
    """Test that a substring of a label is not an exact match."""
    picker = _open_picker()
    picker.type_text("sams")

    result = picker.submit()

    assert result.selected.value == "sams"
    assert result.selected.is_custom is True


def test_blank_submit_is_ignored():
    picker = _open_picker()
    picker.type_text("   ")

    result = picker.submit()

    assert result.accepted is False
    assert result.action == "ignored"
    assert result.reason == "empty_text"
    assert picker.is_open is True


def test_novel_text_ignored_when_custom_values_disabled():
    picker = _open_picker(allow_custom_value=False)
    picker.type_text("Xiaomi")

    result = picker.submit()

    assert result.action == "ignored"
    assert result.reason == "no_match"
    assert picker.is_open is True
    assert picker.query == "Xiaomi"


def test_option_activation_still_two_phase():
    picker = _open_picker()
    picker.type_text("app")

    assert picker.activate("b2").action == "armed"
    result = picker.activate("b2")

    assert result.selected.value == "b2"
    assert result.selected.is_custom is False


def test_submit_on_closed_picker_is_rejected():
    picker = FreeTextOrOptionResolver(BRANDS, name="brand")

    assert picker.submit().reason == "picker_closed"


def test_display_value_shows_label_or_raw_text():
    picker = FreeTextOrOptionResolver(BRANDS, name="brand")

    assert picker.display_value("b3") == "MOTOROLA"
    assert picker.display_value("Xiaomi") == "Xiaomi"
    assert picker.display_value(None) == ""


def test_status_options_use_portuguese_labels():
    labels = {o.id: o.label for o in status_options()}

    assert labels["working"] == "Funcionando"
    assert labels["not_available"] == "Não Possui"
    assert len(labels) == 4
