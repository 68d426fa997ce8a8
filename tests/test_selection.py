"""
Tests for two-phase selection and the searchable picker.
"""

from __future__ import annotations

from repairdesk.application.use_cases.picker import SearchablePicker
from repairdesk.application.use_cases.selection import SelectionDisambiguator
from repairdesk.application.utils.confirmation_gate import ConfirmationGate
from repairdesk.domain.entities.selectable_item import SelectableItem
from repairdesk.domain.entities.selection_state import ArmedSelection

CLIENTS = (
    SelectableItem(id="c1", label="ANA SOUZA", detail="11 98888-0001"),
    SelectableItem(id="c2", label="BRUNO LIMA", detail="11 97777-0002"),
    SelectableItem(id="c3", label="ANDRE COSTA", detail="21 96666-0003"),
)


def test_gate_confirms_only_the_armed_key():
    """Test that a confirmation lands only on the last armed key and clears the gate."""
    gate = ConfirmationGate()
    assert gate.confirm("a") is False

    gate.arm("a")
    gate.arm("b")
    assert gate.confirm("a") is False
    assert gate.is_armed("b")

    assert gate.confirm("b") is True
    assert gate.is_armed() is False


def test_first_activation_arms_second_selects():
    """Test that one activation arms and a second one on the same id selects."""
    selection = SelectionDisambiguator(CLIENTS)

    first = selection.activate("c1")
    assert first.accepted is True
    assert first.action == "armed"
    assert first.selected is None
    assert selection.armed_id == "c1"

    second = selection.activate("c1")
    assert second.action == "selected"
    assert second.selected is not None
    assert second.selected.value == "c1"
    assert selection.armed_id is None


def test_activating_another_candidate_moves_the_arm():
    """Test that A then B leaves B armed and nothing selected."""
    selection = SelectionDisambiguator(CLIENTS)
    selection.activate("c1")

    result = selection.activate("c2")

    assert result.action == "armed"
    assert result.selected is None
    assert selection.armed_id == "c2"


def test_unknown_candidate_is_rejected():
    selection = SelectionDisambiguator(CLIENTS)
    selection.activate("c1")

    result = selection.activate("missing")

    assert result.accepted is False
    assert result.reason == "unknown_candidate"
    assert selection.armed_id == "c1"


def test_changed_candidate_list_disarms():
    """Test that replacing the candidates with a different list drops the armed id."""
    selection = SelectionDisambiguator(CLIENTS)
    selection.activate("c1")

    selection.set_candidates(CLIENTS)
    assert selection.armed_id == "c1"

    selection.set_candidates(CLIENTS[:2])
    assert selection.armed_id is None


def test_picker_typing_filters_and_disarms():
    """Test that typing narrows the visible options and clears any armed option."""
    picker = SearchablePicker(CLIENTS, name="client")
    picker.open()
    picker.activate("c1")
    assert picker.armed_id == "c1"

    result = picker.type_text("an")

    assert result.action == "filtered"
    assert picker.armed_id is None
    assert [o.id for o in picker.visible_options] == ["c1", "c3"]


def test_picker_matches_detail_when_enabled():
    """Test that a phone fragment finds a client only when detail matching is on."""
    by_label = SearchablePicker(CLIENTS, name="client")
    by_label.open()
    by_label.type_text("97777")
    assert by_label.visible_options == ()

    by_detail = SearchablePicker(CLIENTS, name="client", match_detail=True)
    by_detail.open()
    by_detail.type_text("97777")
    assert [o.id for o in by_detail.visible_options] == ["c2"]


def test_picker_hidden_option_cannot_be_activated():
    picker = SearchablePicker(CLIENTS, name="client")
    picker.open()
    picker.type_text("bruno")

    result = picker.activate("c1")

    assert result.accepted is False
    assert result.reason == "unknown_candidate"


def test_picker_selection_closes_and_clears_query():
    picker = SearchablePicker(CLIENTS, name="client")
    picker.open()
    picker.type_text("bru")
    picker.activate("c2")

    result = picker.activate("c2")

    assert result.selected is not None
    assert result.selected.value == "c2"
    assert picker.is_open is False
    assert picker.query == ""


def test_closing_the_picker_disarms():
    picker = SearchablePicker(CLIENTS, name="client")
    picker.open()
    picker.activate("c3")

    picker.close()
    picker.open()

    assert picker.armed_id is None
    assert picker.activate("c3").action == "armed"


def test_closed_picker_rejects_interaction():
    picker = SearchablePicker(CLIENTS, name="client")

    assert picker.activate("c1").reason == "picker_closed"
    assert picker.type_text("ana").reason == "picker_closed"


def test_picker_limit_caps_visible_options():
    picker = SearchablePicker(CLIENTS, name="client", limit=2)
    picker.open()

    assert [o.id for o in picker.visible_options] == ["c1", "c2"]


def test_state_reports_armed_candidate():
    selection = SelectionDisambiguator(CLIENTS)
    assert selection.state() == ArmedSelection(armed_id=None)

    selection.activate("c3")

    assert selection.state() == ArmedSelection(armed_id="c3")


def test_picker_new_options_drop_stale_arm():
    """Test that an armed option removed by a refresh is never confirmed."""
    picker = SearchablePicker(CLIENTS, name="client")
    picker.open()
    picker.activate("c2")

    picker.set_options([CLIENTS[0], CLIENTS[2]])

    assert picker.armed_id is None
    assert picker.activate("c2").reason == "unknown_candidate"
