"""
Tests for Workspace: dashboard management, lock propagation and
whole-workspace save/restore.
"""
from copy import deepcopy
from unittest.mock import MagicMock
import pytest

from dashdock.core.config import LayoutSettings
from dashdock.layout.area import Orientation, TabArea, WidgetRef
from dashdock.workspace import Workspace


def test_add_dashboard_selects_it():
    ws = Workspace()
    handler = MagicMock()
    ws.dashboard_added.connect(handler)

    main = ws.add_dashboard("Main")
    other = ws.add_dashboard()

    assert ws.labels == ["Main", "Dashboard"]
    assert ws.current_index == 1
    assert ws.current_dashboard is other
    assert handler.call_count == 2
    handler.assert_any_call(main, 0)


def test_default_label_from_settings():
    ws = Workspace(LayoutSettings(default_dashboard_label="Board"))
    dock = ws.request_new_dashboard()

    assert dock.label == "Board"
    assert dock.root == TabArea()
    assert dock.root.current_index == -1


def test_current_index_out_of_range_selects_none():
    ws = Workspace()
    ws.add_dashboard("Main")

    ws.current_index = 5

    assert ws.current_index == -1
    assert ws.current_dashboard is None


def test_close_current_dashboard_moves_selection():
    ws = Workspace()
    first = ws.add_dashboard("One")
    ws.add_dashboard("Two")
    last = ws.add_dashboard("Three")

    assert ws.close_dashboard(last)
    assert last.is_closed
    assert ws.labels == ["One", "Two"]
    assert ws.current_index == 1

    assert ws.close_dashboard(first)
    assert ws.current_index == 0
    assert ws.current_dashboard.label == "Two"


def test_close_unknown_dashboard_fails(log_messages):
    ws = Workspace()
    stranger = Workspace().add_dashboard("Elsewhere")

    assert not ws.close_dashboard(stranger)
    assert len(log_messages) == 1


def test_move_dashboard_keeps_selection():
    ws = Workspace()
    ws.add_dashboard("One")
    ws.add_dashboard("Two")
    ws.add_dashboard("Three")
    ws.current_index = 0

    assert ws.move_dashboard(0, 2)

    assert ws.labels == ["Two", "Three", "One"]
    assert ws.current_dashboard.label == "One"
    assert not ws.move_dashboard(0, 3)


def test_lock_propagates_to_new_dashboards():
    ws = Workspace()
    existing = ws.add_dashboard("One")

    assert ws.toggle_lock()
    created = ws.add_dashboard("Two")

    assert existing.locked
    assert created.locked
    assert not created.add_widget(WidgetRef("X"))


def test_start_locked_setting():
    ws = Workspace(LayoutSettings(start_locked=True))
    assert ws.add_dashboard("Main").locked


def test_serialize_restore_round_trip(sample_tree, serializer, deserializer):
    ws = Workspace()
    ws.add_dashboard("Sales", sample_tree)
    ws.add_dashboard("Empty")

    document = ws.serialize_workspace(serializer)
    assert document["type"] == "application"
    assert document["version"] == 1
    assert [d["title"] for d in document["dashboards"]] == ["Sales", "Empty"]
    assert document["dashboards"][1]["config"] is None

    restored = Workspace()
    restored.add_dashboard("Old")
    assert restored.restore_workspace(document, deserializer)

    assert restored.labels == ["Sales", "Empty"]
    assert restored.dashboards[0].root == sample_tree
    assert restored.dashboards[1].root is None
    assert restored.current_index == 0


def test_serialize_does_not_modify_workspace(sample_tree, serializer):
    ws = Workspace()
    dock = ws.add_dashboard("Sales", sample_tree)
    before = deepcopy(sample_tree)

    ws.serialize_workspace(serializer)

    assert dock.root == before
    assert ws.labels == ["Sales"]


def test_serialize_while_maximized_uses_active_tree(sample_tree, widgets, serializer):
    ws = Workspace()
    dock = ws.add_dashboard("Sales", sample_tree)
    assert dock.toggle_maximize(widgets["C"])

    document = ws.serialize_workspace(serializer)

    assert document["dashboards"][0]["config"] == {
        "type": "tab-area",
        "currentIndex": 0,
        "widgets": [{"title": "C", "configuration": widgets["C"].payload}],
    }


def test_restore_closes_previous_dashboards(serializer, deserializer):
    ws = Workspace()
    old = ws.add_dashboard("Old")
    removed = MagicMock()
    restored = MagicMock()
    ws.dashboard_removed.connect(removed)
    ws.restored.connect(restored)

    document = Workspace().serialize_workspace(serializer)
    document["dashboards"].append({"type": "dashboard", "title": "New", "config": None})

    assert ws.restore_workspace(document, deserializer)

    assert old.is_closed
    removed.assert_called_once_with(old)
    restored.assert_called_once_with(ws)
    assert ws.labels == ["New"]


def test_unknown_version_leaves_workspace_untouched(sample_tree, serializer, deserializer, log_messages):
    """A rejected document must not close anything."""
    ws = Workspace()
    dock = ws.add_dashboard("Sales", sample_tree)

    document = ws.serialize_workspace(serializer)
    document["version"] = 2

    assert not ws.restore_workspace(document, deserializer)

    assert ws.dashboards == [dock]
    assert not dock.is_closed
    assert dock.root is sample_tree
    assert any("unknown version" in m for m in log_messages)


@pytest.mark.parametrize("document", [
    None,
    [],
    {"type": "dashboard", "version": 1, "dashboards": []},
    {"type": "application", "version": True, "dashboards": []},
    {"type": "application", "version": 1, "dashboards": {}},
])
def test_malformed_documents_are_rejected(document, deserializer):
    ws = Workspace()
    dock = ws.add_dashboard("Keep")

    assert not ws.restore_workspace(document, deserializer)
    assert ws.dashboards == [dock]


def test_deserializer_error_propagates_without_clearing(sample_tree, serializer):
    ws = Workspace()
    dock = ws.add_dashboard("Sales", sample_tree)
    document = ws.serialize_workspace(serializer)

    def failing(configuration):
        raise KeyError("unknown widget kind")

    with pytest.raises(KeyError):
        ws.restore_workspace(document, failing)

    assert ws.dashboards == [dock]
    assert not dock.is_closed


def test_restore_normalizes_current_index(deserializer):
    document = {
        "type": "application",
        "version": 1,
        "dashboards": [{
            "type": "dashboard",
            "title": "Main",
            "config": {
                "type": "tab-area",
                "currentIndex": 99,
                "widgets": [
                    {"title": "A", "configuration": 1},
                    {"title": "B", "configuration": 2},
                ],
            },
        }],
    }
    ws = Workspace()

    assert ws.restore_workspace(document, deserializer)

    root = ws.dashboards[0].root
    assert [w.title for w in root.widgets] == ["A", "B"]
    assert root.current_index == 0


def test_clear_closes_everything():
    ws = Workspace()
    docks = [ws.add_dashboard("One"), ws.add_dashboard("Two")]
    changed = MagicMock()
    ws.current_changed.connect(changed)

    ws.clear()

    assert len(ws) == 0
    assert ws.current_index == -1
    assert all(dock.is_closed for dock in docks)
    changed.assert_called_once_with(1, -1)


def test_insert_dashboard_clamps_index():
    ws = Workspace()
    ws.add_dashboard("One")

    ws.insert_dashboard(-3, "First")
    ws.insert_dashboard(10, "Last")

    assert ws.labels == ["First", "One", "Last"]
    assert ws.current_index == 2


def test_close_last_dashboard_clears_selection():
    ws = Workspace()
    dock = ws.add_dashboard("Only")

    assert ws.close_dashboard(dock)

    assert ws.current_index == -1
    assert ws.current_dashboard is None


def test_restore_applies_lock(serializer, deserializer):
    source = Workspace()
    source.add_dashboard("Main")
    document = source.serialize_workspace(serializer)

    ws = Workspace()
    ws.locked = True
    assert ws.restore_workspace(document, deserializer)

    assert ws.dashboards[0].locked


def test_restore_empty_document(deserializer):
    ws = Workspace()
    ws.add_dashboard("Old")

    assert ws.restore_workspace({"type": "application", "version": 1, "dashboards": []}, deserializer)

    assert len(ws) == 0
    assert ws.current_index == -1


def test_restore_keeps_undecodable_dashboard_slot(deserializer, log_messages):
    document = {
        "type": "application",
        "version": 1,
        "dashboards": [
            {"type": "dashboard", "title": "Broken", "config": {"type": "mystery-area"}},
            {"type": "dashboard", "config": None},
        ],
    }
    ws = Workspace()

    assert ws.restore_workspace(document, deserializer)

    assert ws.labels == ["Broken", "Dashboard"]
    assert ws.dashboards[0].root is None
    assert any("unknown type: mystery-area" in m for m in log_messages)


def test_split_uses_default_split_sizes():
    ws = Workspace(LayoutSettings(default_split_sizes=[3.0, 1.0]))
    dock = ws.add_dashboard("Main")
    dock.add_widget(WidgetRef("A"))

    assert dock.split_region((), Orientation.HORIZONTAL, WidgetRef("B")) == (1,)

    assert dock.root.sizes == [3.0, 1.0]


def test_move_dashboard_emits_current_changed():
    ws = Workspace()
    ws.add_dashboard("One")
    ws.add_dashboard("Two")
    changed = MagicMock()
    ws.current_changed.connect(changed)

    assert ws.move_dashboard(1, 0)

    changed.assert_called_once_with(1, 0)
    assert ws.current_dashboard.label == "Two"
