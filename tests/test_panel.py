import json

import pytest

from panelkit.panel import (
    Panel,
    PanelButton,
    PanelStore,
    export_json,
    import_json,
    sort_by_id,
)


def make_panel(panel_id=5, name="Main", launch=0):
    return Panel(
        id=panel_id,
        name=name,
        launch=launch,
        modified="2020-01-02 03:04:05",
        link_texts=["Docs", "Home"],
        link_urls=["http://example.com/docs", "http://example.com/"],
        buttons=[
            PanelButton(id=2, title="Second", script="pkt2"),
            PanelButton(id=1, title="First", script="pkt1"),
        ],
    )


def test_round_trip_keeps_fields():
    panel = make_panel()
    (result,) = import_json(export_json([panel]))
    assert result.id == panel.id
    assert result.name == panel.name
    assert result.modified == panel.modified
    assert result.link_texts == panel.link_texts
    assert result.link_urls == panel.link_urls
    assert [b.id for b in result.buttons] == [1, 2]
    assert [b.script for b in result.buttons] == ["pkt1", "pkt2"]


def test_export_uses_string_numbers_and_source_keys():
    document = json.loads(export_json([make_panel(panel_id=7, launch=1)]))
    entry = document[0]
    assert entry["id"] == "7"
    assert entry["launch"] == "1"
    assert set(entry) == {"name", "id", "launch", "lastmodfied", "linkURLs", "buttonlist"}


def test_export_reverses_order():
    document = json.loads(export_json([make_panel(1, "A"), make_panel(2, "B")]))
    assert [entry["name"] for entry in document] == ["B", "A"]


def test_export_skips_nameless_panels_and_untitled_buttons():
    panel = make_panel()
    panel.buttons.append(PanelButton(id=9, title="", script="x"))
    document = json.loads(export_json([panel, Panel(id=3)]))
    assert len(document) == 1
    assert all(b["title"] for b in document[0]["buttonlist"])


def test_export_truncates_links_to_shorter_list():
    panel = make_panel()
    panel.link_texts.append("Orphan")
    (result,) = import_json(export_json([panel]))
    assert result.link_texts == ["Docs", "Home"]


def test_import_sorts_by_id():
    data = export_json([make_panel(9, "Z"), make_panel(3, "C"), make_panel(6, "F")])
    assert [p.id for p in import_json(data)] == [3, 6, 9]


@pytest.mark.parametrize("data", [b"not json", b"{}", b"42", b""])
def test_import_rejects_non_arrays(data):
    assert import_json(data) == []


def test_import_bad_numbers_become_zero():
    (panel,) = import_json(b'[{"name": "x", "id": 12, "launch": "abc"}]')
    assert panel.id == 0
    assert panel.launch == 0


def test_sort_by_id_orders_panels():
    panels = [Panel(id=3), Panel(id=1), Panel(id=2)]
    assert [p.id for p in sort_by_id(panels)] == [1, 2, 3]


def test_copy_from_is_independent():
    source = make_panel()
    target = Panel()
    target.copy_from(source)
    assert target == source
    target.buttons[0].title = "Changed"
    target.link_texts.append("Extra")
    assert source.buttons[0].title == "Second"
    assert len(source.link_texts) == 2


def test_state_predicates():
    assert Panel().is_new()
    assert not Panel().is_not_new()
    assert Panel(id=4).is_not_new()
    assert Panel(launch=1).is_launch_panel()
    assert not Panel(launch=0).is_launch_panel()


def test_last_modified_parses_and_rejects():
    parsed = make_panel().last_modified()
    assert (parsed.year, parsed.second) == (2020, 5)
    assert Panel(modified="garbage").last_modified() is None


def test_store_missing_file_is_empty(tmp_path):
    assert PanelStore(tmp_path / "panels.json").fetch_all() == []


def test_store_save_and_fetch(tmp_path):
    store = PanelStore(tmp_path / "panels.json")
    panel = make_panel()
    store.save(panel)
    fetched = store.by_id(panel.id)
    assert fetched.name == panel.name
    assert fetched.modified == panel.modified
    assert fetched.last_modified() is not None
    assert store.by_name("Main").id == panel.id


def test_store_save_replaces_same_id(tmp_path):
    store = PanelStore(tmp_path / "panels.json")
    store.save(make_panel(1, "Old"))
    store.save(make_panel(1, "New"))
    panels = store.fetch_all()
    assert [p.name for p in panels] == ["New"]


def test_store_missing_lookups_return_new_panel(tmp_path):
    store = PanelStore(tmp_path / "panels.json")
    store.save(make_panel(1, "A"))
    assert store.by_id(99).is_new()
    assert store.by_name("nobody").is_new()
    assert store.launch_panel().is_new()


def test_store_launch_panel_clears_earlier_launchers(tmp_path):
    store = PanelStore(tmp_path / "panels.json")
    store.save(make_panel(1, "A", launch=1))
    store.save(make_panel(2, "B", launch=1))
    assert store.launch_panel().id == 2
    assert store.by_id(1).launch == 0


def test_store_delete(tmp_path):
    store = PanelStore(tmp_path / "panels.json")
    store.save(make_panel(1, "A"))
    store.save(make_panel(2, "B"))
    store.delete(1)
    assert [p.id for p in store.fetch_all()] == [2]


def test_new_panel_id_fills_gap():
    store = PanelStore("unused.json")
    assert store.new_panel_id([Panel(id=1), Panel(id=2), Panel(id=4)]) == 3


def test_new_panel_id_reads_store_when_empty(tmp_path):
    store = PanelStore(tmp_path / "panels.json")
    store.save(make_panel(1, "A"))
    new_id = store.new_panel_id([])
    assert new_id not in {p.id for p in store.fetch_all()}
    assert new_id >= 1