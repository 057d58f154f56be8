from __future__ import annotations

"""
Unit tests for the walk entry records, the StructureModel aggregate and
the pipeline result factory.
"""

from structure4ai.domain.pipeline_models import create_result
from structure4ai.domain.tree_models import Entry, EntryKind, StructureModel, WalkCounters


def _entry(name: str, kind: EntryKind) -> Entry:
    return Entry(name=name, absolute_path=f"/r/{name}", relative_path=name, kind=kind, depth=0)


def test_add_updates_counters() -> None:
    """TC-01: Each kind increments its own counter plus the processed total."""
    model = StructureModel(root_path="/r", root_name="r")
    model.add(_entry("d", EntryKind.DIRECTORY), "├── 📁 d")
    model.add(_entry("f", EntryKind.FILE), "├── 📄 f")
    model.add(_entry("e", EntryKind.ERROR), "└── ❌ e [Error: x]")

    assert (model.folder_count, model.file_count, model.error_count) == (1, 1, 1)
    assert model.processed_count == 3
    assert len(model.lines) == len(model.entries) == 3
    assert [e.name for e in model.files] == ["f"]
    assert [e.name for e in model.directories] == ["d"]


def test_counters_snapshot_is_immutable_copy() -> None:
    model = StructureModel(root_path="/r", root_name="r", total_expected=4)
    model.add(_entry("f", EntryKind.FILE), "└── 📄 f")
    snapshot = model.counters()

    model.add(_entry("g", EntryKind.FILE), "└── 📄 g")

    assert snapshot == WalkCounters(folders=0, files=1, errors=0, processed=1, total_expected=4)
    assert model.counters().processed == 2


def test_progress_percent() -> None:
    assert WalkCounters(0, 0, 0, 1, 4).progress_percent == 25
    assert WalkCounters(0, 0, 0, 5, 4).progress_percent == 100
    assert WalkCounters(0, 0, 0, 3, 0).progress_percent == 0


def test_entry_kind_properties() -> None:
    assert _entry("d", EntryKind.DIRECTORY).is_directory
    assert _entry("f", EntryKind.FILE).is_file
    assert _entry("e", EntryKind.ERROR).is_error
    assert EntryKind.FILE.value == "file"


def test_create_result_copies_counters() -> None:
    """TC-02: The result is ok only when no format failed."""
    model = StructureModel(root_path="/r", root_name="r")
    model.add(_entry("f", EntryKind.FILE), "└── 📄 f")

    ok = create_result(model, "/out", "tree", {"json": "/out/tree.json"}, {})
    assert ok.ok is True
    assert ok.error == ""
    assert ok.file_count == 1
    assert ok.processed_count == 1
    assert ok.root_path == "/r"

    partial = create_result(model, "/out", "tree", {}, {"html": "disk full"}, summary_extra={"x": 1})
    assert partial.ok is False
    assert "html" in partial.error
    assert partial.summary["x"] == 1
