from __future__ import annotations

from pathlib import Path

import pytest


def test_commas_inside_values_become_spaces_on_export(tmp_path: Path) -> None:
    from game_loom.library import Library

    library = Library()
    library.add_manual_entry(
        {"title": "Doom", "platform": "PC", "release_date": "1993-12-10", "notes": "fast, fun"}
    )
    out = library.export_csv(tmp_path / "library.csv")

    assert out.read_text(encoding="utf-8").splitlines() == [
        "title, platform, release_date, notes",
        '"Doom", PC, 1993-12-10, fast  fun',
    ]

    reloaded = Library()
    (record,) = reloaded.import_csv(out)
    assert record.title == "Doom"
    assert record.get("notes") == "fast  fun"
    assert reloaded.registry.keys() == ["title", "platform", "release_date", "notes"]


def test_empty_and_missing_values_export_as_sentinel(tmp_path: Path) -> None:
    from game_loom.library import Library

    library = Library()
    library.import_text("Title,Platform,Notes\nDoom,PC,\nQuake\n")
    out = library.export_csv(tmp_path / "library.csv")

    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "title, platform, notes",
        '"Doom", PC, N/A',
        '"Quake", N/A, N/A',
    ]


def test_export_cell_rendering() -> None:
    from game_loom.exporter import to_export_cell

    assert to_export_cell("a,b") == "a b"
    assert to_export_cell("") == "N/A"
    assert to_export_cell("Doom") == "Doom"


def test_records_to_frame_uses_sentinel_for_missing() -> None:
    from game_loom.exporter import records_to_frame
    from game_loom.record import Record

    df = records_to_frame(
        [Record({"title": '"Doom"', "platform": "PC"}), Record({"title": '"Quake"'})],
        ["title", "platform"],
    )
    assert list(df.columns) == ["title", "platform"]
    assert df.to_dict(orient="records") == [
        {"title": '"Doom"', "platform": "PC"},
        {"title": '"Quake"', "platform": "N/A"},
    ]


def test_export_without_keys_writes_empty_file(tmp_path: Path) -> None:
    from game_loom.exporter import export_csv

    out = export_csv([], [], tmp_path / "empty.csv")
    assert out.read_text(encoding="utf-8") == ""


def test_unwritable_destination_raises_write_failed(tmp_path: Path) -> None:
    from game_loom.errors import CatalogIOError, ErrorCode
    from game_loom.exporter import export_csv
    from game_loom.record import Record

    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(CatalogIOError) as exc:
        export_csv([Record({"title": '"Doom"'})], ["title"], blocker / "out.csv")
    assert exc.value.code is ErrorCode.WRITE_FAILED
