from __future__ import annotations

from pathlib import Path

import pytest


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_language_columns_aggregate_per_row(tmp_path: Path) -> None:
    from game_loom.importer import import_csv
    from game_loom.registry import AttributeRegistry

    p = _write(
        tmp_path / "steam.csv",
        "Title,Platform,Hours,German\nZelda,Switch,10,x\nMario,Switch,5,\nMetroid,Switch,3,x\n",
    )
    registry = AttributeRegistry()
    records = import_csv(p, registry=registry)

    assert [r.title for r in records] == ["Zelda", "Mario", "Metroid"]
    assert [r.get("languages") for r in records] == ["german", "N/A", "german"]
    assert records[0].get("title") == '"Zelda"'
    assert records[0].get("hours_played") == "10"
    assert records[1].platform == "Switch"
    assert registry.keys() == ["title", "platform", "hours_played", "languages"]


def test_delimiter_is_picked_by_column_count() -> None:
    from game_loom.importer import detect_delimiter

    assert detect_delimiter("a,b,c") == ","
    assert detect_delimiter("a;b") == ";"
    assert detect_delimiter("a\tb\tc;d") == "\t"
    # Ties go to the earlier candidate; a single column falls back to comma.
    assert detect_delimiter("a,b;c") == ","
    assert detect_delimiter("title") == ","
    # Trailing empty columns carry no weight.
    assert detect_delimiter("a;b;c,,,,") == ";"


def test_semicolon_export_is_parsed() -> None:
    from game_loom.importer import parse_catalog_text

    records = parse_catalog_text("Name;Platform;Release Date\nDoom;PC;1993-12-10\n")
    assert len(records) == 1
    assert records[0].title == "Doom"
    assert records[0].get("release_date") == "1993-12-10"


def test_split_fields_respects_quotes() -> None:
    from game_loom.importer import split_fields

    assert split_fields('"Hello, World", PC ,2020', ",") == ['"Hello, World"', "PC", "2020"]
    assert split_fields("a,,b", ",") == ["a", "", "b"]
    assert split_fields("a;b", "\t") == ["a;b"]


def test_quoted_title_is_kept_whole_and_not_double_wrapped() -> None:
    from game_loom.importer import parse_catalog_text

    records = parse_catalog_text('Title,Platform\n"Hello, World",PC\n')
    assert records[0].get("title") == '"Hello, World"'
    assert records[0].title == "Hello, World"
    assert records[0].platform == "PC"


def test_utf8_bom_is_stripped_from_first_header(tmp_path: Path) -> None:
    from game_loom.importer import import_csv

    p = tmp_path / "bom.csv"
    p.write_bytes("\ufeffTitle,Platform\nDoom,PC\n".encode("utf-8"))
    records = import_csv(p)
    assert records[0].title == "Doom"
    assert records[0].keys() == ["title", "platform"]


def test_nintendo_trailer_rows_are_dropped() -> None:
    from game_loom.importer import parse_catalog_text

    text = "Title,Platform\nZelda,Switch\nMario,Switch\n\n\n\nTotal games,2\nTotal cost,$50\n"
    records = parse_catalog_text(text, "Nintendo")
    assert [r.title for r in records] == ["Zelda", "Mario"]


def test_playstation_trailer_row_is_dropped() -> None:
    from game_loom.importer import parse_catalog_text

    text = "Title,Platform\nBloodborne,PS4\nAstro Bot,PS5\ninternal_db_name\n"
    assert [r.title for r in parse_catalog_text(text, "playstation")] == ["Bloodborne", "Astro Bot"]
    # Other platforms keep every line.
    assert len(parse_catalog_text(text, "Steam")) == 3


def test_trailer_larger_than_file_leaves_no_rows() -> None:
    from game_loom.importer import parse_catalog_text

    assert parse_catalog_text("Title\nZelda\nMario\n", "Nintendo") == []


def test_non_game_titles_are_dropped() -> None:
    from game_loom.importer import parse_catalog_text

    records = parse_catalog_text("Title,Platform\nNetflix,PS5\nDoom,PC\n youtube ,PS5\n")
    assert [r.title for r in records] == ["Doom"]


def test_short_rows_miss_attributes_and_long_rows_are_cut() -> None:
    from game_loom.importer import parse_catalog_text

    records = parse_catalog_text("Title,Platform\nDoom\nQuake,PC,extra\n")
    assert records[0].platform == "N/A"
    assert "platform" not in records[0]
    assert records[1].keys() == ["title", "platform"]


def test_blank_lines_and_empty_input_produce_no_records() -> None:
    from game_loom.importer import parse_catalog_text

    assert parse_catalog_text("") == []
    assert parse_catalog_text("Title,Platform\n") == []
    records = parse_catalog_text("Title,Platform\r\nDoom,PC\r\n\r\nQuake,PC\r\n")
    assert [r.title for r in records] == ["Doom", "Quake"]


def test_missing_file_raises_not_found(tmp_path: Path) -> None:
    from game_loom.errors import CatalogIOError, ErrorCode
    from game_loom.importer import import_csv

    with pytest.raises(CatalogIOError) as exc:
        import_csv(tmp_path / "missing.csv")
    assert exc.value.code is ErrorCode.NOT_FOUND
    assert exc.value.path == tmp_path / "missing.csv"


def test_invalid_utf8_raises_decode_failed(tmp_path: Path) -> None:
    from game_loom.errors import CatalogIOError, ErrorCode
    from game_loom.importer import import_csv

    p = tmp_path / "latin1.csv"
    p.write_bytes("Title\nPok\xe9mon\n".encode("latin-1"))
    with pytest.raises(CatalogIOError) as exc:
        import_csv(p)
    assert exc.value.code is ErrorCode.DECODE_FAILED


def test_directory_raises_unreadable(tmp_path: Path) -> None:
    from game_loom.errors import CatalogIOError, ErrorCode
    from game_loom.importer import import_csv

    with pytest.raises(CatalogIOError) as exc:
        import_csv(tmp_path)
    assert exc.value.code is ErrorCode.UNREADABLE
