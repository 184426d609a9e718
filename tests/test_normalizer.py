from __future__ import annotations

from game_loom.normalizer import normalize
from game_loom.registry import AttributeRegistry


def test_aliases_map_onto_canonical_keys() -> None:
    out = normalize(
        {
            "game name": "Doom",
            "hours played": "12",
            "last played": "2023-01-02",
            "release date": "1993-12-10",
            "subtitles": "english",
            "co-op": "x",
            "single player": "true",
        }
    )
    assert out == {
        "title": "Doom",
        "hours_played": "12",
        "last_played": "2023-01-02",
        "release_date": "1993-12-10",
        "captions": "english",
        "multiplayer": "co-op",
        "singleplayer": "single player",
    }


def test_unmatched_columns_pass_through() -> None:
    out = normalize({"title": "Doom", "platform": "PC", "my rating": "5"})
    assert out["platform"] == "PC"
    assert out["my_rating"] == "5"


def test_truthy_language_columns_aggregate_column_names() -> None:
    out = normalize(
        {"title": "Doom", "german": "x", "french": "TRUE", "italian": "", "polish": "null"}
    )
    assert out["languages"] == "german, french"


def test_literal_values_are_comma_appended() -> None:
    out = normalize({"title": "Doom", "captions": "english", "subtitles": "french"})
    assert out["captions"] == "english, french"


def test_empty_markers_contribute_nothing() -> None:
    out = normalize({"title": "Doom", "hours": "N/A", "release": ""})
    assert "hours_played" not in out
    assert "release_date" not in out


def test_id_columns_never_become_the_title() -> None:
    out = normalize({"game id": "1234", "name": "Doom"})
    assert out["title"] == "Doom"
    assert out["game_id"] == "1234"


def test_first_title_candidate_wins() -> None:
    out = normalize({"name": "Doom", "game": "ignored", "title": "also ignored"})
    assert out["title"] == "Doom"
    assert out["game"] == "ignored"


def test_empty_title_candidate_lets_the_next_one_fill_the_title() -> None:
    out = normalize({"name": "", "title": "Doom"})
    assert out["title"] == "Doom"


def test_registry_records_populated_and_passthrough_keys_once() -> None:
    registry = AttributeRegistry()
    normalize({"title": "Doom", "platform": "PC", "hours": "", "german": "x"}, registry)
    normalize({"title": "Quake", "platform": "PC", "hours": "3", "french": "x"}, registry)
    assert registry.keys() == ["title", "platform", "languages", "hours_played"]


def test_normalize_is_idempotent_on_canonical_keys() -> None:
    raw = {
        "Game Name": "Doom",
        "platform": "PC",
        "Hours": "12.5",
        "Last Played": "2023-01-02",
        "Release Date": "1993-12-10",
        "Subtitles": "english",
        "co-op": "x",
        "single player": "x",
        "german": "x",
        "french": "x",
    }
    once = normalize({k.lower(): v for k, v in raw.items()})
    twice = normalize(once)
    assert twice == once
    assert once["languages"] == "german, french"


def test_registry_register_if_absent_reports_insertions() -> None:
    registry = AttributeRegistry(["title"])
    assert registry.register_if_absent("platform") is True
    assert registry.register_if_absent("platform") is False
    assert registry.register_if_absent("  ") is False
    assert list(registry) == ["title", "platform"]
    assert "platform" in registry
