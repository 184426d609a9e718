from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .schema import (
    DEFAULT_ALIAS_TABLES,
    DEFAULT_EMPTY_MARKERS,
    DEFAULT_NON_GAME_TITLES,
    DEFAULT_TRUTHY_MARKERS,
    TITLE_EXCLUDED_SUBSTRING,
    TITLE_KEY,
)


def default_aliases_path(*, run_dir: Path | None = None) -> Path | None:
    """
    Default alias override used by the CLI.

    Returns `<run_dir>/aliases.yaml` when present, otherwise None (built-in tables).
    When `run_dir` is not provided, uses the default run directory `data/`.
    """
    base = Path(run_dir) if run_dir is not None else Path("data")
    p = base / "aliases.yaml"
    if p.exists():
        return p
    return None


@dataclass(frozen=True)
class AliasConfig:
    """
    Static normalization data:
    - canonical key -> raw header substrings (tuple order is evaluation priority)
    - empty/truthy cell markers (stored casefolded)
    - non-game title denylist (stored casefolded)
    """

    tables: tuple[tuple[str, tuple[str, ...]], ...]
    empty_markers: frozenset[str]
    truthy_markers: frozenset[str]
    non_game_titles: frozenset[str]

    @property
    def canonical_keys(self) -> tuple[str, ...]:
        return tuple(k for k, _ in self.tables)

    def match(self, raw_key: str, *, title_taken: bool) -> str | None:
        """
        Return the canonical key for a raw header, or None for a passthrough header.

        `title_taken` tells whether the current row already has a populated title.
        """
        key = raw_key.casefold()
        for canonical, needles in self.tables:
            if canonical == TITLE_KEY and (title_taken or TITLE_EXCLUDED_SUBSTRING in key):
                continue
            if any(n in key for n in needles):
                return canonical
        return None

    def is_empty(self, value: str) -> bool:
        return value.casefold() in self.empty_markers

    def is_truthy(self, value: str) -> bool:
        return value.casefold() in self.truthy_markers

    def is_non_game(self, title: str) -> bool:
        return title.strip().casefold() in self.non_game_titles


def _casefold_set(values: Any) -> frozenset[str]:
    return frozenset(str(v if v is not None else "").strip().casefold() for v in values)


DEFAULT_ALIASES = AliasConfig(
    tables=DEFAULT_ALIAS_TABLES,
    empty_markers=_casefold_set(DEFAULT_EMPTY_MARKERS),
    truthy_markers=_casefold_set(DEFAULT_TRUTHY_MARKERS),
    non_game_titles=_casefold_set(DEFAULT_NON_GAME_TITLES),
)


def _as_str_list(value: Any, *, where: str) -> list[str]:
    if not isinstance(value, list):
        raise ValueError(f"{where} must be a list")
    out: list[str] = []
    for item in value:
        # YAML turns bare `null`/`true` into None/True; keep their spelling.
        if item is None:
            out.append("null")
        elif isinstance(item, bool):
            out.append("true" if item else "false")
        else:
            out.append(str(item))
    return out


def load_alias_config(path: str | Path) -> AliasConfig:
    """
    Load alias tables from YAML.

    Format (version 1); every section is optional and falls back to the built-in data:

        version: 1
        aliases:            # mapping order is the evaluation priority
          title: [game, name, title]
          hours_played: [hours]
        empty_markers: ["", "null", "n/a"]
        truthy_markers: [x, "true"]
        non_game_titles: [Netflix, YouTube]
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("alias config must be a YAML mapping")

    version = int(data.get("version") or 0)
    if version != 1:
        raise ValueError(f"Unsupported alias config version={version} in {p}. Expected version: 1")

    tables = DEFAULT_ALIASES.tables
    aliases_in = data.get("aliases")
    if aliases_in is not None:
        if not isinstance(aliases_in, dict) or not aliases_in:
            raise ValueError("'aliases' must be a non-empty mapping")
        parsed: list[tuple[str, tuple[str, ...]]] = []
        for key_raw, needles in aliases_in.items():
            key = str(key_raw or "").strip().lower()
            if not key:
                raise ValueError("alias keys must be non-empty")
            values = [
                s.strip().lower()
                for s in _as_str_list(needles, where=f"aliases['{key}']")
                if s.strip()
            ]
            if not values:
                raise ValueError(f"aliases['{key}'] must list at least one substring")
            parsed.append((key, tuple(values)))
        tables = tuple(parsed)

    def _markers(name: str, default: frozenset[str]) -> frozenset[str]:
        raw = data.get(name)
        if raw is None:
            return default
        return _casefold_set(_as_str_list(raw, where=f"'{name}'"))

    return AliasConfig(
        tables=tables,
        empty_markers=_markers("empty_markers", DEFAULT_ALIASES.empty_markers),
        truthy_markers=_markers("truthy_markers", DEFAULT_ALIASES.truthy_markers),
        non_game_titles=_markers("non_game_titles", DEFAULT_ALIASES.non_game_titles),
    )
