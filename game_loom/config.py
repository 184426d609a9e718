from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecordConfig:
    # Returned for any attribute lookup that misses.
    sentinel: str = "N/A"
    title_quote: str = '"'
    # Keys rendered first (in this order) by Record.summary().
    summary_front_keys: tuple[str, ...] = (
        "platform",
        "hours_played",
        "release_date",
        "last_played",
        "metascore",
    )


@dataclass(frozen=True)
class ImportConfig:
    # Candidate delimiters in tie-break order (earlier wins a tie).
    delimiters: tuple[str, ...] = (",", ";", "\t")
    default_delimiter: str = ","
    encoding: str = "utf-8"
    quote_char: str = '"'
    # Storefront exporters append non-data lines at the end of the file:
    # - Nintendo: 3 blank separators + 2 summary rows (total games, cost)
    # - Playstation (PSDLE): the internal database name
    trailer_rows: tuple[tuple[str, int], ...] = (
        ("nintendo", 5),
        ("playstation", 1),
    )
    # Platform choice meaning "a file this program exported": its rows keep their own platform.
    library_platform: str = "GameLoom Library"

    def trailer_rows_for(self, platform_hint: str | None) -> int:
        hint = str(platform_hint or "").strip().casefold()
        for platform, rows in self.trailer_rows:
            if platform == hint:
                return rows
        return 0

    def platform_to_stamp(self, platform_hint: str | None) -> str | None:
        """Platform written onto every imported record, or None to keep the file's own values."""
        hint = str(platform_hint or "").strip()
        if not hint or hint.casefold() == self.library_platform.casefold():
            return None
        return hint


@dataclass(frozen=True)
class ExportConfig:
    separator: str = ", "
    empty_value: str = "N/A"


@dataclass(frozen=True)
class CLIConfig:
    logs_dir: str = "data/logs"
    preview_max_colwidth: int = 40


RECORD = RecordConfig()
IMPORT = ImportConfig()
EXPORT = ExportConfig()
CLI = CLIConfig()
