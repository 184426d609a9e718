from __future__ import annotations

import logging
from pathlib import Path

from .aliases import DEFAULT_ALIASES, AliasConfig
from .config import IMPORT
from .errors import CatalogIOError, ErrorCode
from .normalizer import normalize
from .record import Record, quote_title, unquote
from .registry import AttributeRegistry
from .schema import TITLE_KEY

_BOM = "\ufeff"


# ----------------------------
# Line / field splitting
# ----------------------------


def split_lines(text: str) -> list[str]:
    """Split text on \\r\\n, \\r or \\n. A final line terminator does not start a new line."""
    s = text.replace("\r\n", "\n").replace("\r", "\n")
    if not s:
        return []
    lines = s.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _count_columns(line: str, delimiter: str) -> int:
    parts = line.split(delimiter)
    # Trailing empty columns ("a,b,,") carry no signal.
    while len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return len(parts)


def detect_delimiter(header_line: str) -> str:
    """
    Pick the delimiter that splits the header into the most columns.

    Headers are assumed free of embedded delimiters, so column count is a reliable signal.
    Ties keep the earlier candidate (comma first), which is also the fallback.
    """
    chosen = IMPORT.default_delimiter
    best = 0
    for delimiter in IMPORT.delimiters:
        n = _count_columns(header_line, delimiter)
        if n > best:
            best = n
            chosen = delimiter
    return chosen


def split_fields(line: str, delimiter: str) -> list[str]:
    """
    Split a data line, honoring quotes.

    A delimiter only ends a field when an even number of quote characters has been seen so
    far on the line. Unquoted values are split as-is; fields are trimmed, quotes are kept.
    """
    fields: list[str] = []
    quote = IMPORT.quote_char
    quotes_seen = 0
    start = 0
    i = 0
    n = len(line)
    step = len(delimiter)
    while i < n:
        if quotes_seen % 2 == 0 and line.startswith(delimiter, i):
            fields.append(line[start:i].strip())
            i += step
            start = i
            continue
        if line[i] == quote:
            quotes_seen += 1
        i += 1
    fields.append(line[start:].strip())
    return fields


def parse_headers(header_line: str, delimiter: str) -> list[str]:
    headers = [h.strip().lower() for h in header_line.split(delimiter)]
    if headers and headers[0].startswith(_BOM):
        headers[0] = headers[0][len(_BOM) :].strip()
    return headers


def trim_trailer(lines: list[str], platform_hint: str | None) -> list[str]:
    """Drop the non-data rows some storefront exporters append at the end."""
    drop = IMPORT.trailer_rows_for(platform_hint)
    if drop <= 0:
        return list(lines)
    return lines[: max(0, len(lines) - drop)]


# ----------------------------
# Import
# ----------------------------


def parse_catalog_text(
    text: str,
    platform_hint: str | None = None,
    *,
    registry: AttributeRegistry | None = None,
    aliases: AliasConfig = DEFAULT_ALIASES,
    source: str = "<text>",
) -> list[Record]:
    """
    Turn raw tabular text (header line + data lines) into normalized Records.

    Rows whose title is a known non-game app are dropped; titles are quote-wrapped.
    """
    lines = split_lines(text)
    if not lines:
        logging.info(f"ℹ {source}: empty input, nothing to import")
        return []

    header_line, data_lines = lines[0], lines[1:]
    delimiter = detect_delimiter(header_line)
    headers = parse_headers(header_line, delimiter)
    logging.debug(f"{source}: delimiter={delimiter!r} headers={headers}")

    kept = trim_trailer(data_lines, platform_hint)
    if len(kept) != len(data_lines):
        logging.debug(
            f"{source}: dropped {len(data_lines) - len(kept)} trailer line(s) "
            f"for platform={platform_hint}"
        )

    records: list[Record] = []
    blank = 0
    non_games = 0
    for line in kept:
        if not line.strip():
            blank += 1
            continue
        values = split_fields(line, delimiter)
        raw: dict[str, str] = {}
        for header, value in zip(headers, values):
            if header:
                raw[header] = value

        attrs = normalize(raw, registry, aliases=aliases)
        title = attrs.get(TITLE_KEY)
        if title is not None:
            if aliases.is_non_game(unquote(title)):
                non_games += 1
                logging.debug(f"{source}: skipping non-game entry {title!r}")
                continue
            attrs[TITLE_KEY] = quote_title(title)
        records.append(Record(attrs))

    logging.info(
        f"✔ Imported {len(records)} record(s) from {source} "
        f"(platform={platform_hint or '-'}, non_games={non_games}, blank={blank})"
    )
    return records


def read_catalog_text(path: str | Path) -> str:
    """Read an input file as UTF-8, translating failures into CatalogIOError."""
    p = Path(path)
    try:
        return p.read_text(encoding=IMPORT.encoding)
    except FileNotFoundError as e:
        raise CatalogIOError(ErrorCode.NOT_FOUND, p, f"Input file not found: {p}") from e
    except UnicodeDecodeError as e:
        raise CatalogIOError(
            ErrorCode.DECODE_FAILED, p, f"Input file is not valid {IMPORT.encoding}: {p}"
        ) from e
    except OSError as e:
        raise CatalogIOError(ErrorCode.UNREADABLE, p, f"Cannot read input file {p}: {e}") from e


def import_csv(
    path: str | Path,
    platform_hint: str | None = None,
    *,
    registry: AttributeRegistry | None = None,
    aliases: AliasConfig = DEFAULT_ALIASES,
) -> list[Record]:
    """
    Import a CSV export.

    The whole file is read before any row is parsed, so an I/O failure yields no records.
    """
    text = read_catalog_text(path)
    return parse_catalog_text(
        text, platform_hint, registry=registry, aliases=aliases, source=str(path)
    )
