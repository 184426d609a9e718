from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from .config import EXPORT, RECORD
from .errors import CatalogIOError, ErrorCode
from .record import Record


def records_to_frame(records: Iterable[Record], keys: Sequence[str]) -> pd.DataFrame:
    """One row per record, one string column per key; missing attributes read as the sentinel."""
    rows = [[r.get(k) for k in keys] for r in records]
    return pd.DataFrame(rows, columns=list(keys), dtype=str)


def to_export_cell(value: str) -> str:
    """
    Render one value for the flat CSV format.

    Lossy by construction: commas inside a value become spaces, and empty values become
    `N/A`.
    """
    s = str(value if value is not None else "")
    if "," in s:
        return s.replace(",", " ")
    if s == "":
        return EXPORT.empty_value
    return s


def render_csv_lines(records: Iterable[Record], keys: Sequence[str]) -> list[str]:
    """Header line (keys joined by ", ") followed by one line per record."""
    cols = list(keys)
    if not cols:
        return []
    df = records_to_frame(records, cols)
    for c in cols:
        df[c] = df[c].fillna(RECORD.sentinel).map(to_export_cell)
    sep = EXPORT.separator
    lines = [sep.join(to_export_cell(c) for c in cols)]
    lines.extend(sep.join(row) for row in df.itertuples(index=False, name=None))
    return lines


def export_csv(records: Iterable[Record], keys: Sequence[str], path: str | Path) -> Path:
    p = Path(path)
    records = list(records)
    lines = render_csv_lines(records, keys)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    except OSError as e:
        raise CatalogIOError(ErrorCode.WRITE_FAILED, p, f"Cannot write {p}: {e}") from e
    logging.info(f"✔ Exported {len(records)} record(s) to {p}")
    return p
