from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, Mapping

import pandas as pd

from .aliases import DEFAULT_ALIASES, AliasConfig
from .config import IMPORT
from .errors import ManualEntryError
from .exporter import export_csv, records_to_frame
from .filtering import FilterResult, Predicate, filter_records
from .importer import import_csv, parse_catalog_text
from .normalizer import normalize
from .record import Record, normalize_key, quote_title, unquote
from .registry import AttributeRegistry
from .schema import MANUAL_REQUIRED_KEYS, PLATFORM_KEY, TITLE_KEY
from .sorting import SortStrategy, sort_records


class Library:
    """
    The master record collection and the registry of attribute names seen so far.

    Only the library mutates either of them (import, manual entry, edit, removal).
    Sort and filter work on a snapshot, so callers never observe a half-updated list.
    """

    def __init__(self, *, aliases: AliasConfig = DEFAULT_ALIASES):
        self.aliases = aliases
        self.registry = AttributeRegistry()
        self._records: list[Record] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.snapshot())

    def snapshot(self) -> list[Record]:
        return list(self._records)

    # ----------------------------
    # Import / manual entry
    # ----------------------------

    def _import_with(
        self, load: Callable[[AttributeRegistry], list[Record]], platform_hint: str | None
    ) -> list[Record]:
        # Registry inserts happen on a scratch copy and are committed with the records.
        scratch = AttributeRegistry(self.registry)
        records = load(scratch)
        platform = IMPORT.platform_to_stamp(platform_hint)
        if platform is not None and records:
            for record in records:
                record.update_attribute(PLATFORM_KEY, platform)
            scratch.register_if_absent(PLATFORM_KEY)
            logging.debug(f"Stamped platform={platform!r} on {len(records)} record(s)")
        for key in scratch:
            self.registry.register_if_absent(key)
        self._records.extend(records)
        return records

    def import_csv(self, path: str | Path, platform_hint: str | None = None) -> list[Record]:
        """
        Import a file; on I/O failure nothing is added and CatalogIOError propagates.

        Every imported record gets `platform_hint` as its platform, unless the hint names
        this program's own library export.
        """
        return self._import_with(
            lambda reg: import_csv(path, platform_hint, registry=reg, aliases=self.aliases),
            platform_hint,
        )

    def import_text(self, text: str, platform_hint: str | None = None) -> list[Record]:
        return self._import_with(
            lambda reg: parse_catalog_text(text, platform_hint, registry=reg, aliases=self.aliases),
            platform_hint,
        )

    def add_manual_entry(self, raw: Mapping[str, str]) -> Record:
        """
        Add a record from a user-assembled attribute mapping.

        `title`, `platform` and `release_date` are required: blank values and empty markers
        (`N/A`, `null`) count as missing. Keys and values go through the same normalization
        and title quoting as CSV import.
        """
        cleaned: dict[str, str] = {}
        for key, value in raw.items():
            k = normalize_key(key)
            if k:
                cleaned[k] = str(value if value is not None else "").strip()

        missing: list[str] = []
        for k in MANUAL_REQUIRED_KEYS:
            value = cleaned.get(k, "")
            if k == TITLE_KEY:
                value = unquote(value).strip()
            if not value or self.aliases.is_empty(value):
                missing.append(k)
        if missing:
            raise ManualEntryError(missing)

        attrs = normalize(cleaned, self.registry, aliases=self.aliases)
        if TITLE_KEY in attrs:
            attrs[TITLE_KEY] = quote_title(attrs[TITLE_KEY])
        record = Record(attrs)
        self._records.append(record)
        logging.info(f"✔ Added {record.title!r} ({record.platform})")
        return record

    # ----------------------------
    # Edit / removal
    # ----------------------------

    def update_attribute(self, record: Record, key: str, value: str) -> None:
        """
        Set one attribute of an owned record; a blank value removes it.

        The title can be changed but not removed.
        """
        self._require_owned(record)
        k = normalize_key(key)
        if k == TITLE_KEY and not str(value or "").strip():
            raise ValueError("The title of a record cannot be removed")
        stored = record.update_attribute(k, value)
        if stored in record:
            self.registry.register_if_absent(stored)

    def remove(self, record: Record) -> None:
        self._require_owned(record)
        self._records = [r for r in self._records if r is not record]
        logging.info(f"Removed {record.title!r}")

    def _require_owned(self, record: Record) -> None:
        if not any(r is record for r in self._records):
            raise ValueError(f"Record is not part of this library: {record.title!r}")

    # ----------------------------
    # Views
    # ----------------------------

    def sort(self, strategy: SortStrategy, *, ascending: bool = True) -> list[Record]:
        return sort_records(self.snapshot(), strategy, ascending=ascending)

    def filter(self, *predicates: Predicate) -> FilterResult:
        return filter_records(self.snapshot(), *predicates)

    def to_frame(self) -> pd.DataFrame:
        return records_to_frame(self._records, self.registry.keys())

    def export_csv(self, path: str | Path, records: list[Record] | None = None) -> Path:
        """Write `records` (default: the whole library) with the registry as header."""
        return export_csv(
            self.snapshot() if records is None else records, self.registry.keys(), path
        )
