"""
Record ordering.

Each strategy compares two records on one field type. Values that cannot be
interpreted (missing, malformed, unparsable) are *invalid* and compare greater
than any valid value, so they sink to the end of an ascending sort.

Descending order wraps the strategy in `Reversed`, which swaps the comparison
arguments. Invalid values therefore float to the start of a descending sort:
placement is relative to the direction, not absolute.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Protocol, TypeVar

from .config import RECORD
from .record import Record, normalize_key
from .schema import PLATFORM_KEY, RELEASE_DATE_KEY

T = TypeVar("T")

DATE_LENGTH = 10  # YYYY-MM-DD


class SortStrategy(Protocol):
    def compare(self, a: Record, b: Record) -> int: ...


def _cmp(a: T, b: T) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _cmp_with_invalid(a: T | None, b: T | None) -> int:
    """Compare two parsed keys where None marks an invalid value (greater than any valid one)."""
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return _cmp(a, b)


def parse_date(value: str) -> tuple[int, int, int] | None:
    """Parse `YYYY-MM-DD` into (year, month, day); None if the value is not date-shaped."""
    if value == RECORD.sentinel or len(value) != DATE_LENGTH:
        return None
    try:
        return int(value[0:4]), int(value[5:7]), int(value[8:10])
    except ValueError:
        return None


def parse_number(value: str) -> float | None:
    """Parse a plain decimal number; NaN, infinities and `1_000`-style grouping are invalid."""
    s = value.strip()
    if "_" in s:
        return None
    try:
        n = float(s)
    except ValueError:
        return None
    if not math.isfinite(n):
        return None
    return n


def _text_or_none(value: str) -> str | None:
    if not value or value == RECORD.sentinel:
        return None
    return value


@dataclass(frozen=True)
class ByTitle:
    def compare(self, a: Record, b: Record) -> int:
        return _cmp(a.title, b.title)


@dataclass(frozen=True)
class ByPlatform:
    def compare(self, a: Record, b: Record) -> int:
        return _cmp(a.get(PLATFORM_KEY), b.get(PLATFORM_KEY))


@dataclass(frozen=True)
class ByDate:
    field: str = RELEASE_DATE_KEY

    def compare(self, a: Record, b: Record) -> int:
        return _cmp_with_invalid(parse_date(a.get(self.field)), parse_date(b.get(self.field)))


@dataclass(frozen=True)
class ByCustomString:
    field: str

    def compare(self, a: Record, b: Record) -> int:
        return _cmp_with_invalid(_text_or_none(a.get(self.field)), _text_or_none(b.get(self.field)))


@dataclass(frozen=True)
class ByCustomNumeric:
    field: str

    def compare(self, a: Record, b: Record) -> int:
        return _cmp_with_invalid(parse_number(a.get(self.field)), parse_number(b.get(self.field)))


@dataclass(frozen=True)
class Reversed:
    inner: SortStrategy

    def compare(self, a: Record, b: Record) -> int:
        return self.inner.compare(b, a)


def strategy_for(field: str, custom_field: str = "", *, alphabetical: bool = True) -> SortStrategy:
    """
    Map a sort choice ("Title", "Platform", "Date" or "Custom") onto a strategy.

    Custom sorts compare `custom_field` as text, or as numbers when `alphabetical` is False.
    """
    choice = str(field or "").strip().casefold()
    if choice == "title":
        return ByTitle()
    if choice == "platform":
        return ByPlatform()
    if choice == "date":
        return ByDate()
    if choice == "custom":
        key = normalize_key(custom_field)
        if not key:
            raise ValueError("Custom sort requires a field name")
        return ByCustomString(key) if alphabetical else ByCustomNumeric(key)
    raise ValueError(f"Unknown sort field: {field!r}. Allowed: Title, Platform, Date, Custom")


def sort_records(
    records: Iterable[Record], strategy: SortStrategy, *, ascending: bool = True
) -> list[Record]:
    """Return a new, stably sorted list; the input is left untouched."""
    effective = strategy if ascending else Reversed(strategy)
    return sorted(records, key=cmp_to_key(effective.compare))
