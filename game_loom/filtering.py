from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from .errors import ErrorCode, FilterArgumentError
from .record import Record, unquote
from .sorting import DATE_LENGTH, parse_number


class Predicate(Protocol):
    def matches(self, record: Record) -> bool: ...


class FilterOutcome(str, Enum):
    NO_DATA = "no_data"  # nothing to filter
    NO_MATCH = "no_match"  # data present, no record survived
    MATCHED = "matched"


@dataclass(frozen=True)
class FilterResult:
    outcome: FilterOutcome
    records: list[Record]

    def __len__(self) -> int:
        return len(self.records)


def _field_text(record: Record, field: str) -> str:
    return unquote(record.get(field).strip()).strip().lower()


def _check_bounds(low: float, high: float) -> None:
    if low > high:
        raise FilterArgumentError(
            ErrorCode.LOW_ABOVE_HIGH, f"Range start {low:g} is greater than range end {high:g}"
        )


@dataclass(frozen=True)
class KeywordPredicate:
    """Case-insensitive substring match of `keyword` inside one attribute."""

    field: str
    keyword: str

    def matches(self, record: Record) -> bool:
        return self.keyword.strip().lower() in _field_text(record, self.field)


@dataclass(frozen=True)
class NumericRange:
    """Inclusive numeric range on one attribute; non-numeric values never match."""

    field: str
    low: float
    high: float

    def __post_init__(self) -> None:
        _check_bounds(self.low, self.high)

    def matches(self, record: Record) -> bool:
        n = parse_number(record.get(self.field).strip())
        return n is not None and self.low <= n <= self.high


def year_of(value: str) -> float | None:
    """Year of a `YYYY-MM-DD` value, or the value itself read as a number."""
    s = value.strip()
    if len(s) == DATE_LENGTH:
        return parse_number(s[:4])
    return parse_number(s)


@dataclass(frozen=True)
class YearRange:
    """Inclusive year range on a date-shaped (or bare year) attribute."""

    field: str
    low: float
    high: float

    def __post_init__(self) -> None:
        _check_bounds(self.low, self.high)

    def matches(self, record: Record) -> bool:
        y = year_of(record.get(self.field))
        return y is not None and self.low <= y <= self.high


@dataclass(frozen=True)
class SearchTerms:
    """
    Free-text search: every whitespace-separated term must appear in the title or in the
    record summary. Blank text matches everything.
    """

    text: str

    def matches(self, record: Record) -> bool:
        terms = self.text.lower().split()
        if not terms:
            return True
        title = record.title.lower()
        description = record.summary().lower()
        return all(t in title or t in description for t in terms)


def filter_records(records: Iterable[Record], *predicates: Predicate) -> FilterResult:
    """
    Apply predicates by sequential intersection (each one narrows the previous result).

    An empty input is reported as NO_DATA rather than as an empty match.
    """
    current = list(records)
    if not current:
        return FilterResult(FilterOutcome.NO_DATA, [])
    for predicate in predicates:
        current = [r for r in current if predicate.matches(r)]
        if not current:
            break
    outcome = FilterOutcome.MATCHED if current else FilterOutcome.NO_MATCH
    return FilterResult(outcome, current)


def parse_bound(text: str, *, name: str) -> float:
    s = str(text or "").strip()
    n = parse_number(s) if s else None
    if n is None:
        raise FilterArgumentError(ErrorCode.NOT_A_NUMBER, f"{name} must be a number, got {text!r}")
    return n


def parse_range(low_text: str, high_text: str) -> tuple[float, float]:
    """Validate user-entered range bounds before building a range predicate."""
    low = parse_bound(low_text, name="Range start")
    high = parse_bound(high_text, name="Range end")
    _check_bounds(low, high)
    return low, high
