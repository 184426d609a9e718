from __future__ import annotations

import re
from typing import Iterator, Mapping

from .config import RECORD
from .schema import TITLE_KEY

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_key(key: str) -> str:
    """
    Normalize an attribute name to the internal labeling convention:
    trimmed, lowercase, inner whitespace runs replaced by `_`.
    """
    s = str(key or "").strip().lower()
    return _WHITESPACE_RE.sub("_", s)


def quote_title(value: str, *, quote: str = RECORD.title_quote) -> str:
    """Wrap a title in the legacy quote character (idempotent)."""
    s = str(value or "")
    if not s.startswith(quote):
        s = quote + s
    if len(s) == len(quote) or not s.endswith(quote):
        s = s + quote
    return s


def unquote(value: str, *, quote: str = RECORD.title_quote) -> str:
    """Strip one layer of legacy quote wrapping, if present."""
    s = str(value or "")
    if len(s) >= 2 * len(quote) and s.startswith(quote) and s.endswith(quote):
        return s[len(quote) : -len(quote)]
    return s


def _format_key(key: str) -> str:
    return " ".join(w[:1].upper() + w[1:].lower() for w in key.split("_") if w)


def _format_hours(value: str) -> str:
    try:
        return f"{float(value):.2f}"
    except ValueError:
        return value


class Record:
    """
    One catalogued game: an ordered, schema-free mapping of attribute name -> string value.

    Every key goes through `normalize_key` on the way in and on lookup, so "My Rating",
    "my rating" and "my_rating" name the same attribute. Lookups never fail: a missing
    attribute reads as the sentinel (`"N/A"`).
    """

    __slots__ = ("_attributes",)

    def __init__(self, attributes: Mapping[str, str] | None = None):
        self._attributes: dict[str, str] = {}
        for key, value in (attributes or {}).items():
            k = normalize_key(key)
            if k:
                self._attributes[k] = str(value if value is not None else "")

    def get(self, key: str) -> str:
        return self._attributes.get(normalize_key(key), RECORD.sentinel)

    def __getitem__(self, key: str) -> str:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return f"Record({self._attributes!r})"

    def keys(self) -> list[str]:
        return list(self._attributes)

    def to_dict(self) -> dict[str, str]:
        return dict(self._attributes)

    @property
    def title(self) -> str:
        """Title with its quote wrapping removed (sentinel when missing)."""
        if TITLE_KEY not in self._attributes:
            return RECORD.sentinel
        return unquote(self._attributes[TITLE_KEY])

    @property
    def platform(self) -> str:
        value = self.get("platform").strip()
        return value or RECORD.sentinel

    def update_attribute(self, key: str, value: str) -> str:
        """
        Set `key` to `value` and return the normalized key.

        A blank value removes the attribute instead of storing an empty string.
        """
        k = normalize_key(key)
        if not k:
            raise ValueError("attribute name must be non-empty")
        v = str(value if value is not None else "").strip()
        if not v:
            self._attributes.pop(k, None)
            return k
        if k == TITLE_KEY:
            v = quote_title(v)
        self._attributes[k] = v
        return k

    def remove_attribute(self, key: str) -> bool:
        return self._attributes.pop(normalize_key(key), None) is not None

    def summary(self) -> str:
        """
        One-line description, e.g. `Platform: Steam | Hours Played: 12.50 | Genre: RPG`.

        Preferred keys come first; title, sentinel and empty values are omitted.
        """
        parts: list[str] = []
        front = RECORD.summary_front_keys
        for key in front:
            value = self._attributes.get(key, RECORD.sentinel)
            if value == RECORD.sentinel or not value:
                continue
            if key == "hours_played":
                value = _format_hours(value)
            parts.append(f"{_format_key(key)}: {value}")
        for key, value in self._attributes.items():
            if key == TITLE_KEY or key in front:
                continue
            if value == RECORD.sentinel or not value:
                continue
            parts.append(f"{_format_key(key)}: {value}")
        return " | ".join(parts)
