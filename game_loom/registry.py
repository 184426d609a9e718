from __future__ import annotations

from typing import Iterable, Iterator


class AttributeRegistry:
    """
    Every attribute name observed so far, in first-seen order.

    Grows monotonically; used to build export headers.
    """

    def __init__(self, keys: Iterable[str] = ()):
        self._keys: dict[str, None] = {}
        for k in keys:
            self.register_if_absent(k)

    def register_if_absent(self, key: str) -> bool:
        """Add `key` unless already present. Returns True when it was added."""
        k = str(key or "").strip()
        if not k or k in self._keys:
            return False
        self._keys[k] = None
        return True

    def keys(self) -> list[str]:
        return list(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"AttributeRegistry({list(self._keys)!r})"
