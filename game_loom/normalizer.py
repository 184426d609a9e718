"""
Attribute normalization.

Storefront exporters spell the same attribute many ways ("Game Name", "title",
"Hours played", one boolean column per language, ...). `normalize` folds a raw
row onto the canonical vocabulary declared by the alias tables:

- first matching table wins, evaluated in priority order;
- a truthy cell (`x`, `true`) contributes the raw column *name*, so per-language
  boolean columns aggregate into a readable list (`"german, french"`);
- any other non-empty cell contributes its literal value;
- several contributions to the same canonical key are joined with `", "`;
- columns matching no table pass through under their own name, in `normalize_key` form
  ("My Rating" becomes `my_rating`), the same form `Record` stores and looks up.
"""

from __future__ import annotations

from typing import Mapping

from .aliases import DEFAULT_ALIASES, AliasConfig
from .record import normalize_key
from .registry import AttributeRegistry
from .schema import TITLE_KEY


def _merge(out: dict[str, str], canonical: str, raw_key: str, value: str, aliases: AliasConfig) -> bool:
    """Apply one source cell to `out[canonical]`. Returns True if something was contributed."""
    if aliases.is_truthy(value):
        contribution = raw_key
    elif not aliases.is_empty(value):
        contribution = value
    else:
        return False

    if canonical in out:
        out[canonical] = f"{out[canonical]}, {contribution}"
    else:
        out[canonical] = contribution
    return True


def normalize(
    raw: Mapping[str, str],
    registry: AttributeRegistry | None = None,
    *,
    aliases: AliasConfig = DEFAULT_ALIASES,
) -> dict[str, str]:
    """
    Map a raw attribute row onto canonical keys.

    Populated canonical keys and passthrough keys are recorded in `registry` when given.
    """
    out: dict[str, str] = {}
    for key_raw, value_raw in raw.items():
        key = str(key_raw or "").strip()
        if not key:
            continue
        value = str(value_raw if value_raw is not None else "")

        canonical = aliases.match(key, title_taken=TITLE_KEY in out)
        if canonical is None:
            # Never clobber a canonical value already built for this row
            # (e.g. a second "title" column after "name" filled the title).
            passthrough = normalize_key(key)
            out.setdefault(passthrough, value)
            if registry is not None:
                registry.register_if_absent(passthrough)
            continue

        if _merge(out, canonical, key, value, aliases) and registry is not None:
            registry.register_if_absent(canonical)
    return out
