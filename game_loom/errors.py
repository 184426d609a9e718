from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"
    DECODE_FAILED = "decode_failed"
    WRITE_FAILED = "write_failed"
    NOT_A_NUMBER = "not_a_number"
    LOW_ABOVE_HIGH = "low_above_high"
    MISSING_FIELDS = "missing_fields"


class CatalogError(Exception):
    """
    Base class for errors surfaced to callers of the catalog core.

    Carries a machine-readable `code`; presentation is left to the caller.
    """

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code


class CatalogIOError(CatalogError):
    """An import or export could not read/write its file. No partial result exists."""

    def __init__(self, code: ErrorCode, path: str | Path, message: str):
        super().__init__(code, message)
        self.path = Path(path)


class FilterArgumentError(CatalogError, ValueError):
    pass


class ManualEntryError(CatalogError, ValueError):
    def __init__(self, missing: list[str]):
        super().__init__(
            ErrorCode.MISSING_FIELDS, f"Missing required fields: {', '.join(missing)}"
        )
        self.missing = list(missing)
