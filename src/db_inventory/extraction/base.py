# ABOUTME: Result and match types shared by the line and file scanners
# ABOUTME: Scans return failures as values so callers decide, visibly, to log and skip them

from dataclasses import dataclass
from typing import Literal

from db_inventory.errors import InventoryError

ConnectionField = Literal["db_name", "table"]


@dataclass(frozen=True, slots=True)
class LineMatch:
    """A configuration line that names a database or a table."""

    field: ConnectionField
    value: str
    key: str


@dataclass(frozen=True)
class ScanResult[T]:
    """Outcome of scanning one line or one file: a value, or the error that stopped it."""

    value: T | None = None
    error: InventoryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None) -> "ScanResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: InventoryError) -> "ScanResult[T]":
        return cls(error=error)
