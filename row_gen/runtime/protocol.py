"""Runtime protocols used by generated code.

Generated read functions take a Cursor; generated write functions return a
ContentValues. Column adapters implement ColumnTypeAdapter.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Cursor(Protocol):
    """A row store positioned on one row.

    Cells are addressed by column index. Numeric getters return 0 for a
    NULL cell; string and blob getters return None.
    """

    def get_column_index(self, column_name: str) -> int:
        """Index of *column_name*, or -1 if the row has no such column."""
        ...

    def get_column_index_or_throw(self, column_name: str) -> int:
        """Index of *column_name*; raises ColumnNotFoundError if missing."""
        ...

    def is_null(self, column_index: int) -> bool:
        ...

    def get_string(self, column_index: int) -> str | None:
        ...

    def get_int(self, column_index: int) -> int:
        ...

    def get_long(self, column_index: int) -> int:
        ...

    def get_short(self, column_index: int) -> int:
        ...

    def get_float(self, column_index: int) -> float:
        ...

    def get_double(self, column_index: int) -> float:
        ...

    def get_blob(self, column_index: int) -> bytes | None:
        ...


class ContentValues(dict[str, Any]):
    """Column name -> value map filled by generated write functions."""

    def put(self, column_name: str, value: Any) -> None:
        self[column_name] = value

    def put_all(self, other: Mapping[str, Any]) -> None:
        self.update(other)


class ColumnTypeAdapter(Protocol[T]):
    """Converts one property between its declared type and storage cells.

    Implementations need a no-argument constructor; generated modules
    create one shared instance per adapter class.
    """

    def from_cursor(self, cursor: Cursor, column_name: str) -> T:
        """Read the value stored under *column_name* in the current row."""
        ...

    def to_content_values(self, values: ContentValues, column_name: str, value: T) -> None:
        """Store *value* under *column_name*."""
        ...
