"""Cursor implementations.

RowCursor holds column names and the current row; MappingCursor wraps a
single dict row; SqliteCursor walks the result set of a sqlite3 cursor.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from row_gen.core.exceptions import ColumnNotFoundError

T = TypeVar("T")

_MISSING = -1


class RowCursor:
    """Cursor over a fixed list of column names and the current row."""

    def __init__(self, columns: Sequence[str], row: Sequence[Any] | None = None) -> None:
        self._columns = list(columns)
        self._indexes: dict[str, int] = {}
        for index, name in enumerate(self._columns):
            # Duplicate column names resolve to the first occurrence
            self._indexes.setdefault(name, index)
        self._row: Sequence[Any] | None = row

    @property
    def column_names(self) -> list[str]:
        return list(self._columns)

    def get_column_index(self, column_name: str) -> int:
        return self._indexes.get(column_name, _MISSING)

    def get_column_index_or_throw(self, column_name: str) -> int:
        index = self.get_column_index(column_name)
        if index == _MISSING:
            raise ColumnNotFoundError(column_name, self.column_names)
        return index

    def is_null(self, column_index: int) -> bool:
        return self._cell(column_index) is None

    def get_string(self, column_index: int) -> str | None:
        value = self._cell(column_index)
        return None if value is None else str(value)

    def get_int(self, column_index: int) -> int:
        value = self._cell(column_index)
        return 0 if value is None else int(value)

    def get_long(self, column_index: int) -> int:
        return self.get_int(column_index)

    def get_short(self, column_index: int) -> int:
        return self.get_int(column_index)

    def get_float(self, column_index: int) -> float:
        value = self._cell(column_index)
        return 0.0 if value is None else float(value)

    def get_double(self, column_index: int) -> float:
        return self.get_float(column_index)

    def get_blob(self, column_index: int) -> bytes | None:
        value = self._cell(column_index)
        return None if value is None else bytes(value)

    def _cell(self, column_index: int) -> Any:
        if self._row is None:
            raise IndexError("Cursor is not positioned on a row")
        if not 0 <= column_index < len(self._columns):
            raise IndexError(f"Column index {column_index} out of range")
        return self._row[column_index]


class MappingCursor(RowCursor):
    """Cursor over a single ``{column: value}`` row."""

    def __init__(self, row: Mapping[str, Any]) -> None:
        super().__init__(list(row.keys()), list(row.values()))


class SqliteCursor(RowCursor):
    """Cursor over the result set of an executed ``sqlite3.Cursor``.

    Starts before the first row; call move_to_next() to advance.

    Usage:
        cursor = SqliteCursor(conn.execute("SELECT * FROM users"))
        users = cursor.map_all(create_from_cursor)
    """

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        if cursor.description is None:
            raise ValueError("Cursor has no result set")
        super().__init__([desc[0] for desc in cursor.description])
        self._cursor = cursor

    def move_to_next(self) -> bool:
        """Advance to the next row. Returns False once the rows are exhausted."""
        self._row = self._cursor.fetchone()
        return self._row is not None

    def map_all(self, mapper: Callable[[SqliteCursor], T]) -> list[T]:
        """Apply *mapper* to every remaining row."""
        results = []
        while self.move_to_next():
            results.append(mapper(self))
        return results

    def close(self) -> None:
        self._cursor.close()
