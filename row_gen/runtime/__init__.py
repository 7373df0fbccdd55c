"""Runtime support for generated mapping modules."""

from __future__ import annotations

from row_gen.runtime.cursor import MappingCursor, RowCursor, SqliteCursor
from row_gen.runtime.protocol import ColumnTypeAdapter, ContentValues, Cursor

__all__ = [
    "Cursor",
    "ColumnTypeAdapter",
    "ContentValues",
    "RowCursor",
    "MappingCursor",
    "SqliteCursor",
]
