"""Cell kind enumeration."""

from __future__ import annotations

from enum import Enum


class CellKind(Enum):
    """Native storage kinds a row store can produce and a cell map accept."""

    STRING = "string"
    INT = "int"
    LONG = "long"
    SHORT = "short"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    BLOB = "blob"
