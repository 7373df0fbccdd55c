"""RowGen - build-time generator of cursor mapping code for value classes."""

from __future__ import annotations

from row_gen.annotations import ColumnAdapter, ColumnName, Float32, Int16, Int64, ValuesAdapter
from row_gen.core.config import (
    AdapterContractConfig,
    CellMapConfig,
    GeneratorConfig,
    RowStoreConfig,
)
from row_gen.core.engine import GeneratedUnit, MapperGenerator
from row_gen.core.enums import CellKind
from row_gen.core.exceptions import (
    AdapterConflictError,
    AdapterContractViolationError,
    ColumnNotFoundError,
    ConfigError,
    DiscoveryError,
    GenerationError,
    RowGenError,
    UnsupportedTypeError,
    UnsupportedTypeWithExplicitColumnError,
)
from row_gen.runtime.cursor import MappingCursor, RowCursor, SqliteCursor
from row_gen.runtime.protocol import ColumnTypeAdapter, ContentValues, Cursor

__all__ = [
    # Markers
    "ColumnName",
    "ColumnAdapter",
    "ValuesAdapter",
    "Int16",
    "Int64",
    "Float32",
    # Config
    "GeneratorConfig",
    "RowStoreConfig",
    "CellMapConfig",
    "AdapterContractConfig",
    # Engine
    "MapperGenerator",
    "GeneratedUnit",
    # Enums
    "CellKind",
    # Runtime
    "Cursor",
    "ColumnTypeAdapter",
    "ContentValues",
    "RowCursor",
    "MappingCursor",
    "SqliteCursor",
    # Exceptions
    "RowGenError",
    "GenerationError",
    "UnsupportedTypeError",
    "UnsupportedTypeWithExplicitColumnError",
    "AdapterContractViolationError",
    "AdapterConflictError",
    "DiscoveryError",
    "ConfigError",
    "ColumnNotFoundError",
]
