"""Type catalog - the closed set of types a row store handles natively.

classify() is total and pure: the same declared type always maps to the same
CellOperations (or None), whatever else is declared on the property.
Nullable and non-nullable forms of a type share one entry.
"""

from __future__ import annotations

from dataclasses import dataclass

from row_gen.codegen.names import string_literal
from row_gen.codegen.types import TypeName
from row_gen.core.config import GeneratorConfig
from row_gen.core.enums import CellKind


@dataclass(frozen=True)
class CellOperations:
    """How one catalog kind is read from a row and written to a cell map."""

    kind: CellKind
    accessor: CellKind
    narrowing: str | None = None

    def read_expression(self, config: GeneratorConfig, cursor: str, index: str) -> str:
        """Expression reading the cell at *index* (an expression) from *cursor*."""
        expr = f"{cursor}.{config.row_store.getter(self.accessor)}({index})"
        if self.narrowing:
            expr = f"{expr} {self.narrowing}"
        return expr

    def write_statement(
        self, config: GeneratorConfig, values: str, column_name: str, value: str
    ) -> str:
        """Statement putting *value* (an expression) under *column_name*.

        The value is passed through unchanged, booleans included; how it is
        stored is up to the cell map.
        """
        return f"{values}.{config.cell_map.put}({string_literal(column_name)}, {value})"


STRING = CellOperations(CellKind.STRING, CellKind.STRING)
INT = CellOperations(CellKind.INT, CellKind.INT)
LONG = CellOperations(CellKind.LONG, CellKind.LONG)
SHORT = CellOperations(CellKind.SHORT, CellKind.SHORT)
FLOAT = CellOperations(CellKind.FLOAT, CellKind.FLOAT)
DOUBLE = CellOperations(CellKind.DOUBLE, CellKind.DOUBLE)
BOOLEAN = CellOperations(CellKind.BOOLEAN, CellKind.INT, narrowing="== 1")
BLOB = CellOperations(CellKind.BLOB, CellKind.BLOB)

# qualified type name -> operations
_CATALOG: dict[str, CellOperations] = {
    "str": STRING,
    "int": INT,
    "row_gen.annotations.Int64": LONG,
    "row_gen.annotations.Int16": SHORT,
    "row_gen.annotations.Float32": FLOAT,
    "float": DOUBLE,
    "bool": BOOLEAN,
    "bytes": BLOB,
    "bytearray": BLOB,
}


def classify(type_name: TypeName) -> CellOperations | None:
    """Return the catalog entry for *type_name*, or None if unsupported."""
    if type_name.args:
        return None
    return _CATALOG.get(type_name.non_null().qualified_name)

