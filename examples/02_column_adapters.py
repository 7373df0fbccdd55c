"""
Example 02: Column Adapters and Error Reporting

This example maps a property of a type the row store can't handle natively
through a column adapter, and shows the diagnostic produced when a property
can't be mapped at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated

from row_gen import (
    ColumnAdapter,
    ColumnName,
    ContentValues,
    Cursor,
    MapperGenerator,
    MappingCursor,
    RowGenError,
)


class DecimalAdapter:
    """Stores decimals as text to keep every digit."""

    def from_cursor(self, cursor: Cursor, column_name: str) -> Decimal:
        return Decimal(cursor.get_string(cursor.get_column_index_or_throw(column_name)))

    def to_content_values(self, values: ContentValues, column_name: str, value: Decimal) -> None:
        values.put(column_name, str(value))


@dataclass(frozen=True)
class Invoice:
    number: str
    total: Annotated[Decimal, ColumnAdapter(DecimalAdapter), ColumnName("total_amount")]
    tax: Annotated[Decimal, ColumnAdapter(DecimalAdapter)]

    @staticmethod
    def create_from_cursor(cursor: Cursor) -> Invoice: ...

    def to_content_values(self) -> ContentValues: ...


@dataclass(frozen=True)
class Broken:
    tags: list[str]

    @staticmethod
    def create_from_cursor(cursor: Cursor) -> Broken: ...


def main():
    generator = MapperGenerator()

    unit = generator.generate(Invoice)
    print("=== Generated module ===\n")
    print(unit.source)

    namespace: dict = {}
    exec(unit.source, namespace)
    invoice = Invoice("INV-7", Decimal("120.10"), Decimal("20.02"))
    values = namespace["to_content_values"](invoice)
    print(f"content values: {dict(values)}")
    print(f"read back:      {namespace['create_from_cursor'](MappingCursor(values))}\n")

    print("=== Unsupported property ===\n")
    try:
        generator.generate(Broken)
    except RowGenError as e:
        print(f"{type(e).__name__}: {e}")


if __name__ == "__main__":
    main()
