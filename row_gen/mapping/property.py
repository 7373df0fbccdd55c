"""Property model - one declared field of a value class.

Frozen dataclasses, constructed once per declared property and shared by
the read and write generators.
"""

from __future__ import annotations

import types
import typing
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from row_gen.annotations import ColumnAdapter, ColumnName, ValuesAdapter
from row_gen.codegen.types import TypeName
from row_gen.core.catalog import CellOperations, classify
from row_gen.core.config import GeneratorConfig
from row_gen.core.exceptions import (
    AdapterConflictError,
    UnsupportedTypeError,
    UnsupportedTypeWithExplicitColumnError,
)


@dataclass(frozen=True)
class DeclarationSite:
    """Where a property is declared: owning class and member name."""

    owner: str
    member: str

    def __str__(self) -> str:
        return f"{self.owner}.{self.member}"


def split_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Separate ``Annotated`` metadata from the bare annotation.

    Also handles ``Optional[Annotated[T, ...]]``, which get_type_hints
    produces for fields defaulting to None on older interpreters.
    """
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        bare, *metadata = typing.get_args(annotation)
        inner, inner_metadata = split_annotation(bare)
        return inner, inner_metadata + tuple(metadata)

    if origin is typing.Union or origin is types.UnionType:
        members = typing.get_args(annotation)
        collected: list[Any] = []
        bare_members = []
        for member in members:
            bare, member_metadata = split_annotation(member)
            bare_members.append(bare)
            collected.extend(member_metadata)
        if collected:
            return typing.Union[tuple(bare_members)], tuple(collected)  # noqa: UP007

    return annotation, ()


@dataclass(frozen=True)
class ColumnProperty:
    """A typed property of a value class and how it maps to a storage cell.

    Args:
        human_name: Attribute name; declaration order is constructor order.
        type_name: Declared type.
        column_override: Explicit column name, if one was declared.
        adapter: Column adapter class converting the value, if any.
        values_factory: Legacy factory class serializing the value to a
            values map, if any.
        nullable: Whether the property may hold None.
        site: Declaration site used in diagnostics.
    """

    human_name: str
    type_name: TypeName
    column_override: str | None = None
    adapter: type | None = None
    values_factory: type | None = None
    nullable: bool = False
    site: DeclarationSite | None = None
    _operations: CellOperations | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.adapter is not None and self.values_factory is not None:
            raise AdapterConflictError(self.human_name, self.site)
        object.__setattr__(self, "_operations", classify(self.type_name))

    @classmethod
    def from_declaration(
        cls,
        human_name: str,
        annotation: Any,
        metadata: Iterable[Any] = (),
        owner: str | None = None,
    ) -> ColumnProperty:
        """Build a property from a raw ``(name, annotation, markers)`` declaration."""
        bare, annotated = split_annotation(annotation)
        type_name = TypeName.of(bare)

        column_override = None
        adapter = None
        values_factory = None
        for marker in (*annotated, *metadata):
            if isinstance(marker, ColumnName):
                column_override = marker.value
            elif isinstance(marker, ColumnAdapter):
                adapter = marker.value
            elif isinstance(marker, ValuesAdapter):
                values_factory = marker.value

        return cls(
            human_name=human_name,
            type_name=type_name,
            column_override=column_override,
            adapter=adapter,
            values_factory=values_factory,
            nullable=type_name.nullable,
            site=DeclarationSite(owner, human_name) if owner else None,
        )

    @property
    def column_name(self) -> str:
        """Storage cell name: the explicit override, else the human name verbatim."""
        return self.column_override if self.column_override is not None else self.human_name

    @property
    def has_explicit_column(self) -> bool:
        return self.column_override is not None

    @property
    def supported_type(self) -> bool:
        """Whether the declared type is in the type catalog."""
        return self._operations is not None

    @property
    def cell_operations(self) -> CellOperations:
        if self._operations is None:
            raise UnsupportedTypeError(self.human_name, str(self.type_name), "read", self.site)
        return self._operations

    def cursor_method(self, config: GeneratorConfig, cursor: str, index: str) -> str:
        """Expression reading this property's cell at *index* from *cursor*."""
        return self.cell_operations.read_expression(config, cursor, index)

    def cell_write_expr(self, config: GeneratorConfig, values: str, value: str) -> str:
        """Statement putting *value* into *values* under this property's column."""
        return self.cell_operations.write_statement(config, values, self.column_name, value)


def unsupported_type_error(prop: ColumnProperty, operation: str) -> UnsupportedTypeError:
    """The diagnostic for a property whose type can't be mapped."""
    if prop.has_explicit_column:
        return UnsupportedTypeWithExplicitColumnError(
            prop.human_name,
            str(prop.type_name),
            prop.column_name,
            operation,
            prop.site,
        )
    return UnsupportedTypeError(prop.human_name, str(prop.type_name), operation, prop.site)
