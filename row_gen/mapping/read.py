"""Read-path generator.

Builds the statements that reconstruct a value object from the current row
of a cursor, one property at a time in declaration order, followed by the
constructor call.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from row_gen.codegen.code import Assignment
from row_gen.codegen.names import NameAllocator, string_literal
from row_gen.codegen.types import TypeName
from row_gen.core.config import GeneratorConfig
from row_gen.host.inspector import ReflectionInspector, TypeInspector
from row_gen.mapping.adapters import AdapterResolver
from row_gen.mapping.plan import AdapterBinding, ReadPlan
from row_gen.mapping.property import ColumnProperty, unsupported_type_error

_INT = TypeName("int")

UNREADABLE_COMMENT = "can't be read from cursor"


def property_tag(prop: ColumnProperty) -> tuple[str, str]:
    return ("property", prop.human_name)


def allocate_locals(allocator: NameAllocator, properties: Sequence[ColumnProperty]) -> None:
    """Bind every property to a local name before anything else is named."""
    for prop in properties:
        allocator.get_or_new(property_tag(prop), prop.human_name)


class ReadPathGenerator:
    """Generates the body of a ``cursor -> value object`` function.

    Args:
        config: Generator configuration.
        target: The value class constructed at the end.
        inspector: Capability query used to validate adapters.
        allocator: Name allocator of the unit. A fresh one is used if omitted.
        adapters: Pre-resolved adapter bindings shared with other routines
            of the unit. Resolved here if omitted.
        keyword_arguments: Construct with ``name=value`` arguments instead of
            positional ones.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        target: TypeName,
        *,
        inspector: TypeInspector | None = None,
        allocator: NameAllocator | None = None,
        adapters: Mapping[type, AdapterBinding] | None = None,
        keyword_arguments: bool = False,
    ) -> None:
        self._config = config
        self._target = target
        self._inspector = inspector or ReflectionInspector()
        self._allocator = allocator or NameAllocator()
        self._adapters = adapters
        self._keyword_arguments = keyword_arguments
        self._cursor = self._allocator.get_or_new(("param", "cursor"), config.cursor_param)

    def generate(self, properties: Sequence[ColumnProperty]) -> ReadPlan:
        """Build the read plan.

        Raises:
            UnsupportedTypeError: A non-nullable property has no way to be read.
            UnsupportedTypeWithExplicitColumnError: An unreadable property is
                explicitly mapped to a column.
            AdapterContractViolationError: An adapter lacks the read method.
        """
        allocate_locals(self._allocator, properties)
        adapters = self._adapters
        if adapters is None:
            resolver = AdapterResolver(self._config, self._inspector, self._allocator)
            adapters = resolver.resolve(properties, read=True, write=False)

        statements: list[Assignment] = []
        arguments: list[str] = []
        for prop in properties:
            local = self._allocator.get(property_tag(prop))
            if prop.adapter is not None:
                statements.append(self._read_with_adapter(prop, local, adapters[prop.adapter]))
            elif prop.supported_type:
                if prop.nullable:
                    statements.extend(self._read_nullable(prop, local))
                else:
                    statements.append(self._read(prop, local))
            elif prop.nullable and not prop.has_explicit_column:
                statements.append(
                    Assignment(prop.type_name, local, "None", comment=UNREADABLE_COMMENT)
                )
            else:
                # An explicit column on an unreadable type fails even when
                # the property is nullable.
                raise unsupported_type_error(prop, "read")

            if self._keyword_arguments:
                arguments.append(f"{prop.human_name}={local}")
            else:
                arguments.append(local)

        construction = f"{self._target.render()}({', '.join(arguments)})"
        return ReadPlan(
            adapters=tuple(adapters.values()),
            statements=tuple(statements),
            construction=construction,
            target=self._target,
            arguments=tuple(arguments),
        )

    def _read(self, prop: ColumnProperty, local: str) -> Assignment:
        index = (
            f"{self._cursor}.{self._config.row_store.index_or_throw}"
            f"({string_literal(prop.column_name)})"
        )
        value = prop.cursor_method(self._config, self._cursor, index)
        return Assignment(prop.type_name, local, value)

    def _read_nullable(self, prop: ColumnProperty, local: str) -> list[Assignment]:
        # A cursor without the column reads the same as a NULL cell.
        row_store = self._config.row_store
        index_var = self._allocator.new_name(f"{local}_column_index")
        lookup = f"{self._cursor}.{row_store.index}({string_literal(prop.column_name)})"
        value = (
            f"None if {index_var} == {row_store.missing_index} "
            f"or {self._cursor}.{row_store.is_null}({index_var}) "
            f"else {prop.cursor_method(self._config, self._cursor, index_var)}"
        )
        return [
            Assignment(_INT, index_var, lookup),
            Assignment(prop.type_name, local, value),
        ]

    def _read_with_adapter(
        self, prop: ColumnProperty, local: str, binding: AdapterBinding
    ) -> Assignment:
        call = (
            f"{binding.name}.{self._config.adapter.read_method}"
            f"({self._cursor}, {string_literal(prop.column_name)})"
        )
        return Assignment(prop.type_name, local, call)


def generate_read(
    properties: Sequence[ColumnProperty],
    target: TypeName,
    config: GeneratorConfig | None = None,
    inspector: TypeInspector | None = None,
) -> ReadPlan:
    """Generate a standalone read plan for *properties*."""
    return ReadPathGenerator(config or GeneratorConfig(), target, inspector=inspector).generate(
        properties
    )
