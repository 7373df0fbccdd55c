"""Write-path generator.

Builds the statements that serialize a value object into a cell map, one
property at a time in declaration order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from row_gen.codegen.code import Statement
from row_gen.codegen.names import NameAllocator, string_literal
from row_gen.codegen.types import TypeName
from row_gen.core.config import GeneratorConfig
from row_gen.core.exceptions import AdapterContractViolationError
from row_gen.host.inspector import ReflectionInspector, TypeInspector, find_method
from row_gen.mapping.adapters import AdapterResolver
from row_gen.mapping.plan import AdapterBinding, WritePlan
from row_gen.mapping.property import ColumnProperty, unsupported_type_error


class WritePathGenerator:
    """Generates the body of a ``value object -> cell map`` function.

    The generated statements expect the value object in the ``value_param``
    variable and an empty cell map in ``values_var`` (see GeneratorConfig).

    Args:
        config: Generator configuration.
        inspector: Capability query used to validate adapters and factories.
        allocator: Name allocator of the unit. A fresh one is used if omitted.
        adapters: Pre-resolved adapter bindings shared with other routines
            of the unit. Resolved here if omitted.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        inspector: TypeInspector | None = None,
        allocator: NameAllocator | None = None,
        adapters: Mapping[type, AdapterBinding] | None = None,
    ) -> None:
        self._config = config
        self._inspector = inspector or ReflectionInspector()
        self._allocator = allocator or NameAllocator()
        self._adapters = adapters
        self._cell_map = TypeName.parse(config.cell_map.type)
        self._value = self._allocator.get_or_new(("param", "value"), config.value_param)
        self._values = self._allocator.get_or_new(("local", "values"), config.values_var)

    @property
    def value_name(self) -> str:
        return self._value

    @property
    def values_name(self) -> str:
        return self._values

    def generate(self, properties: Sequence[ColumnProperty]) -> WritePlan:
        """Build the write plan.

        Raises:
            UnsupportedTypeError: A property's type can't be put into the map.
            AdapterContractViolationError: An adapter lacks the write method,
                or a values factory lacks a matching static method.
        """
        adapters = self._adapters
        if adapters is None:
            resolver = AdapterResolver(self._config, self._inspector, self._allocator)
            adapters = resolver.resolve(properties, read=False, write=True)

        statements: list[Statement] = []
        for prop in properties:
            accessor = f"{self._value}.{prop.human_name}"
            if prop.values_factory is not None:
                statements.extend(self._merge_from_factory(prop, accessor))
            elif prop.adapter is not None:
                binding = adapters[prop.adapter]
                statements.append(
                    Statement(
                        f"{binding.name}.{self._config.adapter.write_method}"
                        f"({self._values}, {string_literal(prop.column_name)}, {accessor})"
                    )
                )
            elif prop.supported_type:
                put = prop.cell_write_expr(self._config, self._values, accessor)
                statements.append(Statement(put))
            else:
                raise unsupported_type_error(prop, "write")

        return WritePlan(adapters=tuple(adapters.values()), statements=tuple(statements))

    def _merge_from_factory(self, prop: ColumnProperty, accessor: str) -> list[Statement]:
        # Entries are merged only when the factory returned a non-empty map.
        factory = prop.values_factory
        method = find_method(
            self._inspector,
            factory,
            static=True,
            takes=(prop.type_name,),
            returns=self._cell_map,
        )
        factory_name = self._inspector.type_name(factory)
        if method is None:
            raise AdapterContractViolationError(
                factory_name.qualified_name,
                "static method",
                f"taking '{prop.type_name.render()}' and returning '{self._cell_map.render()}'",
                prop.site,
            )

        local = self._allocator.new_name(f"{prop.human_name}_values")
        put_all = self._config.cell_map.put_all
        return [
            Statement(
                f"{local} = {factory_name.render()}.{method.name}({accessor})",
                (factory_name,),
            ),
            Statement(f"if {local}:\n    {self._values}.{put_all}({local})"),
        ]


def generate_write(
    properties: Sequence[ColumnProperty],
    config: GeneratorConfig | None = None,
    inspector: TypeInspector | None = None,
) -> WritePlan:
    """Generate a standalone write plan for *properties*."""
    return WritePathGenerator(config or GeneratorConfig(), inspector=inspector).generate(properties)
