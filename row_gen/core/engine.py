"""Generator engine.

The MapperGenerator discovers the properties and hooks of a value class,
runs the read and write path generators over one shared name allocator,
and assembles the result into a single generated module.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

import structlog

from row_gen.codegen.code import FunctionSpec, ModuleSpec, Statement
from row_gen.codegen.names import NameAllocator
from row_gen.codegen.types import TypeName
from row_gen.core.config import GeneratorConfig
from row_gen.core.exceptions import GenerationError, RowGenError
from row_gen.host.discovery import HostCapabilities, discover_properties, inspect_host
from row_gen.host.inspector import MethodRef, ReflectionInspector, TypeInspector
from row_gen.mapping.adapters import AdapterResolver
from row_gen.mapping.plan import ReadPlan, WritePlan
from row_gen.mapping.property import ColumnProperty
from row_gen.mapping.read import ReadPathGenerator, allocate_locals
from row_gen.mapping.write import WritePathGenerator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GeneratedUnit:
    """The generated module for one value class.

    Attributes:
        target: The value class the module maps.
        source: Complete module source text.
        read_function: Name of the ``cursor -> value`` function, if generated.
        write_function: Name of the ``value -> cell map`` function, if generated.
        mapper: Name of the module-level mapper constant, if generated.
        read_plan: Plan behind the read function.
        write_plan: Plan behind the write function.
    """

    target: TypeName
    source: str
    read_function: str | None = None
    write_function: str | None = None
    mapper: str | None = None
    read_plan: ReadPlan | None = None
    write_plan: WritePlan | None = None


class MapperGenerator:
    """Generates mapping modules for value classes.

    Args:
        config: Generator configuration. Defaults are used if omitted.
        inspector: Capability query over host types.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        inspector: TypeInspector | None = None,
    ) -> None:
        self._config = config or GeneratorConfig()
        self._inspector = inspector or ReflectionInspector()

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def generate(self, cls: type) -> GeneratedUnit | None:
        """Generate the mapping module for *cls*.

        Returns:
            The generated unit, or None if *cls* opts into no routine.

        Raises:
            DiscoveryError: If the properties of *cls* can't be discovered.
            GenerationError: If any property can't be mapped.
        """
        capabilities = inspect_host(cls, self._config, self._inspector)
        if not capabilities.applicable:
            logger.debug("unit_skipped", target=cls.__qualname__)
            return None
        properties = discover_properties(cls)
        return self.generate_unit(self._inspector.type_name(cls), properties, capabilities)

    def generate_unit(
        self,
        target: TypeName,
        properties: Sequence[ColumnProperty],
        capabilities: HostCapabilities,
    ) -> GeneratedUnit:
        """Assemble one module from already discovered properties and hooks.

        Any failure aborts the whole unit.
        """
        try:
            unit = self._assemble(target, properties, capabilities)
        except RowGenError as e:
            logger.warning("generation_failed", target=target.qualified_name, error=str(e))
            raise
        logger.info(
            "unit_generated",
            target=target.qualified_name,
            properties=len(properties),
            read=unit.read_function,
            write=unit.write_function,
        )
        return unit

    def _assemble(
        self,
        target: TypeName,
        properties: Sequence[ColumnProperty],
        capabilities: HostCapabilities,
    ) -> GeneratedUnit:
        config = self._config
        row_store = TypeName.parse(config.row_store.type)
        cell_map = TypeName.parse(config.cell_map.type)

        referenced = self._referenced_types(target, row_store, cell_map, properties)
        for type_name in referenced:
            _check_importable(type_name)

        allocator = NameAllocator()
        aliases = _import_aliases(referenced, allocator)
        local_target = target.aliased(aliases)
        row_store = row_store.aliased(aliases)
        cell_map = cell_map.aliased(aliases)
        properties = [replace(p, type_name=p.type_name.aliased(aliases)) for p in properties]
        inspector = _AliasedInspector(self._inspector, aliases)

        read_function = mapper = write_function = None
        if capabilities.generates_read:
            read_function = allocator.new_name(config.read_function, ("function", "read"))
            if capabilities.exposes_mapper:
                mapper = allocator.new_name(config.mapper_name, ("mapper",))
            allocator.get_or_new(("param", "cursor"), config.cursor_param)
        if capabilities.generates_write:
            write_function = allocator.new_name(capabilities.values_method, ("function", "write"))
            allocator.get_or_new(("param", "value"), config.value_param)
            allocator.get_or_new(("local", "values"), config.values_var)
        allocate_locals(allocator, properties)

        resolver = AdapterResolver(config, inspector, allocator)
        adapters = resolver.resolve(
            properties,
            read=capabilities.generates_read,
            write=capabilities.generates_write,
        )

        module = ModuleSpec(
            f"Cursor mapping for {target.qualified_name}. Generated, do not edit."
        )
        for binding in adapters.values():
            module.add(binding.instantiation())

        read_plan = None
        if read_function is not None:
            reader = ReadPathGenerator(
                config,
                local_target,
                inspector=inspector,
                allocator=allocator,
                adapters=adapters,
                keyword_arguments=capabilities.keyword_construction,
            )
            read_plan = reader.generate(properties)
            cursor = allocator.get(("param", "cursor"))
            function = FunctionSpec(
                read_function,
                [(cursor, row_store)],
                local_target,
                docstring=f"Read one {target.simple_name} from the current row of the cursor.",
            )
            function.add_all(read_plan.statements)
            function.add(Statement(f"return {read_plan.construction}", (local_target,)))
            module.add(function)

            if mapper is not None:
                mapper_type = TypeName.callable([row_store], local_target)
                declaration = f"{mapper}: {mapper_type.render()} = {read_function}"
                module.add(Statement(declaration, (mapper_type,)))

        write_plan = None
        if write_function is not None:
            writer = WritePathGenerator(
                config,
                inspector=inspector,
                allocator=allocator,
                adapters=adapters,
            )
            write_plan = writer.generate(properties)
            function = FunctionSpec(
                write_function,
                [(writer.value_name, local_target)],
                cell_map,
                docstring=f"Serialize one {target.simple_name} into content values.",
            )
            function.add(Statement(f"{writer.values_name} = {cell_map.render()}()", (cell_map,)))
            function.add_all(write_plan.statements)
            function.add(Statement(f"return {writer.values_name}"))
            module.add(function)

        return GeneratedUnit(
            target=target,
            source=module.render(),
            read_function=read_function,
            write_function=write_function,
            mapper=mapper,
            read_plan=read_plan,
            write_plan=write_plan,
        )

    def _referenced_types(
        self,
        target: TypeName,
        row_store: TypeName,
        cell_map: TypeName,
        properties: Sequence[ColumnProperty],
    ) -> list[TypeName]:
        """Types the generated module imports, which no local may shadow."""
        types = [target, row_store, cell_map, TypeName.callable([], target)]
        for prop in properties:
            types.append(prop.type_name)
            for handle in (prop.adapter, prop.values_factory):
                if handle is not None:
                    types.append(self._inspector.type_name(handle))
        return types


def _check_importable(type_name: TypeName) -> None:
    if "<locals>" in type_name.name:
        raise GenerationError(
            f"Type '{type_name.qualified_name}' is defined inside a function "
            "and can't be imported by generated code"
        )
    for arg in type_name.args:
        _check_importable(arg)


def _import_aliases(
    types: Sequence[TypeName], allocator: NameAllocator
) -> dict[tuple[str, str], str]:
    """Reserve every imported name in *allocator*.

    The first type imported under a name keeps it. A different type with the
    same name gets a fresh alias, keyed by ``(module, name)``.
    """
    owners: dict[str, tuple[str, str]] = {}
    aliases: dict[tuple[str, str], str] = {}
    for type_name in types:
        for module, name in type_name.imports():
            key = (module, name)
            if owners.get(name) == key or key in aliases:
                continue
            if name in allocator:
                aliases[key] = allocator.new_name(name)
            else:
                allocator.reserve(name)
                owners[name] = key
    return aliases


class _AliasedInspector:
    """Names types the way the unit being generated imports them."""

    def __init__(self, inspector: TypeInspector, aliases: Mapping[tuple[str, str], str]) -> None:
        self._inspector = inspector
        self._aliases = aliases

    def type_name(self, handle: Any) -> TypeName:
        return self._inspector.type_name(handle).aliased(self._aliases)

    def methods(self, handle: Any) -> list[MethodRef]:
        return self._inspector.methods(handle)
