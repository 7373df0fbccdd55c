"""Adapter resolution.

Validates column adapter classes against the read/write contract and binds
each distinct adapter class to one local name, in first-seen order.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from row_gen.codegen.names import NameAllocator, snake_case
from row_gen.codegen.types import TypeName
from row_gen.core.config import GeneratorConfig
from row_gen.core.exceptions import AdapterContractViolationError
from row_gen.host.inspector import TypeInspector, find_method
from row_gen.mapping.plan import AdapterBinding
from row_gen.mapping.property import ColumnProperty

logger = structlog.get_logger(__name__)

_NONE = TypeName("None")
_STR = TypeName("str")


class AdapterResolver:
    """Resolves the column adapters used by a list of properties.

    Args:
        config: Generator configuration (adapter method names, row-store
            and cell-map types).
        inspector: Capability query over adapter classes.
        allocator: Name allocator of the unit being generated.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        inspector: TypeInspector,
        allocator: NameAllocator,
    ) -> None:
        self._config = config
        self._inspector = inspector
        self._allocator = allocator
        self._row_store = TypeName.parse(config.row_store.type)
        self._cell_map = TypeName.parse(config.cell_map.type)

    def resolve(
        self,
        properties: Sequence[ColumnProperty],
        *,
        read: bool = True,
        write: bool = True,
    ) -> dict[type, AdapterBinding]:
        """Validate adapters and bind each distinct class once.

        Args:
            properties: Properties in declaration order.
            read: Require the read method on every adapter.
            write: Require the write method on every adapter.

        Returns:
            Adapter class -> binding, ordered by first use.

        Raises:
            AdapterContractViolationError: If an adapter lacks a required
                method shape. Attached to the first property using it.
        """
        bindings: dict[type, AdapterBinding] = {}
        for prop in properties:
            if prop.adapter is None:
                continue
            if read:
                self._require_read(prop)
            if write:
                self._require_write(prop)

            if prop.adapter not in bindings:
                type_name = self._inspector.type_name(prop.adapter)
                name = self._allocator.new_name(
                    snake_case(type_name.simple_name), ("adapter", prop.adapter)
                )
                bindings[prop.adapter] = AdapterBinding(prop.adapter, type_name, name)
                logger.debug("adapter_bound", adapter=type_name.qualified_name, binding=name)
        return bindings

    def _require_read(self, prop: ColumnProperty) -> None:
        method = self._config.adapter.read_method
        takes = (self._row_store, _STR)
        if find_method(
            self._inspector,
            prop.adapter,
            static=False,
            name=method,
            takes=takes,
            returns=prop.type_name,
        ):
            return
        raise AdapterContractViolationError(
            self._inspector.type_name(prop.adapter).qualified_name,
            "public method",
            f"'{method}(self, cursor: {self._row_store.render()}, column_name: str)"
            f" -> {prop.type_name.render()}'",
            prop.site,
        )

    def _require_write(self, prop: ColumnProperty) -> None:
        method = self._config.adapter.write_method
        takes = (self._cell_map, _STR, prop.type_name)
        if find_method(
            self._inspector,
            prop.adapter,
            static=False,
            name=method,
            takes=takes,
            returns=_NONE,
        ):
            return
        raise AdapterContractViolationError(
            self._inspector.type_name(prop.adapter).qualified_name,
            "public method",
            f"'{method}(self, values: {self._cell_map.render()}, column_name: str,"
            f" value: {prop.type_name.render()}) -> None'",
            prop.site,
        )
