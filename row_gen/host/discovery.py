"""Host discovery - properties and opt-in hooks of a value class.

Supports dataclasses, Pydantic models, and plain classes. The result is a
list of ColumnProperty records plus a HostCapabilities record; nothing
downstream touches the class itself.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from row_gen.codegen.types import TypeName
from row_gen.core.config import GeneratorConfig
from row_gen.core.exceptions import DiscoveryError
from row_gen.host.inspector import ReflectionInspector, TypeInspector, find_method, has_method
from row_gen.mapping.property import ColumnProperty


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return issubclass(cls, BaseModel)


def _get_field_names(cls: type) -> list[str]:
    """Extract constructor field names from a dataclass or plain class, in order."""
    # Dataclass
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls) if f.init]

    # Plain class - use __init__ parameters
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
    except (ValueError, TypeError) as e:
        raise DiscoveryError(cls.__qualname__, str(e)) from e
    return [
        name
        for name, param in sig.parameters.items()
        if name != "self" and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


def _constructs_by_keyword(cls: type) -> bool:
    """Whether some constructor argument can only be passed by name."""
    if _is_pydantic_model(cls):
        return True
    if dataclasses.is_dataclass(cls):
        return any(f.kw_only is True for f in dataclasses.fields(cls) if f.init)
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
    except (ValueError, TypeError):
        return False
    return any(p.kind is p.KEYWORD_ONLY for p in sig.parameters.values())


def _get_hints(cls: type) -> dict[str, Any]:
    source: Any = cls if dataclasses.is_dataclass(cls) else cls.__init__  # type: ignore[misc]
    try:
        return typing.get_type_hints(source, include_extras=True)
    except (NameError, TypeError) as e:
        raise DiscoveryError(cls.__qualname__, f"unresolvable annotation: {e}") from e


def _declarations(cls: type) -> list[tuple[str, Any, tuple[Any, ...]]]:
    """Raw ``(name, annotation, metadata)`` triples in declaration order."""
    # Pydantic keeps Annotated metadata on the field, not the annotation
    if _is_pydantic_model(cls):
        return [
            (name, info.annotation, tuple(info.metadata))
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
        ]

    hints = _get_hints(cls)
    declarations = []
    for name in _get_field_names(cls):
        if name not in hints:
            raise DiscoveryError(cls.__qualname__, f"field '{name}' has no type annotation")
        declarations.append((name, hints[name], ()))
    return declarations


def discover_properties(cls: type) -> list[ColumnProperty]:
    """Build one ColumnProperty per constructor field of *cls*, in order.

    Raises:
        DiscoveryError: If a field has no annotation or it can't be resolved.
    """
    owner = TypeName.of(cls).qualified_name
    properties = []
    for name, annotation, metadata in _declarations(cls):
        try:
            properties.append(
                ColumnProperty.from_declaration(name, annotation, metadata, owner=owner)
            )
        except TypeError as e:
            raise DiscoveryError(cls.__qualname__, f"field '{name}': {e}") from e
    return properties


@dataclass(frozen=True)
class HostCapabilities:
    """Which routines a value class opts into.

    Attributes:
        reads_from_cursor: Declares a static ``(cursor) -> Self`` method.
        exposes_mapper: Declares a static ``() -> Callable[[cursor], Self]``
            method; a module-level mapper is generated as well.
        values_method: Name of an instance ``() -> cell map`` method; the
            write routine is generated under this name.
        keyword_construction: Construct the class with keyword arguments.
    """

    reads_from_cursor: bool = False
    exposes_mapper: bool = False
    values_method: str | None = None
    keyword_construction: bool = False

    @property
    def generates_read(self) -> bool:
        return self.reads_from_cursor or self.exposes_mapper

    @property
    def generates_write(self) -> bool:
        return self.values_method is not None

    @property
    def applicable(self) -> bool:
        return self.generates_read or self.generates_write


def inspect_host(
    cls: type,
    config: GeneratorConfig | None = None,
    inspector: TypeInspector | None = None,
) -> HostCapabilities:
    """Query *cls* for the hook methods that opt into generated routines."""
    config = config or GeneratorConfig()
    inspector = inspector or ReflectionInspector()
    target = inspector.type_name(cls)
    row_store = TypeName.parse(config.row_store.type)
    cell_map = TypeName.parse(config.cell_map.type)

    reads = has_method(inspector, cls, static=True, takes=(row_store,), returns=target)
    mapper = has_method(
        inspector,
        cls,
        static=True,
        takes=(),
        returns=TypeName.callable([row_store], target),
    )
    values = find_method(inspector, cls, static=False, takes=(), returns=cell_map)

    return HostCapabilities(
        reads_from_cursor=reads,
        exposes_mapper=mapper,
        values_method=values.name if values is not None else None,
        keyword_construction=_constructs_by_keyword(cls),
    )
