"""Generator configuration.

GeneratorConfig is a Pydantic model. The row-store and cell-map types the
generated code talks to are injected here as qualified names, together with
the method names they expose, so the engine never hard-codes them.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from row_gen.core.enums import CellKind
from row_gen.core.exceptions import ConfigError

_DEFAULT_GETTERS: dict[CellKind, str] = {
    CellKind.STRING: "get_string",
    CellKind.INT: "get_int",
    CellKind.LONG: "get_long",
    CellKind.SHORT: "get_short",
    CellKind.FLOAT: "get_float",
    CellKind.DOUBLE: "get_double",
    CellKind.BLOB: "get_blob",
}


class RowStoreConfig(BaseModel):
    """The cursor-like type generated read code consumes."""

    type: str = "row_gen.runtime.protocol.Cursor"
    index_or_throw: str = "get_column_index_or_throw"
    index: str = "get_column_index"
    is_null: str = "is_null"
    missing_index: int = -1
    getters: dict[CellKind, str] = Field(default_factory=lambda: dict(_DEFAULT_GETTERS))

    @field_validator("getters", mode="before")
    @classmethod
    def merge_default_getters(cls, value: Any) -> Any:
        # Configured getters override the defaults one kind at a time
        if not isinstance(value, dict):
            return value
        merged: dict[str, Any] = {kind.value: getter for kind, getter in _DEFAULT_GETTERS.items()}
        for kind, getter in value.items():
            merged[kind.value if isinstance(kind, CellKind) else kind] = getter
        return merged

    def getter(self, kind: CellKind) -> str:
        try:
            return self.getters[kind]
        except KeyError:
            raise ConfigError(f"No row-store getter configured for {kind.value} cells") from None


class CellMapConfig(BaseModel):
    """The map type generated write code fills."""

    type: str = "row_gen.runtime.protocol.ContentValues"
    put: str = "put"
    put_all: str = "put_all"


class AdapterContractConfig(BaseModel):
    """Method names a column adapter class must define."""

    read_method: str = "from_cursor"
    write_method: str = "to_content_values"


class GeneratorConfig(BaseModel):
    """Configuration for generated mapping modules."""

    row_store: RowStoreConfig = Field(default_factory=RowStoreConfig)
    cell_map: CellMapConfig = Field(default_factory=CellMapConfig)
    adapter: AdapterContractConfig = Field(default_factory=AdapterContractConfig)
    read_function: str = "create_from_cursor"
    mapper_name: str = "MAPPER"
    cursor_param: str = "cursor"
    value_param: str = "value"
    values_var: str = "values"

    @classmethod
    def from_toml(cls, path: Path | str) -> GeneratorConfig:
        """Load configuration from a TOML file.

        Keys may live at the top level or under a ``[tool.row-gen]`` table,
        so the file can be a project's pyproject.toml.

        Raises:
            ConfigError: If the file can't be read, has a ``[tool]`` table
                without ``row-gen``, or fails validation.
        """
        path = Path(path)
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Cannot read config file '{path}': {e}") from e

        if "tool" not in data:
            section = data
        elif isinstance(data["tool"], dict) and "row-gen" in data["tool"]:
            section = data["tool"]["row-gen"]
        else:
            raise ConfigError(f"No [tool.row-gen] table in '{path}'")
        try:
            return cls.model_validate(section)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in '{path}': {e}") from e
