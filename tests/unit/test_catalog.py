"""Unit tests for the type catalog."""

from __future__ import annotations

import pytest

from row_gen.annotations import Float32, Int16, Int64
from row_gen.codegen.types import TypeName
from row_gen.core.catalog import BOOLEAN, classify
from row_gen.core.config import GeneratorConfig
from row_gen.core.enums import CellKind


class TestClassify:
    @pytest.mark.parametrize(
        ("annotation", "kind"),
        [
            (str, CellKind.STRING),
            (int, CellKind.INT),
            (Int64, CellKind.LONG),
            (Int16, CellKind.SHORT),
            (Float32, CellKind.FLOAT),
            (float, CellKind.DOUBLE),
            (bool, CellKind.BOOLEAN),
            (bytes, CellKind.BLOB),
            (bytearray, CellKind.BLOB),
        ],
    )
    def test_supported_kinds(self, annotation: object, kind: CellKind) -> None:
        operations = classify(TypeName.of(annotation))
        assert operations is not None
        assert operations.kind == kind

    def test_nullable_shares_entry(self) -> None:
        assert classify(TypeName.of(int | None)) is classify(TypeName.of(int))

    @pytest.mark.parametrize("annotation", [list[int], dict[str, int], object, complex])
    def test_unsupported(self, annotation: object) -> None:
        assert classify(TypeName.of(annotation)) is None

    def test_same_name_other_module_is_unsupported(self) -> None:
        assert classify(TypeName("Int64", "somewhere.else")) is None


class TestCellOperations:
    def test_read_expression(self, config: GeneratorConfig) -> None:
        operations = classify(TypeName("str"))
        assert operations is not None
        assert operations.read_expression(config, "cursor", "3") == "cursor.get_string(3)"

    def test_boolean_narrows_int(self, config: GeneratorConfig) -> None:
        assert BOOLEAN.accessor == CellKind.INT
        assert BOOLEAN.read_expression(config, "c", "i") == "c.get_int(i) == 1"

    def test_write_statement_passes_value_through(self, config: GeneratorConfig) -> None:
        statement = BOOLEAN.write_statement(config, "values", "is_active", "value.active")
        assert statement == 'values.put("is_active", value.active)'

    def test_configured_getter_names(self) -> None:
        config = GeneratorConfig.model_validate(
            {"row_store": {"getters": {"long": "getLong"}}}
        )
        operations = classify(TypeName.of(Int64))
        assert operations is not None
        assert operations.read_expression(config, "c", "0") == "c.getLong(0)"

    def test_partial_getters_keep_defaults(self) -> None:
        config = GeneratorConfig.model_validate({"row_store": {"getters": {"long": "getLong"}}})
        operations = classify(TypeName("str"))
        assert operations is not None
        assert operations.read_expression(config, "c", "0") == "c.get_string(0)"
        assert config.row_store.getter(CellKind.INT) == "get_int"
