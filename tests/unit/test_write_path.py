"""Unit tests for the write-path generator."""

from __future__ import annotations

from datetime import date
from typing import Annotated

import pytest

from row_gen.annotations import ColumnAdapter, ColumnName, Float32, ValuesAdapter
from row_gen.codegen.types import TypeName
from row_gen.core.config import GeneratorConfig
from row_gen.core.exceptions import AdapterContractViolationError, UnsupportedTypeError
from row_gen.mapping.property import ColumnProperty
from row_gen.mapping.write import WritePathGenerator, generate_write
from sample_models import DateAdapter, NotAFactory, ReadOnlyDateAdapter, TagsFactory


def _props(*declarations: tuple[str, object]) -> list[ColumnProperty]:
    return [
        ColumnProperty.from_declaration(name, annotation, owner="pkg.models.Test")
        for name, annotation in declarations
    ]


def _code(props: list[ColumnProperty]) -> list[str]:
    return [statement.code for statement in generate_write(props).statements]


class TestWritePathGenerator:
    def test_native_kinds(self) -> None:
        props = _props(("id", int), ("title", str), ("rating", Float32), ("cover", bytes))
        assert _code(props) == [
            'values.put("id", value.id)',
            'values.put("title", value.title)',
            'values.put("rating", value.rating)',
            'values.put("cover", value.cover)',
        ]

    def test_boolean_written_unchanged(self) -> None:
        assert _code(_props(("active", bool))) == ['values.put("active", value.active)']

    def test_nullable_written_directly(self) -> None:
        assert _code(_props(("note", str | None))) == ['values.put("note", value.note)']

    def test_column_override(self) -> None:
        props = _props(("b", Annotated[str | None, ColumnName("column_b")]))
        assert _code(props) == ['values.put("column_b", value.b)']

    def test_unsupported_fails(self) -> None:
        with pytest.raises(UnsupportedTypeError, match="can't be put into content values"):
            generate_write(_props(("a", list[int] | None)))

    def test_adapter(self) -> None:
        props = _props(
            ("starts", Annotated[date, ColumnAdapter(DateAdapter)]),
            ("ends", Annotated[date, ColumnAdapter(DateAdapter)]),
        )
        plan = generate_write(props)
        assert [b.name for b in plan.adapters] == ["date_adapter"]
        assert [s.code for s in plan.statements] == [
            'date_adapter.to_content_values(values, "starts", value.starts)',
            'date_adapter.to_content_values(values, "ends", value.ends)',
        ]

    def test_adapter_without_write_method(self) -> None:
        props = _props(("due", Annotated[date, ColumnAdapter(ReadOnlyDateAdapter)]))
        with pytest.raises(AdapterContractViolationError, match="to_content_values"):
            generate_write(props)

    def test_values_factory_merges_non_empty(self) -> None:
        props = _props(("id", int), ("tags", Annotated[list[str], ValuesAdapter(TagsFactory)]))
        plan = generate_write(props)
        assert [s.code for s in plan.statements] == [
            'values.put("id", value.id)',
            "tags_values = TagsFactory.to_values(value.tags)",
            "if tags_values:\n    values.put_all(tags_values)",
        ]
        assert list(plan.statements[1].referenced_types()) == [TypeName.of(TagsFactory)]

    def test_values_factory_needs_static_method(self) -> None:
        props = _props(("tags", Annotated[list[str], ValuesAdapter(NotAFactory)]))
        with pytest.raises(AdapterContractViolationError) as exc_info:
            generate_write(props)
        assert exc_info.value.method_shape == "static method"
        assert "taking 'list[str]' and returning 'ContentValues'" in str(exc_info.value)

    def test_names(self, config: GeneratorConfig) -> None:
        generator = WritePathGenerator(config)
        assert generator.value_name == "value"
        assert generator.values_name == "values"

    def test_configured_put(self) -> None:
        config = GeneratorConfig.model_validate(
            {"value_param": "obj", "values_var": "cv", "cell_map": {"put": "set"}}
        )
        plan = WritePathGenerator(config).generate(_props(("a", int)))
        assert plan.statements[0].code == 'cv.set("a", obj.a)'
