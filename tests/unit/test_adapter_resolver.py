"""Unit tests for AdapterResolver."""

from __future__ import annotations

from datetime import date
from typing import Annotated

import pytest

from row_gen.annotations import ColumnAdapter
from row_gen.codegen.names import NameAllocator
from row_gen.core.config import GeneratorConfig
from row_gen.core.exceptions import AdapterContractViolationError
from row_gen.host.inspector import ReflectionInspector
from row_gen.mapping.adapters import AdapterResolver
from row_gen.mapping.property import ColumnProperty
from sample_models import DateAdapter, ReadOnlyDateAdapter, WrongReturnAdapter


def _prop(name: str, adapter: type, annotation: object = date) -> ColumnProperty:
    return ColumnProperty.from_declaration(
        name, Annotated[annotation, ColumnAdapter(adapter)], owner="pkg.Row"
    )


@pytest.fixture
def resolver(config: GeneratorConfig) -> AdapterResolver:
    return AdapterResolver(config, ReflectionInspector(), NameAllocator())


class TestAdapterResolver:
    def test_binds_each_class_once(self, resolver: AdapterResolver) -> None:
        props = [_prop("starts", DateAdapter), _prop("ends", DateAdapter)]
        bindings = resolver.resolve(props)
        assert list(bindings) == [DateAdapter]
        assert bindings[DateAdapter].name == "date_adapter"

    def test_first_seen_order(self, resolver: AdapterResolver) -> None:
        props = [
            _prop("due", ReadOnlyDateAdapter),
            _prop("plain", DateAdapter),
        ]
        bindings = resolver.resolve(props, write=False)
        assert list(bindings) == [ReadOnlyDateAdapter, DateAdapter]
        assert [b.name for b in bindings.values()] == [
            "read_only_date_adapter",
            "date_adapter",
        ]

    def test_properties_without_adapter_ignored(self, resolver: AdapterResolver) -> None:
        assert resolver.resolve([ColumnProperty.from_declaration("a", int)]) == {}

    def test_binding_avoids_taken_names(self, config: GeneratorConfig) -> None:
        allocator = NameAllocator()
        allocator.reserve("date_adapter")
        resolver = AdapterResolver(config, ReflectionInspector(), allocator)
        bindings = resolver.resolve([_prop("due", DateAdapter)])
        assert bindings[DateAdapter].name == "date_adapter_"

    def test_instantiation(self, resolver: AdapterResolver) -> None:
        binding = resolver.resolve([_prop("due", DateAdapter)])[DateAdapter]
        statement = binding.instantiation()
        assert statement.code == "date_adapter = DateAdapter()"
        assert [t.qualified_name for t in statement.referenced_types()] == [
            "sample_models.DateAdapter"
        ]

    def test_missing_write_method(self, resolver: AdapterResolver) -> None:
        with pytest.raises(AdapterContractViolationError) as exc_info:
            resolver.resolve([_prop("due", ReadOnlyDateAdapter)])
        error = exc_info.value
        assert error.adapter_name == "sample_models.ReadOnlyDateAdapter"
        assert "to_content_values(self, values: ContentValues" in error.expected
        assert str(error.site) == "pkg.Row.due"

    def test_read_only_when_write_not_needed(self, resolver: AdapterResolver) -> None:
        bindings = resolver.resolve([_prop("due", ReadOnlyDateAdapter)], write=False)
        assert ReadOnlyDateAdapter in bindings

    def test_return_type_must_match_property(self, resolver: AdapterResolver) -> None:
        with pytest.raises(AdapterContractViolationError, match="public method 'from_cursor"):
            resolver.resolve([_prop("due", WrongReturnAdapter)], write=False)

    def test_nullable_property_needs_nullable_adapter(self, resolver: AdapterResolver) -> None:
        with pytest.raises(AdapterContractViolationError, match=r"-> date \| None"):
            resolver.resolve([_prop("due", DateAdapter, date | None)], write=False)
