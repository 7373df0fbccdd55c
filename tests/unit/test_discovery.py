"""Unit tests for host discovery."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from row_gen.annotations import Int64
from row_gen.codegen.types import TypeName
from row_gen.core.config import GeneratorConfig
from row_gen.core.exceptions import AdapterConflictError, DiscoveryError
from row_gen.host.discovery import HostCapabilities, discover_properties, inspect_host
from sample_models import (
    Bounds,
    Conflicted,
    Coordinates,
    DateAdapter,
    Event,
    KeywordOnlyPair,
    Pair,
    PartlyKeywordOnly,
    Reminder,
    TaggedItem,
    Track,
    Unmapped,
    User,
)


@dataclass
class WithDerivedField:
    a: int
    total: int = field(init=False, default=0)


class Untyped:
    def __init__(self, a, b: int) -> None:  # noqa: ANN001
        self.a = a
        self.b = b


@dataclass
class Dangling:
    a: NotDefinedAnywhere  # noqa: F821


class TestDiscoverProperties:
    def test_dataclass_order(self) -> None:
        names = [p.human_name for p in discover_properties(Track)]
        assert names == [
            "id",
            "title",
            "duration",
            "track_number",
            "rating",
            "score",
            "explicit",
            "cover",
            "album",
        ]

    def test_dataclass_markers(self) -> None:
        props = {p.human_name: p for p in discover_properties(Track)}
        assert props["id"].type_name == TypeName.of(Int64)
        assert props["album"].column_name == "album_title"
        assert props["album"].nullable
        assert props["cover"].nullable

    def test_adapters(self) -> None:
        props = discover_properties(Event)
        assert [p.adapter for p in props] == [None, DateAdapter, DateAdapter]

    def test_site_names_owner(self) -> None:
        props = discover_properties(Pair)
        assert str(props[0].site) == "sample_models.Pair.a"

    def test_pydantic_model(self) -> None:
        props = {p.human_name: p for p in discover_properties(User)}
        assert list(props) == ["id", "name", "email"]
        assert props["id"].type_name == TypeName.of(Int64)
        assert props["name"].column_name == "user_name"
        assert props["email"].nullable

    def test_plain_class(self) -> None:
        props = discover_properties(Coordinates)
        assert [(p.human_name, p.type_name) for p in props] == [
            ("lat", TypeName("float")),
            ("lng", TypeName("float")),
        ]

    def test_init_false_fields_skipped(self) -> None:
        assert [p.human_name for p in discover_properties(WithDerivedField)] == ["a"]

    def test_missing_annotation(self) -> None:
        with pytest.raises(DiscoveryError, match="field 'a' has no type annotation"):
            discover_properties(Untyped)

    def test_unresolvable_annotation(self) -> None:
        with pytest.raises(DiscoveryError, match="unresolvable annotation"):
            discover_properties(Dangling)

    def test_adapter_conflict_propagates(self) -> None:
        with pytest.raises(AdapterConflictError):
            discover_properties(Conflicted)


class TestInspectHost:
    def test_read_and_write_hooks(self) -> None:
        capabilities = inspect_host(Track)
        assert capabilities.reads_from_cursor
        assert not capabilities.exposes_mapper
        assert capabilities.values_method == "to_content_values"
        assert not capabilities.keyword_construction

    def test_mapper_hook(self) -> None:
        assert inspect_host(Event).exposes_mapper

    def test_write_hook_name(self) -> None:
        capabilities = inspect_host(Reminder)
        assert capabilities.values_method == "as_values"
        assert not capabilities.generates_read
        assert capabilities.generates_write

    def test_write_only(self) -> None:
        capabilities = inspect_host(TaggedItem)
        assert capabilities.generates_write
        assert not capabilities.generates_read

    def test_pydantic_uses_keywords(self) -> None:
        assert inspect_host(User).keyword_construction

    @pytest.mark.parametrize("cls", [KeywordOnlyPair, PartlyKeywordOnly, Bounds])
    def test_keyword_only_arguments_use_keywords(self, cls: type) -> None:
        assert inspect_host(cls).keyword_construction

    def test_positional_plain_class(self) -> None:
        assert not inspect_host(Coordinates).keyword_construction

    def test_not_applicable(self) -> None:
        capabilities = inspect_host(Unmapped)
        assert capabilities == HostCapabilities()
        assert not capabilities.applicable

    def test_hooks_follow_configured_types(self) -> None:
        config = GeneratorConfig.model_validate({"row_store": {"type": "other.Cursor"}})
        capabilities = inspect_host(Track, config)
        assert not capabilities.reads_from_cursor
        assert capabilities.generates_write
