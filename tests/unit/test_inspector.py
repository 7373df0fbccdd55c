"""Unit tests for host type inspection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from row_gen.codegen.types import TypeName
from row_gen.host.inspector import ReflectionInspector, TypeInspector, find_method, has_method
from sample_models import DateAdapter, Event, TagsFactory

CURSOR = TypeName("Cursor", "row_gen.runtime.protocol")
CONTENT_VALUES = TypeName("ContentValues", "row_gen.runtime.protocol")


class Base:
    def shared(self) -> int:
        return 1

    def overridden(self) -> int:
        return 1


class Derived(Base):
    def overridden(self) -> str:
        return ""

    @classmethod
    def build(cls, raw: str) -> Derived:
        return cls()

    def untyped(self, raw):  # noqa: ANN001, ANN201
        return raw

    def variadic(self, *args: int) -> None:
        pass


class Abstract(ABC):
    @abstractmethod
    def load(self) -> date: ...


class Unresolvable:
    def broken(self) -> MissingType:  # noqa: F821
        raise NotImplementedError


class TestReflectionInspector:
    def test_is_type_inspector(self) -> None:
        assert isinstance(ReflectionInspector(), TypeInspector)

    def test_instance_method_drops_self(self) -> None:
        methods = {m.name: m for m in ReflectionInspector().methods(DateAdapter)}
        read = methods["from_cursor"]
        assert read.params == (CURSOR, TypeName("str"))
        assert read.returns == TypeName.of(date)
        assert not read.static

    def test_staticmethod(self) -> None:
        methods = {m.name: m for m in ReflectionInspector().methods(TagsFactory)}
        factory = methods["to_values"]
        assert factory.static
        assert factory.params == (TypeName.of(list[str]),)
        assert factory.returns == CONTENT_VALUES

    def test_classmethod_counts_as_static(self) -> None:
        methods = {m.name: m for m in ReflectionInspector().methods(Derived)}
        assert methods["build"].static
        assert methods["build"].params == (TypeName("str"),)

    def test_most_derived_override_wins(self) -> None:
        methods = {m.name: m for m in ReflectionInspector().methods(Derived)}
        assert methods["overridden"].returns == TypeName("str")
        assert methods["overridden"].owner == TypeName.of(Derived)
        assert "shared" in methods

    def test_untyped_and_variadic_skipped(self) -> None:
        names = {m.name for m in ReflectionInspector().methods(Derived)}
        assert "untyped" not in names
        assert "variadic" not in names

    def test_abstract_method_listed(self) -> None:
        methods = {m.name: m for m in ReflectionInspector().methods(Abstract)}
        assert methods["load"].returns == TypeName.of(date)

    def test_unresolvable_hints_skipped(self) -> None:
        assert ReflectionInspector().methods(Unresolvable) == []

    def test_callable_return(self) -> None:
        methods = {m.name: m for m in ReflectionInspector().methods(Event)}
        expected = TypeName.callable([CURSOR], TypeName.of(Event))
        assert methods["mapper"].returns == expected


class TestFindMethod:
    def test_exact_shape(self) -> None:
        inspector = ReflectionInspector()
        found = find_method(
            inspector,
            DateAdapter,
            static=False,
            takes=(CURSOR, TypeName("str")),
            returns=TypeName.of(date),
        )
        assert found is not None
        assert found.name == "from_cursor"

    def test_static_flag_must_match(self) -> None:
        assert not has_method(
            ReflectionInspector(),
            TagsFactory,
            static=False,
            takes=(TypeName.of(list[str]),),
            returns=CONTENT_VALUES,
        )

    def test_nullability_must_match(self) -> None:
        assert not has_method(
            ReflectionInspector(),
            DateAdapter,
            static=False,
            takes=(CURSOR, TypeName("str")),
            returns=TypeName.of(date | None),
        )

    def test_name_filter(self) -> None:
        assert not has_method(
            ReflectionInspector(),
            DateAdapter,
            static=False,
            name="read",
            takes=(CURSOR, TypeName("str")),
            returns=TypeName.of(date),
        )
