"""Type names for generated source.

A TypeName is an immutable description of a Python annotation that can be
compared, rendered as source text, and asked which imports it needs.
"""

from __future__ import annotations

import types
import typing
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

BUILTINS = "builtins"

# Pseudo-module for names that are syntax rather than importable objects
# ("..." and the parameter list of a Callable).
_SYNTAX = ""
_PARAMS = "[]"


@dataclass(frozen=True)
class TypeName:
    """A rendered-able, comparable reference to a Python type."""

    name: str
    module: str = BUILTINS
    args: tuple[TypeName, ...] = ()
    nullable: bool = False
    # Local name the root is imported under when its own name is taken.
    alias: str | None = field(default=None, compare=False)

    @classmethod
    def of(cls, annotation: Any) -> TypeName:
        """Build a TypeName from a resolved annotation.

        ``Annotated`` metadata is dropped; callers that need it read it
        before converting.
        """
        if annotation is None or annotation is type(None):
            return cls("None")
        if annotation is Ellipsis:
            return cls("...", _SYNTAX)
        if isinstance(annotation, list):
            return cls(_PARAMS, _SYNTAX, tuple(cls.of(a) for a in annotation))
        if isinstance(annotation, typing.ForwardRef | str):
            raise TypeError(f"Unresolved forward reference: {annotation!r}")

        origin = typing.get_origin(annotation)
        if origin is typing.Annotated:
            return cls.of(typing.get_args(annotation)[0])
        if origin is typing.Union or origin is types.UnionType:
            return cls._of_union(typing.get_args(annotation))
        if origin is not None:
            base = cls._of_class(origin)
            return replace(base, args=tuple(cls.of(a) for a in typing.get_args(annotation)))
        if annotation is Any:
            return cls("Any", "typing")
        if isinstance(annotation, typing.NewType):
            return cls(annotation.__name__, annotation.__module__)
        return cls._of_class(annotation)

    @classmethod
    def parse(cls, qualified_name: str) -> TypeName:
        """Build a TypeName from a dotted name such as ``pkg.module.Cursor``."""
        module, _, name = qualified_name.rpartition(".")
        return cls(name, module or BUILTINS)

    @classmethod
    def callable(cls, params: list[TypeName], returns: TypeName) -> TypeName:
        return cls(
            "Callable",
            "collections.abc",
            (cls(_PARAMS, _SYNTAX, tuple(params)), returns),
        )

    @classmethod
    def _of_class(cls, obj: Any) -> TypeName:
        name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
        if name is None:
            raise TypeError(f"Cannot name annotation {obj!r}")
        return cls(name, getattr(obj, "__module__", BUILTINS) or BUILTINS)

    @classmethod
    def _of_union(cls, members: tuple[Any, ...]) -> TypeName:
        non_null = [m for m in members if m is not type(None)]
        nullable = len(non_null) != len(members)
        if len(non_null) == 1:
            return replace(cls.of(non_null[0]), nullable=nullable)
        return cls("Union", "typing", tuple(cls.of(m) for m in non_null), nullable)

    @property
    def qualified_name(self) -> str:
        if self.module in (BUILTINS, _SYNTAX):
            return self.name
        return f"{self.module}.{self.name}"

    @property
    def simple_name(self) -> str:
        return self.name.rpartition(".")[2]

    @property
    def root_name(self) -> str:
        """First segment of the name, the one an import statement binds."""
        return self.name.partition(".")[0]

    def non_null(self) -> TypeName:
        return replace(self, nullable=False) if self.nullable else self

    def aliased(self, aliases: Mapping[tuple[str, str], str]) -> TypeName:
        """Apply import aliases, keyed by ``(module, root name)``, throughout.

        Names without an entry lose any alias they had.
        """
        return replace(
            self,
            args=tuple(arg.aliased(aliases) for arg in self.args),
            alias=aliases.get((self.module, self.root_name)),
        )

    def render(self) -> str:
        """Render as annotation source text, e.g. ``list[int] | None``."""
        if self.name == _PARAMS and self.module == _SYNTAX:
            text = "[" + ", ".join(a.render() for a in self.args) + "]"
        elif self.name == "Union" and self.module == "typing":
            text = " | ".join(a.render() for a in self.args)
        elif self.args:
            text = f"{self._local_name()}[{', '.join(a.render() for a in self.args)}]"
        else:
            text = self._local_name()
        if self.nullable:
            text += " | None"
        return text

    def _local_name(self) -> str:
        if self.alias is None:
            return self.name
        return self.alias + self.name[len(self.root_name) :]

    def imports(self) -> Iterator[tuple[str, str]]:
        """Yield ``(module, name)`` pairs needed to use this type in source.

        An aliased name is yielded as ``"Name as Alias"``.
        """
        if self.module not in (BUILTINS, _SYNTAX) and not (
            self.name == "Union" and self.module == "typing"
        ):
            if self.alias is None:
                yield self.module, self.root_name
            else:
                yield self.module, f"{self.root_name} as {self.alias}"
        for arg in self.args:
            yield from arg.imports()

    def __str__(self) -> str:
        # Diagnostics name types as declared, not as imported.
        return self.aliased({}).render()
