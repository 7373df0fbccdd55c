"""Identifier allocation for generated source."""

from __future__ import annotations

import json
import keyword
import re
from collections.abc import Hashable

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_INVALID_CHARS = re.compile(r"\W")


def snake_case(name: str) -> str:
    """Convert a class name to a variable name: ``FooAdapter`` -> ``foo_adapter``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def to_identifier(suggestion: str) -> str:
    """Turn an arbitrary string into a valid Python identifier."""
    name = _INVALID_CHARS.sub("_", suggestion)
    if not name or name[0].isdigit():
        name = "_" + name
    return name


def string_literal(value: str) -> str:
    """Render a double-quoted Python string literal."""
    return json.dumps(value, ensure_ascii=False)


class NameAllocator:
    """Hands out identifiers that are unique within one generated unit.

    Every name used by generated code (parameters, locals, module-level
    bindings, imported names) goes through one allocator, so a name derived
    from an adapter can never shadow a property local and vice versa.
    Collisions and keywords are resolved by appending ``_``.
    """

    def __init__(self) -> None:
        self._allocated: set[str] = set()
        self._tags: dict[Hashable, str] = {}

    def new_name(self, suggestion: str, tag: Hashable | None = None) -> str:
        """Allocate a fresh name derived from *suggestion*.

        Raises:
            ValueError: If *tag* was already used.
        """
        if tag is not None and tag in self._tags:
            raise ValueError(f"Tag {tag!r} is already bound to '{self._tags[tag]}'")

        name = to_identifier(suggestion)
        while keyword.iskeyword(name) or name in self._allocated:
            name += "_"

        self._allocated.add(name)
        if tag is not None:
            self._tags[tag] = name
        return name

    def reserve(self, name: str) -> None:
        """Mark *name* as taken without binding it to a tag."""
        self._allocated.add(name)

    def get(self, tag: Hashable) -> str:
        """Return the name bound to *tag*.

        Raises:
            KeyError: If nothing was allocated for *tag*.
        """
        try:
            return self._tags[tag]
        except KeyError:
            raise KeyError(f"No name allocated for tag {tag!r}") from None

    def get_or_new(self, tag: Hashable, suggestion: str) -> str:
        if tag in self._tags:
            return self._tags[tag]
        return self.new_name(suggestion, tag)

    def __contains__(self, name: object) -> bool:
        return name in self._allocated
