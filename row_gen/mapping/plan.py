"""Generator output data classes.

Frozen dataclasses describing generated routines. The code emission layer
turns them into source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from row_gen.codegen.code import Assignment, Statement
from row_gen.codegen.types import TypeName


@dataclass(frozen=True)
class AdapterBinding:
    """One shared adapter instance of a generated unit."""

    adapter: type
    type_name: TypeName
    name: str

    def instantiation(self) -> Statement:
        return Statement(f"{self.name} = {self.type_name.render()}()", (self.type_name,))


@dataclass(frozen=True)
class ReadPlan:
    """Statements reconstructing a value object from a row.

    ``adapters`` are instantiated before any of ``statements``; the
    ``construction`` expression comes last.
    """

    adapters: tuple[AdapterBinding, ...]
    statements: tuple[Assignment, ...]
    construction: str
    target: TypeName
    arguments: tuple[str, ...] = field(default=())


@dataclass(frozen=True)
class WritePlan:
    """Statements serializing a value object into a cell map."""

    adapters: tuple[AdapterBinding, ...]
    statements: tuple[Statement, ...]
