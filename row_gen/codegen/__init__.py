"""Code emission - type names, identifier allocation, statement builder."""

from __future__ import annotations

from row_gen.codegen.code import Assignment, FunctionSpec, ModuleSpec, Statement
from row_gen.codegen.names import NameAllocator, snake_case, string_literal
from row_gen.codegen.types import TypeName

__all__ = [
    "TypeName",
    "NameAllocator",
    "snake_case",
    "string_literal",
    "Statement",
    "Assignment",
    "FunctionSpec",
    "ModuleSpec",
]
