"""Mapping layer - decide how each property maps to a storage cell."""

from __future__ import annotations

from row_gen.mapping.adapters import AdapterResolver
from row_gen.mapping.plan import AdapterBinding, ReadPlan, WritePlan
from row_gen.mapping.property import ColumnProperty, DeclarationSite
from row_gen.mapping.read import ReadPathGenerator, generate_read
from row_gen.mapping.write import WritePathGenerator, generate_write

__all__ = [
    "ColumnProperty",
    "DeclarationSite",
    "AdapterResolver",
    "AdapterBinding",
    "ReadPathGenerator",
    "WritePathGenerator",
    "ReadPlan",
    "WritePlan",
    "generate_read",
    "generate_write",
]
