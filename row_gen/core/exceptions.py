"""RowGen exception hierarchy.

Generation errors carry the declaration site of the offending property so
that tooling can point the author at the right line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from row_gen.mapping.property import DeclarationSite


class RowGenError(Exception):
    """Base exception for all RowGen errors."""


# --- Generation ---


class GenerationError(RowGenError):
    """Base for errors that abort code generation."""

    def __init__(self, message: str, site: DeclarationSite | None = None) -> None:
        self.site = site
        if site is not None:
            message = f"{site}: {message}"
        super().__init__(message)


class UnsupportedTypeError(GenerationError):
    """Raised when a property's type can't be read from or written to a cell."""

    def __init__(
        self,
        property_name: str,
        type_name: str,
        operation: str = "read",
        site: DeclarationSite | None = None,
    ) -> None:
        self.property_name = property_name
        self.type_name = type_name
        self.operation = operation
        super().__init__(self._describe(), site)

    def _describe(self) -> str:
        if self.operation == "write":
            return (
                f"Property '{self.property_name}' has type '{self.type_name}' "
                "that can't be put into content values"
            )
        return (
            f"Property '{self.property_name}' has type '{self.type_name}' "
            "that can't be read from cursor"
        )


class UnsupportedTypeWithExplicitColumnError(UnsupportedTypeError):
    """Raised when an unsupported property is explicitly mapped to a column."""

    def __init__(
        self,
        property_name: str,
        type_name: str,
        column_name: str,
        operation: str = "read",
        site: DeclarationSite | None = None,
    ) -> None:
        self.column_name = column_name
        super().__init__(property_name, type_name, operation, site)

    def _describe(self) -> str:
        return (
            f"Property '{self.property_name}' is mapped to column "
            f"'{self.column_name}' but its type '{self.type_name}' is not supported"
        )


class AdapterContractViolationError(GenerationError):
    """Raised when an adapter class lacks a required method shape."""

    def __init__(
        self,
        adapter_name: str,
        method_shape: str,
        expected: str,
        site: DeclarationSite | None = None,
    ) -> None:
        self.adapter_name = adapter_name
        self.method_shape = method_shape
        self.expected = expected
        super().__init__(
            f"Class '{adapter_name}' needs to define a {method_shape} {expected}",
            site,
        )


class AdapterConflictError(GenerationError):
    """Raised when a property declares both a column adapter and a values factory."""

    def __init__(self, property_name: str, site: DeclarationSite | None = None) -> None:
        self.property_name = property_name
        super().__init__(
            f"Property '{property_name}' can't use a column adapter and a "
            "values factory at the same time",
            site,
        )


# --- Discovery ---


class DiscoveryError(RowGenError):
    """Raised when the properties of a value class can't be discovered."""

    def __init__(self, class_name: str, detail: str) -> None:
        self.class_name = class_name
        super().__init__(f"Cannot discover properties of {class_name}: {detail}")


# --- Configuration ---


class ConfigError(RowGenError):
    """Raised when generator configuration can't be loaded or validated."""


# --- Runtime ---


class ColumnNotFoundError(RowGenError):
    """Raised by a cursor when a required column is missing."""

    def __init__(self, column_name: str, available: list[str]) -> None:
        self.column_name = column_name
        self.available = available
        super().__init__(f"Column '{column_name}' does not exist. Available columns: {available}")
