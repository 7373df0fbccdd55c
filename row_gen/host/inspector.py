"""Host type inspection.

The mapping engine never reflects on classes itself. It asks a
TypeInspector for the methods a class declares, as plain MethodRef records,
and matches them by shape.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import structlog

from row_gen.codegen.types import TypeName

logger = structlog.get_logger(__name__)

# Base classes from these packages never declare hook or adapter methods.
_FRAMEWORK_MODULES = frozenset({"typing", "abc", "pydantic"})


@dataclass(frozen=True)
class MethodRef:
    """A method declared by a host class, reduced to its typed shape."""

    owner: TypeName
    name: str
    params: tuple[TypeName, ...]
    returns: TypeName
    static: bool = False


@runtime_checkable
class TypeInspector(Protocol):
    """Capability query over host types."""

    def type_name(self, handle: Any) -> TypeName:
        """Name of the type behind *handle*."""
        ...

    def methods(self, handle: Any) -> list[MethodRef]:
        """Typed methods declared by *handle*, in declaration order."""
        ...


def find_method(
    inspector: TypeInspector,
    handle: Any,
    *,
    static: bool,
    takes: Sequence[TypeName],
    returns: TypeName,
    name: str | None = None,
) -> MethodRef | None:
    """Return the first method of *handle* with exactly this shape, or None."""
    expected = tuple(takes)
    for method in inspector.methods(handle):
        if name is not None and method.name != name:
            continue
        if method.static != static:
            continue
        if method.params == expected and method.returns == returns:
            return method
    return None


def has_method(
    inspector: TypeInspector,
    handle: Any,
    *,
    static: bool,
    takes: Sequence[TypeName],
    returns: TypeName,
    name: str | None = None,
) -> bool:
    return (
        find_method(inspector, handle, static=static, takes=takes, returns=returns, name=name)
        is not None
    )


class ReflectionInspector:
    """TypeInspector for Python classes, based on ``inspect`` and type hints.

    Methods without complete annotations are skipped since they can't match
    any shape. Both ``staticmethod`` and ``classmethod`` count as static.
    """

    def type_name(self, handle: Any) -> TypeName:
        return TypeName.of(handle)

    def methods(self, handle: Any) -> list[MethodRef]:
        owner = self.type_name(handle)
        seen: set[str] = set()
        result: list[MethodRef] = []
        for klass in inspect.getmro(handle):
            if klass is object or klass.__module__.partition(".")[0] in _FRAMEWORK_MODULES:
                continue
            for attr_name, raw in vars(klass).items():
                if attr_name in seen:
                    continue
                # An override hides the base method even when it is untyped
                seen.add(attr_name)
                method = self._method_ref(owner, attr_name, raw)
                if method is not None:
                    result.append(method)
        return result

    def _method_ref(self, owner: TypeName, name: str, raw: Any) -> MethodRef | None:
        static = isinstance(raw, staticmethod | classmethod)
        func = raw.__func__ if static else raw
        if not inspect.isfunction(func):
            return None

        try:
            hints = typing.get_type_hints(func)
        except (NameError, TypeError, AttributeError) as e:
            logger.debug("method_hints_unresolved", owner=str(owner), method=name, error=str(e))
            return None

        try:
            params = list(inspect.signature(func).parameters.values())
        except (ValueError, TypeError):
            return None
        if isinstance(raw, classmethod) or not static:
            params = params[1:]
        if any(p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD) for p in params):
            return None
        if "return" not in hints or any(p.name not in hints for p in params):
            return None

        try:
            param_types = tuple(TypeName.of(hints[p.name]) for p in params)
            return_type = TypeName.of(hints["return"])
        except TypeError as e:
            logger.debug("method_hints_unnamed", owner=str(owner), method=name, error=str(e))
            return None

        return MethodRef(
            owner=owner,
            name=name,
            params=param_types,
            returns=return_type,
            static=static,
        )
