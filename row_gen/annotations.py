"""Declaration markers for value classes.

Attach them to fields with ``typing.Annotated``::

    @dataclass(frozen=True)
    class Track:
        id: Int64
        title: Annotated[str, ColumnName("track_title")]
        cover: Annotated[Image | None, ColumnAdapter(ImageAdapter)]

The ``Int16``/``Int64``/``Float32`` types select the narrower or wider row
store accessors; plain ``int`` and ``float`` read as 32-bit integers and
doubles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

Int16 = NewType("Int16", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)


@dataclass(frozen=True)
class ColumnName:
    """Read and write the property under this column instead of its name."""

    value: str


@dataclass(frozen=True)
class ColumnAdapter:
    """Convert the property with an instance of this adapter class."""

    value: type


@dataclass(frozen=True)
class ValuesAdapter:
    """Serialize the property through a static factory returning a values map."""

    value: type
