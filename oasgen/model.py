"""In-memory model of a parsed OpenAPI document.

Schema nodes are a closed set of frozen dataclasses; the resolver in
schema_parser switches over them with ``match``. All collections are tuples
in document order so every walk over the model is deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .errors import SchemaShapeFailure

# Scalar values allowed inside an ``enum`` list
EnumValue = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Primitive:
    """A scalar schema. ``kind`` is the raw OpenAPI ``type`` (None if absent)."""

    kind: str | None = None
    format: str | None = None


@dataclass(frozen=True)
class ArrayOf:
    items: SchemaNode | None = None


@dataclass(frozen=True)
class ObjectInline:
    properties: tuple[tuple[str, SchemaNode], ...] = ()
    required: tuple[str, ...] = ()

    def is_required(self, name: str) -> bool:
        return name in self.required


@dataclass(frozen=True)
class Ref:
    """Reference to a named schema of the same document."""

    name: str


@dataclass(frozen=True)
class EnumOf:
    values: tuple[EnumValue, ...] = ()


@dataclass(frozen=True)
class Composite:
    """``allOf`` composition: inherited ``$ref`` bases plus merged inline parts."""

    bases: tuple[Ref, ...] = ()
    inline: ObjectInline = field(default_factory=ObjectInline)


SchemaNode = Union[Primitive, ArrayOf, ObjectInline, Ref, EnumOf, Composite]

# Degraded node for anything that does not match a known shape
OPAQUE = Primitive()


@dataclass(frozen=True)
class Parameter:
    name: str
    location: str  # path / query / header / cookie
    required: bool = False


@dataclass(frozen=True)
class Operation:
    path: str
    method: str
    operation_id: str | None = None
    summary: str = ""
    description: str = ""
    parameters: tuple[Parameter, ...] = ()


@dataclass(frozen=True)
class Document:
    """One parsed OpenAPI document."""

    servers: tuple[str, ...] = ()
    paths: dict[str, dict[str, Operation]] = field(default_factory=dict)
    schemas: dict[str, SchemaNode] = field(default_factory=dict)
    title: str = ""
    issues: tuple[SchemaShapeFailure, ...] = ()

    @property
    def base_url(self) -> str:
        """First server URL, or an empty string."""
        return self.servers[0] if self.servers else ""

    def operations(self) -> list[Operation]:
        """All operations in document order, regardless of method."""
        return [op for methods in self.paths.values() for op in methods.values()]
