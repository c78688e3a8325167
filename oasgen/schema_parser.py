"""Turn raw OpenAPI schemas into SchemaNodes and SchemaNodes into TS types.

Handles:
- $ref (same-document, last path segment is the schema name)
- enum literal unions
- allOf composition ($ref bases + merged inline object parts)
- nested objects and arrays
- string date/date-time formats -> Date
- malformed nodes degrade to ``any`` and are recorded as issues
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import SchemaShapeFailure
from .model import (
    OPAQUE,
    ArrayOf,
    Composite,
    EnumOf,
    ObjectInline,
    Primitive,
    Ref,
    SchemaNode,
)
from .naming import is_identifier

_DATE_FORMATS = frozenset({"date", "date-time"})
_NUMERIC_KINDS = frozenset({"number", "integer"})

ANY = "any"
EMPTY_OBJECT = "Record<string, any>"


@dataclass(frozen=True)
class ResolvedType:
    """A TypeScript type expression and the schema names it depends on."""

    expression: str
    references: tuple[str, ...] = ()


def ref_name(ref: str) -> str:
    """``#/components/schemas/User`` -> ``User``."""
    return ref.rstrip("/").split("/")[-1]


def merge_names(*groups: tuple[str, ...]) -> tuple[str, ...]:
    """Concatenate name groups keeping first occurrences only."""
    merged: list[str] = []
    for group in groups:
        for name in group:
            if name not in merged:
                merged.append(name)
    return tuple(merged)


# ---------------------------------------------------------------------------
# Raw dict -> SchemaNode
# ---------------------------------------------------------------------------

def parse_schema(
    raw: Any,
    location: str,
    issues: list[SchemaShapeFailure] | None = None,
    ancestors: frozenset[int] = frozenset(),
) -> SchemaNode:
    """Parse a raw schema, degrading malformed parts to ``any``.

    Shape failures are appended to ``issues`` instead of being raised, so a
    single bad property never costs the rest of the schema. ``ancestors``
    holds the ids of the raw mappings on the current path.
    """
    try:
        return _parse_node(raw, location, issues, ancestors)
    except SchemaShapeFailure as exc:
        if issues is not None:
            issues.append(exc)
        return OPAQUE


def _parse_node(
    raw: Any,
    location: str,
    issues: list[SchemaShapeFailure] | None,
    ancestors: frozenset[int],
) -> SchemaNode:
    if not isinstance(raw, dict):
        raise SchemaShapeFailure(f"expected a mapping, got {type(raw).__name__}", location)

    # YAML aliases can make a mapping contain itself
    if id(raw) in ancestors:
        raise SchemaShapeFailure("schema contains itself through a YAML alias", location)
    ancestors = ancestors | {id(raw)}

    if "$ref" in raw:
        return _parse_ref(raw["$ref"], location)

    if "enum" in raw:
        return _parse_enum(raw["enum"], location)

    if "allOf" in raw:
        return _parse_all_of(raw, location, issues, ancestors)

    schema_type = raw.get("type")
    if schema_type is not None and not isinstance(schema_type, str):
        # e.g. OpenAPI 3.1 type lists; not part of the supported subset
        return Primitive()

    if schema_type == "array":
        items = raw.get("items")
        if items is None:
            return ArrayOf()
        return ArrayOf(parse_schema(items, f"{location}.items", issues, ancestors))

    if schema_type == "object" or "properties" in raw:
        return _parse_object(raw, location, issues, ancestors)

    fmt = raw.get("format")
    return Primitive(schema_type, fmt if isinstance(fmt, str) else None)


def _parse_ref(ref: Any, location: str) -> Ref:
    if not isinstance(ref, str) or not ref_name(ref):
        raise SchemaShapeFailure(f"invalid $ref {ref!r}", location)
    return Ref(ref_name(ref))


def _parse_enum(values: Any, location: str) -> EnumOf:
    if not isinstance(values, list):
        raise SchemaShapeFailure("enum must be a list", location)
    for value in values:
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise SchemaShapeFailure(f"unsupported enum value {value!r}", location)
    return EnumOf(tuple(values))


def _parse_required(raw: dict[str, Any], location: str) -> tuple[str, ...]:
    required = raw.get("required", [])
    if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
        raise SchemaShapeFailure("required must be a list of names", location)
    return tuple(required)


def _parse_object(
    raw: dict[str, Any],
    location: str,
    issues: list[SchemaShapeFailure] | None,
    ancestors: frozenset[int],
) -> ObjectInline:
    properties = raw.get("properties") or {}
    if not isinstance(properties, dict):
        raise SchemaShapeFailure("properties must be a mapping", location)

    parsed = tuple(
        (str(name), parse_schema(prop, f"{location}.properties.{name}", issues, ancestors))
        for name, prop in properties.items()
    )
    return ObjectInline(parsed, _parse_required(raw, location))


def _parse_all_of(
    raw: dict[str, Any],
    location: str,
    issues: list[SchemaShapeFailure] | None,
    ancestors: frozenset[int],
) -> Composite:
    parts = raw["allOf"]
    if not isinstance(parts, list):
        raise SchemaShapeFailure("allOf must be a list", location)

    bases: list[Ref] = []
    properties: dict[str, SchemaNode] = {}
    required = list(_parse_required(raw, location))

    # Sibling properties next to allOf are merged like an inline part
    if "properties" in raw:
        sibling = _parse_object(raw, location, issues, ancestors)
        properties.update(sibling.properties)

    for index, part in enumerate(parts):
        part_location = f"{location}.allOf[{index}]"
        node = parse_schema(part, part_location, issues, ancestors)
        match node:
            case Ref():
                bases.append(node)
            case ObjectInline(properties=props, required=part_required):
                properties.update(props)
                required.extend(r for r in part_required if r not in required)
            case _:
                if node is not OPAQUE and issues is not None:
                    issues.append(SchemaShapeFailure("allOf part is neither a $ref nor an object", part_location))

    return Composite(tuple(bases), ObjectInline(tuple(properties.items()), tuple(required)))


# ---------------------------------------------------------------------------
# SchemaNode -> TypeScript type
# ---------------------------------------------------------------------------

def enum_literal(value: Any) -> str:
    """Render one enum value as a TypeScript literal type."""
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def property_key(name: str) -> str:
    """Quote property names that are not bare identifiers."""
    if is_identifier(name):
        return name
    return enum_literal(name)


def _primitive_type(kind: str | None, fmt: str | None) -> str:
    if kind == "string":
        return "Date" if fmt in _DATE_FORMATS else "string"
    if kind in _NUMERIC_KINDS:
        return "number"
    if kind == "boolean":
        return "boolean"
    return ANY


def _inline_object(obj: ObjectInline, owner: str) -> ResolvedType:
    if not obj.properties:
        return ResolvedType(EMPTY_OBJECT)
    fields = []
    references: tuple[str, ...] = ()
    for name, prop in obj.properties:
        resolved = resolve_type(prop, owner)
        fields.append(f"{property_key(name)}: {resolved.expression}")
        references = merge_names(references, resolved.references)
    return ResolvedType("{ " + "; ".join(fields) + " }", references)


def resolve_type(node: SchemaNode | None, owner: str) -> ResolvedType:
    """Map a schema node to a TypeScript type expression.

    ``owner`` is the schema being emitted; a reference to it is a
    self-reference and is not reported as a dependency. References are
    never followed into the target schema, so resolution only walks the
    node's own tree.
    """
    match node:
        case None:
            return ResolvedType(ANY)
        case EnumOf(values=values):
            if not values:
                return ResolvedType("never")
            return ResolvedType(" | ".join(enum_literal(v) for v in values))
        case Ref(name=name):
            return ResolvedType(name, () if name == owner else (name,))
        case ArrayOf(items=items):
            element = resolve_type(items, owner)
            expression = element.expression
            if " | " in expression or " & " in expression:
                expression = f"({expression})"
            return ResolvedType(f"{expression}[]", element.references)
        case ObjectInline():
            return _inline_object(node, owner)
        case Composite(bases=bases, inline=inline):
            parts = [base.name for base in bases]
            references = merge_names(tuple(b.name for b in bases if b.name != owner))
            if inline.properties or not parts:
                body = _inline_object(inline, owner)
                parts.append(body.expression)
                references = merge_names(references, body.references)
            return ResolvedType(" & ".join(parts), references)
        case Primitive(kind=kind, format=fmt):
            return ResolvedType(_primitive_type(kind, fmt))
    return ResolvedType(ANY)
