"""Load OpenAPI YAML documents into the Document model.

Discovers documents under a root directory, parses their text with PyYAML
and extracts servers, operations and component schemas.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import yaml

from .errors import ParseFailure, SchemaShapeFailure
from .filesystem import FileSystem
from .model import Document, Operation, Parameter, SchemaNode
from .schema_parser import parse_schema

DEFAULT_EXTENSIONS: tuple[str, ...] = (".yml", ".yaml")

DocumentParser = Callable[[str], Document]


def discover_documents(
    fs: FileSystem,
    root: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Return every file under ``root`` whose suffix is a known extension."""
    return [path for path in fs.walk(root) if path.suffix in extensions]


def load_spec(text: str) -> dict[str, Any]:
    """Parse YAML text into the raw spec mapping."""
    try:
        spec = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseFailure(f"invalid YAML: {exc}") from exc
    if not isinstance(spec, dict):
        raise ParseFailure("document root is not a mapping")
    return spec


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    paths = spec.get("paths") or {}
    if not isinstance(paths, dict):
        raise ParseFailure("'paths' is not a mapping")
    return paths


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    components = spec.get("components") or {}
    if not isinstance(components, dict):
        raise ParseFailure("'components' is not a mapping")
    schemas = components.get("schemas") or {}
    if not isinstance(schemas, dict):
        raise ParseFailure("'components.schemas' is not a mapping")
    return schemas


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any] | None:
    """Resolve a same-document ``#/...`` pointer, or None if it dangles."""
    if not ref.startswith("#/"):
        return None
    node: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, dict) else None


def _get_servers(spec: dict[str, Any]) -> tuple[str, ...]:
    servers = spec.get("servers") or []
    if not isinstance(servers, list):
        return ()
    return tuple(
        server["url"]
        for server in servers
        if isinstance(server, dict) and isinstance(server.get("url"), str)
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _parse_parameters(
    spec: dict[str, Any],
    raw_params: Any,
    location: str,
    issues: list[SchemaShapeFailure],
) -> tuple[Parameter, ...]:
    if not isinstance(raw_params, list):
        return ()
    params = []
    for index, raw in enumerate(raw_params):
        if isinstance(raw, dict) and isinstance(raw.get("$ref"), str):
            resolved = resolve_ref(spec, raw["$ref"])
            if resolved is None:
                issues.append(SchemaShapeFailure(f"unresolved parameter {raw['$ref']!r}", f"{location}[{index}]"))
                continue
            raw = resolved
        if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
            issues.append(SchemaShapeFailure("parameter without a name", f"{location}[{index}]"))
            continue
        params.append(Parameter(
            name=raw["name"],
            location=_text(raw.get("in")),
            required=bool(raw.get("required", False)),
        ))
    return tuple(params)


def _parse_operation(
    spec: dict[str, Any],
    path: str,
    method: str,
    raw: dict[str, Any],
    issues: list[SchemaShapeFailure],
) -> Operation:
    operation_id = raw.get("operationId")
    return Operation(
        path=path,
        method=method,
        operation_id=str(operation_id) if operation_id not in (None, "") else None,
        summary=_text(raw.get("summary")),
        description=_text(raw.get("description")),
        parameters=_parse_parameters(
            spec, raw.get("parameters"), f"paths.{path}.{method}.parameters", issues,
        ),
    )


def build_document(spec: dict[str, Any]) -> Document:
    """Convert a raw spec mapping into a Document."""
    issues: list[SchemaShapeFailure] = []

    paths: dict[str, dict[str, Operation]] = {}
    for path, path_item in get_paths(spec).items():
        if not isinstance(path_item, dict):
            issues.append(SchemaShapeFailure("path item is not a mapping", f"paths.{path}"))
            continue
        operations = {
            str(method): _parse_operation(spec, str(path), str(method), operation, issues)
            for method, operation in path_item.items()
            if isinstance(operation, dict)
        }
        paths[str(path)] = operations

    schemas: dict[str, SchemaNode] = {
        str(name): parse_schema(raw, f"components.schemas.{name}", issues)
        for name, raw in get_schemas(spec).items()
    }

    info = spec.get("info") if isinstance(spec.get("info"), dict) else {}
    return Document(
        servers=_get_servers(spec),
        paths=paths,
        schemas=schemas,
        title=_text(info.get("title")),
        issues=tuple(issues),
    )


def parse_document(text: str) -> Document:
    """Default DocumentParser: YAML text -> Document."""
    return build_document(load_spec(text))
