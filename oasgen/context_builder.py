"""Build Jinja2 template contexts from a parsed Document.

Models: one ModelContext per component schema (enum alias, interface or
plain alias) with its import list.

Client: analyzes every path/method pair into a GeneratedMethod (path
params, query params, method name, doc lines) and assembles the
ClientContext for client.ts.j2.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import PurePath

from .model import Composite, Document, EnumOf, ObjectInline, Operation, SchemaNode
from .naming import build_method_name, client_class_name, path_parameters, to_identifier
from .schema_parser import merge_names, property_key, resolve_type

# HTTP methods that produce client methods; anything else (head, options, ...) is skipped
SUPPORTED_METHODS = ("get", "post", "put", "delete", "patch")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldContext:
    key: str
    type: str
    optional: bool


@dataclass(frozen=True)
class ModelContext:
    """Everything needed to render one models/<Name>.ts file."""

    name: str
    kind: str  # enum / interface / alias
    expression: str = ""
    imports: tuple[str, ...] = ()
    extends: tuple[str, ...] = ()
    fields: tuple[FieldContext, ...] = ()


def _fields(obj: ObjectInline, owner: str) -> tuple[tuple[FieldContext, ...], tuple[str, ...]]:
    fields = []
    references: tuple[str, ...] = ()
    for name, prop in obj.properties:
        resolved = resolve_type(prop, owner)
        fields.append(FieldContext(property_key(name), resolved.expression, not obj.is_required(name)))
        references = merge_names(references, resolved.references)
    return tuple(fields), references


def build_model_context(name: str, node: SchemaNode) -> ModelContext:
    """Describe the declaration emitted for schema ``name``."""
    match node:
        case EnumOf():
            return ModelContext(name, "enum", expression=resolve_type(node, name).expression)
        case ObjectInline():
            fields, references = _fields(node, name)
            return ModelContext(name, "interface", imports=references, fields=fields)
        case Composite(bases=bases, inline=inline):
            fields, references = _fields(inline, name)
            # an interface cannot extend itself
            base_names = merge_names(tuple(base.name for base in bases if base.name != name))
            imports = merge_names(base_names, references)
            return ModelContext(name, "interface", imports=imports, extends=base_names, fields=fields)
    resolved = resolve_type(node, name)
    return ModelContext(name, "alias", expression=resolved.expression, imports=resolved.references)


def build_model_contexts(document: Document) -> list[ModelContext]:
    """One ModelContext per schema, in document order."""
    return [build_model_context(name, node) for name, node in document.schemas.items()]


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PathParam:
    token: str
    identifier: str

    @property
    def placeholder(self) -> str:
        return "{" + self.token + "}"


@dataclass(frozen=True)
class GeneratedMethod:
    name: str
    http_method: str
    path: str
    path_params: tuple[PathParam, ...] = ()
    query_params: tuple[str, ...] = ()
    summary: str = ""
    description: str = ""

    @property
    def has_query_params(self) -> bool:
        return bool(self.query_params)

    @property
    def signature(self) -> str:
        """Argument list: path params, then the optional query object."""
        params = [f"{p.identifier}: string | number" for p in self.path_params]
        if self.query_params:
            keys = merge_names(self.query_params)
            params.append("queryParams?: { " + "; ".join(f"{property_key(k)}?: any" for k in keys) + " }")
        return ", ".join(params)

    @property
    def doc_lines(self) -> list[str]:
        lines = _doc_text(self.summary) or [f"{self.http_method.upper()} {self.path}"]
        lines.extend(_doc_text(self.description))
        lines.extend(f"@param {p.identifier} Path parameter" for p in self.path_params)
        if self.query_params:
            lines.append("@param queryParams Query parameters")
        lines.append(f"@returns URL for the {self.name} endpoint")
        return lines


def _doc_text(text: str) -> list[str]:
    """Split free text into comment-safe, non-empty lines."""
    return [line.strip().replace("*/", "*\\/") for line in text.strip().splitlines() if line.strip()]


def analyze_operation(operation: Operation) -> GeneratedMethod:
    """Derive the client method for one path/method pair."""
    method = operation.method.lower()
    return GeneratedMethod(
        name=build_method_name(method, operation.path, operation.operation_id),
        http_method=method,
        path=operation.path,
        path_params=tuple(PathParam(token, to_identifier(token)) for token in path_parameters(operation.path)),
        query_params=tuple(p.name for p in operation.parameters if p.location == "query"),
        summary=operation.summary,
        description=operation.description,
    )


def analyze_operations(document: Document) -> list[GeneratedMethod]:
    """Analyze every supported operation in document order."""
    return [
        analyze_operation(operation)
        for operation in document.operations()
        if operation.method.lower() in SUPPORTED_METHODS
    ]


def deduplicate_method_names(methods: list[GeneratedMethod]) -> tuple[list[GeneratedMethod], list[str]]:
    """Suffix repeated method names with 2, 3, ... in document order.

    Returns the renamed methods and one message per rename.
    """
    taken = {m.name for m in methods}
    seen: set[str] = set()
    result = []
    renames = []
    for method in methods:
        if method.name not in seen:
            seen.add(method.name)
            result.append(method)
            continue
        counter = 2
        while f"{method.name}{counter}" in taken:
            counter += 1
        new_name = f"{method.name}{counter}"
        taken.add(new_name)
        seen.add(new_name)
        renames.append(f"{method.http_method.upper()} {method.path}: method {method.name} renamed to {new_name}")
        result.append(replace(method, name=new_name))
    return result, renames


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClientContext:
    class_name: str
    file_name: str
    base_url: str
    methods: tuple[GeneratedMethod, ...] = ()
    renames: tuple[str, ...] = ()


def build_client_context(document: Document, document_path: str | PurePath) -> ClientContext:
    """Assemble the client class context for one document."""
    methods, renames = deduplicate_method_names(analyze_operations(document))
    return ClientContext(
        class_name=client_class_name(document_path),
        file_name=PurePath(document_path).stem,
        base_url=document.base_url,
        methods=tuple(methods),
        renames=tuple(renames),
    )
