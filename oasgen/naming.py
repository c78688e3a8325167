"""Identifier helpers shared by the model and client emitters.

Operation identifiers come from ``operationId`` when present, otherwise
from the path template:

  /users              -> users
  /users/{id}         -> usersBy
  /users/{id}/posts   -> usersByposts

Client method names are the lowercase HTTP verb followed by the
PascalCased identifier, even when the identifier already holds a verb:

  GET    /users/{id}              -> getUsersBy
  POST   /users (id: createUser)  -> postCreateUser
"""

from __future__ import annotations

import re
from pathlib import PurePath

_SEPARATOR_RUN = re.compile(r"[-_\s]+(.)")
_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")
_PATH_TOKEN = re.compile(r"\{([^}]+)\}")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def camel_case(value: str) -> str:
    """Lower the first character and fold ``-``/``_``/space runs into capitals."""
    if not value:
        return ""
    rest = _SEPARATOR_RUN.sub(lambda m: m.group(1).upper(), value[1:])
    return value[0].lower() + _NON_ALPHANUMERIC.sub("", rest)


def pascal_case(value: str) -> str:
    camel = camel_case(value)
    return camel[:1].upper() + camel[1:]


def is_identifier(name: str) -> bool:
    """True when ``name`` can be used bare as a TypeScript identifier or key."""
    return bool(_IDENTIFIER.match(name))


def to_identifier(name: str) -> str:
    """Return ``name`` unchanged if valid, otherwise a camelCased identifier."""
    if is_identifier(name):
        return name
    ident = _NON_ALPHANUMERIC.sub("", camel_case(name))
    if not ident or ident[0].isdigit():
        ident = f"_{ident}"
    return ident


def path_parameters(path: str) -> list[str]:
    """``{token}`` names in first-occurrence order, duplicates folded."""
    seen: list[str] = []
    for token in _PATH_TOKEN.findall(path):
        if token not in seen:
            seen.append(token)
    return seen


def derive_operation_id(path: str) -> str:
    """Build an identifier from a path: ``{x}`` becomes ``By``, then non-alphanumerics go."""
    return _NON_ALPHANUMERIC.sub("", _PATH_TOKEN.sub("By", path))


def build_method_name(method: str, path: str, operation_id: str | None = None) -> str:
    """Client method name for an operation, e.g. ``getUsersBy``."""
    identifier = operation_id or derive_operation_id(path)
    return method.lower() + pascal_case(identifier)


def client_class_name(document_path: str | PurePath) -> str:
    """``pet-store.yaml`` -> ``PetStoreClient``."""
    return pascal_case(PurePath(document_path).stem) + "Client"
