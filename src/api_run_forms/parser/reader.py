"""Guarded accessors over an untrusted OpenAPI document.

Uploaded documents are arbitrary JSON values. Each accessor narrows one
level of the document and returns ``None`` when that level is missing or
has the wrong shape, so callers compose them with early returns and a
malformed document simply yields nothing.
"""

from collections.abc import Mapping
from typing import Any

# HTTP methods recognized as operations under a path item
HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head", "trace")

JSON_CONTENT_TYPE = "application/json"


def as_mapping(value: Any) -> Mapping | None:
    """Return ``value`` if it is a mapping, else ``None``."""
    return value if isinstance(value, Mapping) else None


def as_list(value: Any) -> list | tuple | None:
    """Return ``value`` if it is a list or tuple, else ``None``."""
    return value if isinstance(value, (list, tuple)) else None


def is_http_method(key: Any) -> bool:
    return isinstance(key, str) and key.lower() in HTTP_METHODS


def get_paths(document: Any) -> Mapping | None:
    doc = as_mapping(document)
    if doc is None:
        return None
    return as_mapping(doc.get("paths"))


def get_path_item(document: Any, path: str) -> Mapping | None:
    paths = get_paths(document)
    if paths is None:
        return None
    return as_mapping(paths.get(path))


def get_operation(document: Any, path: str, method: str) -> Mapping | None:
    """Resolve the operation object for ``method`` under ``path``.

    The lowercase key is tried first; otherwise any recognized method key
    matching case-insensitively is accepted, mirroring how endpoints are
    listed.
    """
    if not is_http_method(method):
        return None
    path_item = get_path_item(document, path)
    if path_item is None:
        return None

    wanted = method.lower()
    operation = path_item.get(wanted)
    if operation is None:
        for key, value in path_item.items():
            if isinstance(key, str) and key.lower() == wanted:
                operation = value
                break
    return as_mapping(operation)


def get_parameters(operation: Any) -> list | tuple | None:
    op = as_mapping(operation)
    if op is None:
        return None
    return as_list(op.get("parameters"))


def get_request_body(operation: Any) -> Mapping | None:
    op = as_mapping(operation)
    if op is None:
        return None
    return as_mapping(op.get("requestBody"))


def get_request_body_schema(request_body: Any) -> Mapping | None:
    """Return ``content["application/json"].schema`` of a request body."""
    body = as_mapping(request_body)
    if body is None:
        return None
    content = as_mapping(body.get("content"))
    if content is None:
        return None
    json_content = as_mapping(content.get(JSON_CONTENT_TYPE))
    if json_content is None:
        return None
    return as_mapping(json_content.get("schema"))


def get_string(obj: Any, key: str) -> str | None:
    """Return ``obj[key]`` when ``obj`` is a mapping and the value a string."""
    mapping = as_mapping(obj)
    if mapping is None:
        return None
    value = mapping.get(key)
    return value if isinstance(value, str) else None
