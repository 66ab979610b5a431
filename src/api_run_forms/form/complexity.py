"""Decide whether a request-body schema can be flattened into form fields."""

from collections.abc import Mapping

from api_run_forms.parser.reader import as_mapping

_COMBINATORS = ("oneOf", "anyOf", "allOf")


def is_complex(schema: Mapping) -> bool:
    """Return True when the body should be edited as raw JSON instead.

    A body is complex when it is a ``oneOf``/``anyOf``/``allOf``
    composition, when a nested object's own properties are objects or
    arrays (three levels of nesting), or when a property is an array of
    structured objects.
    """
    if any(_is_set(schema.get(key)) for key in _COMBINATORS):
        return True

    if schema.get("type") != "object":
        return False
    properties = as_mapping(schema.get("properties"))
    if properties is None:
        return False

    for prop in properties.values():
        prop = as_mapping(prop)
        if prop is None:
            continue
        if _has_structured_children(prop):
            return True
        if _is_array_of_objects(prop):
            return True

    return False


def _is_set(value) -> bool:
    # Containers count even when empty; scalars only when truthy.
    return isinstance(value, (Mapping, list, tuple)) or bool(value)


def _is_object_with_properties(schema: Mapping | None) -> bool:
    return (
        schema is not None
        and schema.get("type") == "object"
        and as_mapping(schema.get("properties")) is not None
    )


def _has_structured_children(prop: Mapping) -> bool:
    if not _is_object_with_properties(prop):
        return False
    for nested in prop["properties"].values():
        nested = as_mapping(nested)
        if nested is not None and nested.get("type") in ("object", "array"):
            return True
    return False


def _is_array_of_objects(prop: Mapping) -> bool:
    if prop.get("type") != "array":
        return False
    return _is_object_with_properties(as_mapping(prop.get("items")))
