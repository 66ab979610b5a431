"""Form model generation from OpenAPI operations.

Converts an endpoint's query parameters and JSON request body into a
:class:`~api_run_forms.contracts.FormModel`: query parameter fields come
first, in document order, followed by the body fields. A body that
:func:`~api_run_forms.form.complexity.is_complex` rejects becomes a single
raw JSON ``body`` field instead of one field per property.

Nothing here raises on a malformed document; unresolvable endpoints and
unusable entries just produce fewer fields.
"""

import logging
from collections.abc import Mapping
from typing import Any

from api_run_forms.contracts import FormField, FormModel
from api_run_forms.parser.reader import (
    as_list,
    as_mapping,
    get_operation,
    get_parameters,
    get_request_body,
    get_request_body_schema,
)

from .complexity import is_complex
from .fields import to_field

logger = logging.getLogger(__name__)

BODY_FIELD_NAME = "body"
BODY_FIELD_LABEL = "Request Body (JSON)"


def split_endpoint_id(endpoint_id: str) -> tuple[str, str]:
    """Split ``"POST /users"`` into method and path at the first space.

    Everything after the first space is the path, spaces included.
    """
    method, _, path = endpoint_id.partition(" ")
    return method, path


def resolve_operation(document: Any, endpoint_id: str) -> Mapping | None:
    method, path = split_endpoint_id(endpoint_id)
    if not method or not path:
        logger.debug("Malformed endpoint id %r", endpoint_id)
        return None
    operation = get_operation(document, path, method)
    if operation is None:
        logger.debug("No operation found for %r", endpoint_id)
    return operation


def compile_form(document: Any, endpoint_id: str) -> FormModel:
    """Generate the form model for one endpoint of an OpenAPI document.

    Example::

        model = compile_form(spec, "POST /users")
        # FormModel(endpoint_id="POST /users", fields=[...])
    """
    operation = resolve_operation(document, endpoint_id)
    if operation is None:
        return FormModel(endpoint_id=endpoint_id, fields=[])

    fields = query_fields(operation)
    body, _ = body_fields(operation)
    clashes = {f.name for f in fields} & {f.name for f in body}
    if clashes:
        logger.debug("%s: body fields %s share names with query parameters", endpoint_id, sorted(clashes))
    fields.extend(body)
    return FormModel(endpoint_id=endpoint_id, fields=fields)


def query_fields(operation: Mapping) -> list[FormField]:
    """One field per usable ``in: query`` parameter, in document order."""
    fields = []
    for param in get_parameters(operation) or ():
        param = as_mapping(param)
        if param is None or param.get("in") != "query":
            continue
        name = param.get("name")
        schema = as_mapping(param.get("schema"))
        if not isinstance(name, str) or schema is None:
            logger.debug("Skipping query parameter without name or schema: %r", param)
            continue
        fields.append(to_field(name, schema, param.get("required") is True))
    return fields


def body_fields(operation: Mapping) -> tuple[list[FormField], bool]:
    """Fields for the JSON request body.

    Returns the fields and whether they stand for the whole body (the
    single raw JSON fallback field) rather than one property each.
    """
    request_body = get_request_body(operation)
    schema = get_request_body_schema(request_body)
    if schema is None:
        return [], False

    if is_complex(schema):
        field = FormField(
            name=BODY_FIELD_NAME,
            label=BODY_FIELD_LABEL,
            kind="json",
            required=request_body.get("required") is True,
        )
        return [field], True

    properties = as_mapping(schema.get("properties"))
    if properties is None:
        return [], False
    required = as_list(schema.get("required")) or ()

    fields = []
    for prop_name, prop_schema in properties.items():
        prop_schema = as_mapping(prop_schema)
        if prop_schema is None:
            continue
        fields.append(to_field(str(prop_name), prop_schema, prop_name in required))
    return fields, False
