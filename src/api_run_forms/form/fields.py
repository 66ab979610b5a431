"""Map a JSON Schema fragment to a single form field.

**Kind selection** (first match wins):

* a non-empty ``enum`` list gives ``enum`` with one string option per value;
* ``boolean`` gives ``boolean``;
* ``number`` and ``integer`` give ``number``;
* ``object`` and ``array`` give ``json`` (edited as raw JSON, never split);
* anything else, including a missing ``type``, gives ``string``.

Constraints are copied only onto the kind they apply to: length and
pattern onto ``string``, bounds onto ``number``.
"""

import json
import re
from collections.abc import Mapping
from typing import Any

from api_run_forms.contracts import FieldKind, FormField
from api_run_forms.parser.reader import as_mapping

_STRING_CONSTRAINTS = (("minLength", "min_length"), ("maxLength", "max_length"))
_NUMBER_CONSTRAINTS = (("minimum", "minimum"), ("maximum", "maximum"))

_WORD_START_RE = re.compile(r"\b\w", re.ASCII)

UNNAMED_LABEL = "Unnamed field"


def to_field(name: str, schema: Mapping, required: bool) -> FormField:
    """Build the :class:`FormField` for ``name`` described by ``schema``."""
    schema = as_mapping(schema) or {}
    kind, options = _select_kind(schema)

    attrs: dict[str, Any] = {
        "name": name,
        "label": field_label(name, schema),
        "kind": kind,
        "required": required,
    }
    if "default" in schema:
        attrs["default_value"] = schema["default"]
    if options is not None:
        attrs["options"] = options

    if kind == "string":
        for key, attr in _STRING_CONSTRAINTS:
            if _is_number(schema.get(key)):
                attrs[attr] = schema[key]
        if isinstance(schema.get("pattern"), str):
            attrs["pattern"] = schema["pattern"]
    elif kind == "number":
        for key, attr in _NUMBER_CONSTRAINTS:
            if _is_number(schema.get(key)):
                attrs[attr] = schema[key]

    return FormField(**attrs)


def field_label(name: str, schema: Mapping) -> str:
    """Pick ``description``, then ``title``, then a humanized ``name``."""
    for key in ("description", "title"):
        text = schema.get(key)
        if isinstance(text, str) and text:
            return text
    return humanize(name) or UNNAMED_LABEL


def humanize(name: str) -> str:
    """``"max_page_size"`` -> ``"Max Page Size"``."""
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), name.replace("_", " "))


def option_label(value: Any) -> str:
    """String form of an enum value, spelled the way JSON spells scalars."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _select_kind(schema: Mapping) -> tuple[FieldKind, list[str] | None]:
    enum_values = schema.get("enum")
    if isinstance(enum_values, list) and enum_values:
        return "enum", [option_label(v) for v in enum_values]

    schema_type = schema.get("type")
    if schema_type == "boolean":
        return "boolean", None
    if schema_type in ("number", "integer"):
        return "number", None
    if schema_type in ("object", "array"):
        return "json", None
    return "string", None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
