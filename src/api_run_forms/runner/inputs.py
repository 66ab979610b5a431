"""Turn submitted form values into structured run inputs.

Values usually arrive as strings straight from a form; each is coerced
according to its field's kind and checked against the field's
constraints. All problems are collected and reported together.
"""

import json
import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from api_run_forms.contracts import FormField, RunInputs
from api_run_forms.exceptions import InputValidationError
from api_run_forms.form.compiler import body_fields, query_fields, resolve_operation
from api_run_forms.form.fields import option_label

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"true", "1", "on", "yes"}
_FALSE_WORDS = {"false", "0", "off", "no"}


def collect_inputs(document: Any, endpoint_id: str, values: Mapping[str, Any]) -> RunInputs:
    """Coerce and validate ``values`` against the endpoint's form.

    Raises:
        InputValidationError: if any required value is missing or a value
            cannot be coerced or violates a constraint.
    """
    operation = resolve_operation(document, endpoint_id)
    if operation is None:
        return RunInputs()

    problems: list[str] = []
    params = query_fields(operation)
    query = _collect(params, values, problems)
    fields, whole_body = body_fields(operation)
    # A submitted name belongs to the query parameter when a body field shares it.
    taken = {field.name for field in params}
    shadowed = [field.name for field in fields if field.name in taken]
    if shadowed:
        logger.debug("Body fields %s shadowed by query parameters on %s", shadowed, endpoint_id)
        fields = [field for field in fields if field.name not in taken]
    body = _collect(fields, values, problems)

    if problems:
        raise InputValidationError(problems)

    inputs: dict[str, Any] = {}
    if query:
        inputs["query"] = query
    if whole_body:
        if fields and fields[0].name in body:
            inputs["body"] = body[fields[0].name]
    elif body:
        inputs["body"] = body
    return RunInputs(**inputs)


def _collect(fields: list[FormField], values: Mapping[str, Any], problems: list[str]) -> dict[str, Any]:
    collected = {}
    for field in fields:
        raw = values.get(field.name)
        if raw is None or raw == "":
            if field.required:
                problems.append(f"{field.name}: value is required")
            continue
        try:
            value = coerce_value(field, raw)
        except ValueError as e:
            problems.append(f"{field.name}: {e}")
            continue
        problems.extend(f"{field.name}: {p}" for p in check_constraints(field, value))
        collected[field.name] = value
    return collected


def coerce_value(field: FormField, raw: Any) -> Any:
    """Convert one submitted value to the type its field kind expects."""
    if field.kind == "number":
        return _to_number(raw)
    if field.kind == "boolean":
        return _to_bool(raw)
    if field.kind == "json":
        if not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON ({e.msg} at line {e.lineno})") from e
    if field.kind == "enum":
        text = raw if isinstance(raw, str) else option_label(raw)
        if text not in field.options:
            raise ValueError(f"{text!r} is not one of {', '.join(field.options)}")
        return text
    return raw if isinstance(raw, str) else str(raw)


def check_constraints(field: FormField, value: Any) -> list[str]:
    """Return the constraint violations of an already coerced value."""
    problems = []
    if field.kind == "string":
        if field.min_length is not None and len(value) < field.min_length:
            problems.append(f"must be at least {field.min_length} characters")
        if field.max_length is not None and len(value) > field.max_length:
            problems.append(f"must be at most {field.max_length} characters")
        if field.pattern is not None:
            try:
                matched = re.fullmatch(field.pattern, value)
            except re.error:
                logger.debug("Ignoring unusable pattern %r on %s", field.pattern, field.name)
            else:
                if matched is None:
                    problems.append(f"must match pattern {field.pattern}")
    elif field.kind == "number":
        if field.minimum is not None and value < field.minimum:
            problems.append(f"must be >= {field.minimum}")
        if field.maximum is not None and value > field.maximum:
            problems.append(f"must be <= {field.maximum}")
    return problems


def _to_number(raw: Any) -> int | float:
    if isinstance(raw, bool):
        raise ValueError("expected a number, got a boolean")
    if isinstance(raw, (int, float)):
        number = raw
    else:
        text = str(raw).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ValueError(f"{raw!r} is not a number") from None
    if isinstance(number, float):
        if not math.isfinite(number):
            raise ValueError(f"{raw!r} is not a finite number")
        if number.is_integer():
            return int(number)
    return number


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"{raw!r} is not a boolean")
