"""Load OpenAPI documents from JSON or YAML files."""

import json
from pathlib import Path
from typing import Any

import yaml

from api_run_forms.exceptions import DocumentLoadError


def load_document(file_path: Path) -> Any:
    """Read and parse an OpenAPI document.

    YAML is tried first (it also accepts most JSON); plain JSON is the
    fallback for files YAML rejects, such as tab-indented JSON.
    The result is not validated: any JSON value may come back.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Cannot read {file_path}: {e}") from e

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as yaml_error:
        try:
            return json.loads(text)
        except ValueError:
            raise DocumentLoadError(
                f"{file_path} is neither valid YAML nor JSON: {yaml_error}"
            ) from yaml_error


def is_openapi_document(document: Any) -> bool:
    """Check for the ``openapi`` / ``swagger`` version marker."""
    return isinstance(document, dict) and ("openapi" in document or "swagger" in document)


def detect_format(file_path: Path) -> str:
    """Detect whether a file holds an OpenAPI document.

    Returns: 'openapi' or 'unknown'.
    """
    try:
        document = load_document(file_path)
    except DocumentLoadError:
        return "unknown"
    return "openapi" if is_openapi_document(document) else "unknown"
