"""Logging setup and redaction of submitted run inputs."""

import logging
import re
from typing import Any

_SENSITIVE_KEYS = re.compile(r"(token|secret|api[_-]?key|password)", re.IGNORECASE)

REDACTED = "***REDACTED***"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def redact_payload(payload: Any) -> Any:
    """Mask values under sensitive keys anywhere in a JSON-like payload.

    Dicts are walked by key and lists/tuples element by element, so a raw
    JSON body such as ``[{"password": ...}]`` is covered too. The input is
    never modified; a redacted copy is returned.
    """
    if isinstance(payload, dict):
        return {
            key: REDACTED if isinstance(key, str) and _SENSITIVE_KEYS.search(key) else redact_payload(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [redact_payload(item) for item in payload]
    return payload
