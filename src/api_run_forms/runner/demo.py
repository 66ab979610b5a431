"""Demo runner: builds a mocked RunEnvelope for a submitted form.

No code is executed and no request is sent. The envelope echoes the
collected inputs so the rendering layer can be exercised end to end.
"""

import logging
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from api_run_forms.contracts import ErrorClass, RunEnvelope
from api_run_forms.exceptions import InputValidationError
from api_run_forms.logging import redact_payload
from api_run_forms.parser.endpoints import list_endpoints

from .inputs import collect_inputs

logger = logging.getLogger(__name__)

DEMO_MESSAGE = "This is a mocked response"


def run_demo(document: Any, endpoint_id: str, values: Mapping[str, Any]) -> RunEnvelope:
    """Simulate running ``endpoint_id`` with the submitted form ``values``."""
    started = time.perf_counter()
    run_id = f"demo-{int(time.time() * 1000)}"

    known = {endpoint.id for endpoint in list_endpoints(document)}
    if endpoint_id not in known:
        logger.info("Demo run %s: unknown endpoint %r", run_id, endpoint_id)
        return _error_envelope(
            run_id,
            started,
            http_status=404,
            error_class=ErrorClass.ENDPOINT_NOT_FOUND,
            message=f"Endpoint {endpoint_id!r} is not defined in the OpenAPI document",
            fix="Pick one of the listed endpoints, e.g. 'GET /path'.",
        )

    try:
        inputs = collect_inputs(document, endpoint_id, values)
    except InputValidationError as e:
        logger.info("Demo run %s: invalid inputs: %s", run_id, e)
        return _error_envelope(
            run_id,
            started,
            http_status=422,
            error_class=ErrorClass.VALIDATION_ERROR,
            message=str(e),
            fix="Correct the highlighted fields and run again.",
        )

    submitted = inputs.to_dict()
    echoed = redact_payload(submitted)
    logger.info("Demo run %s for %s inputs=%s", run_id, endpoint_id, echoed)
    return RunEnvelope(
        run_id=run_id,
        status="success",
        duration_ms=_elapsed_ms(started),
        http_status=200,
        content_type="application/json",
        json_body={
            "demo": DEMO_MESSAGE,
            "endpoint": endpoint_id,
            "inputs": echoed,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        artifacts=[],
        warnings=[],
        redactions_applied=echoed != submitted,
    )


def _error_envelope(
    run_id: str,
    started: float,
    http_status: int,
    error_class: ErrorClass,
    message: str,
    fix: str,
) -> RunEnvelope:
    return RunEnvelope(
        run_id=run_id,
        status="error",
        duration_ms=_elapsed_ms(started),
        http_status=http_status,
        content_type="text/plain",
        text_preview=message,
        artifacts=[],
        warnings=[],
        redactions_applied=False,
        error_class=error_class,
        error_message=message,
        suggested_fix=fix,
    )


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
