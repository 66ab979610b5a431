"""Endpoint listing for OpenAPI 3.x documents."""

import logging
from typing import Any

from api_run_forms.contracts import EndpointMeta

from .reader import as_mapping, get_paths, get_string, is_http_method

logger = logging.getLogger(__name__)


def list_endpoints(document: Any) -> list[EndpointMeta]:
    """List every (method, path) operation in document order.

    Keys under a path item that are not HTTP methods (``parameters``,
    ``servers``, extensions) are skipped. A document without ``paths``
    yields an empty list.
    """
    endpoints: list[EndpointMeta] = []
    paths = get_paths(document)
    if paths is None:
        logger.debug("Document has no paths mapping")
        return endpoints

    for path, path_item in paths.items():
        if not isinstance(path, str):
            continue
        methods = as_mapping(path_item)
        if methods is None:
            continue

        for method, operation in methods.items():
            if not is_http_method(method):
                continue

            method = method.upper()
            meta = {"id": f"{method} {path}", "method": method, "path": path}
            # A non-mapping operation still lists, just without text.
            summary = get_string(operation, "summary")
            if summary is not None:
                meta["summary"] = summary
            description = get_string(operation, "description")
            if description is not None:
                meta["description"] = description
            endpoints.append(EndpointMeta(**meta))

    return endpoints
