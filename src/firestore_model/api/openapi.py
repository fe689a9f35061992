from __future__ import annotations

from typing import Any

from firestore_model.api.errors import ErrorResponse

ERROR_RESPONSES: dict[int, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Bad parameters"},
    404: {"model": ErrorResponse, "description": "Document not found"},
    422: {"model": ErrorResponse, "description": "Invalid path or request body"},
    500: {"model": ErrorResponse, "description": "Unexpected error"},
}


def error_responses(*codes: int) -> dict[int, dict[str, Any]]:
    responses: dict[int, dict[str, Any]] = {}
    for code in codes:
        if code in ERROR_RESPONSES:
            responses[code] = ERROR_RESPONSES[code]
    return responses
