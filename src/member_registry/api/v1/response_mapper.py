"""
Translate a registration Outcome into an HTTP status and payload.

| Outcome              | Status | Payload                              |
| -------------------- | ------ | ------------------------------------ |
| Success              | 200    | empty body                           |
| FieldViolations      | 400    | {field path: message}                |
| UniqueConflict       | 409    | {"email": "Email taken", ...}        |
| UnexpectedFailure    | 400    | {"error": message}                   |

`map_outcome` is total. Anything that is not a known variant is mapped to a
400 error payload instead of raising.
"""

from typing import Any

from fastapi.responses import JSONResponse, Response

from member_registry.services.outcomes import (
    FieldViolations,
    Outcome,
    Success,
    UnexpectedFailure,
    UniqueConflict,
)

STATUS_OK = 200
STATUS_BAD_REQUEST = 400
STATUS_CONFLICT = 409


def _violations_payload(outcome: FieldViolations) -> dict[str, str]:
    return {v.field: v.message for v in outcome.violations}


def _conflict_payload(outcome: UniqueConflict) -> dict[str, str]:
    return {name.lower(): f"{name} taken" for name in outcome.fields}


def map_outcome(outcome: Outcome) -> tuple[int, dict[str, Any] | None]:
    """Return `(status_code, payload)`; payload is None for an empty body."""
    if isinstance(outcome, Success):
        return STATUS_OK, None
    if isinstance(outcome, FieldViolations):
        return STATUS_BAD_REQUEST, _violations_payload(outcome)
    if isinstance(outcome, UniqueConflict):
        return STATUS_CONFLICT, _conflict_payload(outcome)
    if isinstance(outcome, UnexpectedFailure):
        return STATUS_BAD_REQUEST, {"error": outcome.message}
    return STATUS_BAD_REQUEST, {"error": "Unexpected outcome"}


def to_response(outcome: Outcome) -> Response:
    status_code, payload = map_outcome(outcome)
    if payload is None:
        return Response(status_code=status_code)
    return JSONResponse(status_code=status_code, content=payload)
