"""
Structural (field-level) validation of a registration submission.

The rules live on `MemberCreate` (required, pattern, length, email format).
This module runs them and turns pydantic's error list into `FieldViolation`s
with stable, client-facing messages. Every field is checked in the same pass,
and each field reports at most one violation.
"""

import logging
from typing import Any

from pydantic import ValidationError

from member_registry.schemas.member import (
    MemberCreate,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PHONE_MAX_LENGTH,
    PHONE_MIN_LENGTH,
)
from member_registry.services.outcomes import FieldViolation

logger = logging.getLogger(__name__)

NOT_NULL = "may not be null"
NOT_A_STRING = "must be a string"
NOT_AN_OBJECT = "Must be a JSON object"

# (field, pydantic error type) -> message
RULE_MESSAGES: dict[tuple[str, str], str] = {
    ("name", "string_too_short"): f"size must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH}",
    ("name", "string_too_long"): f"size must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH}",
    ("name", "string_pattern_mismatch"): "Must not contain numbers",
    ("email", "value_error"): "not a well-formed email address",
    ("phone", "string_too_short"): f"size must be between {PHONE_MIN_LENGTH} and {PHONE_MAX_LENGTH}",
    ("phone", "string_too_long"): f"size must be between {PHONE_MIN_LENGTH} and {PHONE_MAX_LENGTH}",
    ("phone", "string_pattern_mismatch"): (
        f"numeric value out of bounds (<{PHONE_MAX_LENGTH} digits>.<0 digits> expected)"
    ),
}


def _message_for(field: str, error: dict) -> str:
    error_type = error["type"]
    if error_type == "missing":
        return NOT_NULL
    if error_type == "string_type":
        return NOT_NULL if error.get("input") is None else NOT_A_STRING
    return RULE_MESSAGES.get((field, error_type), error["msg"])


class FieldValidator:
    """Stateless validator for candidate Members. Safe to share between requests."""

    schema = MemberCreate

    def inspect(self, payload: Any) -> tuple[MemberCreate | None, frozenset[FieldViolation]]:
        """
        Validate `payload` and return `(candidate, violations)`.

        `candidate` is the parsed, normalised MemberCreate when there are no
        violations, otherwise None.
        """
        try:
            candidate = self.schema.model_validate(payload)
        except ValidationError as exc:
            return None, self._to_violations(exc)
        return candidate, frozenset()

    def validate(self, payload: Any) -> frozenset[FieldViolation]:
        return self.inspect(payload)[1]

    def _to_violations(self, exc: ValidationError) -> frozenset[FieldViolation]:
        reported: dict[str, FieldViolation] = {}
        for error in exc.errors():
            loc = error.get("loc") or ()
            if not loc:
                reported.setdefault("body", FieldViolation("body", NOT_AN_OBJECT))
                continue
            path = ".".join(str(part) for part in loc)
            # first error per field wins
            if path not in reported:
                reported[path] = FieldViolation(path, _message_for(str(loc[0]), error))

        logger.debug(
            "field_validator.violations",
            extra={"fields": sorted(reported)},
        )
        return frozenset(reported.values())
