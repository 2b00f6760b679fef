"""
Outcome of a single registration attempt.

Exactly one of the four variants below is returned by
`RegistrationService.register()`. Failures travel as values rather than
exceptions, so the response mapper can match on the variant type.
"""

from dataclasses import dataclass
from typing import Union

from member_registry.models import Member


@dataclass(frozen=True)
class FieldViolation:
    """One broken structural rule: the field path and a human-readable message."""
    field: str
    message: str


@dataclass(frozen=True)
class Success:
    member: Member


@dataclass(frozen=True)
class FieldViolations:
    violations: frozenset[FieldViolation]

    def __post_init__(self):
        if not self.violations:
            raise ValueError("FieldViolations requires at least one violation")


@dataclass(frozen=True)
class UniqueConflict:
    # capitalised field names, e.g. {"Email", "Name"}
    fields: frozenset[str]

    def __post_init__(self):
        if not self.fields:
            raise ValueError("UniqueConflict requires at least one conflicting field")


@dataclass(frozen=True)
class UnexpectedFailure:
    message: str


Outcome = Union[Success, FieldViolations, UniqueConflict, UnexpectedFailure]

__all__ = [
    "FieldViolation",
    "Success",
    "FieldViolations",
    "UniqueConflict",
    "UnexpectedFailure",
    "Outcome",
]
