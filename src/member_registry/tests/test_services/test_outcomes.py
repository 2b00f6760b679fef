import dataclasses

import pytest

from member_registry.services.outcomes import (
    FieldViolation,
    FieldViolations,
    UnexpectedFailure,
    UniqueConflict,
)


def test_field_violations_require_at_least_one():
    with pytest.raises(ValueError):
        FieldViolations(frozenset())


def test_unique_conflict_requires_at_least_one_field():
    with pytest.raises(ValueError):
        UniqueConflict(frozenset())


def test_outcomes_are_immutable():
    outcome = UnexpectedFailure("boom")
    with pytest.raises(dataclasses.FrozenInstanceError):
        outcome.message = "changed"


def test_field_violations_compare_by_content():
    a = FieldViolations(frozenset({FieldViolation("name", "may not be null")}))
    b = FieldViolations(frozenset({FieldViolation("name", "may not be null")}))
    assert a == b
