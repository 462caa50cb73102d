"""Workflow and business rule errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.models.enums import EntityType, RuleSeverity


def _tag(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


@dataclass(frozen=True)
class FieldViolation:
    """A single failed business rule, attached to the offending field path."""

    field: str
    code: str
    message: str
    severity: RuleSeverity = RuleSeverity.ERROR

    @property
    def is_error(self) -> bool:
        return self.severity == RuleSeverity.ERROR


class WorkflowError(ValueError):
    """Base class for status workflow and record validation failures."""

    error_code = "workflow_error"


class UnknownStatus(WorkflowError):
    """Raised when a status tag is not part of the entity's enumeration."""

    error_code = "unknown_status"

    def __init__(self, entity: EntityType, value: object):
        self.entity = entity
        self.value = value
        super().__init__(f"Unknown {entity.value} status: {value!r}")


class InvalidTransition(WorkflowError):
    """Raised when a status change is not in the entity's transition table."""

    error_code = "invalid_transition"

    def __init__(self, entity: EntityType, from_status, to_status):
        self.entity = entity
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid {entity.value} status transition from "
            f"{_tag(from_status)} to {_tag(to_status)}"
        )


class FieldConsistencyViolation(WorkflowError):
    """Raised when one or more cross-field business rules failed.

    Carries every violation found, not just the first one.
    """

    error_code = "field_consistency_violation"

    def __init__(self, entity: EntityType, violations: list[FieldViolation]):
        self.entity = entity
        self.violations = list(violations)
        fields = ", ".join(sorted({v.field for v in self.violations if v.is_error}))
        super().__init__(f"{entity.value} failed business rules on: {fields}")
