"""Pydantic schemas for workflow description and validation endpoints."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.errors import FieldViolation
from src.models.enums import EntityType, RuleSeverity


def strip_optional(v: str | None) -> str | None:
    """Strip surrounding whitespace; blank strings become None."""
    if v is None:
        return None
    v = v.strip()
    return v or None


class WorkflowDescription(BaseModel):
    """Full transition table of one entity."""

    entity: EntityType
    statuses: list[str]
    initial_status: str
    terminal_statuses: list[str]
    transitions: dict[str, list[str]]
    aliases: dict[str, str] = {}


class StatusDetail(BaseModel):
    """Where a record can go next from one status."""

    entity: EntityType
    status: str
    is_terminal: bool
    valid_transitions: list[str]


class TransitionCheckRequest(BaseModel):
    """Request schema for checking a status change.

    Statuses are raw tags so unknown values can be told apart from
    disallowed transitions.
    """

    model_config = ConfigDict(extra="forbid")

    from_status: str = Field(..., min_length=1, max_length=50)
    to_status: str = Field(..., min_length=1, max_length=50)

    @field_validator("from_status", "to_status")
    @classmethod
    def strip_status(cls, v: str) -> str:
        return v.strip()


class TransitionCheckResponse(BaseModel):
    entity: EntityType
    from_status: str
    to_status: str
    allowed: bool


class FieldViolationItem(BaseModel):
    """A business rule failure attached to a field path."""

    model_config = ConfigDict(from_attributes=True)

    field: str
    code: str
    message: str
    severity: RuleSeverity


class ValidationReport(BaseModel):
    """Outcome of validating a record or request.

    ``valid`` is False only when at least one error-level violation exists;
    warnings are listed either way.
    """

    entity: EntityType
    valid: bool
    violations: list[FieldViolationItem]

    @classmethod
    def from_violations(
        cls, entity: EntityType, violations: list[FieldViolation]
    ) -> "ValidationReport":
        return cls(
            entity=entity,
            valid=not any(v.is_error for v in violations),
            violations=[FieldViolationItem.model_validate(v) for v in violations],
        )


class StatusChangeRequest(BaseModel):
    """Base schema for a requested status change.

    Subclasses declare ``status_code`` with the entity's enum plus any
    companion fields; companion fields are copied onto the record when the
    change is applied, except those listed in ``NON_RECORD_FIELDS``.
    """

    model_config = ConfigDict(extra="forbid")

    NON_RECORD_FIELDS: ClassVar[frozenset[str]] = frozenset({"notes"})

    notes: str | None = Field(None, max_length=1000)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: str | None) -> str | None:
        return strip_optional(v)

    def record_updates(self) -> dict:
        """Fields to merge onto the record, status excluded."""
        return self.model_dump(
            exclude_none=True,
            exclude=set(self.NON_RECORD_FIELDS) | {"status_code"},
        )
