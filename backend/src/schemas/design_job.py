"""Pydantic schemas for design job records and requests."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.workflows import DESIGN_JOB_WORKFLOW
from src.models.enums import ApprovalLevel, DesignJobStatus
from src.schemas.workflow import StatusChangeRequest, strip_optional


def _normalize_status(v):
    # Maps the legacy "review" tag; unknown tags surface as validation errors
    if isinstance(v, str):
        return DESIGN_JOB_WORKFLOW.parse(v)
    return v


class DesignJobRecord(BaseModel):
    """Design job snapshot as it would be persisted."""

    model_config = ConfigDict(extra="forbid")

    id: UUID | None = None
    order_item_id: UUID | None = None
    title: str | None = Field(None, max_length=200)
    brief: str | None = Field(None, max_length=5000)
    priority: int = Field(5, ge=1, le=10, description="1 (urgent) to 10 (low)")
    status_code: DesignJobStatus = DesignJobStatus.QUEUED
    assignee_designer_id: UUID | None = None

    estimated_hours: float | None = Field(None, gt=0, le=200)
    actual_hours: float | None = Field(None, ge=0, le=300)
    deadline: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    client_feedback: str | None = Field(None, max_length=2000)
    designer_notes: str | None = Field(None, max_length=2000)
    rejection_reason: str | None = Field(None, max_length=1000)
    revision_count: int = Field(0, ge=0, le=10)
    max_revisions: int = Field(3, ge=1, le=10)

    @field_validator("status_code", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return _normalize_status(v)

    @field_validator("title", "brief", "client_feedback", "designer_notes", "rejection_reason")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class DesignJobStatusChange(StatusChangeRequest):
    """Requested design job status change."""

    status_code: DesignJobStatus
    client_feedback: str | None = Field(None, max_length=2000)
    designer_notes: str | None = Field(None, max_length=2000)
    rejection_reason: str | None = Field(None, max_length=1000)
    actual_hours: float | None = Field(None, ge=0, le=300)
    assignee_designer_id: UUID | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("status_code", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return _normalize_status(v)

    @field_validator("client_feedback", "designer_notes", "rejection_reason")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class DesignJobStatusChangeRequest(BaseModel):
    """Record snapshot plus the change to apply to it."""

    model_config = ConfigDict(extra="forbid")

    record: DesignJobRecord
    change: DesignJobStatusChange


class ReviewDesignRequest(BaseModel):
    """Approve or reject submitted design work."""

    model_config = ConfigDict(extra="forbid")

    approved: bool
    client_feedback: str | None = Field(None, max_length=2000)
    rejection_reason: str | None = Field(None, max_length=1000)
    revision_required: bool = False
    revision_notes: str | None = Field(None, max_length=1000)
    quality_score: int | None = Field(None, ge=1, le=5)
    approval_level: ApprovalLevel = ApprovalLevel.CLIENT
    additional_revisions: int = Field(0, ge=0, le=5)

    @field_validator("client_feedback", "rejection_reason", "revision_notes")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)
