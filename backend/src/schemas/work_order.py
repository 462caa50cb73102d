"""Pydantic schemas for manufacturing work orders."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.enums import WorkOrderStatus
from src.schemas.workflow import StatusChangeRequest, strip_optional


class WorkOrderRecord(BaseModel):
    """Work order snapshot as it would be persisted."""

    model_config = ConfigDict(extra="forbid")

    id: UUID | None = None
    order_item_id: UUID | None = None
    manufacturer_id: UUID | None = None
    status_code: WorkOrderStatus = WorkOrderStatus.PENDING
    priority: int = Field(5, ge=1, le=10, description="1 (highest) to 10 (lowest)")
    quantity: int = Field(..., gt=0, le=10_000)
    instructions: str | None = Field(None, max_length=2000)

    planned_start_date: datetime | None = None
    planned_due_date: datetime | None = None
    actual_start_date: datetime | None = None
    actual_end_date: datetime | None = None
    actual_completion_date: datetime | None = None

    quality_notes: str | None = Field(None, max_length=2000)
    delay_reason: str | None = Field(None, max_length=1000)

    @field_validator("instructions", "quality_notes", "delay_reason")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class WorkOrderStatusChange(StatusChangeRequest):
    """Requested work order status change."""

    status_code: WorkOrderStatus
    manufacturer_id: UUID | None = None
    quality_notes: str | None = Field(None, max_length=2000)
    delay_reason: str | None = Field(None, max_length=1000)
    actual_start_date: datetime | None = None
    actual_completion_date: datetime | None = None

    @field_validator("quality_notes", "delay_reason")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class WorkOrderStatusChangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    record: WorkOrderRecord
    change: WorkOrderStatusChange
