"""Pydantic schemas for customer orders and order items."""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.models.enums import OrderItemStatus, OrderStatus
from src.schemas.workflow import StatusChangeRequest, strip_optional


class OrderItemRecord(BaseModel):
    """Order line item snapshot."""

    model_config = ConfigDict(extra="forbid")

    id: UUID | None = None
    order_id: UUID | None = None
    product_id: UUID | None = None
    name_snapshot: str | None = Field(None, max_length=200)
    sku_snapshot: str | None = Field(None, max_length=50)
    price_snapshot: Decimal | None = Field(None, ge=0, le=100_000)
    quantity: int = Field(..., gt=0, le=10_000)
    status_code: OrderItemStatus = OrderItemStatus.PENDING_DESIGN
    designer_id: UUID | None = None
    manufacturer_id: UUID | None = None

    @field_validator("name_snapshot", "sku_snapshot")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class OrderRecord(BaseModel):
    """Customer order snapshot as it would be persisted."""

    model_config = ConfigDict(extra="forbid")

    id: UUID | None = None
    customer_id: UUID | None = None
    salesperson_id: UUID | None = None
    sport_id: UUID | None = None
    code: str | None = Field(None, pattern=r"^ORD-\d{8}-\d{4}$")
    customer_contact_name: str | None = Field(None, min_length=2, max_length=100)
    customer_contact_email: EmailStr | None = None
    customer_contact_phone: str | None = Field(None, pattern=r"^\+?[\d\s\-().]{10,17}$")
    status_code: OrderStatus = OrderStatus.DRAFT
    total_amount: Decimal | None = Field(None, ge=0, le=1_000_000)
    revenue_estimate: Decimal | None = Field(None, ge=0)
    due_date: datetime | None = None
    notes: str | None = Field(None, max_length=5000)
    items: list[OrderItemRecord] | None = Field(None, max_length=100)

    @field_validator("customer_contact_email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return v.lower() if v else v

    @field_validator("customer_contact_name", "notes")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class OrderTotals(BaseModel):
    """Monetary breakdown of an order."""

    model_config = ConfigDict(extra="forbid")

    subtotal: Decimal = Field(..., ge=0)
    tax_amount: Decimal = Field(..., ge=0)
    shipping_amount: Decimal = Field(..., ge=0)
    discount_amount: Decimal = Field(..., ge=0)
    total_amount: Decimal = Field(..., ge=0)
    revenue_estimate: Decimal | None = Field(None, ge=0)


class OrderStatusChange(StatusChangeRequest):
    """Requested order status change."""

    NON_RECORD_FIELDS: ClassVar[frozenset[str]] = frozenset({"notes", "reason"})

    status_code: OrderStatus
    reason: str | None = Field(None, max_length=500)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: str | None) -> str | None:
        return strip_optional(v)


class OrderStatusChangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    record: OrderRecord
    change: OrderStatusChange


class OrderItemStatusChange(StatusChangeRequest):
    """Requested order item status change."""

    status_code: OrderItemStatus
    designer_id: UUID | None = None
    manufacturer_id: UUID | None = None


class OrderItemStatusChangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    record: OrderItemRecord
    change: OrderItemStatusChange
