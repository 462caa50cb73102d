"""Pydantic schemas for purchase order records and requests."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.core.config import get_settings
from src.models.enums import Currency, MaterialCategory, PurchaseOrderStatus
from src.schemas.workflow import StatusChangeRequest, strip_optional


class PurchaseOrderRecord(BaseModel):
    """Purchase order snapshot as it would be persisted."""

    model_config = ConfigDict(extra="forbid")

    id: UUID | None = None
    po_number: str | None = Field(None, pattern=r"^PO-\d{8}-\d{4}$")
    supplier_id: UUID | None = None
    supplier_name: str | None = Field(None, max_length=200)
    status_code: PurchaseOrderStatus = PurchaseOrderStatus.DRAFT

    total_amount: Decimal = Field(..., ge=0, le=10_000_000)
    subtotal: Decimal = Field(Decimal("0"), ge=0)
    tax_amount: Decimal = Field(Decimal("0"), ge=0)
    shipping_amount: Decimal = Field(Decimal("0"), ge=0)
    discount_amount: Decimal = Field(Decimal("0"), ge=0)
    approval_threshold: Decimal = Field(
        default_factory=lambda: get_settings().approval_threshold_default,
        gt=0,
        le=1_000_000,
    )
    currency: Currency = Currency.USD
    exchange_rate: Decimal = Field(Decimal("1"), gt=0)

    approved_by: UUID | None = None
    approved_at: datetime | None = None
    rejected_by: UUID | None = None
    rejected_at: datetime | None = None
    rejection_reason: str | None = Field(None, max_length=1000)

    order_date: datetime
    expected_delivery_date: datetime | None = None
    actual_delivery_date: datetime | None = None

    requested_by: UUID | None = None
    assigned_to: UUID | None = None
    priority: int = Field(3, ge=1, le=5, description="1 (urgent) to 5 (low)")
    notes: str | None = Field(None, max_length=2000)

    @field_validator("supplier_name", "rejection_reason", "notes")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class PurchaseOrderItemRecord(BaseModel):
    """Purchase order line item snapshot."""

    model_config = ConfigDict(extra="forbid")

    id: UUID | None = None
    purchase_order_id: UUID | None = None
    material_id: UUID | None = None
    material_name: str = Field(..., min_length=1, max_length=200)
    material_sku: str | None = Field(None, max_length=50)
    quantity: Decimal = Field(..., gt=0, le=1_000_000)
    unit: str = Field(..., min_length=1, max_length=20)
    unit_cost: Decimal = Field(..., gt=0, le=100_000)
    total_cost: Decimal = Field(..., gt=0, le=100_000_000)
    quantity_received: Decimal = Field(Decimal("0"), ge=0, le=1_000_000)
    quality_check_passed: bool | None = None
    quality_notes: str | None = Field(None, max_length=2000)
    line_number: int = Field(1, ge=1, le=1000)

    @field_validator("material_name", "unit")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v

    @field_validator("quality_notes")
    @classmethod
    def strip_notes(cls, v: str | None) -> str | None:
        return strip_optional(v)


class ApprovePurchaseOrderRequest(BaseModel):
    """Approval decision on a purchase order."""

    model_config = ConfigDict(extra="forbid")

    approved: bool
    notes: str | None = Field(None, max_length=1000)
    rejection_reason: str | None = Field(None, max_length=1000)
    budget_approval: bool = True
    compliance_check: bool = True

    @field_validator("notes", "rejection_reason")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class PurchaseOrderStatusChange(StatusChangeRequest):
    """Requested purchase order status change."""

    status_code: PurchaseOrderStatus
    approved_by: UUID | None = None
    rejected_by: UUID | None = None
    rejection_reason: str | None = Field(None, max_length=1000)

    @field_validator("rejection_reason")
    @classmethod
    def strip_reason(cls, v: str | None) -> str | None:
        return strip_optional(v)


class PurchaseOrderStatusChangeRequest(BaseModel):
    """Record snapshot plus the change to apply to it."""

    model_config = ConfigDict(extra="forbid")

    record: PurchaseOrderRecord
    change: PurchaseOrderStatusChange


class MaterialRecord(BaseModel):
    """Material catalogue entry that purchase order lines draw from."""

    model_config = ConfigDict(extra="forbid")

    id: UUID | None = None
    name: str = Field(..., min_length=1, max_length=200)
    sku: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=1000)
    category: MaterialCategory
    unit: str = Field(..., min_length=1, max_length=20)
    unit_cost: Decimal = Field(..., gt=0, le=100_000)
    reorder_level: int = Field(0, ge=0, le=100_000)
    preferred_supplier_id: UUID | None = None
    lead_time_days: int = Field(7, gt=0, le=365)
    moq: int | None = Field(None, gt=0, le=100_000, description="Minimum order quantity")
    is_active: bool = True
    is_critical: bool = False
    quality_standards: str | None = Field(None, max_length=1000)
    storage_requirements: str | None = Field(None, max_length=500)
    safety_notes: str | None = Field(None, max_length=1000)

    @field_validator("name", "unit")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v

    @field_validator("description", "quality_standards", "storage_requirements", "safety_notes")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_optional(v)


class SupplierRecord(BaseModel):
    """Supplier profile with performance tracking."""

    model_config = ConfigDict(extra="forbid")

    id: UUID | None = None
    name: str = Field(..., min_length=1, max_length=200)
    contact_email: EmailStr
    contact_phone: str | None = Field(None, max_length=30)
    country: str | None = Field(None, max_length=100)
    lead_time_days: int | None = Field(None, gt=0, le=365)
    minimum_order_quantity: int | None = Field(None, gt=0, le=100_000)
    payment_terms: str | None = Field(None, max_length=200)
    credit_limit: Decimal | None = Field(None, gt=0, le=1_000_000)
    is_active: bool = True
    is_approved: bool = False
    certifications: list[str] = Field(default_factory=list, max_length=10)

    performance_score: float | None = Field(None, ge=1, le=5)
    on_time_delivery_rate: float | None = Field(None, ge=0, le=1)
    quality_score: float | None = Field(None, ge=1, le=5)
    communication_score: float | None = Field(None, ge=1, le=5)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v
