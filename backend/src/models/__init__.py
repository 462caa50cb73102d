"""Workflow entity and status enumerations."""

from src.models.enums import (
    ApprovalLevel,
    Currency,
    DesignJobStatus,
    EntityType,
    FulfillmentStatus,
    MaterialCategory,
    OrderItemStatus,
    OrderStatus,
    PurchaseOrderStatus,
    RuleSeverity,
    WorkOrderStatus,
)

__all__ = [
    "ApprovalLevel",
    "Currency",
    "DesignJobStatus",
    "EntityType",
    "FulfillmentStatus",
    "MaterialCategory",
    "OrderItemStatus",
    "OrderStatus",
    "PurchaseOrderStatus",
    "RuleSeverity",
    "WorkOrderStatus",
]
