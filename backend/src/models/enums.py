"""Enumerations for workflow entities and their statuses."""

from enum import Enum


class EntityType(str, Enum):
    """Entities whose status is governed by a workflow table."""

    PURCHASE_ORDER = "purchase_order"
    DESIGN_JOB = "design_job"
    ORDER_ITEM = "order_item"
    ORDER = "order"
    WORK_ORDER = "work_order"
    FULFILLMENT = "fulfillment"


class PurchaseOrderStatus(str, Enum):
    """Purchase order lifecycle.

    Workflow:
    - DRAFT: PO created but not finalized
    - PENDING_APPROVAL: Waiting for approval (high value orders)
    - APPROVED / REJECTED: Outcome of the approval step
    - SENT .. RECEIVED: Supplier fulfilment
    - COMPLETED: Closed, terminal
    - CANCELLED: Terminal
    - ON_HOLD: Temporarily paused
    """

    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    SENT = "sent"
    ACKNOWLEDGED = "acknowledged"
    IN_PRODUCTION = "in_production"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    RECEIVED = "received"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ON_HOLD = "on_hold"


class DesignJobStatus(str, Enum):
    """Design job lifecycle.

    The legacy ``review`` tag is not a member; it is normalized to
    UNDER_REVIEW when parsed (see ``src.core.workflows``).
    """

    QUEUED = "queued"
    ASSIGNED = "assigned"
    DRAFTING = "drafting"
    SUBMITTED_FOR_REVIEW = "submitted_for_review"
    UNDER_REVIEW = "under_review"
    REVISION_REQUESTED = "revision_requested"
    REVISIONS_SUBMITTED = "revisions_submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELED = "canceled"


class OrderItemStatus(str, Enum):
    """Order item production lifecycle."""

    PENDING_DESIGN = "pending_design"
    DESIGN_IN_PROGRESS = "design_in_progress"
    DESIGN_APPROVED = "design_approved"
    PENDING_MANUFACTURING = "pending_manufacturing"
    IN_PRODUCTION = "in_production"
    QUALITY_CHECK = "quality_check"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderStatus(str, Enum):
    """Customer order lifecycle."""

    DRAFT = "draft"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ON_HOLD = "on_hold"


class WorkOrderStatus(str, Enum):
    """Manufacturing work order lifecycle."""

    PENDING = "pending"
    QUEUED = "queued"
    IN_PRODUCTION = "in_production"
    QUALITY_CHECK = "quality_check"
    REWORK = "rework"
    PACKAGING = "packaging"
    COMPLETED = "completed"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"
    ON_HOLD = "on_hold"


class FulfillmentStatus(str, Enum):
    """Order fulfillment lifecycle.

    Workflow:
    - NOT_STARTED -> PREPARATION -> PACKAGING -> READY_TO_SHIP -> SHIPPED
    - SHIPPED -> IN_TRANSIT -> DELIVERED -> COMPLETED
    - EXCEPTION: Any step before delivery can fail; recovers to PREPARATION
      or PACKAGING, or is CANCELLED
    """

    NOT_STARTED = "not_started"
    PREPARATION = "preparation"
    PACKAGING = "packaging"
    READY_TO_SHIP = "ready_to_ship"
    SHIPPED = "shipped"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    EXCEPTION = "exception"
    CANCELLED = "cancelled"


class RuleSeverity(str, Enum):
    """Severity of a business rule violation.

    ERROR rejects the record, WARNING is reported only.
    """

    ERROR = "error"
    WARNING = "warning"


class Currency(str, Enum):
    """Currencies accepted on purchase orders."""

    USD = "USD"
    CAD = "CAD"
    EUR = "EUR"
    GBP = "GBP"


class MaterialCategory(str, Enum):
    """Categories of purchasable materials."""

    FABRIC = "fabric"
    THREAD = "thread"
    HARDWARE = "hardware"
    DYE = "dye"
    CHEMICALS = "chemicals"
    PACKAGING = "packaging"
    LABELS = "labels"
    ACCESSORIES = "accessories"
    OUTSOURCED_SERVICE = "outsourced_service"
    EQUIPMENT = "equipment"
    TOOLS = "tools"
    MAINTENANCE = "maintenance"
    OTHER = "other"


class ApprovalLevel(str, Enum):
    """Who signed off a design review."""

    CLIENT = "client"
    ADMIN = "admin"
    FINAL = "final"
