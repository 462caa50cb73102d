"""Status workflow state machines for every governed entity."""

from types import MappingProxyType

from src.core.transition_table import TransitionTable
from src.models.enums import (
    DesignJobStatus,
    EntityType,
    FulfillmentStatus,
    OrderItemStatus,
    OrderStatus,
    PurchaseOrderStatus,
    WorkOrderStatus,
)

_PO = PurchaseOrderStatus

PURCHASE_ORDER_WORKFLOW = TransitionTable(
    EntityType.PURCHASE_ORDER,
    PurchaseOrderStatus,
    {
        _PO.DRAFT: [_PO.PENDING_APPROVAL, _PO.APPROVED, _PO.CANCELLED],
        _PO.PENDING_APPROVAL: [_PO.APPROVED, _PO.REJECTED, _PO.CANCELLED],
        _PO.APPROVED: [_PO.SENT, _PO.CANCELLED],
        _PO.REJECTED: [_PO.DRAFT, _PO.CANCELLED],
        _PO.SENT: [_PO.ACKNOWLEDGED, _PO.CANCELLED, _PO.ON_HOLD],
        _PO.ACKNOWLEDGED: [_PO.IN_PRODUCTION, _PO.CANCELLED, _PO.ON_HOLD],
        _PO.IN_PRODUCTION: [_PO.SHIPPED, _PO.CANCELLED, _PO.ON_HOLD],
        _PO.SHIPPED: [_PO.DELIVERED, _PO.ON_HOLD],
        _PO.DELIVERED: [_PO.RECEIVED],
        _PO.RECEIVED: [_PO.COMPLETED],
        _PO.COMPLETED: [],  # Terminal
        _PO.CANCELLED: [],  # Terminal
        _PO.ON_HOLD: [
            _PO.APPROVED,
            _PO.SENT,
            _PO.ACKNOWLEDGED,
            _PO.IN_PRODUCTION,
            _PO.SHIPPED,
            _PO.CANCELLED,
        ],
    },
    initial=_PO.DRAFT,
)

_DJ = DesignJobStatus

DESIGN_JOB_WORKFLOW = TransitionTable(
    EntityType.DESIGN_JOB,
    DesignJobStatus,
    {
        _DJ.QUEUED: [_DJ.ASSIGNED, _DJ.CANCELED],
        _DJ.ASSIGNED: [_DJ.DRAFTING, _DJ.QUEUED, _DJ.CANCELED],
        _DJ.DRAFTING: [_DJ.SUBMITTED_FOR_REVIEW, _DJ.ASSIGNED, _DJ.CANCELED],
        _DJ.SUBMITTED_FOR_REVIEW: [_DJ.UNDER_REVIEW, _DJ.DRAFTING],
        _DJ.UNDER_REVIEW: [_DJ.APPROVED, _DJ.REVISION_REQUESTED, _DJ.REJECTED],
        _DJ.REVISION_REQUESTED: [_DJ.REVISIONS_SUBMITTED, _DJ.DRAFTING, _DJ.CANCELED],
        _DJ.REVISIONS_SUBMITTED: [_DJ.UNDER_REVIEW, _DJ.APPROVED],
        _DJ.APPROVED: [],  # Terminal
        _DJ.REJECTED: [_DJ.QUEUED, _DJ.CANCELED],
        _DJ.CANCELED: [],  # Terminal
    },
    initial=_DJ.QUEUED,
    # Clients built against the old single-step review still send "review"
    aliases={"review": _DJ.UNDER_REVIEW},
)

_OI = OrderItemStatus

ORDER_ITEM_WORKFLOW = TransitionTable(
    EntityType.ORDER_ITEM,
    OrderItemStatus,
    {
        _OI.PENDING_DESIGN: [_OI.DESIGN_IN_PROGRESS, _OI.CANCELLED],
        _OI.DESIGN_IN_PROGRESS: [_OI.DESIGN_APPROVED, _OI.PENDING_DESIGN, _OI.CANCELLED],
        _OI.DESIGN_APPROVED: [_OI.PENDING_MANUFACTURING, _OI.DESIGN_IN_PROGRESS, _OI.CANCELLED],
        _OI.PENDING_MANUFACTURING: [_OI.IN_PRODUCTION, _OI.CANCELLED],
        _OI.IN_PRODUCTION: [_OI.QUALITY_CHECK, _OI.CANCELLED],
        _OI.QUALITY_CHECK: [_OI.COMPLETED, _OI.IN_PRODUCTION, _OI.CANCELLED],
        _OI.COMPLETED: [],  # Terminal
        _OI.CANCELLED: [],  # Terminal
    },
    initial=_OI.PENDING_DESIGN,
)

_O = OrderStatus

ORDER_WORKFLOW = TransitionTable(
    EntityType.ORDER,
    OrderStatus,
    {
        _O.DRAFT: [_O.PENDING, _O.CANCELLED],
        _O.PENDING: [_O.CONFIRMED, _O.CANCELLED],
        _O.CONFIRMED: [_O.PROCESSING, _O.CANCELLED],
        _O.PROCESSING: [_O.SHIPPED, _O.CANCELLED, _O.ON_HOLD],
        _O.SHIPPED: [_O.DELIVERED],
        _O.DELIVERED: [_O.COMPLETED],
        _O.COMPLETED: [],  # Terminal
        _O.CANCELLED: [],  # Terminal
        _O.ON_HOLD: [_O.PROCESSING, _O.CANCELLED],
    },
    initial=_O.DRAFT,
)

_WO = WorkOrderStatus

WORK_ORDER_WORKFLOW = TransitionTable(
    EntityType.WORK_ORDER,
    WorkOrderStatus,
    {
        _WO.PENDING: [_WO.QUEUED, _WO.CANCELLED],
        _WO.QUEUED: [_WO.IN_PRODUCTION, _WO.ON_HOLD, _WO.CANCELLED],
        _WO.IN_PRODUCTION: [_WO.QUALITY_CHECK, _WO.REWORK, _WO.ON_HOLD, _WO.CANCELLED],
        _WO.QUALITY_CHECK: [_WO.PACKAGING, _WO.REWORK, _WO.COMPLETED, _WO.CANCELLED],
        _WO.REWORK: [_WO.QUALITY_CHECK, _WO.CANCELLED],
        _WO.PACKAGING: [_WO.COMPLETED, _WO.CANCELLED],
        _WO.COMPLETED: [_WO.SHIPPED],
        _WO.SHIPPED: [],  # Terminal
        _WO.CANCELLED: [],  # Terminal
        _WO.ON_HOLD: [_WO.QUEUED, _WO.IN_PRODUCTION, _WO.CANCELLED],
    },
    initial=_WO.PENDING,
)

_F = FulfillmentStatus

FULFILLMENT_WORKFLOW = TransitionTable(
    EntityType.FULFILLMENT,
    FulfillmentStatus,
    {
        _F.NOT_STARTED: [_F.PREPARATION],
        _F.PREPARATION: [_F.PACKAGING, _F.EXCEPTION],
        _F.PACKAGING: [_F.READY_TO_SHIP, _F.EXCEPTION],
        _F.READY_TO_SHIP: [_F.SHIPPED, _F.EXCEPTION],
        _F.SHIPPED: [_F.IN_TRANSIT, _F.DELIVERED, _F.EXCEPTION],
        _F.IN_TRANSIT: [_F.DELIVERED, _F.EXCEPTION],
        _F.DELIVERED: [_F.COMPLETED],
        _F.COMPLETED: [],  # Terminal
        _F.EXCEPTION: [_F.PREPARATION, _F.PACKAGING, _F.CANCELLED],
        _F.CANCELLED: [],  # Terminal
    },
    initial=_F.NOT_STARTED,
)

WORKFLOWS = MappingProxyType(
    {
        EntityType.PURCHASE_ORDER: PURCHASE_ORDER_WORKFLOW,
        EntityType.DESIGN_JOB: DESIGN_JOB_WORKFLOW,
        EntityType.ORDER_ITEM: ORDER_ITEM_WORKFLOW,
        EntityType.ORDER: ORDER_WORKFLOW,
        EntityType.WORK_ORDER: WORK_ORDER_WORKFLOW,
        EntityType.FULFILLMENT: FULFILLMENT_WORKFLOW,
    }
)


def get_workflow(entity: EntityType) -> TransitionTable:
    """Get the transition table for an entity."""
    return WORKFLOWS[entity]


def is_valid_transition(entity: EntityType, from_status, to_status) -> bool:
    """Check if a status transition is valid for the given entity.

    Examples:
        >>> is_valid_transition(EntityType.PURCHASE_ORDER, "draft", "pending_approval")
        True
        >>> is_valid_transition(EntityType.PURCHASE_ORDER, "completed", "on_hold")
        False
    """
    return WORKFLOWS[entity].is_valid_transition(from_status, to_status)


def get_allowed_transitions(entity: EntityType, from_status) -> frozenset:
    """Get the set of statuses reachable in one step from ``from_status``."""
    return WORKFLOWS[entity].valid_transitions_from(from_status)
