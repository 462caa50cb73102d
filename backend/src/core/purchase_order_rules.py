"""Business rules for purchase orders, their line items and approvals."""

from src.core.rule_engine import Rule, days_between, has_text, money_matches, net_total
from src.models.enums import PurchaseOrderStatus, RuleSeverity

# Statuses in which an order above the approval threshold may still lack an approver
_PRE_APPROVAL = {
    PurchaseOrderStatus.DRAFT,
    PurchaseOrderStatus.PENDING_APPROVAL,
    PurchaseOrderStatus.REJECTED,
    PurchaseOrderStatus.CANCELLED,
}


def _total_matches(po, ctx) -> bool:
    expected = net_total(po.subtotal, po.tax_amount, po.shipping_amount, po.discount_amount)
    return money_matches(po.total_amount, expected, ctx)


def _approved_above_threshold(po, ctx) -> bool:
    if po.total_amount <= po.approval_threshold or po.status_code in _PRE_APPROVAL:
        return True
    return po.approved_by is not None


def _delivery_within_window(po, ctx) -> bool:
    if not po.expected_delivery_date:
        return True
    days = days_between(po.order_date, po.expected_delivery_date)
    s = ctx.settings
    return s.delivery_window_min_days <= days <= s.delivery_window_max_days


def _lead_time_comfortable(po, ctx) -> bool:
    if not po.expected_delivery_date:
        return True
    days = days_between(po.order_date, po.expected_delivery_date)
    # Out-of-window dates are already an error
    if days < ctx.settings.delivery_window_min_days:
        return True
    return days >= ctx.settings.short_lead_time_days


def _rejection_has_reason(po, ctx) -> bool:
    if po.status_code != PurchaseOrderStatus.REJECTED and po.rejected_by is None:
        return True
    return has_text(po.rejection_reason, ctx.min_reason_length)


def _delivered_after_order(po, ctx) -> bool:
    if not po.actual_delivery_date:
        return True
    return days_between(po.order_date, po.actual_delivery_date) >= 0


PURCHASE_ORDER_RULES = (
    Rule(
        field="total_amount",
        code="total_mismatch",
        message="Total amount must equal subtotal + tax + shipping - discount",
        check=_total_matches,
    ),
    Rule(
        field="approved_by",
        code="approval_required",
        message="Orders above approval threshold must be approved before processing",
        check=_approved_above_threshold,
    ),
    Rule(
        field="expected_delivery_date",
        code="delivery_out_of_window",
        message=(
            "Expected delivery date must be between {delivery_window_min_days} and "
            "{delivery_window_max_days} days from order date"
        ),
        check=_delivery_within_window,
    ),
    Rule(
        field="expected_delivery_date",
        code="short_lead_time",
        message="Very short lead time - confirm with supplier",
        check=_lead_time_comfortable,
        severity=RuleSeverity.WARNING,
    ),
    Rule(
        field="rejection_reason",
        code="rejection_reason_required",
        message=(
            "Rejected purchase orders must include a rejection reason of at least "
            "{rejection_reason_min_length} characters"
        ),
        check=_rejection_has_reason,
    ),
    Rule(
        field="actual_delivery_date",
        code="delivered_before_order",
        message="Actual delivery date cannot be before order date",
        check=_delivered_after_order,
    ),
)


PURCHASE_ORDER_ITEM_RULES = (
    Rule(
        field="total_cost",
        code="total_mismatch",
        message="Total cost must equal quantity multiplied by unit cost",
        check=lambda item, ctx: money_matches(item.total_cost, item.quantity * item.unit_cost, ctx),
    ),
    Rule(
        field="quantity_received",
        code="over_received",
        message="Quantity received cannot exceed ordered quantity",
        check=lambda item, ctx: item.quantity_received <= item.quantity,
    ),
    Rule(
        field="quality_notes",
        code="quality_notes_required",
        message="Failed quality checks must include quality notes",
        check=lambda item, ctx: item.quality_check_passed is not False or has_text(item.quality_notes),
    ),
)


PURCHASE_ORDER_APPROVAL_RULES = (
    Rule(
        field="rejection_reason",
        code="rejection_reason_required",
        message=(
            "Rejected purchase orders must include a rejection reason of at least "
            "{rejection_reason_min_length} characters"
        ),
        check=lambda req, ctx: req.approved or has_text(req.rejection_reason, ctx.min_reason_length),
    ),
)


PURCHASE_ORDER_STATUS_CHANGE_RULES = (
    Rule(
        field="rejection_reason",
        code="rejection_reason_required",
        message=(
            "Rejecting a purchase order requires a reason of at least "
            "{rejection_reason_min_length} characters"
        ),
        check=lambda req, ctx: (
            req.status_code != PurchaseOrderStatus.REJECTED
            or has_text(req.rejection_reason, ctx.min_reason_length)
        ),
    ),
    Rule(
        field="notes",
        code="hold_notes_required",
        message="Putting a purchase order on hold requires notes",
        check=lambda req, ctx: req.status_code != PurchaseOrderStatus.ON_HOLD or has_text(req.notes),
    ),
)


MATERIAL_RULES = (
    Rule(
        field="quality_standards",
        code="quality_standards_required",
        message="Critical materials must have quality standards defined",
        check=lambda m, ctx: not m.is_critical or has_text(m.quality_standards),
    ),
)


SUPPLIER_RULES = (
    Rule(
        field="performance_score",
        code="performance_metrics_required",
        message="Approved suppliers must have performance metrics",
        check=lambda s, ctx: not s.is_approved or s.performance_score is not None,
    ),
    Rule(
        field="on_time_delivery_rate",
        code="performance_metrics_required",
        message="Approved suppliers must have performance metrics",
        check=lambda s, ctx: not s.is_approved or s.on_time_delivery_rate is not None,
    ),
)
