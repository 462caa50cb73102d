"""Business rules for customer orders and order items."""

from decimal import Decimal

from src.core.rule_engine import ItemRule, Rule, as_aware, days_between, has_text, money_matches, net_total
from src.models.enums import OrderItemStatus, OrderStatus, RuleSeverity

_DESIGN_PHASE = {
    OrderItemStatus.PENDING_DESIGN,
    OrderItemStatus.DESIGN_IN_PROGRESS,
    OrderItemStatus.DESIGN_APPROVED,
}
_MANUFACTURING = {
    OrderItemStatus.IN_PRODUCTION,
    OrderItemStatus.QUALITY_CHECK,
    OrderItemStatus.COMPLETED,
}
_ACTIVE_EXCLUDED = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}
_ITEM_SETTLED = {OrderItemStatus.COMPLETED, OrderItemStatus.CANCELLED}

MIN_MARGIN_PERCENT = Decimal("10")
HIGH_QUANTITY = 1000


def _due_date_ahead(order, ctx) -> bool:
    if not order.due_date or order.status_code in _ACTIVE_EXCLUDED:
        return True
    return as_aware(order.due_date) > ctx.now


def _due_date_within_year(order, ctx) -> bool:
    if not order.due_date or order.status_code in _ACTIVE_EXCLUDED:
        return True
    return days_between(ctx.now, order.due_date) <= ctx.settings.delivery_window_max_days


def _revenue_within_total(order, ctx) -> bool:
    if order.revenue_estimate is None or order.total_amount is None:
        return True
    return order.revenue_estimate <= order.total_amount


def _total_matches_items(order, ctx) -> bool:
    if not order.items or order.total_amount is None:
        return True
    calculated = sum(
        (Decimal(item.quantity) * (item.price_snapshot or Decimal("0")) for item in order.items),
        Decimal("0"),
    )
    return money_matches(order.total_amount, calculated, ctx)


def _items_ready_to_ship(order, ctx) -> bool:
    if order.status_code != OrderStatus.SHIPPED:
        return True
    return all(item.status_code in _ITEM_SETTLED for item in order.items)


def _margin_healthy(order, ctx) -> bool:
    if not order.revenue_estimate or not order.total_amount:
        return True
    return order.revenue_estimate / order.total_amount * 100 >= MIN_MARGIN_PERCENT


ORDER_RULES = (
    Rule(
        field="due_date",
        code="due_date_passed",
        message="Due date must be in the future for active orders",
        check=_due_date_ahead,
    ),
    Rule(
        field="due_date",
        code="due_date_too_far",
        message="Due date is more than {delivery_window_max_days} days away",
        check=_due_date_within_year,
        severity=RuleSeverity.WARNING,
    ),
    Rule(
        field="revenue_estimate",
        code="revenue_exceeds_total",
        message="Revenue estimate cannot exceed total amount",
        check=_revenue_within_total,
    ),
    Rule(
        field="customer_contact_name",
        code="contact_required",
        message="Completed orders must have customer contact information",
        check=lambda order, ctx: (
            order.status_code != OrderStatus.COMPLETED
            or has_text(order.customer_contact_name)
            or bool(order.customer_contact_email)
        ),
    ),
    Rule(
        field="status_code",
        code="incomplete_items_cannot_ship",
        message="Cannot ship order while items are not completed or cancelled",
        check=_items_ready_to_ship,
    ),
    Rule(
        field="total_amount",
        code="total_mismatch",
        message="Total amount does not match the sum of item quantity times price",
        check=_total_matches_items,
    ),
    Rule(
        field="revenue_estimate",
        code="low_margin",
        message="Profit margin is below 10% - please review pricing",
        check=_margin_healthy,
        severity=RuleSeverity.WARNING,
    ),
    ItemRule(
        field="quantity",
        code="high_quantity",
        message="Quantity is unusually high - please verify",
        check=lambda item, ctx: item.quantity <= HIGH_QUANTITY,
        severity=RuleSeverity.WARNING,
        collection="items",
    ),
)


ORDER_TOTALS_RULES = (
    Rule(
        field="total_amount",
        code="total_mismatch",
        message="Total amount must equal subtotal + tax + shipping - discount",
        check=lambda t, ctx: money_matches(
            t.total_amount,
            net_total(t.subtotal, t.tax_amount, t.shipping_amount, t.discount_amount),
            ctx,
        ),
    ),
    Rule(
        field="revenue_estimate",
        code="revenue_exceeds_total",
        message="Revenue estimate cannot exceed total amount",
        check=lambda t, ctx: t.revenue_estimate is None or t.revenue_estimate <= t.total_amount,
    ),
)


ORDER_STATUS_CHANGE_RULES = (
    Rule(
        field="reason",
        code="reason_required",
        message="Cancelling or holding an order requires a reason",
        check=lambda req, ctx: (
            req.status_code not in {OrderStatus.CANCELLED, OrderStatus.ON_HOLD} or has_text(req.reason)
        ),
    ),
)


ORDER_ITEM_RULES = (
    Rule(
        field="status_code",
        code="designer_outside_design_phase",
        message="Order item with assigned designer must be in design phase status",
        check=lambda item, ctx: item.designer_id is None or item.status_code in _DESIGN_PHASE,
        severity=RuleSeverity.WARNING,
    ),
    Rule(
        field="price_snapshot",
        code="price_required",
        message="Completed order items must have a positive price",
        check=lambda item, ctx: (
            item.status_code != OrderItemStatus.COMPLETED
            or (item.price_snapshot is not None and item.price_snapshot > 0)
        ),
    ),
    Rule(
        field="manufacturer_id",
        code="manufacturer_required",
        message="Order items in production must have a manufacturer",
        check=lambda item, ctx: item.status_code not in _MANUFACTURING or item.manufacturer_id is not None,
    ),
)

