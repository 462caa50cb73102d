"""Business rules for manufacturing work orders."""

from src.core.rule_engine import Rule, as_aware, days_between, has_text
from src.models.enums import WorkOrderStatus

_WO = WorkOrderStatus

_NEEDS_MANUFACTURER = {_WO.IN_PRODUCTION, _WO.QUALITY_CHECK, _WO.PACKAGING, _WO.COMPLETED}
_FINISHED = {_WO.COMPLETED, _WO.SHIPPED}


def _ordered(start, end) -> bool:
    if not start or not end:
        return True
    return as_aware(start) < as_aware(end)


def _enough_manufacturing_time(wo, ctx) -> bool:
    start, due = wo.planned_start_date, wo.planned_due_date
    # Reversed dates are reported by their own rule
    if not start or not due or not _ordered(start, due):
        return True
    return days_between(start, due) >= ctx.settings.min_manufacturing_days


WORK_ORDER_RULES = (
    Rule(
        field="planned_due_date",
        code="planned_dates_reversed",
        message="Planned start date must be before planned due date",
        check=lambda wo, ctx: _ordered(wo.planned_start_date, wo.planned_due_date),
    ),
    Rule(
        field="planned_due_date",
        code="insufficient_manufacturing_time",
        message="Manufacturing period is too short: plan at least {min_manufacturing_days} day(s)",
        check=_enough_manufacturing_time,
    ),
    Rule(
        field="actual_end_date",
        code="actual_dates_reversed",
        message="Actual start date must be before actual end date",
        check=lambda wo, ctx: _ordered(wo.actual_start_date, wo.actual_end_date),
    ),
    Rule(
        field="actual_completion_date",
        code="completion_date_required",
        message="Completed work orders must have a completion date",
        check=lambda wo, ctx: wo.status_code not in _FINISHED or wo.actual_completion_date is not None,
    ),
    Rule(
        field="delay_reason",
        code="delay_reason_required",
        message="Work orders on hold must include a delay reason",
        check=lambda wo, ctx: wo.status_code != _WO.ON_HOLD or has_text(wo.delay_reason),
    ),
    Rule(
        field="manufacturer_id",
        code="manufacturer_required",
        message="Work orders in production must have a manufacturer assigned",
        check=lambda wo, ctx: wo.status_code not in _NEEDS_MANUFACTURER or wo.manufacturer_id is not None,
    ),
)


WORK_ORDER_STATUS_CHANGE_RULES = (
    Rule(
        field="quality_notes",
        code="quality_notes_required",
        message="Quality check transitions must include quality notes",
        check=lambda req, ctx: req.status_code != _WO.QUALITY_CHECK or has_text(req.quality_notes),
    ),
    Rule(
        field="delay_reason",
        code="delay_reason_required",
        message="Work orders on hold must include a delay reason",
        check=lambda req, ctx: req.status_code != _WO.ON_HOLD or has_text(req.delay_reason),
    ),
)
