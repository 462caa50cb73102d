"""Business rules for design jobs and design reviews."""

from src.core.rule_engine import Rule, as_aware, has_text
from src.models.enums import DesignJobStatus, RuleSeverity

_DJ = DesignJobStatus

_CLOSED = {_DJ.APPROVED, _DJ.REJECTED, _DJ.CANCELED}
_STARTED = {
    _DJ.DRAFTING,
    _DJ.SUBMITTED_FOR_REVIEW,
    _DJ.UNDER_REVIEW,
    _DJ.REVISION_REQUESTED,
    _DJ.REVISIONS_SUBMITTED,
    _DJ.APPROVED,
}
_FINISHED = {_DJ.APPROVED, _DJ.REJECTED}


def _deadline_ahead(job, ctx) -> bool:
    if not job.deadline or job.status_code in _CLOSED:
        return True
    return as_aware(job.deadline) > ctx.now


def _deadline_leaves_room(job, ctx) -> bool:
    if not job.deadline or not job.estimated_hours or job.status_code in _CLOSED:
        return True
    hours_left = (as_aware(job.deadline) - ctx.now).total_seconds() / 3600
    # A passed deadline is already an error
    if hours_left <= 0:
        return True
    return hours_left >= job.estimated_hours * 2


def _completed_after_start(job, ctx) -> bool:
    if not job.completed_at or not job.started_at:
        return True
    return as_aware(job.completed_at) >= as_aware(job.started_at)


def _hours_reasonable(job, ctx) -> bool:
    if job.actual_hours is None or not job.estimated_hours:
        return True
    return job.actual_hours <= job.estimated_hours * 2


_REJECTION_REASON_MESSAGE = (
    "Rejected design jobs must include a rejection reason of at least "
    "{rejection_reason_min_length} characters"
)


DESIGN_JOB_RULES = (
    Rule(
        field="deadline",
        code="deadline_passed",
        message="Deadline must be in the future for active design jobs",
        check=_deadline_ahead,
    ),
    Rule(
        field="deadline",
        code="tight_deadline",
        message="Deadline may not provide sufficient time for estimated work",
        check=_deadline_leaves_room,
        severity=RuleSeverity.WARNING,
    ),
    Rule(
        field="started_at",
        code="start_time_required",
        message="Started design jobs must have a start time",
        check=lambda job, ctx: job.status_code not in _STARTED or job.started_at is not None,
    ),
    Rule(
        field="completed_at",
        code="completion_time_required",
        message="Completed design jobs must have a completion time",
        check=lambda job, ctx: job.status_code not in _FINISHED or job.completed_at is not None,
    ),
    Rule(
        field="completed_at",
        code="completed_before_start",
        message="Completion time cannot be before start time",
        check=_completed_after_start,
    ),
    Rule(
        field="revision_count",
        code="revisions_exhausted",
        message="Revision count cannot exceed maximum allowed revisions",
        check=lambda job, ctx: job.revision_count <= job.max_revisions,
    ),
    Rule(
        field="actual_hours",
        code="hours_overrun",
        message="Actual hours significantly exceed estimated hours - please review",
        check=_hours_reasonable,
    ),
    Rule(
        field="actual_hours",
        code="actual_hours_missing",
        message="Completed design jobs should have actual hours tracked",
        check=lambda job, ctx: job.status_code not in _FINISHED or bool(job.actual_hours),
        severity=RuleSeverity.WARNING,
    ),
    Rule(
        field="rejection_reason",
        code="rejection_reason_required",
        message=_REJECTION_REASON_MESSAGE,
        check=lambda job, ctx: (
            job.status_code != _DJ.REJECTED or has_text(job.rejection_reason, ctx.min_reason_length)
        ),
    ),
)


DESIGN_JOB_STATUS_CHANGE_RULES = (
    Rule(
        field="client_feedback",
        code="client_feedback_required",
        message="Revision requests must include client feedback",
        check=lambda req, ctx: req.status_code != _DJ.REVISION_REQUESTED or has_text(req.client_feedback),
    ),
    Rule(
        field="rejection_reason",
        code="rejection_reason_required",
        message=_REJECTION_REASON_MESSAGE,
        check=lambda req, ctx: (
            req.status_code != _DJ.REJECTED or has_text(req.rejection_reason, ctx.min_reason_length)
        ),
    ),
)


DESIGN_REVIEW_RULES = (
    Rule(
        field="rejection_reason",
        code="rejection_reason_required",
        message=_REJECTION_REASON_MESSAGE,
        check=lambda req, ctx: req.approved or has_text(req.rejection_reason, ctx.min_reason_length),
    ),
    Rule(
        field="revision_notes",
        code="revision_notes_required",
        message="Rejected designs requiring revision must include revision notes",
        check=lambda req, ctx: req.approved or not req.revision_required or has_text(req.revision_notes),
    ),
)
