"""Workflow service binding status tables to business rule sets."""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel

from src.core.config import Settings, get_settings
from src.core.design_job_rules import DESIGN_JOB_RULES, DESIGN_JOB_STATUS_CHANGE_RULES, DESIGN_REVIEW_RULES
from src.core.errors import FieldConsistencyViolation, FieldViolation, InvalidTransition, UnknownStatus
from src.core.metrics import observe_transition_check, observe_violations
from src.core.order_rules import ORDER_ITEM_RULES, ORDER_RULES, ORDER_STATUS_CHANGE_RULES, ORDER_TOTALS_RULES
from src.core.purchase_order_rules import (
    MATERIAL_RULES,
    PURCHASE_ORDER_APPROVAL_RULES,
    PURCHASE_ORDER_ITEM_RULES,
    PURCHASE_ORDER_RULES,
    PURCHASE_ORDER_STATUS_CHANGE_RULES,
    SUPPLIER_RULES,
)
from src.core.rule_engine import Rule, errors_only, evaluate_rules
from src.core.structured_logging import log_json
from src.core.transition_table import TransitionTable
from src.core.work_order_rules import WORK_ORDER_RULES, WORK_ORDER_STATUS_CHANGE_RULES
from src.core.workflows import get_workflow
from src.models.enums import EntityType
from src.schemas.workflow import StatusChangeRequest, StatusDetail, ValidationReport, WorkflowDescription

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityPolicy:
    """Rule sets that apply to one entity type."""

    record_rules: tuple[Rule, ...]
    status_change_rules: tuple[Rule, ...] = ()
    request_rules: Mapping[str, tuple[Rule, ...]] = field(default_factory=dict)


POLICIES: Mapping[EntityType, EntityPolicy] = MappingProxyType(
    {
        EntityType.PURCHASE_ORDER: EntityPolicy(
            record_rules=PURCHASE_ORDER_RULES,
            status_change_rules=PURCHASE_ORDER_STATUS_CHANGE_RULES,
            request_rules={
                "item": PURCHASE_ORDER_ITEM_RULES,
                "approval": PURCHASE_ORDER_APPROVAL_RULES,
                "material": MATERIAL_RULES,
                "supplier": SUPPLIER_RULES,
            },
        ),
        EntityType.DESIGN_JOB: EntityPolicy(
            record_rules=DESIGN_JOB_RULES,
            status_change_rules=DESIGN_JOB_STATUS_CHANGE_RULES,
            request_rules={"review": DESIGN_REVIEW_RULES},
        ),
        EntityType.ORDER_ITEM: EntityPolicy(record_rules=ORDER_ITEM_RULES),
        EntityType.ORDER: EntityPolicy(
            record_rules=ORDER_RULES,
            status_change_rules=ORDER_STATUS_CHANGE_RULES,
            request_rules={"totals": ORDER_TOTALS_RULES},
        ),
        EntityType.WORK_ORDER: EntityPolicy(
            record_rules=WORK_ORDER_RULES,
            status_change_rules=WORK_ORDER_STATUS_CHANGE_RULES,
        ),
        # Fulfillment records carry no cross-field rules, only the status table
        EntityType.FULFILLMENT: EntityPolicy(record_rules=()),
    }
)


def _dedupe(violations: list[FieldViolation]) -> list[FieldViolation]:
    # The same requirement can fail on the request and again on the merged record
    seen = set()
    unique = []
    for violation in violations:
        key = (violation.field, violation.code)
        if key not in seen:
            seen.add(key)
            unique.append(violation)
    return unique


class WorkflowService:
    """Service for checking status changes and record consistency."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize workflow service.

        Args:
            settings: Settings override (defaults to the cached settings)
        """
        self.settings = settings or get_settings()

    def _table(self, entity: EntityType) -> TransitionTable:
        return get_workflow(entity)

    def _log_unknown(self, entity: EntityType, exc: UnknownStatus) -> None:
        observe_transition_check(entity=entity.value, outcome="unknown_status")
        log_json(
            logger,
            logging.WARNING,
            "workflow.unknown_status",
            entity=entity.value,
            value=exc.value,
        )

    def _evaluate(
        self,
        entity: EntityType,
        rules: tuple[Rule, ...],
        subject: BaseModel,
        now: Optional[datetime],
    ) -> list[FieldViolation]:
        violations = evaluate_rules(rules, subject, now=now, settings=self.settings)
        observe_violations(entity.value, violations)
        return violations

    def describe(self, entity: EntityType) -> WorkflowDescription:
        """Describe the statuses and transition table of an entity.

        Args:
            entity: Entity type

        Returns:
            WorkflowDescription with statuses, terminal statuses and table
        """
        table = self._table(entity)
        return WorkflowDescription(
            entity=entity,
            statuses=[s.value for s in table.statuses],
            initial_status=table.initial.value,
            terminal_statuses=sorted(s.value for s in table.terminal_statuses),
            transitions={
                source.value: sorted(t.value for t in targets)
                for source, targets in table.rows().items()
            },
            aliases={alias: s.value for alias, s in table.aliases.items()},
        )

    def status_detail(self, entity: EntityType, status: str) -> StatusDetail:
        """Where a record in ``status`` may move next.

        Raises:
            UnknownStatus: If the tag is not a status of the entity
        """
        table = self._table(entity)
        try:
            current = table.parse(status)
        except UnknownStatus as e:
            self._log_unknown(entity, e)
            raise
        return StatusDetail(
            entity=entity,
            status=current.value,
            is_terminal=table.is_terminal(current),
            valid_transitions=sorted(s.value for s in table.valid_transitions_from(current)),
        )

    def check_transition(self, entity: EntityType, from_status, to_status) -> bool:
        """Check whether a status change is allowed.

        Args:
            entity: Entity type
            from_status: Current status (member or raw tag)
            to_status: Requested status (member or raw tag)

        Returns:
            True if the transition is in the table (identity included)

        Raises:
            UnknownStatus: If either tag is not a status of the entity
        """
        table = self._table(entity)
        try:
            allowed = table.is_valid_transition(from_status, to_status)
        except UnknownStatus as e:
            self._log_unknown(entity, e)
            raise

        observe_transition_check(
            entity=entity.value,
            outcome="allowed" if allowed else "rejected",
        )
        return allowed

    def validate_record(
        self,
        entity: EntityType,
        record: BaseModel,
        now: Optional[datetime] = None,
    ) -> list[FieldViolation]:
        """Run the entity's record rules and return every violation."""
        return self._evaluate(entity, POLICIES[entity].record_rules, record, now)

    def ensure_valid(
        self,
        entity: EntityType,
        record: BaseModel,
        now: Optional[datetime] = None,
    ) -> list[FieldViolation]:
        """Validate a record and fail on error-level violations.

        Returns:
            Remaining warnings (empty if the record is clean)

        Raises:
            FieldConsistencyViolation: If any error-level rule failed
        """
        violations = self.validate_record(entity, record, now)
        if errors_only(violations):
            raise FieldConsistencyViolation(entity, violations)
        return violations

    def report(self, entity: EntityType, violations: list[FieldViolation]) -> ValidationReport:
        """Build a validation report, failing if any violation is an error.

        Raises:
            FieldConsistencyViolation: If any error-level rule failed
        """
        if errors_only(violations):
            raise FieldConsistencyViolation(entity, violations)
        return ValidationReport.from_violations(entity, violations)

    def validate_request(
        self,
        entity: EntityType,
        kind: str,
        request: BaseModel,
        now: Optional[datetime] = None,
    ) -> list[FieldViolation]:
        """Run the rules for a companion request (approval, review, totals, item, material, supplier).

        Raises:
            KeyError: If the entity has no rules for ``kind``
        """
        rules = POLICIES[entity].request_rules[kind]
        return self._evaluate(entity, rules, request, now)

    def change_status(
        self,
        entity: EntityType,
        record: BaseModel,
        change: StatusChangeRequest,
        now: Optional[datetime] = None,
    ) -> BaseModel:
        """Apply a status change to a record snapshot.

        The transition is checked first, then the change request's own rules
        and the merged record's rules; all violations are reported together.

        Args:
            entity: Entity type
            record: Current record snapshot (left untouched)
            change: Requested status plus companion fields
            now: Reference time for date rules

        Returns:
            New record with the status and companion fields replaced

        Raises:
            InvalidTransition: If the table does not allow the change
            FieldConsistencyViolation: If any error-level rule failed
        """
        table = self._table(entity)
        current = record.status_code
        try:
            target = table.require_transition(current, change.status_code)
        except InvalidTransition:
            observe_transition_check(entity=entity.value, outcome="rejected")
            log_json(
                logger,
                logging.INFO,
                "workflow.transition_rejected",
                entity=entity.value,
                from_status=current.value,
                to_status=change.status_code.value,
            )
            raise
        observe_transition_check(entity=entity.value, outcome="allowed")

        policy = POLICIES[entity]
        violations = self._evaluate(entity, policy.status_change_rules, change, now)

        updated = record.model_copy(update={**change.record_updates(), "status_code": target})
        violations = _dedupe(violations + self._evaluate(entity, policy.record_rules, updated, now))

        if errors_only(violations):
            log_json(
                logger,
                logging.INFO,
                "workflow.record_rejected",
                entity=entity.value,
                to_status=target.value,
                fields=sorted({v.field for v in violations if v.is_error}),
            )
            raise FieldConsistencyViolation(entity, violations)

        log_json(
            logger,
            logging.INFO,
            "workflow.status_changed",
            entity=entity.value,
            from_status=current.value,
            to_status=target.value,
            warnings=len(violations),
        )
        return updated
