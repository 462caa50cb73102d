"""Unit tests for status transition tables."""

import pytest

from src.core.errors import InvalidTransition, UnknownStatus
from src.core.transition_table import TransitionTable
from src.core.workflows import (
    DESIGN_JOB_WORKFLOW,
    FULFILLMENT_WORKFLOW,
    PURCHASE_ORDER_WORKFLOW,
    WORKFLOWS,
    get_allowed_transitions,
    is_valid_transition,
)
from src.models.enums import (
    DesignJobStatus,
    EntityType,
    FulfillmentStatus,
    OrderStatus,
    PurchaseOrderStatus,
)

ALL_TABLES = list(WORKFLOWS.values())


class TestTableShape:
    """Properties every entity table must satisfy."""

    def test_every_entity_has_a_table(self):
        assert set(WORKFLOWS) == set(EntityType)

    @pytest.mark.parametrize("table", ALL_TABLES, ids=lambda t: t.entity.value)
    def test_every_status_is_a_key(self, table):
        assert set(table.rows()) == set(table.status_type)

    @pytest.mark.parametrize("table", ALL_TABLES, ids=lambda t: t.entity.value)
    def test_identity_transition_always_allowed(self, table):
        for status in table.statuses:
            assert table.is_valid_transition(status, status)

    @pytest.mark.parametrize("table", ALL_TABLES, ids=lambda t: t.entity.value)
    def test_terminal_statuses_have_empty_rows(self, table):
        assert table.terminal_statuses
        for status in table.terminal_statuses:
            assert table.valid_transitions_from(status) == frozenset()
            assert table.is_terminal(status)

    @pytest.mark.parametrize("table", ALL_TABLES, ids=lambda t: t.entity.value)
    def test_terminal_statuses_reject_every_other_target(self, table):
        for status in table.terminal_statuses:
            for target in table.statuses:
                if target is not status:
                    assert not table.is_valid_transition(status, target)

    @pytest.mark.parametrize("table", ALL_TABLES, ids=lambda t: t.entity.value)
    def test_status_tags_round_trip(self, table):
        for status in table.statuses:
            assert table.parse(status.value) is status

    def test_rows_are_read_only(self):
        with pytest.raises(TypeError):
            PURCHASE_ORDER_WORKFLOW.rows()[PurchaseOrderStatus.DRAFT] = frozenset()


class TestPurchaseOrderWorkflow:
    """Purchase order lifecycle."""

    def test_draft_to_pending_approval_allowed(self):
        assert is_valid_transition(EntityType.PURCHASE_ORDER, "draft", "pending_approval")

    def test_draft_to_shipped_rejected(self):
        assert not is_valid_transition(EntityType.PURCHASE_ORDER, "draft", "shipped")

    def test_completed_to_on_hold_rejected(self):
        assert not is_valid_transition(EntityType.PURCHASE_ORDER, "completed", "on_hold")

    def test_on_hold_recovery_targets(self):
        assert get_allowed_transitions(EntityType.PURCHASE_ORDER, "on_hold") == {
            PurchaseOrderStatus.APPROVED,
            PurchaseOrderStatus.SENT,
            PurchaseOrderStatus.ACKNOWLEDGED,
            PurchaseOrderStatus.IN_PRODUCTION,
            PurchaseOrderStatus.SHIPPED,
            PurchaseOrderStatus.CANCELLED,
        }

    def test_rejected_can_return_to_draft(self):
        assert PURCHASE_ORDER_WORKFLOW.is_valid_transition("rejected", "draft")
        assert not PURCHASE_ORDER_WORKFLOW.is_terminal("rejected")

    def test_require_transition_raises_with_both_statuses(self):
        with pytest.raises(InvalidTransition) as exc_info:
            PURCHASE_ORDER_WORKFLOW.require_transition("draft", "shipped")

        assert exc_info.value.from_status is PurchaseOrderStatus.DRAFT
        assert exc_info.value.to_status is PurchaseOrderStatus.SHIPPED
        assert "draft" in str(exc_info.value)
        assert "shipped" in str(exc_info.value)

    def test_require_transition_returns_target(self):
        target = PURCHASE_ORDER_WORKFLOW.require_transition("approved", "sent")
        assert target is PurchaseOrderStatus.SENT


class TestDesignJobWorkflow:
    def test_legacy_review_tag_maps_to_under_review(self):
        assert DESIGN_JOB_WORKFLOW.parse("review") is DesignJobStatus.UNDER_REVIEW
        assert DESIGN_JOB_WORKFLOW.is_valid_transition("submitted_for_review", "review")

    def test_legacy_tag_is_not_a_status(self):
        assert "review" not in {s.value for s in DESIGN_JOB_WORKFLOW.statuses}

    def test_rejected_can_be_requeued(self):
        assert DESIGN_JOB_WORKFLOW.is_valid_transition("rejected", "queued")


class TestFulfillmentWorkflow:
    def test_happy_path_is_linear(self):
        path = [
            "not_started",
            "preparation",
            "packaging",
            "ready_to_ship",
            "shipped",
            "in_transit",
            "delivered",
            "completed",
        ]
        for source, target in zip(path, path[1:]):
            assert is_valid_transition(EntityType.FULFILLMENT, source, target)

    def test_cannot_skip_packaging(self):
        assert not FULFILLMENT_WORKFLOW.is_valid_transition("preparation", "ready_to_ship")

    def test_exception_recovers_or_cancels(self):
        assert get_allowed_transitions(EntityType.FULFILLMENT, "exception") == {
            FulfillmentStatus.PREPARATION,
            FulfillmentStatus.PACKAGING,
            FulfillmentStatus.CANCELLED,
        }

    def test_delivered_cannot_raise_exception(self):
        assert not FULFILLMENT_WORKFLOW.is_valid_transition("delivered", "exception")

    def test_only_exception_leads_to_cancelled(self):
        sources = {
            status
            for status, targets in FULFILLMENT_WORKFLOW.rows().items()
            if FulfillmentStatus.CANCELLED in targets
        }
        assert sources == {FulfillmentStatus.EXCEPTION}


class TestUnknownStatus:
    """Unknown tags are integration errors, not disallowed transitions."""

    def test_unknown_from_status_raises(self):
        with pytest.raises(UnknownStatus) as exc_info:
            PURCHASE_ORDER_WORKFLOW.is_valid_transition("archived", "draft")
        assert exc_info.value.value == "archived"

    def test_unknown_to_status_raises(self):
        with pytest.raises(UnknownStatus):
            PURCHASE_ORDER_WORKFLOW.is_valid_transition("draft", "bogus")

    def test_unknown_identity_is_still_unknown(self):
        with pytest.raises(UnknownStatus):
            PURCHASE_ORDER_WORKFLOW.is_valid_transition("bogus", "bogus")

    def test_other_entity_status_is_not_coerced(self):
        # OrderStatus.DRAFT shares the "draft" tag but belongs to another entity
        with pytest.raises(UnknownStatus):
            PURCHASE_ORDER_WORKFLOW.parse(OrderStatus.DRAFT)

    def test_alias_only_applies_to_its_entity(self):
        with pytest.raises(UnknownStatus):
            PURCHASE_ORDER_WORKFLOW.parse("review")


class TestTableConstruction:
    def test_missing_row_rejected(self):
        with pytest.raises(ValueError, match="no row"):
            TransitionTable(
                EntityType.ORDER,
                OrderStatus,
                {OrderStatus.DRAFT: [OrderStatus.PENDING]},
                initial=OrderStatus.DRAFT,
            )

    def test_foreign_status_rejected(self):
        rows = {status: [] for status in OrderStatus}
        rows[OrderStatus.DRAFT] = [PurchaseOrderStatus.SENT]

        with pytest.raises(ValueError, match="outside"):
            TransitionTable(EntityType.ORDER, OrderStatus, rows, initial=OrderStatus.DRAFT)
