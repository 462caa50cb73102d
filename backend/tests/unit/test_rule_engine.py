"""Unit tests for the business rule engine."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from src.core.config import Settings
from src.core.rule_engine import (
    ItemRule,
    Rule,
    as_aware,
    days_between,
    errors_only,
    evaluate_rules,
    has_text,
    net_total,
)
from src.models.enums import RuleSeverity


@dataclass
class _Line:
    quantity: int


@dataclass
class _Record:
    name: str | None = None
    amount: int = 0
    lines: list = field(default_factory=list)


NAME_RULE = Rule(
    field="name",
    code="name_required",
    message="Name is required",
    check=lambda r, ctx: has_text(r.name),
)
AMOUNT_RULE = Rule(
    field="amount",
    code="amount_positive",
    message="Amount must be positive",
    check=lambda r, ctx: r.amount > 0,
)


class TestEvaluateRules:
    def test_clean_record_has_no_violations(self, settings):
        record = _Record(name="ok", amount=1)
        assert evaluate_rules((NAME_RULE, AMOUNT_RULE), record, settings=settings) == []

    def test_all_failures_are_collected(self, settings):
        violations = evaluate_rules((NAME_RULE, AMOUNT_RULE), _Record(), settings=settings)

        assert [v.field for v in violations] == ["name", "amount"]
        assert all(v.is_error for v in violations)

    def test_message_interpolates_settings(self):
        rule = Rule(
            field="reason",
            code="too_short",
            message="At least {rejection_reason_min_length} characters",
            check=lambda r, ctx: False,
        )
        custom = Settings(rejection_reason_min_length=25)

        (violation,) = evaluate_rules((rule,), _Record(), settings=custom)

        assert violation.message == "At least 25 characters"

    def test_now_is_passed_to_rules(self, settings, now):
        seen = []
        rule = Rule(field="x", code="x", message="x", check=lambda r, ctx: seen.append(ctx.now) or True)

        evaluate_rules((rule,), _Record(), now=now, settings=settings)

        assert seen == [now]

    def test_naive_now_is_treated_as_utc(self, settings):
        seen = []
        rule = Rule(field="x", code="x", message="x", check=lambda r, ctx: seen.append(ctx.now) or True)

        evaluate_rules((rule,), _Record(), now=datetime(2025, 1, 1), settings=settings)

        assert seen[0].tzinfo is UTC


class TestItemRule:
    def test_violations_carry_indexed_path(self, settings):
        rule = ItemRule(
            field="quantity",
            code="too_many",
            message="Too many",
            check=lambda line, ctx: line.quantity <= 10,
            collection="lines",
        )
        record = _Record(lines=[_Line(1), _Line(50), _Line(3), _Line(11)])

        violations = evaluate_rules((rule,), record, settings=settings)

        assert [v.field for v in violations] == ["lines[1].quantity", "lines[3].quantity"]

    def test_missing_collection_is_empty(self, settings):
        rule = ItemRule(field="quantity", code="c", message="m", check=lambda line, ctx: False, collection="lines")
        assert evaluate_rules((rule,), _Record(lines=None), settings=settings) == []


class TestSeverity:
    def test_warnings_are_not_errors(self, settings):
        warning = Rule(
            field="amount",
            code="large",
            message="Large amount",
            check=lambda r, ctx: r.amount < 100,
            severity=RuleSeverity.WARNING,
        )

        violations = evaluate_rules((warning, NAME_RULE), _Record(name=None, amount=500), settings=settings)

        assert len(violations) == 2
        assert [v.code for v in errors_only(violations)] == ["name_required"]


class TestHelpers:
    def test_has_text_ignores_whitespace(self):
        assert not has_text("   ")
        assert not has_text(None)
        assert has_text(" ok ")
        assert not has_text("too short", min_length=10)
        assert has_text("long enough reason", min_length=10)

    def test_net_total(self):
        assert net_total(Decimal("100"), Decimal("8"), Decimal("5"), Decimal("3")) == Decimal("110")

    def test_days_between_mixes_naive_and_aware(self):
        start = datetime(2025, 1, 1)
        end = datetime(2025, 1, 11, tzinfo=UTC)
        assert days_between(start, end) == 10

    def test_as_aware_keeps_existing_timezone(self, now):
        assert as_aware(now) is now
