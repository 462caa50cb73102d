"""Cross-field business rule evaluation.

A rule set is a plain tuple of ``Rule`` objects. ``evaluate_rules`` runs every
rule against a record snapshot and collects all failures, so a form can show
every offending field at once.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from src.core.config import Settings, get_settings
from src.core.errors import FieldViolation
from src.models.enums import RuleSeverity


@dataclass(frozen=True)
class RuleContext:
    """Inputs a rule may need besides the record itself."""

    now: datetime
    settings: Settings

    @property
    def min_reason_length(self) -> int:
        return self.settings.rejection_reason_min_length


@dataclass(frozen=True)
class Rule:
    """A predicate over one record; ``check`` returns True when the rule holds."""

    field: str
    code: str
    message: str
    check: Callable[[Any, RuleContext], bool]
    severity: RuleSeverity = RuleSeverity.ERROR

    def _violation(self, path: str, ctx: RuleContext) -> FieldViolation:
        return FieldViolation(
            field=path,
            code=self.code,
            message=self.message.format(**ctx.settings.model_dump()),
            severity=self.severity,
        )

    def violations(self, record: Any, ctx: RuleContext) -> list[FieldViolation]:
        if self.check(record, ctx):
            return []
        return [self._violation(self.field, ctx)]


@dataclass(frozen=True)
class ItemRule(Rule):
    """Rule applied to every element of a list attribute.

    Violations are reported as ``<collection>[<index>].<field>``.
    """

    collection: str = field(default="items", kw_only=True)

    def violations(self, record: Any, ctx: RuleContext) -> list[FieldViolation]:
        items = getattr(record, self.collection, None) or []
        return [
            self._violation(f"{self.collection}[{index}].{self.field}", ctx)
            for index, item in enumerate(items)
            if not self.check(item, ctx)
        ]


def evaluate_rules(
    rules: Iterable[Rule],
    record: Any,
    *,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> list[FieldViolation]:
    """Evaluate every rule and return all violations (errors and warnings).

    Args:
        rules: Rule set to apply
        record: Record or request snapshot to check
        now: Reference time for date rules (defaults to current UTC time)
        settings: Settings override (defaults to the cached settings)

    Returns:
        List of violations, empty if the record passes
    """
    ctx = RuleContext(
        now=as_aware(now) if now else datetime.now(UTC),
        settings=settings or get_settings(),
    )
    violations: list[FieldViolation] = []
    for rule in rules:
        violations.extend(rule.violations(record, ctx))
    return violations


def errors_only(violations: Sequence[FieldViolation]) -> list[FieldViolation]:
    return [v for v in violations if v.is_error]


# Predicate helpers shared by the rule sets


def as_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with ``now``."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def days_between(start: datetime, end: datetime) -> float:
    return (as_aware(end) - as_aware(start)).total_seconds() / 86400


def has_text(value: str | None, min_length: int = 1) -> bool:
    return value is not None and len(value.strip()) >= min_length


def money_matches(actual: Decimal, expected: Decimal, ctx: RuleContext) -> bool:
    return abs(Decimal(actual) - Decimal(expected)) <= ctx.settings.money_tolerance


def net_total(subtotal, tax, shipping, discount) -> Decimal:
    """subtotal + tax + shipping - discount."""
    return Decimal(subtotal) + Decimal(tax) + Decimal(shipping) - Decimal(discount)
