"""Prometheus metrics helpers."""

from __future__ import annotations

import re

from prometheus_client import Counter, Histogram

HTTP_REQUESTS_TOTAL = Counter(
    "richhabits_http_requests_total",
    "Total number of HTTP requests.",
    ["method", "route", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "richhabits_http_request_duration_seconds",
    "HTTP request duration in seconds.",
    ["method", "route", "status"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

TRANSITION_CHECKS_TOTAL = Counter(
    "richhabits_transition_checks_total",
    "Status transition checks by outcome.",
    ["entity", "outcome"],
)

RULE_VIOLATIONS_TOTAL = Counter(
    "richhabits_rule_violations_total",
    "Business rule violations reported, by field.",
    ["entity", "field", "severity"],
)


def observe_http_request(
    *,
    method: str,
    route: str,
    status_code: int,
    duration_ms: float,
) -> None:
    status = str(status_code)
    HTTP_REQUESTS_TOTAL.labels(method=method, route=route, status=status).inc()
    HTTP_REQUEST_DURATION_SECONDS.labels(
        method=method, route=route, status=status
    ).observe(duration_ms / 1000.0)


def observe_transition_check(*, entity: str, outcome: str) -> None:
    TRANSITION_CHECKS_TOTAL.labels(entity=entity, outcome=outcome).inc()


_ITEM_INDEX = re.compile(r"\[\d+\]")


def field_label(path: str) -> str:
    """Collapse list indexes so `items[57].quantity` is counted as `items[].quantity`."""
    return _ITEM_INDEX.sub("[]", path)


def observe_violations(entity: str, violations) -> None:
    for violation in violations:
        RULE_VIOLATIONS_TOTAL.labels(
            entity=entity,
            field=field_label(violation.field),
            severity=violation.severity.value,
        ).inc()
