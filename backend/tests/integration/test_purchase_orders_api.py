"""Integration tests for purchase order endpoints."""

import pytest
from httpx import AsyncClient


def po_payload(**overrides) -> dict:
    payload = {
        "po_number": "PO-20250301-0001",
        "subtotal": "100",
        "tax_amount": "8",
        "shipping_amount": "5",
        "discount_amount": "0",
        "total_amount": "113.00",
        "order_date": "2025-03-01T00:00:00Z",
        "expected_delivery_date": "2025-03-15T00:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_validate_consistent_purchase_order(client: AsyncClient):
    response = await client.post("/api/purchase-orders/validate", json=po_payload())

    assert response.status_code == 200
    assert response.json() == {"entity": "purchase_order", "valid": True, "violations": []}


@pytest.mark.asyncio
async def test_validate_total_mismatch(client: AsyncClient):
    response = await client.post(
        "/api/purchase-orders/validate",
        json=po_payload(total_amount="112.50"),
    )

    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "field_consistency_violation"
    (violation,) = data["details"]["violations"]
    assert violation["field"] == "total_amount"
    assert violation["code"] == "total_mismatch"
    assert violation["severity"] == "error"


@pytest.mark.asyncio
async def test_structural_errors_use_default_body(client: AsyncClient):
    response = await client.post(
        "/api/purchase-orders/validate",
        json=po_payload(po_number="12345", priority=9),
    )

    assert response.status_code == 422
    locations = {tuple(e["loc"]) for e in response.json()["detail"]}
    assert ("body", "po_number") in locations
    assert ("body", "priority") in locations


@pytest.mark.asyncio
async def test_unknown_fields_rejected(client: AsyncClient):
    response = await client.post("/api/purchase-orders/validate", json=po_payload(colour="red"))
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_validate_line_item(client: AsyncClient):
    response = await client.post(
        "/api/purchase-orders/items/validate",
        json={
            "material_name": "Polyester mesh",
            "quantity": "20",
            "unit": "yard",
            "unit_cost": "3.10",
            "total_cost": "60.00",
        },
    )

    assert response.status_code == 422
    assert [v["field"] for v in response.json()["details"]["violations"]] == ["total_cost"]


@pytest.mark.asyncio
async def test_approval_rejection_requires_reason(client: AsyncClient):
    response = await client.post(
        "/api/purchase-orders/approval/validate",
        json={"approved": False},
    )

    assert response.status_code == 422
    assert response.json()["details"]["violations"][0]["field"] == "rejection_reason"


@pytest.mark.asyncio
async def test_change_status_submits_for_approval(client: AsyncClient):
    response = await client.post(
        "/api/purchase-orders/status",
        json={"record": po_payload(), "change": {"status_code": "pending_approval"}},
    )

    assert response.status_code == 200
    assert response.json()["status_code"] == "pending_approval"


@pytest.mark.asyncio
async def test_change_status_invalid_transition(client: AsyncClient):
    response = await client.post(
        "/api/purchase-orders/status",
        json={"record": po_payload(), "change": {"status_code": "shipped"}},
    )

    assert response.status_code == 409
    data = response.json()
    assert data["error"] == "invalid_transition"
    assert data["details"]["from_status"] == "draft"
    assert data["details"]["to_status"] == "shipped"
    assert "draft" in data["message"] and "shipped" in data["message"]


@pytest.mark.asyncio
async def test_change_status_rejection_needs_reason(client: AsyncClient):
    record = po_payload(status_code="pending_approval")

    response = await client.post(
        "/api/purchase-orders/status",
        json={"record": record, "change": {"status_code": "rejected"}},
    )
    assert response.status_code == 422
    assert [v["field"] for v in response.json()["details"]["violations"]] == ["rejection_reason"]

    response = await client.post(
        "/api/purchase-orders/status",
        json={
            "record": record,
            "change": {"status_code": "rejected", "rejection_reason": "Quote expired last week"},
        },
    )
    assert response.status_code == 200
    assert response.json()["rejection_reason"] == "Quote expired last week"


@pytest.mark.asyncio
async def test_critical_material_without_standards(client: AsyncClient):
    material = {
        "name": "Reflective trim",
        "category": "accessories",
        "unit": "roll",
        "unit_cost": "18.75",
        "is_critical": True,
    }

    response = await client.post("/api/purchase-orders/materials/validate", json=material)
    assert response.status_code == 422
    (violation,) = response.json()["details"]["violations"]
    assert violation["field"] == "quality_standards"

    material["quality_standards"] = "Retroreflectivity per EN ISO 20471"
    response = await client.post("/api/purchase-orders/materials/validate", json=material)
    assert response.status_code == 200
    assert response.json()["valid"] is True


@pytest.mark.asyncio
async def test_approved_supplier_without_metrics(client: AsyncClient):
    response = await client.post(
        "/api/purchase-orders/suppliers/validate",
        json={
            "name": "Carolina Knits",
            "contact_email": "orders@carolinaknits.com",
            "is_approved": True,
            "performance_score": 4,
        },
    )

    assert response.status_code == 422
    assert [v["field"] for v in response.json()["details"]["violations"]] == ["on_time_delivery_rate"]
