"""API routes for purchase order validation and status changes."""

from fastapi import APIRouter, Depends

from src.api.deps import get_workflow_service
from src.models.enums import EntityType
from src.schemas.errors import ErrorResponse
from src.schemas.purchase_order import (
    ApprovePurchaseOrderRequest,
    MaterialRecord,
    PurchaseOrderItemRecord,
    PurchaseOrderRecord,
    PurchaseOrderStatusChangeRequest,
    SupplierRecord,
)
from src.schemas.workflow import ValidationReport
from src.services.workflow_service import WorkflowService

router = APIRouter()

ENTITY = EntityType.PURCHASE_ORDER


@router.post(
    "/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate purchase order",
)
async def validate_purchase_order(
    record: PurchaseOrderRecord,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    """Check totals, approval, delivery window and rejection details."""
    return service.report(ENTITY, service.validate_record(ENTITY, record))


@router.post(
    "/items/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate purchase order line item",
)
async def validate_purchase_order_item(
    item: PurchaseOrderItemRecord,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    return service.report(ENTITY, service.validate_request(ENTITY, "item", item))


@router.post(
    "/approval/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate purchase order approval decision",
)
async def validate_purchase_order_approval(
    request: ApprovePurchaseOrderRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    """A rejection must carry a reason."""
    return service.report(ENTITY, service.validate_request(ENTITY, "approval", request))


@router.post(
    "/materials/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate material",
)
async def validate_material(
    material: MaterialRecord,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    """Critical materials must define quality standards."""
    return service.report(ENTITY, service.validate_request(ENTITY, "material", material))


@router.post(
    "/suppliers/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate supplier",
)
async def validate_supplier(
    supplier: SupplierRecord,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    """Approved suppliers must carry performance score and on-time delivery rate."""
    return service.report(ENTITY, service.validate_request(ENTITY, "supplier", supplier))


@router.post(
    "/status",
    response_model=PurchaseOrderRecord,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Change purchase order status",
)
async def change_purchase_order_status(
    request: PurchaseOrderStatusChangeRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> PurchaseOrderRecord:
    """Apply a status change to a purchase order snapshot.

    Valid transitions:
    - draft -> pending_approval, approved, cancelled
    - pending_approval -> approved, rejected, cancelled
    - approved -> sent, cancelled
    - rejected -> draft, cancelled
    - sent, acknowledged, in_production, shipped -> next step or on_hold
    - on_hold -> approved, sent, acknowledged, in_production, shipped, cancelled
    - completed, cancelled -> (terminal)
    """
    return service.change_status(ENTITY, request.record, request.change)
