"""API routes for customer order validation and status changes."""

from fastapi import APIRouter, Depends

from src.api.deps import get_workflow_service
from src.models.enums import EntityType
from src.schemas.errors import ErrorResponse
from src.schemas.order import OrderRecord, OrderStatusChangeRequest, OrderTotals
from src.schemas.workflow import ValidationReport
from src.services.workflow_service import WorkflowService

router = APIRouter()

ENTITY = EntityType.ORDER


@router.post(
    "/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate order",
)
async def validate_order(
    record: OrderRecord,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    """Check due date, revenue, contact details and item totals.

    Low margins and unusually large quantities are reported as warnings.
    """
    return service.report(ENTITY, service.validate_record(ENTITY, record))


@router.post(
    "/totals/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate order totals",
)
async def validate_order_totals(
    totals: OrderTotals,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    return service.report(ENTITY, service.validate_request(ENTITY, "totals", totals))


@router.post(
    "/status",
    response_model=OrderRecord,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Change order status",
)
async def change_order_status(
    request: OrderStatusChangeRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> OrderRecord:
    """Apply a status change; cancelling or holding requires a reason."""
    return service.change_status(ENTITY, request.record, request.change)
