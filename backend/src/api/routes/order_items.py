"""API routes for order item validation and status changes."""

from fastapi import APIRouter, Depends

from src.api.deps import get_workflow_service
from src.models.enums import EntityType
from src.schemas.errors import ErrorResponse
from src.schemas.order import OrderItemRecord, OrderItemStatusChangeRequest
from src.schemas.workflow import ValidationReport
from src.services.workflow_service import WorkflowService

router = APIRouter()

ENTITY = EntityType.ORDER_ITEM


@router.post(
    "/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate order item",
)
async def validate_order_item(
    record: OrderItemRecord,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    return service.report(ENTITY, service.validate_record(ENTITY, record))


@router.post(
    "/status",
    response_model=OrderItemRecord,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Change order item status",
)
async def change_order_item_status(
    request: OrderItemStatusChangeRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> OrderItemRecord:
    return service.change_status(ENTITY, request.record, request.change)
