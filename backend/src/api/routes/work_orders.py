"""API routes for manufacturing work order validation and status changes."""

from fastapi import APIRouter, Depends

from src.api.deps import get_workflow_service
from src.models.enums import EntityType
from src.schemas.errors import ErrorResponse
from src.schemas.work_order import WorkOrderRecord, WorkOrderStatusChangeRequest
from src.schemas.workflow import ValidationReport
from src.services.workflow_service import WorkflowService

router = APIRouter()

ENTITY = EntityType.WORK_ORDER


@router.post(
    "/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate work order",
)
async def validate_work_order(
    record: WorkOrderRecord,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    return service.report(ENTITY, service.validate_record(ENTITY, record))


@router.post(
    "/status",
    response_model=WorkOrderRecord,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Change work order status",
)
async def change_work_order_status(
    request: WorkOrderStatusChangeRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> WorkOrderRecord:
    """Apply a status change to a work order snapshot.

    Entering quality check needs quality notes; going on hold needs a delay
    reason.
    """
    return service.change_status(ENTITY, request.record, request.change)
