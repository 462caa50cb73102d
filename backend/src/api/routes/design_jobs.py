"""API routes for design job validation, reviews and status changes."""

from fastapi import APIRouter, Depends

from src.api.deps import get_workflow_service
from src.models.enums import EntityType
from src.schemas.design_job import DesignJobRecord, DesignJobStatusChangeRequest, ReviewDesignRequest
from src.schemas.errors import ErrorResponse
from src.schemas.workflow import ValidationReport
from src.services.workflow_service import WorkflowService

router = APIRouter()

ENTITY = EntityType.DESIGN_JOB


@router.post(
    "/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate design job",
)
async def validate_design_job(
    record: DesignJobRecord,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    return service.report(ENTITY, service.validate_record(ENTITY, record))


@router.post(
    "/review/validate",
    response_model=ValidationReport,
    responses={422: {"model": ErrorResponse}},
    summary="Validate design review decision",
)
async def validate_design_review(
    request: ReviewDesignRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationReport:
    """Rejections need a reason; rejections requiring revision need notes."""
    return service.report(ENTITY, service.validate_request(ENTITY, "review", request))


@router.post(
    "/status",
    response_model=DesignJobRecord,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Change design job status",
)
async def change_design_job_status(
    request: DesignJobStatusChangeRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> DesignJobRecord:
    """Apply a status change to a design job snapshot.

    The legacy ``review`` tag is accepted and stored as ``under_review``.
    """
    return service.change_status(ENTITY, request.record, request.change)
