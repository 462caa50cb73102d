"""API routes describing status workflows and checking transitions."""

from fastapi import APIRouter, Depends

from src.api.deps import get_workflow_service
from src.models.enums import EntityType
from src.schemas.errors import ErrorResponse
from src.schemas.workflow import (
    StatusDetail,
    TransitionCheckRequest,
    TransitionCheckResponse,
    WorkflowDescription,
)
from src.services.workflow_service import WorkflowService

router = APIRouter()


@router.get(
    "",
    response_model=list[WorkflowDescription],
    summary="List status workflows",
)
async def list_workflows(
    service: WorkflowService = Depends(get_workflow_service),
) -> list[WorkflowDescription]:
    """Return the transition table of every entity."""
    return [service.describe(entity) for entity in EntityType]


@router.get(
    "/{entity}",
    response_model=WorkflowDescription,
    summary="Describe one status workflow",
)
async def get_workflow(
    entity: EntityType,
    service: WorkflowService = Depends(get_workflow_service),
) -> WorkflowDescription:
    return service.describe(entity)


@router.get(
    "/{entity}/statuses/{status}",
    response_model=StatusDetail,
    responses={422: {"model": ErrorResponse}},
    summary="Valid next statuses",
)
async def get_status_detail(
    entity: EntityType,
    status: str,
    service: WorkflowService = Depends(get_workflow_service),
) -> StatusDetail:
    """List the statuses reachable from ``status`` and whether it is terminal."""
    return service.status_detail(entity, status)


@router.post(
    "/{entity}/transitions/check",
    response_model=TransitionCheckResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Check a status transition",
)
async def check_transition(
    entity: EntityType,
    request: TransitionCheckRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> TransitionCheckResponse:
    """Check whether moving from one status to another is allowed.

    A disallowed transition answers 200 with ``allowed: false``; a tag that
    is not a status of the entity answers 422 ``unknown_status``.
    """
    allowed = service.check_transition(entity, request.from_status, request.to_status)
    return TransitionCheckResponse(
        entity=entity,
        from_status=request.from_status,
        to_status=request.to_status,
        allowed=allowed,
    )
