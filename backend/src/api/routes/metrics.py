"""Prometheus exposition of request, transition and rule violation counters."""

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.api.deps import require_metrics_access

router = APIRouter()


@router.get(
    "/metrics",
    include_in_schema=False,
    dependencies=[Depends(require_metrics_access)],
    summary="Prometheus metrics",
)
async def metrics_endpoint() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
