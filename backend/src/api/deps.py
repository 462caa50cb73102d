"""FastAPI dependencies shared by the workflow routes."""

import hmac

from fastapi import Depends, Header, HTTPException, status

from src.core.config import Settings, get_settings
from src.services.workflow_service import WorkflowService


def get_workflow_service() -> WorkflowService:
    """Provide a workflow service bound to the current settings."""
    return WorkflowService(get_settings())


def _scrape_token(authorization: str | None, x_metrics_token: str | None) -> str | None:
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return x_metrics_token


def require_metrics_access(
    authorization: str | None = Header(default=None),
    x_metrics_token: str | None = Header(default=None, alias="X-Metrics-Token"),
    settings: Settings = Depends(get_settings),
) -> None:
    """Guard the scrape endpoint outside development.

    Production without a configured ``metrics_token`` hides the endpoint (404);
    a missing or wrong token is refused (403).

    Raises:
        HTTPException: 404 or 403 as above
    """
    if settings.environment != "production":
        return
    if not settings.metrics_token:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    token = _scrape_token(authorization, x_metrics_token)
    if not token or not hmac.compare_digest(token, settings.metrics_token):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
