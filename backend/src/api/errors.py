"""Exception handlers mapping workflow errors to HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.core.errors import FieldConsistencyViolation, InvalidTransition, UnknownStatus, WorkflowError
from src.schemas.errors import ErrorResponse
from src.schemas.workflow import FieldViolationItem


def _error_response(status_code: int, exc: WorkflowError, message: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=exc.error_code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def unknown_status_handler(request: Request, exc: UnknownStatus) -> JSONResponse:
    # The offending tag is logged by the service, not echoed to the caller
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        exc,
        "Invalid status",
        {"entity": exc.entity.value},
    )


async def invalid_transition_handler(request: Request, exc: InvalidTransition) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        exc,
        str(exc),
        {
            "entity": exc.entity.value,
            "from_status": exc.from_status.value,
            "to_status": exc.to_status.value,
        },
    )


async def field_consistency_handler(request: Request, exc: FieldConsistencyViolation) -> JSONResponse:
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        exc,
        str(exc),
        {
            "entity": exc.entity.value,
            "violations": [
                FieldViolationItem.model_validate(v).model_dump(mode="json") for v in exc.violations
            ],
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the workflow error handlers to ``app``."""
    app.add_exception_handler(UnknownStatus, unknown_status_handler)
    app.add_exception_handler(InvalidTransition, invalid_transition_handler)
    app.add_exception_handler(FieldConsistencyViolation, field_consistency_handler)
