"""Error response schemas."""
from pydantic import BaseModel, Field
from typing import Optional


class ErrorResponse(BaseModel):
    """Standard error response schema.

    Used for workflow rejections (409, 422) across the API.
    """

    error: str = Field(
        ...,
        description="Error type identifier",
        examples=["invalid_transition", "unknown_status", "field_consistency_violation"]
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid purchase_order status transition from draft to shipped"]
    )
    details: Optional[dict] = Field(
        None,
        description="Additional error context (statuses involved, field violations, etc.)",
        examples=[{"from_status": "draft", "to_status": "shipped"}]
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "invalid_transition",
                    "message": "Invalid purchase_order status transition from draft to shipped",
                    "details": {"from_status": "draft", "to_status": "shipped"},
                },
                {
                    "error": "unknown_status",
                    "message": "Invalid status",
                },
                {
                    "error": "field_consistency_violation",
                    "message": "Record failed business rules",
                    "details": {
                        "violations": [
                            {
                                "field": "total_amount",
                                "code": "total_mismatch",
                                "message": "Total amount must equal subtotal + tax + shipping - discount",
                                "severity": "error",
                            }
                        ]
                    },
                },
            ]
        }
    }
