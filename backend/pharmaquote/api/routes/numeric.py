"""Numeric field check route.

Lets a client run the same parse and advisory checks the server applies to
quantity, rate, MRP and charge fields.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...models import APIResponse
from ...services.numeric_input import (
    REJECTED,
    NumericFieldConfig,
    apply_input,
    is_in_progress,
    parse,
    to_number,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Numeric"])


class NumericCheckRequest(BaseModel):
    """Edit offered to a numeric field."""

    value: Any = Field(None, description="Raw text the user produced")
    current: str = Field("", description="Value currently stored in the field")
    min: Optional[float] = Field(None, description="Minimum value (advisory)")
    max: Optional[float] = Field(None, description="Maximum value (advisory)")
    allow_negative: bool = Field(False, description="Whether negatives are allowed")
    allow_decimals: bool = Field(True, description="Whether a decimal point is allowed")


@router.post(
    "/numeric/check",
    response_model=APIResponse,
    summary="Check an edit to a numeric field",
)
async def check_numeric(request: NumericCheckRequest) -> dict:
    """
    Parse and check a numeric field edit.

    - Malformed text is rejected: `accepted` is false and `value` keeps `current`
    - Range and sign problems are advisory: the value is accepted and `error`
      carries the message
    """
    config = NumericFieldConfig(
        min_value=request.min,
        max_value=request.max,
        allow_negative=request.allow_negative,
        allow_decimals=request.allow_decimals,
    )
    accepted = parse(request.value, config) is not REJECTED
    state = apply_input(request.current, request.value, config)

    return {
        "success": True,
        "message": "Accepted" if accepted else "Rejected",
        "data": {
            "accepted": accepted,
            "value": state.value,
            "error": state.error,
            "inProgress": is_in_progress(state.value),
            "number": to_number(state.value),
        },
    }
