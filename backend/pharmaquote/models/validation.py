"""Validation result models."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ValidationResult(BaseModel):
    """Outcome of a whole-form validation.

    ``errors`` maps camelCase field names (``partyName``, ``items``, ...) to
    user-facing messages. ``item_errors`` holds one field -> message map per
    line item, in item order. Nothing is raised; the caller decides how to
    present the messages and whether to block submission.
    """

    model_config = ConfigDict(populate_by_name=True)

    valid: bool = Field(..., description="True when no rule failed")
    errors: Dict[str, str] = Field(default_factory=dict, description="Field -> message")
    item_errors: List[Dict[str, str]] = Field(
        default_factory=list,
        alias="itemErrors",
        description="Per-item field -> message maps",
    )

    @classmethod
    def from_errors(
        cls,
        errors: Dict[str, str],
        item_errors: Optional[List[Dict[str, str]]] = None,
    ) -> "ValidationResult":
        return cls(valid=not errors, errors=dict(errors), item_errors=list(item_errors or []))
