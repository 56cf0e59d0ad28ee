"""Models package."""

from .item import Item, ITEM_FIELDS, ITEM_FIELD_ALIASES
from .quote import CompanySettings, QuoteForm, Charges, Totals
from .validation import ValidationResult
from .responses import APIResponse, ErrorResponse

__all__ = [
    "Item",
    "ITEM_FIELDS",
    "ITEM_FIELD_ALIASES",
    "CompanySettings",
    "QuoteForm",
    "Charges",
    "Totals",
    "ValidationResult",
    "APIResponse",
    "ErrorResponse",
]
