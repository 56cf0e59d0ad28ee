"""Quote form, company settings and totals models."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .. import constants
from .item import Item


_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompanySettings(BaseModel):
    """Organization-wide settings shown on printed quotes."""

    model_config = _CAMEL_CONFIG

    company_phone: str = constants.DEFAULT_COMPANY_PHONE
    company_email: str = constants.DEFAULT_COMPANY_EMAIL
    invoice_label: str = constants.DEFAULT_INVOICE_LABEL
    advance_payment_note: str = constants.DEFAULT_ADVANCE_PAYMENT_NOTE


class QuoteForm(BaseModel):
    """Quote being composed, header plus line items."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    # Party / contact
    party_name: str = Field("", description="Party name")
    marketed_by: str = Field("", description="Marketed by")
    client_email: str = Field("", description="Client email")
    client_phone: str = Field("", description="Client phone")
    client_address: str = Field("", description="Client address")

    # Commercial aggregates (inputs for the totals aggregator)
    discount_percent: float = 0
    tax_percent: float = 0
    cylinder_charges: float = 0
    inventory_charges: float = 0

    items: List[Item] = Field(default_factory=lambda: [Item()], description="Line items")

    terms: str = constants.DEFAULT_TERMS
    bank_details: str = ""


# Header fields settable through the form session
HEADER_TEXT_FIELDS = frozenset({
    "party_name", "marketed_by", "client_email", "client_phone", "client_address",
    "terms", "bank_details",
})
HEADER_NUMERIC_FIELDS = frozenset({
    "discount_percent", "tax_percent", "cylinder_charges", "inventory_charges",
})
HEADER_FIELD_ALIASES = {
    to_camel(name): name for name in HEADER_TEXT_FIELDS | HEADER_NUMERIC_FIELDS
}


class Charges(BaseModel):
    """Commercial inputs of the totals aggregator."""

    discount_percent: float = 0
    tax_percent: float = 0
    cylinder_charges: float = 0
    inventory_charges: float = 0

    @classmethod
    def from_form(cls, form: QuoteForm) -> "Charges":
        return cls(
            discount_percent=form.discount_percent,
            tax_percent=form.tax_percent,
            cylinder_charges=form.cylinder_charges,
            inventory_charges=form.inventory_charges,
        )


class Totals(BaseModel):
    """Totals consumed by the rendering layer."""

    model_config = _CAMEL_CONFIG

    subtotal: float = 0
    tax_on_subtotal: float = 0
    tax_on_charges: float = 0
    total_tax: float = 0
    total: float = 0
    advance_payment: float = 0
