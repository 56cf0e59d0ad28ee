"""Read-only projection consumed by the quote rendering layer.

The printable layouts receive ``(items, company_settings, totals, flags)``.
Totals come from a pluggable aggregator; the flags tell a layout whether to
reserve the PVC and soft-gelatin colour columns.
"""

import logging
from typing import List, Protocol, Sequence

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .. import constants
from ..models.item import Item
from ..models.quote import Charges, CompanySettings, Totals


logger = logging.getLogger(__name__)


class TotalsAggregator(Protocol):
    """Computes quote totals from items and commercial inputs."""

    def aggregate(self, items: Sequence[Item], charges: Charges) -> Totals:
        ...


class PreviewTotalsAggregator:
    """Totals as shown on the quote preview.

    Tax on the subtotal uses the quote's tax percent; cylinder and inventory
    charges are taxed at a separate fixed rate. The advance payment is a fixed
    share of the total. The discount percent is not applied here.
    """

    def __init__(self, charges_tax_percent: float = 18.0, advance_payment_ratio: float = 0.35):
        self.charges_tax_percent = charges_tax_percent
        self.advance_payment_ratio = advance_payment_ratio

    def aggregate(self, items: Sequence[Item], charges: Charges) -> Totals:
        subtotal = sum(item.line_amount for item in items)
        charges_total = charges.cylinder_charges + charges.inventory_charges
        tax_on_subtotal = subtotal * charges.tax_percent / 100
        tax_on_charges = charges_total * self.charges_tax_percent / 100
        total_tax = tax_on_subtotal + tax_on_charges
        total = subtotal + charges_total + total_tax
        return Totals(
            subtotal=subtotal,
            tax_on_subtotal=tax_on_subtotal,
            tax_on_charges=tax_on_charges,
            total_tax=total_tax,
            total=total,
            advance_payment=total * self.advance_payment_ratio,
        )


class RenderFlags(BaseModel):
    """Optional columns a layout needs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    has_soft_gelatin: bool = False
    has_blister: bool = False


class RenderContext(BaseModel):
    """Everything a printable layout consumes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: List[Item]
    company_settings: CompanySettings
    totals: Totals
    flags: RenderFlags


def compute_render_flags(items: Sequence[Item]) -> RenderFlags:
    """
    Scan items for formulations/packaging that need extra columns.

    Args:
        items: Line items

    Returns:
        RenderFlags
    """
    return RenderFlags(
        has_soft_gelatin=any(item.formulation_type == constants.SOFT_GELATINE for item in items),
        has_blister=any(item.packaging_type == constants.BLISTER for item in items),
    )


def build_render_context(
    items: Sequence[Item],
    company_settings: CompanySettings,
    totals: Totals,
) -> RenderContext:
    """
    Assemble the rendering input.

    Args:
        items: Final line items
        company_settings: Company details for the header/footer
        totals: Totals from the aggregator

    Returns:
        RenderContext
    """
    return RenderContext(
        items=list(items),
        company_settings=company_settings,
        totals=totals,
        flags=compute_render_flags(items),
    )
