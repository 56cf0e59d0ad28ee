"""Quote form validation.

Validates the party/contact header and sweeps the line items for completeness.
Every rule runs on every call (no short-circuit) and nothing is raised: the
result carries a field -> message map for the caller to present, plus one
map per line item.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from .. import constants
from ..models.item import Item
from ..models.quote import QuoteForm
from ..models.validation import ValidationResult
from .formulation_catalog import FormulationCatalog, get_formulation_catalog


logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# Digits, spaces and hyphens only; line breaks never pass
PHONE_PATTERN = re.compile(r"[+]?[\d -]{10,15}")

MESSAGES = {
    "partyName": "Party name is required",
    "marketedBy": "Marketed by is required",
    "clientEmail.required": "Email is required",
    "clientEmail.invalid": "Please enter a valid email address",
    "clientPhone": "Please enter a valid phone number",
    "items": "Please fill in all mandatory item fields (Brand, Composition, Packing, etc.)",
}

# Per-item messages, keyed by camelCase item field
ITEM_MESSAGES = {
    "brandName": "Brand name is required",
    "composition": "Composition is required",
    "quantity": "Quantity is required",
    "rate": "Rate is required",
    "mrp": "MRP is required",
    "packagingType": "Packaging type is required",
    "packing": "Packing is required",
    "softGelatinColor": "Colour is required",
    "injectionBoxPacking": "Box packing is required",
    "injectionPacking": "Injection packing is required",
    "dryInjectionUnitPack": "Unit pack is required",
    "dryInjectionPackType": "Pack type is required",
    "dryInjectionTrayPack": "Tray pack is required",
    "cartonPacking": "Carton is required",
    "drySyrupWaterType": "Water type is required",
}


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


class QuoteFormValidator:
    """Stateless validator for quote forms."""

    def __init__(self, catalog: Optional[FormulationCatalog] = None):
        """
        Initialize QuoteFormValidator.

        Args:
            catalog: Formulation catalog used for the packing requirement
        """
        self.catalog = catalog or get_formulation_catalog()

    @staticmethod
    def validate_email(email: Optional[str]) -> bool:
        return bool(email) and EMAIL_PATTERN.fullmatch(email) is not None

    @staticmethod
    def validate_phone(phone: Optional[str]) -> bool:
        """Phone is optional: blank passes."""
        if not phone:
            return True
        return PHONE_PATTERN.fullmatch(phone) is not None

    def missing_item_fields(self, item: Item) -> List[str]:
        """
        List the mandatory fields an item is missing.

        Args:
            item: Line item

        Returns:
            camelCase names of the missing fields, empty when complete
        """
        missing = []
        if _blank(item.brand_name):
            missing.append("brandName")
        if _blank(item.composition):
            missing.append("composition")
        if not item.quantity:
            missing.append("quantity")
        if not item.rate:
            missing.append("rate")
        if not item.mrp:
            missing.append("mrp")
        if _blank(item.packaging_type):
            missing.append("packagingType")
        if self.catalog.requires_packing(item.formulation_type) and _blank(item.packing):
            missing.append("packing")
        return missing

    def formulation_missing_fields(self, item: Item) -> List[str]:
        """
        List the formulation-specific fields an item is missing.

        Args:
            item: Line item

        Returns:
            camelCase names of the missing sub-fields (soft gelatin colour,
            injection packs, dry syrup carton and water type)
        """
        formulation = item.formulation_type
        required = []
        if formulation == constants.SOFT_GELATINE:
            required.append(("softGelatinColor", item.soft_gelatin_color))
        if formulation == constants.INJECTION:
            if item.injection_type == constants.LIQUID_INJECTION:
                required.append(("injectionBoxPacking", item.injection_box_packing))
                required.append(("injectionPacking", item.injection_packing))
            elif item.injection_type == constants.DRY_INJECTION:
                required.append(("dryInjectionUnitPack", item.dry_injection_unit_pack))
                required.append(("dryInjectionPackType", item.dry_injection_pack_type))
                required.append(("dryInjectionTrayPack", item.dry_injection_tray_pack))
        if self.catalog.requires_carton(formulation):
            required.append(("cartonPacking", item.carton_packing))
        if formulation == constants.DRY_SYRUP:
            required.append(("drySyrupWaterType", item.dry_syrup_water_type))
        return [name for name, value in required if _blank(value)]

    def item_errors(self, item: Item) -> Dict[str, str]:
        """
        Per-field messages for one item.

        Covers the mandatory fields and the formulation-specific ones. Only
        the mandatory fields decide the form-level ``items`` error.

        Args:
            item: Line item

        Returns:
            camelCase field -> message, empty when nothing is missing
        """
        missing = self.missing_item_fields(item) + self.formulation_missing_fields(item)
        return {name: ITEM_MESSAGES[name] for name in missing}

    def item_is_complete(self, item: Item) -> bool:
        return not self.missing_item_fields(item)

    def items_are_complete(self, items: Iterable[Item]) -> bool:
        return all(self.item_is_complete(item) for item in items)

    def validate(self, form: QuoteForm) -> ValidationResult:
        """
        Validate a quote form.

        Args:
            form: Quote form to check

        Returns:
            ValidationResult with one message per failing field
        """
        errors = {}

        if _blank(form.party_name):
            errors["partyName"] = MESSAGES["partyName"]

        if _blank(form.marketed_by):
            errors["marketedBy"] = MESSAGES["marketedBy"]

        if _blank(form.client_email):
            errors["clientEmail"] = MESSAGES["clientEmail.required"]
        elif not self.validate_email(form.client_email):
            errors["clientEmail"] = MESSAGES["clientEmail.invalid"]

        if form.client_phone and not self.validate_phone(form.client_phone):
            errors["clientPhone"] = MESSAGES["clientPhone"]

        if not self.items_are_complete(form.items):
            errors["items"] = MESSAGES["items"]

        item_errors = [self.item_errors(item) for item in form.items]

        if errors:
            logger.debug(f"Quote validation failed: {sorted(errors)}")
        return ValidationResult.from_errors(errors, item_errors)


def get_quote_validator() -> QuoteFormValidator:
    """
    Get a validator bound to the built-in catalog.

    Returns:
        QuoteFormValidator instance
    """
    return QuoteFormValidator()
