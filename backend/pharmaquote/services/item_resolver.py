"""Item dependency resolver.

Every change to a line item goes through ``update_field``, which returns a new
item with the field set and all dependent fields reconciled against the
formulation catalog. There is no invalid-item state: any input is normalised,
and an incomplete combination is only reported later by form validation.

Rules:
1. Setting ``formulation_type`` clears packing and packaging (and their custom
   overrides), plus the sub-fields of other formulation families.
2. Setting ``injection_type`` clears all dry- and liquid-injection fields.
3. Moving a primary field off ``"Custom"`` clears its custom override.
4. After every update the applicability invariants are re-applied, so a field
   that does not apply to the item's formulation is always empty, and a
   packing, packaging or carton value outside the formulation's option set
   is cleared.
"""

import logging
import uuid
from typing import Any, Dict, Mapping, Optional, Union

from .. import constants
from ..models.item import Item, ITEM_FIELDS, ITEM_FIELD_ALIASES
from .formulation_catalog import FormulationCatalog, get_formulation_catalog
from .numeric_input import to_number


logger = logging.getLogger(__name__)

NUMERIC_FIELDS = frozenset({"quantity", "rate", "mrp"})

PACKING_FIELDS = ("packing", "custom_packing")
PACKAGING_FIELDS = ("packaging_type", "custom_packaging_type")
CARTON_FIELDS = ("carton_packing", "custom_carton_packing")
PVC_FIELDS = ("pvc_type", "custom_pvc_type")
DRY_INJECTION_FIELDS = (
    "dry_injection_unit_pack",
    "dry_injection_pack_type",
    "dry_injection_tray_pack",
)
LIQUID_INJECTION_FIELDS = (
    "injection_box_packing",
    "injection_packing",
    "custom_injection_packing",
    "injection_pvc_type",
)
INJECTION_FIELDS = ("injection_type",) + DRY_INJECTION_FIELDS + LIQUID_INJECTION_FIELDS

# Primary field -> custom override cleared when the primary leaves "Custom"
CUSTOM_OVERRIDES = {
    "packing": "custom_packing",
    "packaging_type": "custom_packaging_type",
    "carton_packing": "custom_carton_packing",
    "pvc_type": "custom_pvc_type",
    "injection_packing": "custom_injection_packing",
}


def resolve_field_name(field: str) -> Optional[str]:
    """
    Map a wire alias or attribute name to the item attribute.

    Args:
        field: ``"formulationType"`` or ``"formulation_type"``

    Returns:
        Attribute name, or None when the item has no such field
    """
    if field in ITEM_FIELDS:
        return field
    return ITEM_FIELD_ALIASES.get(field)


def _coerce(name: str, value: Any) -> Any:
    if name in NUMERIC_FIELDS:
        return to_number(value)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class ItemResolver:
    """Applies field updates to items and keeps them consistent."""

    def __init__(self, catalog: Optional[FormulationCatalog] = None):
        """
        Initialize ItemResolver.

        Args:
            catalog: Formulation catalog (defaults to the built-in one)
        """
        self.catalog = catalog or get_formulation_catalog()

    def create_item(self) -> Item:
        """Fresh item with default values and a new identity."""
        return Item()

    def duplicate_item(self, item: Item) -> Item:
        """
        Copy an item under a new identity.

        Args:
            item: Source item

        Returns:
            Independent item with identical field values
        """
        return item.model_copy(update={"id": str(uuid.uuid4())}, deep=True)

    def update_field(self, item: Item, field: str, value: Any) -> Item:
        """
        Set one field and reconcile the fields that depend on it.

        Args:
            item: Current item (not modified)
            field: Attribute name or camelCase alias
            value: New value; quantity/rate/mrp are coerced to numbers

        Returns:
            New item; the same item when the field is unknown
        """
        name = resolve_field_name(field)
        if name is None:
            logger.debug(f"Ignoring update of unknown item field: {field}")
            return item

        value = _coerce(name, value)
        data = {key: getattr(item, key) for key in ITEM_FIELDS}

        if name == "formulation_type":
            for key in PACKING_FIELDS + PACKAGING_FIELDS + PVC_FIELDS:
                data[key] = ""
        elif name == "injection_type":
            for key in DRY_INJECTION_FIELDS + LIQUID_INJECTION_FIELDS:
                data[key] = ""

        data[name] = value
        if name in CUSTOM_OVERRIDES and value != constants.CUSTOM_OPTION:
            data[CUSTOM_OVERRIDES[name]] = ""

        self._apply_invariants(data)
        changes = {key: data[key] for key in ITEM_FIELDS if data[key] != getattr(item, key)}
        return item.model_copy(update=changes)

    def normalize_item(self, item: Union[Item, Mapping[str, Any]]) -> Item:
        """
        Bring an externally supplied item in line with the invariants.

        Args:
            item: Item or raw mapping (camelCase or snake_case keys)

        Returns:
            Consistent item
        """
        if not isinstance(item, Item):
            item = Item.model_validate(dict(item))
        data = {key: getattr(item, key) for key in ITEM_FIELDS}
        self._apply_invariants(data)
        changes = {key: data[key] for key in ITEM_FIELDS if data[key] != getattr(item, key)}
        return item.model_copy(update=changes) if changes else item

    def _apply_invariants(self, data: Dict[str, Any]) -> None:
        """Clear every field that does not apply to the current combination."""
        formulation = data["formulation_type"]

        def clear(keys) -> None:
            for key in keys:
                data[key] = ""

        def restrict(keys, options) -> None:
            # Free-form formulations have no option set and keep any value
            value = data[keys[0]]
            if options and value and value not in self.catalog.selectable(options):
                clear(keys)

        if not self.catalog.requires_packing(formulation):
            clear(PACKING_FIELDS)
        else:
            restrict(PACKING_FIELDS, self.catalog.packing_options_for(formulation))
        restrict(PACKAGING_FIELDS, self.catalog.packaging_options_for(formulation))
        if data["packaging_type"] != constants.BLISTER:
            clear(PVC_FIELDS)
        if not self.catalog.uses_cartons(formulation):
            clear(CARTON_FIELDS)
        else:
            restrict(CARTON_FIELDS, self.catalog.carton_options_for(formulation))

        if formulation != constants.INJECTION:
            clear(INJECTION_FIELDS)
        else:
            if data["injection_type"] != constants.DRY_INJECTION:
                clear(DRY_INJECTION_FIELDS)
            if data["injection_type"] != constants.LIQUID_INJECTION:
                clear(LIQUID_INJECTION_FIELDS)
            if data["injection_packing"] != constants.BLISTER_PACKING:
                data["injection_pvc_type"] = ""

        if formulation != constants.DRY_SYRUP:
            data["dry_syrup_water_type"] = ""
        if formulation != constants.SOFT_GELATINE:
            data["soft_gelatin_color"] = ""


# Default resolver over the built-in catalog
_default_resolver = ItemResolver()


def get_item_resolver() -> ItemResolver:
    """
    Get the resolver bound to the built-in catalog.

    Returns:
        ItemResolver instance
    """
    return _default_resolver


def create_item() -> Item:
    return _default_resolver.create_item()


def duplicate_item(item: Item) -> Item:
    return _default_resolver.duplicate_item(item)


def update_field(item: Item, field: str, value: Any) -> Item:
    return _default_resolver.update_field(item, field, value)


def normalize_item(item: Union[Item, Mapping[str, Any]]) -> Item:
    return _default_resolver.normalize_item(item)
