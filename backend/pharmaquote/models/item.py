"""Quote line item data model.

Attributes are snake_case in Python and camelCase on the wire
(``brand_name`` <-> ``brandName``). Items are frozen: every change goes through
``services.item_resolver.update_field``, which returns a new item with the
dependent fields reconciled.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from ..constants import CUSTOM_OPTION


def _effective(value: str, custom_value: str) -> str:
    """Apply the custom-override convention."""
    return custom_value if value == CUSTOM_OPTION else value


class Item(BaseModel):
    """One product line of a quote."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "brandName": "Paracip 650",
                "categoryType": "Drug",
                "orderType": "New",
                "formulationType": "Tablet",
                "composition": "Paracetamol 650mg",
                "packing": "10x10",
                "packagingType": "Blister",
                "pvcType": "Clear PVC",
                "quantity": 5000,
                "mrp": 32.5,
                "rate": 11.2,
            }
        },
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique identifier (UUID)")

    # Identity
    brand_name: str = Field("", description="Brand name")
    category_type: str = Field("Drug", description="Drug / Nutraceutical / Cosmetics")
    order_type: str = Field("New", description="New / Repeat")
    formulation_type: str = Field("Tablet", description="Pharmaceutical form")
    composition: str = Field("", description="Product composition")
    specification: str = Field("", description="Free-text specification")

    # Formulation-dependent pairs ("Custom" -> paired custom field)
    packing: str = Field("", description="Unit-count / volume grouping")
    custom_packing: str = ""
    packaging_type: str = Field("", description="Outer packaging method")
    custom_packaging_type: str = ""
    carton_packing: str = Field("", description="Secondary packaging (liquids)")
    custom_carton_packing: str = ""
    pvc_type: str = Field("", description="PVC film, blister packaging only")
    custom_pvc_type: str = ""

    # Injection
    injection_type: str = Field("", description="Dry Injection / Liquid Injection")
    dry_injection_unit_pack: str = ""
    dry_injection_pack_type: str = ""
    dry_injection_tray_pack: str = ""
    injection_box_packing: str = ""
    injection_packing: str = ""
    custom_injection_packing: str = ""
    injection_pvc_type: str = ""

    # Dry syrup / soft gelatine
    dry_syrup_water_type: str = ""
    soft_gelatin_color: str = ""

    # Commercials
    quantity: float = Field(1, description="Quantity")
    mrp: float = Field(0, description="Maximum retail price")
    rate: float = Field(0, description="Rate per unit")

    @computed_field(alias="lineAmount")
    @property
    def line_amount(self) -> float:
        """quantity x rate."""
        return self.quantity * self.rate

    @property
    def effective_packing(self) -> str:
        return _effective(self.packing, self.custom_packing)

    @property
    def effective_packaging_type(self) -> str:
        return _effective(self.packaging_type, self.custom_packaging_type)

    @property
    def effective_carton_packing(self) -> str:
        return _effective(self.carton_packing, self.custom_carton_packing)

    @property
    def effective_pvc_type(self) -> str:
        return _effective(self.pvc_type, self.custom_pvc_type)

    @property
    def effective_injection_packing(self) -> str:
        return _effective(self.injection_packing, self.custom_injection_packing)

    def field_values(self) -> dict:
        """All stored field values except the identity."""
        return self.model_dump(exclude={"id", "line_amount"})


# Stored field names, and the wire alias -> field name lookup
ITEM_FIELDS = frozenset(name for name in Item.model_fields if name != "id")
ITEM_FIELD_ALIASES = {
    info.alias or name: name for name, info in Item.model_fields.items() if name != "id"
}
