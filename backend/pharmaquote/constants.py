"""Formulation option tables and quote defaults.

These tables are the single source of truth for which packing, packaging and
carton options are legal for each formulation type.
"""

from typing import Dict, List


CUSTOM_OPTION = "Custom"

_SOLID_PACKING = ["10x10", "10x1x10", "10x15", "20x10", "10x3", "10x5", "10x6", "10x7"]
_LIQUID_PACKING = [
    "2ml", "4ml", "4x5ml", "10ml", "15ml", "30ml", "50ml", "60ml", "100ml",
    "110ml", "120ml", "150ml", "170ml", "200ml", "220ml", "250ml", "300ml", "450ml",
]

# Packing options per formulation type
PACKING_OPTIONS: Dict[str, List[str]] = {
    "Tablet": _SOLID_PACKING,
    "Capsule": _SOLID_PACKING,
    "Soft Gelatine": _SOLID_PACKING,
    "Syrup/Suspension": _LIQUID_PACKING,
    "Dry Syrup": _LIQUID_PACKING,
    "Ointment/Cream": ["5gm", "10gm", "15gm", "20gm", "30gm", "50gm"],
    "Sachet": [
        "10x1gm", "20x1gm", "25x1gm", "30x1gm", "50x1gm", "10x3gm", "20x3gm",
        "10x5gm", "20x5gm", "10x7.5gm", "20x7.5gm", "10x1x8gm", "20x1x8gm",
    ],
}

_BLISTER_PACKAGING = ["Alu Alu", "Blister", "Aluminium"]
_LABEL_PACKAGING = ["Only label", "Sticker label", "Metallic label", "Vinyl label"]

# Packaging type options per formulation type
PACKAGING_OPTIONS: Dict[str, List[str]] = {
    "Tablet": _BLISTER_PACKAGING,
    "Capsule": _BLISTER_PACKAGING,
    "Soft Gelatine": _BLISTER_PACKAGING,
    "Syrup/Suspension": _LABEL_PACKAGING,
    "Dry Syrup": _LABEL_PACKAGING,
    "Ointment/Cream": ["With carton", "With metalic carton", "With flap"],
    "Sachet": ["With carton"],
}

_LIQUID_CARTONS = ["With carton", "With metallic carton", "With leafing carton", "With matt carton"]

# Carton options, only for formulations shipped in cartons
CARTON_OPTIONS: Dict[str, List[str]] = {
    "Syrup/Suspension": _LIQUID_CARTONS,
    "Dry Syrup": _LIQUID_CARTONS,
}

# Formulations without a packing field (free-form packaging)
NO_PACKING_FORMULATIONS: List[str] = ["Injection", "I.V/Fluid", "Lotion", "Soap"]

FORMULATION_TYPES: List[str] = list(PACKING_OPTIONS) + NO_PACKING_FORMULATIONS

# Formulation types with their own sub-structures
INJECTION = "Injection"
DRY_SYRUP = "Dry Syrup"
SOFT_GELATINE = "Soft Gelatine"
BLISTER = "Blister"
CARTON_REQUIRED_FORMULATIONS: List[str] = [DRY_SYRUP]

DRY_INJECTION = "Dry Injection"
LIQUID_INJECTION = "Liquid Injection"
INJECTION_TYPES: List[str] = [DRY_INJECTION, LIQUID_INJECTION]
DRY_INJECTION_PACK_TYPES: List[str] = ["Water (WFI)", "Without Water"]
DRY_INJECTION_TRAY_PACKS: List[str] = ["Required", "Not Required"]
BLISTER_PACKING = "Blister Packing"
INJECTION_PACKING_OPTIONS: List[str] = ["Tray Packing", BLISTER_PACKING]
PVC_TYPES: List[str] = ["Clear PVC", "Amber PVC"]
WATER_TYPES: List[str] = ["Water", "Without Water"]

ORDER_TYPES: List[str] = ["New", "Repeat"]
CATEGORY_TYPES: List[str] = ["Drug", "Nutraceutical", "Cosmetics"]

DEFAULT_TERMS = "Payment due within 30 days. All prices in INR."

DEFAULT_COMPANY_PHONE = "+917696275527"
DEFAULT_COMPANY_EMAIL = "user@gmail.com"
DEFAULT_INVOICE_LABEL = "QUOTATION"
DEFAULT_ADVANCE_PAYMENT_NOTE = "Please pay the advance amount to continue the process."
