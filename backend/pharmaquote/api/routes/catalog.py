"""Formulation catalog API routes."""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Query

from ... import constants
from ...api.dependencies import CatalogDep
from ...models import APIResponse
from ...services.formulation_catalog import FormulationCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Catalog"])


def _describe(
    catalog: FormulationCatalog,
    formulation_type: str,
    injection_type: Optional[str] = None,
) -> dict:
    data = catalog.describe(formulation_type)
    data["layout"] = asdict(catalog.field_layout(formulation_type, injection_type))
    return data


@router.get(
    "/formulations",
    response_model=APIResponse,
    summary="List formulation types and their options",
)
async def list_formulations(catalog: CatalogDep) -> dict:
    """
    All formulation types with packing, packaging and carton options.

    Also returns the sub-option lists used by injection, dry syrup and
    blister items.
    """
    return {
        "success": True,
        "message": f"{len(catalog.formulation_types())} formulation types",
        "data": {
            "formulations": [_describe(catalog, name) for name in catalog.formulation_types()],
            "custom_option": constants.CUSTOM_OPTION,
            "order_types": constants.ORDER_TYPES,
            "category_types": constants.CATEGORY_TYPES,
            "injection_types": constants.INJECTION_TYPES,
            "dry_injection_pack_types": constants.DRY_INJECTION_PACK_TYPES,
            "dry_injection_tray_packs": constants.DRY_INJECTION_TRAY_PACKS,
            "injection_packing_options": constants.INJECTION_PACKING_OPTIONS,
            "pvc_types": constants.PVC_TYPES,
            "water_types": constants.WATER_TYPES,
        },
    }


@router.get(
    "/formulations/{formulation_type:path}",
    response_model=APIResponse,
    summary="Options and field layout for one formulation type",
)
async def get_formulation(
    formulation_type: str,
    catalog: CatalogDep,
    injection_type: Optional[str] = Query(None, description="Dry Injection / Liquid Injection"),
) -> dict:
    """
    Options for one formulation type.

    - **formulation_type**: e.g. `Tablet`, `Syrup/Suspension`
    - Unknown types return empty option lists rather than an error
    """
    data = _describe(catalog, formulation_type, injection_type)
    if not data["known"]:
        logger.info(f"Lookup of uncatalogued formulation type: {formulation_type}")
    return {
        "success": True,
        "message": f"Options for {formulation_type}",
        "data": data,
    }
