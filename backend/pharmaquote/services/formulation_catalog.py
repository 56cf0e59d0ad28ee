"""Formulation option catalog.

Pure lookups over the formulation option tables. Unknown or legacy formulation
types resolve to empty option sets instead of failing, so free-text values
entered before a type was catalogued keep working.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .. import constants


logger = logging.getLogger(__name__)

Options = Tuple[str, ...]


@dataclass(frozen=True)
class FieldLayout:
    """Which item fields apply to a formulation (read-only projection)."""

    formulation_type: str
    show_packing: bool
    packing_label: str
    show_packaging_type: bool
    packaging_type_label: str
    show_carton: bool
    carton_required: bool
    show_injection_type: bool
    show_dry_injection_fields: bool
    show_liquid_injection_fields: bool
    show_water_type: bool
    show_soft_gelatin_color: bool


def _freeze(table: Mapping[str, Iterable[str]]) -> Mapping[str, Options]:
    return MappingProxyType({key: tuple(values) for key, values in table.items()})


class FormulationCatalog:
    """Lookup of the legal option sets for each formulation type."""

    _LABEL_TYPE_FORMULATIONS = ("Syrup/Suspension", "Dry Syrup")

    def __init__(
        self,
        packing_options: Mapping[str, Iterable[str]],
        packaging_options: Mapping[str, Iterable[str]],
        carton_options: Mapping[str, Iterable[str]],
        no_packing_formulations: Iterable[str],
        carton_required_formulations: Iterable[str] = (),
        extra_formulation_types: Iterable[str] = (),
    ):
        """
        Initialize FormulationCatalog.

        Args:
            packing_options: Formulation type -> ordered packing options
            packaging_options: Formulation type -> ordered packaging options
            carton_options: Formulation type -> ordered carton options
            no_packing_formulations: Types for which packing does not apply
            carton_required_formulations: Types whose carton field is mandatory
            extra_formulation_types: Free-form types without option tables
        """
        self._packing = _freeze(packing_options)
        self._packaging = _freeze(packaging_options)
        self._carton = _freeze(carton_options)
        self._no_packing = frozenset(no_packing_formulations)
        self._carton_required = frozenset(carton_required_formulations)

        types: List[str] = list(self._packing)
        for name in list(self._packaging) + list(extra_formulation_types):
            if name not in types:
                types.append(name)
        for name in no_packing_formulations:
            if name not in types:
                types.append(name)
        self._types: Options = tuple(types)

    @property
    def packing_options_by_type(self) -> Mapping[str, Options]:
        return self._packing

    @property
    def packaging_options_by_type(self) -> Mapping[str, Options]:
        return self._packaging

    @property
    def carton_options_by_type(self) -> Mapping[str, Options]:
        return self._carton

    @property
    def no_packing_formulations(self) -> frozenset:
        return self._no_packing

    def formulation_types(self) -> Options:
        """All known formulation types, in display order."""
        return self._types

    def is_known(self, formulation_type: Optional[str]) -> bool:
        return formulation_type in self._types

    def packing_options_for(self, formulation_type: Optional[str]) -> Options:
        return self._packing.get(formulation_type or "", ())

    def packaging_options_for(self, formulation_type: Optional[str]) -> Options:
        return self._packaging.get(formulation_type or "", ())

    def carton_options_for(self, formulation_type: Optional[str]) -> Options:
        return self._carton.get(formulation_type or "", ())

    def requires_packing(self, formulation_type: Optional[str]) -> bool:
        """Packing applies to every formulation outside the no-packing set."""
        return formulation_type not in self._no_packing

    def uses_cartons(self, formulation_type: Optional[str]) -> bool:
        return bool(self.carton_options_for(formulation_type))

    def requires_carton(self, formulation_type: Optional[str]) -> bool:
        return formulation_type in self._carton_required

    @staticmethod
    def selectable(options: Iterable[str]) -> Options:
        """Options as offered to a user, with the custom sentinel appended."""
        return tuple(options) + (constants.CUSTOM_OPTION,)

    def field_layout(
        self,
        formulation_type: Optional[str],
        injection_type: Optional[str] = None,
    ) -> FieldLayout:
        """
        Describe which item fields apply to a formulation.

        Args:
            formulation_type: Current formulation type of the item
            injection_type: Current injection sub-type (Injection only)

        Returns:
            FieldLayout for the combination
        """
        is_injection = formulation_type == constants.INJECTION
        is_dry_injection = is_injection and injection_type == constants.DRY_INJECTION
        label_type = formulation_type in self._LABEL_TYPE_FORMULATIONS

        return FieldLayout(
            formulation_type=formulation_type or "",
            show_packing=self.requires_packing(formulation_type),
            packing_label="Unit Pack" if label_type else "Box Packing",
            show_packaging_type=not is_dry_injection,
            packaging_type_label="Label Type" if label_type else "Packaging Type",
            show_carton=self.uses_cartons(formulation_type),
            carton_required=self.requires_carton(formulation_type),
            show_injection_type=is_injection,
            show_dry_injection_fields=is_dry_injection,
            show_liquid_injection_fields=(
                is_injection and injection_type == constants.LIQUID_INJECTION
            ),
            show_water_type=formulation_type == constants.DRY_SYRUP,
            show_soft_gelatin_color=formulation_type == constants.SOFT_GELATINE,
        )

    def describe(self, formulation_type: Optional[str]) -> Dict[str, object]:
        """
        Option sets and field layout for one formulation type.

        Args:
            formulation_type: Formulation type to describe

        Returns:
            Dictionary ready for an API response
        """
        return {
            "formulation_type": formulation_type,
            "known": self.is_known(formulation_type),
            "requires_packing": self.requires_packing(formulation_type),
            "packing_options": list(self.packing_options_for(formulation_type)),
            "packaging_options": list(self.packaging_options_for(formulation_type)),
            "carton_options": list(self.carton_options_for(formulation_type)),
        }


def build_default_catalog() -> FormulationCatalog:
    """Build the catalog from the built-in option tables."""
    catalog = FormulationCatalog(
        packing_options=constants.PACKING_OPTIONS,
        packaging_options=constants.PACKAGING_OPTIONS,
        carton_options=constants.CARTON_OPTIONS,
        no_packing_formulations=constants.NO_PACKING_FORMULATIONS,
        carton_required_formulations=constants.CARTON_REQUIRED_FORMULATIONS,
    )
    logger.debug(f"Formulation catalog loaded: {len(catalog.formulation_types())} types")
    return catalog


# Read-only catalog shared by the resolver and validator
DEFAULT_CATALOG = build_default_catalog()


def get_formulation_catalog() -> FormulationCatalog:
    """
    Get the built-in formulation catalog.

    Returns:
        FormulationCatalog instance
    """
    return DEFAULT_CATALOG
