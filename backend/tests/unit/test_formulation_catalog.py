"""Unit tests for FormulationCatalog."""

import pytest

from pharmaquote.services.formulation_catalog import (
    FormulationCatalog,
    build_default_catalog,
    get_formulation_catalog,
)


@pytest.fixture
def catalog() -> FormulationCatalog:
    return build_default_catalog()


class TestFormulationTypes:
    """formulation_types() / is_known()."""

    def test_all_types_in_display_order(self, catalog: FormulationCatalog):
        assert catalog.formulation_types() == (
            "Tablet",
            "Capsule",
            "Soft Gelatine",
            "Syrup/Suspension",
            "Dry Syrup",
            "Ointment/Cream",
            "Sachet",
            "Injection",
            "I.V/Fluid",
            "Lotion",
            "Soap",
        )

    def test_is_known(self, catalog: FormulationCatalog):
        assert catalog.is_known("Tablet")
        assert catalog.is_known("Soap")
        assert not catalog.is_known("Gel")
        assert not catalog.is_known(None)

    def test_shared_default_catalog(self):
        assert get_formulation_catalog() is get_formulation_catalog()


class TestOptionLookups:
    """Option sets per formulation type."""

    def test_solid_forms_share_packing(self, catalog: FormulationCatalog):
        assert catalog.packing_options_for("Tablet") == catalog.packing_options_for("Capsule")
        assert catalog.packing_options_for("Tablet")[0] == "10x10"

    def test_liquid_packing(self, catalog: FormulationCatalog):
        options = catalog.packing_options_for("Syrup/Suspension")
        assert options[0] == "2ml"
        assert "450ml" in options

    def test_packaging_options(self, catalog: FormulationCatalog):
        assert catalog.packaging_options_for("Tablet") == ("Alu Alu", "Blister", "Aluminium")
        assert catalog.packaging_options_for("Sachet") == ("With carton",)

    def test_carton_options_only_for_liquids(self, catalog: FormulationCatalog):
        assert "With leafing carton" in catalog.carton_options_for("Dry Syrup")
        assert catalog.carton_options_for("Tablet") == ()
        assert catalog.uses_cartons("Syrup/Suspension")
        assert not catalog.uses_cartons("Ointment/Cream")

    def test_unknown_type_returns_empty_options(self, catalog: FormulationCatalog):
        assert catalog.packing_options_for("Gel") == ()
        assert catalog.packaging_options_for("Gel") == ()
        assert catalog.carton_options_for(None) == ()

    def test_tables_are_read_only(self, catalog: FormulationCatalog):
        with pytest.raises(TypeError):
            catalog.packing_options_by_type["Tablet"] = ("1x1",)
        assert isinstance(catalog.packing_options_by_type["Tablet"], tuple)

    def test_selectable_appends_custom(self):
        assert FormulationCatalog.selectable(("A", "B")) == ("A", "B", "Custom")


class TestPackingRequirement:
    """requires_packing() / requires_carton()."""

    @pytest.mark.parametrize("formulation", ["Injection", "I.V/Fluid", "Lotion", "Soap"])
    def test_no_packing_formulations(self, catalog: FormulationCatalog, formulation: str):
        assert not catalog.requires_packing(formulation)

    def test_packing_required_otherwise(self, catalog: FormulationCatalog):
        assert catalog.requires_packing("Tablet")
        assert catalog.requires_packing("Gel")

    def test_carton_required_for_dry_syrup(self, catalog: FormulationCatalog):
        assert catalog.requires_carton("Dry Syrup")
        assert not catalog.requires_carton("Syrup/Suspension")


class TestFieldLayout:
    """field_layout() projection."""

    def test_liquid_labels(self, catalog: FormulationCatalog):
        layout = catalog.field_layout("Syrup/Suspension")
        assert layout.packing_label == "Unit Pack"
        assert layout.packaging_type_label == "Label Type"
        assert layout.show_carton

    def test_solid_labels(self, catalog: FormulationCatalog):
        layout = catalog.field_layout("Tablet")
        assert layout.packing_label == "Box Packing"
        assert layout.packaging_type_label == "Packaging Type"
        assert not layout.show_carton

    def test_dry_injection_hides_packaging_type(self, catalog: FormulationCatalog):
        layout = catalog.field_layout("Injection", "Dry Injection")
        assert not layout.show_packing
        assert not layout.show_packaging_type
        assert layout.show_dry_injection_fields
        assert not layout.show_liquid_injection_fields

    def test_liquid_injection(self, catalog: FormulationCatalog):
        layout = catalog.field_layout("Injection", "Liquid Injection")
        assert layout.show_packaging_type
        assert layout.show_liquid_injection_fields

    def test_family_specific_fields(self, catalog: FormulationCatalog):
        assert catalog.field_layout("Dry Syrup").show_water_type
        assert catalog.field_layout("Dry Syrup").carton_required
        assert catalog.field_layout("Soft Gelatine").show_soft_gelatin_color
        assert not catalog.field_layout("Tablet").show_injection_type


class TestDescribe:
    """describe() payload."""

    def test_describe_known(self, catalog: FormulationCatalog):
        data = catalog.describe("Ointment/Cream")
        assert data["known"] is True
        assert data["requires_packing"] is True
        assert data["packing_options"][0] == "5gm"
        assert data["carton_options"] == []

    def test_describe_unknown(self, catalog: FormulationCatalog):
        data = catalog.describe("Gel")
        assert data["known"] is False
        assert data["packing_options"] == []


class TestCustomCatalog:
    """Catalog built from caller-supplied tables."""

    def test_extra_and_no_packing_types_are_listed(self):
        catalog = FormulationCatalog(
            packing_options={"Tablet": ["10x10"]},
            packaging_options={"Tablet": ["Blister"], "Gel": ["Tube"]},
            carton_options={},
            no_packing_formulations=["Injection"],
            extra_formulation_types=["Powder"],
        )
        assert catalog.formulation_types() == ("Tablet", "Gel", "Powder", "Injection")
        assert not catalog.requires_packing("Injection")
