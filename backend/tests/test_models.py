"""Tests for the FoamDesk domain models and their validation rules."""

import math

import pytest
from pydantic import TypeAdapter, ValidationError

from foamdesk.models import (
    BuildingGeometry,
    CompanySettings,
    Customer,
    EstimateInputs,
    ExtraCharges,
    FlatAreaGeometry,
    FoamSpec,
    FoamType,
    Geometry,
    GeometryMode,
    InventoryItem,
    LineItem,
    PricingSettings,
    SCHEMA_VERSION,
    WallsOnlyGeometry,
    geometry_mode,
)

_geometry_adapter: TypeAdapter = TypeAdapter(Geometry)


class TestGeometry:
    def test_building_defaults(self) -> None:
        g = BuildingGeometry(length=40, width=20)
        assert g.wall_height == 8.0
        assert g.roof_pitch == 0.0
        assert g.is_gable is True
        assert geometry_mode(g) == GeometryMode.BUILDING

    def test_discriminator_picks_variant(self) -> None:
        g = _geometry_adapter.validate_python(
            {"mode": "walls_only", "linear_feet": 120, "wall_height": 10}
        )
        assert isinstance(g, WallsOnlyGeometry)
        assert geometry_mode(g) == GeometryMode.WALLS_ONLY

    def test_flat_area_from_json(self) -> None:
        g = _geometry_adapter.validate_json('{"mode": "flat_area", "length": 30, "width": 25}')
        assert isinstance(g, FlatAreaGeometry)

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _geometry_adapter.validate_python({"mode": "dome", "length": 1})

    @pytest.mark.parametrize("field", ["length", "width", "wall_height", "roof_pitch"])
    def test_negative_building_dimension_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            BuildingGeometry(**{field: -1})

    def test_non_finite_dimension_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WallsOnlyGeometry(linear_feet=math.inf)
        with pytest.raises(ValidationError):
            FlatAreaGeometry(length=math.nan, width=1)

    def test_walls_only_has_no_width(self) -> None:
        g = WallsOnlyGeometry(linear_feet=50)
        assert not hasattr(g, "width")


class TestFoamSpec:
    def test_thickness_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            FoamSpec(foam_type=FoamType.OPEN_CELL, thickness_inches=0)

    def test_foam_type_from_label(self) -> None:
        spec = FoamSpec.model_validate({"foam_type": "Closed Cell", "thickness_inches": 2})
        assert spec.foam_type == FoamType.CLOSED_CELL


class TestLineItem:
    def test_create_computes_total(self) -> None:
        item = LineItem.create("Masking", 3, "Rolls", 12.5)
        assert item.total == 37.5
        assert item.id

    def test_missing_total_is_filled(self) -> None:
        item = LineItem.model_validate({"description": "Caulk", "quantity": 4, "unit_price": 6})
        assert item.total == 24.0

    def test_explicit_total_is_kept(self) -> None:
        item = LineItem(description="Discount", quantity=1, unit_price=0, total=-50)
        assert item.total == -50

    def test_updated_recomputes_total(self) -> None:
        item = LineItem.create("Masking", 3, "Rolls", 12.5)
        changed = item.updated(quantity=5)
        assert changed.total == 62.5
        assert changed.id == item.id
        assert item.total == 37.5

    def test_ids_are_unique(self) -> None:
        assert LineItem.create("a").id != LineItem.create("a").id


class TestExtraCharges:
    def test_misc_total(self) -> None:
        extras = ExtraCharges(
            line_items=[LineItem.create("a", 2, unit_price=10), LineItem.create("b", 1, unit_price=5)]
        )
        assert extras.misc_total == 25.0

    def test_negative_labor_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ExtraCharges(labor_hours=-1)


class TestPricingSettings:
    def test_zero_yield_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PricingSettings(
                open_cell_yield=0, closed_cell_yield=4000, open_cell_cost=2000,
                closed_cell_cost=2600, labor_rate=85, tax_rate=7.5,
            )

    def test_yield_for(self) -> None:
        pricing = PricingSettings(
            open_cell_yield=16000, closed_cell_yield=4000, open_cell_cost=2000,
            closed_cell_cost=2600, labor_rate=85, tax_rate=7.5,
        )
        assert pricing.yield_for(FoamType.OPEN_CELL) == 16000
        assert pricing.yield_for(FoamType.CLOSED_CELL) == 4000


class TestEstimateInputs:
    def test_defaults_match_estimator_form(self) -> None:
        inputs = EstimateInputs(geometry=BuildingGeometry())
        assert inputs.wall_foam.thickness_inches == 3.5
        assert inputs.roof_foam.thickness_inches == 5.5
        assert inputs.wall_foam.foam_type == FoamType.OPEN_CELL
        assert inputs.waste_pct == 10.0
        assert inputs.extras.labor_hours == 0.0

    def test_geometry_from_dict(self) -> None:
        inputs = EstimateInputs.model_validate(
            {"geometry": {"mode": "flat_area", "length": 10, "width": 10}}
        )
        assert isinstance(inputs.geometry, FlatAreaGeometry)

    def test_negative_waste_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EstimateInputs(geometry=BuildingGeometry(), waste_pct=-5)


class TestRecords:
    def test_records_carry_schema_version(self) -> None:
        customer = Customer(name="Dana Whitfield")
        assert customer.schema_version == SCHEMA_VERSION
        assert customer.model_dump()["schema_version"] == SCHEMA_VERSION

    def test_blank_customer_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Customer(name="   ")

    def test_inventory_quantity_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            InventoryItem(name="Suit", category="Supply", quantity=-1, unit="Pcs")

    def test_inventory_quantity_must_be_finite(self) -> None:
        with pytest.raises(ValidationError):
            InventoryItem(name="Suit", category="Supply", quantity=math.inf, unit="Pcs")
        with pytest.raises(ValidationError):
            InventoryItem(name="Suit", category="Supply", unit="Pcs", min_level=math.nan)

    @pytest.mark.parametrize(
        "field",
        ["open_cell_yield", "closed_cell_yield", "open_cell_cost", "closed_cell_cost", "labor_rate", "tax_rate"],
    )
    def test_settings_pricing_must_be_finite(self, field: str) -> None:
        values = {
            "company_name": "Acme Foam",
            "company_address": "1 Main St",
            "company_phone": "555-0100",
            "company_email": "ops@acme.test",
            "open_cell_yield": 16000,
            "closed_cell_yield": 4000,
            "open_cell_cost": 2000,
            "closed_cell_cost": 2600,
            "labor_rate": 85,
            "tax_rate": 7.5,
        }
        values[field] = math.inf
        with pytest.raises(ValidationError):
            CompanySettings(**values)

    def test_settings_pricing_subset(self) -> None:
        settings = CompanySettings(
            company_name="Acme Foam",
            company_address="1 Main St",
            company_phone="555-0100",
            company_email="ops@acme.test",
            open_cell_yield=15000,
            closed_cell_yield=4200,
            open_cell_cost=1900,
            closed_cell_cost=2500,
            labor_rate=90,
            tax_rate=8,
        )
        pricing = settings.pricing()
        assert pricing.open_cell_yield == 15000
        assert pricing.closed_cell_cost == 2500
        assert pricing.tax_rate == 8
