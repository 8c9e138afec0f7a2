"""Tests for schema upgrades of persisted records, including the legacy browser format."""

from __future__ import annotations

import pytest

from foamdesk.data.migrations import RecordKind, parse_record, upgrade_record
from foamdesk.exceptions import SchemaMigrationError
from foamdesk.models.base import SCHEMA_VERSION
from foamdesk.models.enums import FoamType, JobStatus
from foamdesk.models.estimate import Estimate
from foamdesk.models.geometry import BuildingGeometry
from foamdesk.models.records import CompanySettings, Customer

# Shapes as written by the browser app before records were versioned.

LEGACY_CUSTOMER = {
    "id": "1718040000000",
    "name": "Dana Whitfield",
    "companyName": "Whitfield Farms",
    "email": "dana@whitfield.test",
    "phone": "555-0101",
    "address": "4 Silo Rd",
    "city": "Tulsa",
    "state": "OK",
    "zip": "74101",
    "createdAt": "2024-06-10T17:20:00.000Z",
}

LEGACY_ESTIMATE = {
    "id": "1718041111111",
    "number": "EST-4821",
    "customerId": "1718040000000",
    "date": "2024-06-10T18:00:00.000Z",
    "status": "Work Order",
    "jobName": "Pole barn",
    "location": {"lat": 36.15, "lng": -95.99, "accuracy": 12},
    "images": [],
    "calcData": {
        "length": 40,
        "width": 20,
        "wallHeight": 8,
        "roofPitch": 4,
        "isGable": True,
        "wallFoamType": "Open Cell",
        "wallThickness": 3.5,
        "roofFoamType": "Closed Cell",
        "roofThickness": 2,
        "wastePct": 10,
    },
    "totalBoardFeetOpen": 3952.67,
    "totalBoardFeetClosed": 1855.2,
    "setsRequiredOpen": 0.247,
    "setsRequiredClosed": 0.4638,
    "items": [
        {"id": "1", "description": "Spray Foam Material", "quantity": 1, "unit": "Lot", "unitPrice": 1700, "total": 1700},
        {"id": "2", "description": "Labor", "quantity": 16, "unit": "Hours", "unitPrice": 85, "total": 1360},
        {"id": "3", "description": "Trip Charge", "quantity": 1, "unit": "Flat", "unitPrice": 150, "total": 150},
        {"id": "1718042222222", "description": "Masking", "quantity": 2, "unit": "Rolls", "unitPrice": 12.5, "total": 25},
    ],
    "subtotal": 3235,
    "tax": 242.63,
    "total": 3477.63,
}

LEGACY_SETTINGS = {
    "companyName": "Premier Spray Foam",
    "companyAddress": "123 Insulation Lane",
    "companyPhone": "(555) 123-4567",
    "companyEmail": "info@premierspray.com",
    "openCellYield": 16000,
    "closedCellYield": 4000,
    "openCellCost": 2000,
    "closedCellCost": 2600,
    "laborRate": 85,
    "taxRate": 7.5,
}


class TestUpgrade:
    def test_current_version_passes_through(self) -> None:
        record = Customer(name="Lee Ortiz").model_dump(mode="json")
        assert upgrade_record(RecordKind.CUSTOMERS, record) == record

    def test_unversioned_record_is_stamped(self) -> None:
        upgraded = upgrade_record(RecordKind.CUSTOMERS, LEGACY_CUSTOMER)
        assert upgraded["schema_version"] == SCHEMA_VERSION
        assert upgraded["company_name"] == "Whitfield Farms"
        assert "companyName" not in upgraded

    def test_input_is_not_mutated(self) -> None:
        payload = dict(LEGACY_ESTIMATE)
        upgrade_record(RecordKind.ESTIMATES, payload)
        assert payload == LEGACY_ESTIMATE

    def test_future_version_rejected(self) -> None:
        with pytest.raises(SchemaMigrationError):
            upgrade_record(RecordKind.CUSTOMERS, {"schema_version": SCHEMA_VERSION + 1})

    def test_non_object_rejected(self) -> None:
        with pytest.raises(SchemaMigrationError):
            upgrade_record(RecordKind.CUSTOMERS, ["not", "a", "record"])

    def test_non_integer_version_rejected(self) -> None:
        with pytest.raises(SchemaMigrationError):
            upgrade_record(RecordKind.CUSTOMERS, {"schema_version": "1"})


class TestLegacyRecords:
    def test_customer(self) -> None:
        customer = parse_record(RecordKind.CUSTOMERS, LEGACY_CUSTOMER)
        assert isinstance(customer, Customer)
        assert customer.company_name == "Whitfield Farms"
        assert customer.created_at.year == 2024

    def test_settings(self) -> None:
        settings = parse_record(RecordKind.SETTINGS, LEGACY_SETTINGS)
        assert isinstance(settings, CompanySettings)
        assert settings.closed_cell_yield == 4000
        assert settings.tax_rate == 7.5

    def test_estimate_figures(self) -> None:
        est = parse_record(RecordKind.ESTIMATES, LEGACY_ESTIMATE)
        assert isinstance(est, Estimate)
        assert est.customer_id == "1718040000000"
        assert est.status == JobStatus.WORK_ORDER
        assert est.board_feet_open == 3952.67
        assert est.sets_closed == 0.4638
        assert est.total == 3477.63
        assert est.location is not None
        assert est.location.lng == -95.99
        assert len(est.items) == 4
        assert est.items[3].unit_price == 12.5

    def test_estimate_inputs_rebuilt_from_calc_data(self) -> None:
        est = parse_record(RecordKind.ESTIMATES, LEGACY_ESTIMATE)
        assert isinstance(est, Estimate)
        geometry = est.inputs.geometry
        assert isinstance(geometry, BuildingGeometry)
        assert geometry.length == 40
        assert geometry.roof_pitch == 4
        assert est.inputs.roof_foam.foam_type == FoamType.CLOSED_CELL
        assert est.inputs.roof_foam.thickness_inches == 2
        assert est.inputs.waste_pct == 10

    def test_estimate_extras_recovered_from_lines(self) -> None:
        est = parse_record(RecordKind.ESTIMATES, LEGACY_ESTIMATE)
        assert isinstance(est, Estimate)
        extras = est.inputs.extras
        assert extras.labor_hours == 16
        assert extras.trip_charge == 150
        assert [i.description for i in extras.line_items] == ["Masking"]

    def test_invalid_legacy_record_rejected(self) -> None:
        broken = {**LEGACY_CUSTOMER, "name": ""}
        with pytest.raises(SchemaMigrationError):
            parse_record(RecordKind.CUSTOMERS, broken)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"calcData": "oops"},
            {"calcData": [1, 2]},
            {"items": ["x"]},
            {"items": {"description": "Labor"}},
        ],
    )
    def test_malformed_legacy_estimate_rejected(self, overrides: dict) -> None:
        broken = {**LEGACY_ESTIMATE, **overrides}
        with pytest.raises(SchemaMigrationError):
            parse_record(RecordKind.ESTIMATES, broken)
