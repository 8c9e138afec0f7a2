"""Schema versioning for persisted records.

Records written before versioning existed (the browser app's camelCase JSON)
are treated as version 0. Each step in ``_MIGRATIONS`` upgrades a raw dict by
one version; :func:`parse_record` runs the chain and validates the result
against the current model.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_snake

from foamdesk.exceptions import SchemaMigrationError
from foamdesk.models.base import SCHEMA_VERSION
from foamdesk.models.estimate import Estimate
from foamdesk.models.records import CompanySettings, Customer, InventoryItem, UserSession


class RecordKind(StrEnum):
    """Entity types held by the record store."""

    USER = "user"
    CUSTOMERS = "customers"
    ESTIMATES = "estimates"
    INVENTORY = "inventory"
    SETTINGS = "settings"


RECORD_MODELS: dict[RecordKind, type[BaseModel]] = {
    RecordKind.USER: UserSession,
    RecordKind.CUSTOMERS: Customer,
    RecordKind.ESTIMATES: Estimate,
    RecordKind.INVENTORY: InventoryItem,
    RecordKind.SETTINGS: CompanySettings,
}

# Line descriptions the browser app generated for an estimate's fixed lines.
_MATERIAL_LINE = "Spray Foam Material"
_LABOR_LINE = "Labor"
_TRIP_LINE = "Trip Charge"


def _snake_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_snake(str(k)): _snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_snake_keys(v) for v in value]
    return value


def _legacy_estimate_inputs(record: dict[str, Any]) -> dict[str, Any]:
    """Rebuild an inputs snapshot from a version 0 ``calcData`` block.

    The browser app only ever measured buildings when it saved ``calcData``
    and kept labor and trip charge as line items, so both are recovered from
    the saved lines.
    """
    calc = record.pop("calc_data", None) or {}
    items = record.get("items") or []
    if not isinstance(calc, dict):
        msg = f"calcData must be an object, got {type(calc).__name__}"
        raise SchemaMigrationError(msg)
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        msg = "items must be a list of objects"
        raise SchemaMigrationError(msg)

    labor_hours = 0.0
    trip_charge = 0.0
    misc: list[dict[str, Any]] = []
    for item in items:
        description = item.get("description")
        if description == _LABOR_LINE:
            labor_hours = item.get("quantity", 0.0)
        elif description == _TRIP_LINE:
            trip_charge = item.get("unit_price", 0.0)
        elif description != _MATERIAL_LINE:
            misc.append(item)

    return {
        "geometry": {
            "mode": "building",
            "length": calc.get("length", 0.0),
            "width": calc.get("width", 0.0),
            "wall_height": calc.get("wall_height", 8.0),
            "roof_pitch": calc.get("roof_pitch", 0.0),
            "is_gable": calc.get("is_gable", True),
        },
        "wall_foam": {
            "foam_type": calc.get("wall_foam_type", "Open Cell"),
            "thickness_inches": calc.get("wall_thickness", 3.5),
        },
        "roof_foam": {
            "foam_type": calc.get("roof_foam_type", "Open Cell"),
            "thickness_inches": calc.get("roof_thickness", 5.5),
        },
        "waste_pct": calc.get("waste_pct", 10.0),
        "extras": {
            "labor_hours": labor_hours,
            "trip_charge": trip_charge,
            "line_items": misc,
        },
    }


_LEGACY_ESTIMATE_RENAMES = {
    "total_board_feet_open": "board_feet_open",
    "total_board_feet_closed": "board_feet_closed",
    "sets_required_open": "sets_open",
    "sets_required_closed": "sets_closed",
}


def _v0_to_v1(kind: RecordKind, record: dict[str, Any]) -> dict[str, Any]:
    record = _snake_keys(record)
    if kind == RecordKind.ESTIMATES:
        for old, new in _LEGACY_ESTIMATE_RENAMES.items():
            if old in record:
                record[new] = record.pop(old)
        if "inputs" not in record:
            record["inputs"] = _legacy_estimate_inputs(record)
    record["schema_version"] = 1
    return record


_MIGRATIONS: dict[int, Callable[[RecordKind, dict[str, Any]], dict[str, Any]]] = {
    0: _v0_to_v1,
}


def upgrade_record(kind: RecordKind, payload: Any) -> dict[str, Any]:
    """Upgrade a raw record dict to ``SCHEMA_VERSION``.

    Raises:
        SchemaMigrationError: If the payload is not an object, was written by
            a newer schema, or has no migration path.
    """
    if not isinstance(payload, dict):
        msg = f"{kind} record must be a JSON object, got {type(payload).__name__}"
        raise SchemaMigrationError(msg)

    record = dict(payload)
    version = record.get("schema_version", 0)
    if not isinstance(version, int) or version > SCHEMA_VERSION:
        msg = f"{kind} record has unsupported schema_version {version!r}"
        raise SchemaMigrationError(msg)

    while version < SCHEMA_VERSION:
        step = _MIGRATIONS.get(version)
        if step is None:
            msg = f"No migration from schema_version {version} for {kind}"
            raise SchemaMigrationError(msg)
        record = step(kind, record)
        version = record["schema_version"]
    return record


def parse_record(kind: RecordKind, payload: Any) -> BaseModel:
    """Upgrade and validate one raw record.

    Raises:
        SchemaMigrationError: If the record cannot be upgraded or does not
            validate against the current model.
    """
    record = upgrade_record(kind, payload)
    model = RECORD_MODELS[kind]
    try:
        return model.model_validate(record)
    except ValidationError as exc:
        msg = f"Invalid {kind} record: {exc}"
        raise SchemaMigrationError(msg) from exc
