"""Estimate input, result and record models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from foamdesk.models.base import VersionedRecord
from foamdesk.models.enums import FoamType, JobStatus
from foamdesk.models.geometry import FoamSpec, Geometry


def new_id() -> str:
    return uuid.uuid4().hex


class LineItem(BaseModel):
    """A priced line on an estimate.

    ``total`` is always ``quantity * unit_price``. Use :meth:`create` and
    :meth:`updated` rather than mutating fields so the two never drift.
    """

    id: str = Field(default_factory=new_id)
    description: str
    quantity: float = Field(default=1.0, allow_inf_nan=False)
    unit: str = "Each"
    unit_price: float = Field(default=0.0, allow_inf_nan=False)
    total: float = 0.0

    @model_validator(mode="after")
    def fill_missing_total(self) -> LineItem:
        if "total" not in self.model_fields_set:
            self.total = self.quantity * self.unit_price
        return self

    @classmethod
    def create(
        cls,
        description: str,
        quantity: float = 1.0,
        unit: str = "Each",
        unit_price: float = 0.0,
    ) -> LineItem:
        return cls(
            description=description,
            quantity=quantity,
            unit=unit,
            unit_price=unit_price,
            total=quantity * unit_price,
        )

    def updated(self, **changes: Any) -> LineItem:
        """Return a copy with ``changes`` applied and the total recomputed."""
        item = self.model_copy(update=changes)
        item.total = item.quantity * item.unit_price
        return item


class ExtraCharges(BaseModel):
    """Labor, trip charge and miscellaneous lines added on top of material."""

    labor_hours: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    trip_charge: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    line_items: list[LineItem] = Field(default_factory=list)

    @property
    def misc_total(self) -> float:
        return sum(item.total for item in self.line_items)


class PricingSettings(BaseModel):
    """Yields and unit prices the engine prices a job with."""

    open_cell_yield: float = Field(gt=0, allow_inf_nan=False)  # board feet per set
    closed_cell_yield: float = Field(gt=0, allow_inf_nan=False)
    open_cell_cost: float = Field(ge=0, allow_inf_nan=False)  # per set
    closed_cell_cost: float = Field(ge=0, allow_inf_nan=False)
    labor_rate: float = Field(ge=0, allow_inf_nan=False)  # per hour
    tax_rate: float = Field(ge=0, allow_inf_nan=False)  # percent

    def yield_for(self, foam_type: FoamType) -> float:
        if foam_type == FoamType.OPEN_CELL:
            return self.open_cell_yield
        return self.closed_cell_yield


def _default_wall_foam() -> FoamSpec:
    return FoamSpec(foam_type=FoamType.OPEN_CELL, thickness_inches=3.5)


def _default_roof_foam() -> FoamSpec:
    return FoamSpec(foam_type=FoamType.OPEN_CELL, thickness_inches=5.5)


class EstimateInputs(BaseModel):
    """Everything the contractor enters for one job, minus the pricing settings."""

    geometry: Geometry
    wall_foam: FoamSpec = Field(default_factory=_default_wall_foam)
    roof_foam: FoamSpec = Field(default_factory=_default_roof_foam)
    waste_pct: float = Field(default=10.0, ge=0, allow_inf_nan=False)
    extras: ExtraCharges = Field(default_factory=ExtraCharges)


class EstimateResult(BaseModel):
    """Quantities and costs derived from an ``EstimateInputs`` snapshot."""

    model_config = ConfigDict(frozen=True)

    wall_area: float
    roof_area: float
    board_feet_open: float
    board_feet_closed: float
    sets_open: float
    sets_closed: float
    material_cost: float
    labor_cost: float
    misc_cost: float
    subtotal: float
    tax: float
    total: float


class JobLocation(BaseModel):
    """GPS fix captured at the job site."""

    lat: float
    lng: float
    accuracy: float | None = None


class Estimate(VersionedRecord):
    """A committed estimate: the inputs snapshot plus the priced figures."""

    id: str = Field(default_factory=new_id)
    number: str
    customer_id: str
    date: datetime
    status: JobStatus = JobStatus.DRAFT

    job_name: str = "Untitled Job"
    job_address: str | None = None
    location: JobLocation | None = None
    images: list[str] = Field(default_factory=list)  # data URLs

    inputs: EstimateInputs

    board_feet_open: float
    board_feet_closed: float
    sets_open: float
    sets_closed: float

    items: list[LineItem] = Field(default_factory=list)
    subtotal: float
    tax: float
    total: float

    notes: str | None = None

    def to_summary_dict(self, customer_name: str | None = None) -> dict[str, Any]:
        """Produce a flat, display-ready summary of the estimate."""
        from foamdesk.formatting import format_board_feet, format_currency, format_sets

        return {
            "number": self.number,
            "customer_name": customer_name or "Unknown",
            "job_name": self.job_name,
            "status": self.status.value,
            "date_formatted": self.date.strftime("%Y-%m-%d"),
            "board_feet_open_formatted": format_board_feet(self.board_feet_open),
            "board_feet_closed_formatted": format_board_feet(self.board_feet_closed),
            "sets_open_formatted": format_sets(self.sets_open),
            "sets_closed_formatted": format_sets(self.sets_closed),
            "items": [
                {
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit": item.unit,
                    "total_formatted": format_currency(item.total),
                }
                for item in self.items
            ],
            "subtotal_formatted": format_currency(self.subtotal),
            "tax_formatted": format_currency(self.tax),
            "total_formatted": format_currency(self.total),
        }
