"""Spray-foam estimation engine.

Converts job geometry and foam specifications into material quantities and a
priced estimate:

1. **Areas**: Wall and roof square footage for the geometry mode. A
   building is a box with a pitched roof (slope length = run * pitch factor)
   and, when gabled, two triangular gable ends added to the wall area.
2. **Board feet**: Area times sprayed thickness per surface, then the waste
   multiplier ``1 + waste/100``. Each surface goes wholly to the open-cell or
   closed-cell total according to its foam type.
3. **Sets**: Board feet divided by the per-set yield of that foam type.
4. **Costs**: Material (sets * cost per set), labor (hours * rate), trip
   charge and miscellaneous lines make the subtotal; tax is a percentage of
   the subtotal.

Every function here is pure. Pricing settings are passed in explicitly, and
the only guarded division is the sets step, so out-of-range numbers that get
past model validation propagate into the result unchanged.
"""

from __future__ import annotations

import math

from foamdesk.models.enums import FoamType, GeometryMode
from foamdesk.models.estimate import (
    EstimateInputs,
    EstimateResult,
    ExtraCharges,
    PricingSettings,
)
from foamdesk.models.geometry import (
    BuildingGeometry,
    FlatAreaGeometry,
    FoamSpec,
    WallsOnlyGeometry,
    geometry_mode,
)

# Roof pitch is quoted as inches of rise per 12 inches of run ("4 in 12").
_PITCH_RUN = 12.0


def pitch_factor(pitch: float) -> float:
    """Slope length per unit of horizontal run for a rise of ``pitch`` in 12."""
    return math.sqrt(_PITCH_RUN**2 + pitch**2) / _PITCH_RUN


def gable_area(width: float, pitch: float) -> float:
    """Area of one triangular gable end spanning ``width``."""
    rise = (pitch / _PITCH_RUN) * (width / 2)
    return 0.5 * width * rise


def compute_areas(
    geometry: BuildingGeometry | WallsOnlyGeometry | FlatAreaGeometry,
) -> tuple[float, float]:
    """Return ``(wall_area, roof_area)`` in square feet."""
    if isinstance(geometry, BuildingGeometry):
        wall_area = (geometry.length + geometry.width) * 2 * geometry.wall_height
        roof_area = geometry.length * geometry.width * pitch_factor(geometry.roof_pitch)
        if geometry.is_gable:
            wall_area += 2 * gable_area(geometry.width, geometry.roof_pitch)
        return wall_area, roof_area

    if isinstance(geometry, WallsOnlyGeometry):
        return geometry.linear_feet * geometry.wall_height, 0.0

    if isinstance(geometry, FlatAreaGeometry):
        return 0.0, geometry.length * geometry.width

    msg = f"Unsupported geometry: {type(geometry).__name__}"
    raise TypeError(msg)


def compute_board_feet(area: float, thickness_inches: float) -> float:
    """Raw board feet (before waste) for ``area`` sq ft sprayed ``thickness_inches`` deep."""
    return area * thickness_inches


def compute_sets(board_feet: float, yield_per_set: float) -> float:
    """Sets of chemical needed; zero when there is no footage of that foam type."""
    if board_feet > 0:
        return board_feet / yield_per_set
    return 0.0


def compute(
    geometry: BuildingGeometry | WallsOnlyGeometry | FlatAreaGeometry,
    wall_foam: FoamSpec,
    roof_foam: FoamSpec,
    waste_pct: float,
    extras: ExtraCharges,
    pricing: PricingSettings,
) -> EstimateResult:
    """Price one job.

    Args:
        geometry: Dimensions of the job; its variant decides which surfaces
            are sprayed.
        wall_foam: Foam type and thickness for the walls.
        roof_foam: Foam type and thickness for the roof or flat area.
        waste_pct: Overage percentage applied to board feet.
        extras: Labor hours, trip charge and miscellaneous line items.
        pricing: Yields and prices from the company settings.

    Returns:
        The full set of derived quantities and costs.
    """
    mode = geometry_mode(geometry)
    wall_area, roof_area = compute_areas(geometry)

    waste_multiplier = 1 + waste_pct / 100
    wall_board_feet = compute_board_feet(wall_area, wall_foam.thickness_inches) * waste_multiplier
    roof_board_feet = compute_board_feet(roof_area, roof_foam.thickness_inches) * waste_multiplier

    board_feet: dict[FoamType, float] = {FoamType.OPEN_CELL: 0.0, FoamType.CLOSED_CELL: 0.0}
    if mode != GeometryMode.FLAT_AREA:
        board_feet[wall_foam.foam_type] += wall_board_feet
    if mode != GeometryMode.WALLS_ONLY:
        board_feet[roof_foam.foam_type] += roof_board_feet

    board_feet_open = board_feet[FoamType.OPEN_CELL]
    board_feet_closed = board_feet[FoamType.CLOSED_CELL]
    sets_open = compute_sets(board_feet_open, pricing.yield_for(FoamType.OPEN_CELL))
    sets_closed = compute_sets(board_feet_closed, pricing.yield_for(FoamType.CLOSED_CELL))

    material_cost = sets_open * pricing.open_cell_cost + sets_closed * pricing.closed_cell_cost
    labor_cost = extras.labor_hours * pricing.labor_rate
    misc_cost = extras.misc_total

    subtotal = material_cost + labor_cost + extras.trip_charge + misc_cost
    tax = subtotal * (pricing.tax_rate / 100)

    return EstimateResult(
        wall_area=wall_area,
        roof_area=roof_area,
        board_feet_open=board_feet_open,
        board_feet_closed=board_feet_closed,
        sets_open=sets_open,
        sets_closed=sets_closed,
        material_cost=material_cost,
        labor_cost=labor_cost,
        misc_cost=misc_cost,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )


def estimate(inputs: EstimateInputs, pricing: PricingSettings) -> EstimateResult:
    """Run :func:`compute` on a bundled inputs snapshot."""
    return compute(
        inputs.geometry,
        inputs.wall_foam,
        inputs.roof_foam,
        inputs.waste_pct,
        inputs.extras,
        pricing,
    )
