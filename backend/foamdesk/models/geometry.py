"""Job geometry and foam specification models.

Geometry is a tagged union on ``mode``: each variant carries only the
dimensions that are meaningful for it, so a walls-only job has an explicit
``linear_feet`` and ``wall_height`` instead of reusing length/width.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from foamdesk.models.enums import FoamType, GeometryMode

DEFAULT_WALL_HEIGHT_FT = 8.0


class BuildingGeometry(BaseModel):
    """A rectangular box building: four walls, optional gable ends, pitched roof."""

    mode: Literal["building"] = "building"
    length: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    width: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    wall_height: float = Field(default=DEFAULT_WALL_HEIGHT_FT, ge=0, allow_inf_nan=False)
    roof_pitch: float = Field(default=0.0, ge=0, allow_inf_nan=False)  # rise per 12 of run
    is_gable: bool = True


class WallsOnlyGeometry(BaseModel):
    """A run of wall measured in linear feet."""

    mode: Literal["walls_only"] = "walls_only"
    linear_feet: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    wall_height: float = Field(default=DEFAULT_WALL_HEIGHT_FT, ge=0, allow_inf_nan=False)


class FlatAreaGeometry(BaseModel):
    """A flat roof, ceiling or slab priced as a single roof surface."""

    mode: Literal["flat_area"] = "flat_area"
    length: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    width: float = Field(default=0.0, ge=0, allow_inf_nan=False)


Geometry = Annotated[
    BuildingGeometry | WallsOnlyGeometry | FlatAreaGeometry,
    Field(discriminator="mode"),
]


def geometry_mode(geometry: BuildingGeometry | WallsOnlyGeometry | FlatAreaGeometry) -> GeometryMode:
    """Return the ``GeometryMode`` enum member for a geometry variant."""
    return GeometryMode(geometry.mode)


class FoamSpec(BaseModel):
    """Foam formulation and sprayed depth for one surface (walls or roof)."""

    foam_type: FoamType = FoamType.OPEN_CELL
    thickness_inches: float = Field(gt=0, allow_inf_nan=False)
