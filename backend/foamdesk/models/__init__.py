"""Domain models for FoamDesk."""

from foamdesk.models.base import SCHEMA_VERSION, VersionedRecord
from foamdesk.models.enums import FoamType, GeometryMode, InventoryCategory, JobStatus
from foamdesk.models.estimate import (
    Estimate,
    EstimateInputs,
    EstimateResult,
    ExtraCharges,
    JobLocation,
    LineItem,
    PricingSettings,
)
from foamdesk.models.geometry import (
    BuildingGeometry,
    FlatAreaGeometry,
    FoamSpec,
    Geometry,
    WallsOnlyGeometry,
    geometry_mode,
)
from foamdesk.models.records import CompanySettings, Customer, InventoryItem, UserSession

__all__ = [
    "SCHEMA_VERSION",
    "BuildingGeometry",
    "CompanySettings",
    "Customer",
    "Estimate",
    "EstimateInputs",
    "EstimateResult",
    "ExtraCharges",
    "FlatAreaGeometry",
    "FoamSpec",
    "FoamType",
    "Geometry",
    "GeometryMode",
    "InventoryCategory",
    "InventoryItem",
    "JobLocation",
    "JobStatus",
    "LineItem",
    "PricingSettings",
    "UserSession",
    "VersionedRecord",
    "WallsOnlyGeometry",
    "geometry_mode",
]
