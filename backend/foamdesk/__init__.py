"""FoamDesk: estimating, CRM and inventory for spray-foam insulation contractors.

Usage::

    from foamdesk import BuildingGeometry, EstimateInputs, create_default_store, estimate

    store = create_default_store()
    inputs = EstimateInputs(geometry=BuildingGeometry(length=40, width=20, roof_pitch=4))
    result = estimate(inputs, store.get_settings().pricing())
"""

from foamdesk.data.repository import RecordStore
from foamdesk.engine import compute, estimate
from foamdesk.factory import create_default_store, create_store
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
    WallsOnlyGeometry,
)
from foamdesk.models.records import CompanySettings, Customer, InventoryItem, UserSession

__all__ = [
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
    "GeometryMode",
    "InventoryCategory",
    "InventoryItem",
    "JobLocation",
    "JobStatus",
    "LineItem",
    "PricingSettings",
    "RecordStore",
    "UserSession",
    "WallsOnlyGeometry",
    "compute",
    "create_default_store",
    "create_store",
    "estimate",
]
