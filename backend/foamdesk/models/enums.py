"""Enums for the FoamDesk domain models.

String values match the labels the contractor sees, so they are also what
lands in exported backups.
"""

from enum import StrEnum


class GeometryMode(StrEnum):
    """Which surfaces of a job are measured and priced."""

    BUILDING = "building"
    WALLS_ONLY = "walls_only"
    FLAT_AREA = "flat_area"


class FoamType(StrEnum):
    """Spray-foam formulations, each with its own yield and set cost."""

    OPEN_CELL = "Open Cell"
    CLOSED_CELL = "Closed Cell"


class JobStatus(StrEnum):
    """Lifecycle of an estimate once it has been committed."""

    DRAFT = "Draft"
    WORK_ORDER = "Work Order"
    INVOICED = "Invoiced"
    PAID = "Paid"
    ARCHIVED = "Archived"


class InventoryCategory(StrEnum):
    """Inventory item groupings."""

    MATERIAL = "Material"
    EQUIPMENT = "Equipment"
    SUPPLY = "Supply"
