"""Factory configuration used when no settings or inventory have been saved."""

from foamdesk.models.enums import InventoryCategory
from foamdesk.models.records import CompanySettings, InventoryItem

DEFAULT_SETTINGS = CompanySettings(
    company_name="Premier Spray Foam",
    company_address="123 Insulation Lane, Contractor City, ST 12345",
    company_phone="(555) 123-4567",
    company_email="info@premierspray.com",
    open_cell_yield=16000,
    closed_cell_yield=4000,
    open_cell_cost=2000,
    closed_cell_cost=2600,
    labor_rate=85,
    tax_rate=7.5,
)

INITIAL_INVENTORY: list[InventoryItem] = [
    InventoryItem(
        id="1",
        name="Open Cell Foam Set",
        category=InventoryCategory.MATERIAL,
        quantity=12,
        unit="Sets",
        min_level=5,
    ),
    InventoryItem(
        id="2",
        name="Closed Cell Foam Set",
        category=InventoryCategory.MATERIAL,
        quantity=8,
        unit="Sets",
        min_level=3,
    ),
    InventoryItem(
        id="3",
        name="Suit - XL",
        category=InventoryCategory.SUPPLY,
        quantity=50,
        unit="Pcs",
        min_level=10,
    ),
    InventoryItem(
        id="4",
        name="Mask Filters",
        category=InventoryCategory.SUPPLY,
        quantity=20,
        unit="Pairs",
        min_level=5,
    ),
    InventoryItem(
        id="5",
        name="Gun Cleaner",
        category=InventoryCategory.SUPPLY,
        quantity=15,
        unit="Cans",
        min_level=5,
    ),
]
