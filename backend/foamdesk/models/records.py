"""Customer, inventory, settings and session records."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from foamdesk.models.base import VersionedRecord
from foamdesk.models.enums import InventoryCategory
from foamdesk.models.estimate import PricingSettings, new_id


class Customer(VersionedRecord):
    """A customer in the CRM."""

    id: str = Field(default_factory=new_id)
    name: str
    company_name: str | None = None
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "customer name must not be blank"
            raise ValueError(msg)
        return v


class InventoryItem(VersionedRecord):
    """A stocked material, piece of equipment or consumable."""

    id: str = Field(default_factory=new_id)
    name: str
    category: InventoryCategory
    quantity: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    unit: str
    min_level: float = Field(default=0.0, ge=0, allow_inf_nan=False)


class CompanySettings(VersionedRecord):
    """The single settings record: company identity plus pricing defaults."""

    company_name: str
    company_address: str
    company_phone: str
    company_email: str
    logo_url: str | None = None

    open_cell_yield: float = Field(gt=0, allow_inf_nan=False)
    closed_cell_yield: float = Field(gt=0, allow_inf_nan=False)
    open_cell_cost: float = Field(ge=0, allow_inf_nan=False)
    closed_cell_cost: float = Field(ge=0, allow_inf_nan=False)
    labor_rate: float = Field(ge=0, allow_inf_nan=False)
    tax_rate: float = Field(ge=0, allow_inf_nan=False)

    def pricing(self) -> PricingSettings:
        """The subset of settings the estimation engine prices with."""
        return PricingSettings(
            open_cell_yield=self.open_cell_yield,
            closed_cell_yield=self.closed_cell_yield,
            open_cell_cost=self.open_cell_cost,
            closed_cell_cost=self.closed_cell_cost,
            labor_rate=self.labor_rate,
            tax_rate=self.tax_rate,
        )


class UserSession(VersionedRecord):
    """The locally remembered signed-in user. Not an authentication mechanism."""

    username: str
    company: str
    is_authenticated: bool = True
