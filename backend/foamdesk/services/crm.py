"""Customer management helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from foamdesk.models.records import Customer

if TYPE_CHECKING:
    from foamdesk.data.repository import RecordStore
    from foamdesk.models.estimate import Estimate


def create_customer(store: RecordStore, name: str, **fields: Any) -> Customer:
    """Create and save a new customer. ``name`` is required."""
    customer = Customer(name=name, **fields)
    return store.save_customer(customer)


def search_customers(customers: list[Customer], term: str) -> list[Customer]:
    """Case-insensitive substring match on name or company name."""
    needle = term.lower()
    return [
        c
        for c in customers
        if needle in c.name.lower() or (c.company_name and needle in c.company_name.lower())
    ]


def customer_estimates(estimates: list[Estimate], customer_id: str) -> list[Estimate]:
    return [e for e in estimates if e.customer_id == customer_id]


def lifetime_value(estimates: list[Estimate], customer_id: str) -> float:
    """Sum of estimate totals for a customer, across every status."""
    return sum(e.total for e in customer_estimates(estimates, customer_id))
