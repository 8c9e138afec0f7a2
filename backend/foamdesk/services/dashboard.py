"""Business overview figures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from foamdesk.models.enums import JobStatus
from foamdesk.services.inventory import low_stock_items as find_low_stock

if TYPE_CHECKING:
    from foamdesk.models.estimate import Estimate
    from foamdesk.models.records import InventoryItem

# Statuses whose value no longer counts toward the open pipeline.
_CLOSED_STATUSES = frozenset({JobStatus.ARCHIVED, JobStatus.PAID})

# Statuses shown in the job status breakdown; archived jobs are left out.
_CHARTED_STATUSES = (JobStatus.DRAFT, JobStatus.WORK_ORDER, JobStatus.INVOICED, JobStatus.PAID)


@dataclass(frozen=True)
class DashboardStats:
    """Snapshot of pipeline, job and stock figures."""

    pipeline_value: float
    active_work_orders: int
    pending_invoices: int
    low_stock_items: list[InventoryItem] = field(default_factory=list)
    status_counts: dict[str, int] = field(default_factory=dict)


def compute_dashboard(estimates: list[Estimate], inventory: list[InventoryItem]) -> DashboardStats:
    pipeline = sum(e.total for e in estimates if e.status not in _CLOSED_STATUSES)
    counts = {status.value: sum(1 for e in estimates if e.status == status) for status in _CHARTED_STATUSES}
    return DashboardStats(
        pipeline_value=pipeline,
        active_work_orders=counts[JobStatus.WORK_ORDER.value],
        pending_invoices=counts[JobStatus.INVOICED.value],
        low_stock_items=find_low_stock(inventory),
        status_counts=counts,
    )
