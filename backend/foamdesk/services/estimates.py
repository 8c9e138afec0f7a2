"""Committing live estimates to the record store and moving them through the job lifecycle."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import TYPE_CHECKING

from foamdesk.engine import estimate as run_estimate
from foamdesk.exceptions import EstimateCommitError, RecordNotFoundError
from foamdesk.models.enums import JobStatus
from foamdesk.models.estimate import Estimate, LineItem

if TYPE_CHECKING:
    from foamdesk.data.repository import RecordStore
    from foamdesk.models.estimate import (
        EstimateInputs,
        EstimateResult,
        JobLocation,
        PricingSettings,
    )

logger = logging.getLogger(__name__)

DEFAULT_JOB_NAME = "Untitled Job"


def estimate_number(rng: random.Random | None = None) -> str:
    """A short display number such as ``EST-4821``. Not guaranteed unique."""
    return f"EST-{(rng or random).randrange(10000)}"


def build_line_items(
    inputs: EstimateInputs,
    result: EstimateResult,
    pricing: PricingSettings,
) -> list[LineItem]:
    """Material lot, labor, trip charge (when charged) and the miscellaneous lines."""
    extras = inputs.extras
    items = [
        LineItem.create("Spray Foam Material", 1, "Lot", result.material_cost),
        LineItem.create("Labor", extras.labor_hours, "Hours", pricing.labor_rate),
    ]
    if extras.trip_charge > 0:
        items.append(LineItem.create("Trip Charge", 1, "Flat", extras.trip_charge))
    items.extend(item.model_copy() for item in extras.line_items)
    return items


def build_estimate(
    *,
    customer_id: str,
    inputs: EstimateInputs,
    pricing: PricingSettings,
    status: JobStatus = JobStatus.DRAFT,
    job_name: str = "",
    job_address: str | None = None,
    location: JobLocation | None = None,
    images: list[str] | None = None,
    notes: str | None = None,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> Estimate:
    """Price ``inputs`` and snapshot them with the result into an ``Estimate``.

    Raises:
        EstimateCommitError: If no customer is selected.
    """
    if not customer_id:
        msg = "Please select a customer first"
        raise EstimateCommitError(msg)

    result = run_estimate(inputs, pricing)
    return Estimate(
        number=estimate_number(rng),
        customer_id=customer_id,
        date=now or datetime.now(),
        status=status,
        job_name=job_name or DEFAULT_JOB_NAME,
        job_address=job_address,
        location=location,
        images=list(images or []),
        notes=notes,
        inputs=inputs,
        board_feet_open=result.board_feet_open,
        board_feet_closed=result.board_feet_closed,
        sets_open=result.sets_open,
        sets_closed=result.sets_closed,
        items=build_line_items(inputs, result, pricing),
        subtotal=result.subtotal,
        tax=result.tax,
        total=result.total,
    )


def commit_estimate(
    store: RecordStore,
    *,
    customer_id: str,
    inputs: EstimateInputs,
    status: JobStatus = JobStatus.DRAFT,
    job_name: str = "",
    job_address: str | None = None,
    location: JobLocation | None = None,
    images: list[str] | None = None,
    notes: str | None = None,
) -> Estimate:
    """Price with the stored settings and save the estimate for an existing customer.

    Raises:
        EstimateCommitError: If the customer is missing or unknown.
    """
    if customer_id:
        try:
            store.get_customer(customer_id)
        except RecordNotFoundError as exc:
            raise EstimateCommitError(str(exc)) from exc

    pricing = store.get_settings().pricing()
    est = build_estimate(
        customer_id=customer_id,
        inputs=inputs,
        pricing=pricing,
        status=status,
        job_name=job_name,
        job_address=job_address,
        location=location,
        images=images,
        notes=notes,
    )
    store.save_estimate(est)
    logger.info("Saved %s %s for customer %s (total %.2f)", est.status, est.number, customer_id, est.total)
    return est


def change_status(store: RecordStore, estimate_id: str, status: JobStatus) -> Estimate:
    """Move a saved estimate to ``status``."""
    updated = store.get_estimate(estimate_id).model_copy(update={"status": status})
    store.save_estimate(updated)
    return updated


def filter_by_status(estimates: list[Estimate], status: JobStatus | None) -> list[Estimate]:
    """Estimates with ``status``; all of them when ``status`` is None."""
    if status is None:
        return list(estimates)
    return [e for e in estimates if e.status == status]
